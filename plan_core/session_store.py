"""
Session Store: keep the runner's unit preferences for the session.

Only UnitPreferences are stored, as JSON under a fixed key. Stored data is
checked by a structural guard before it is trusted; anything malformed is
logged and treated as absent.
"""

from typing import Any, MutableMapping, Optional
import json
import logging

from .units import UnitPreferences, UnitSystem

logger = logging.getLogger(__name__)

STORAGE_KEYS = {
    'unit_preferences': "daniels_plan_unit_preferences",
    'app_state': "daniels_plan_app_state",
}

_PROBE_KEY = "__test_session_storage__"


def is_valid_unit_preferences(obj: Any) -> bool:
    """Structural check of a decoded preferences object."""
    if not isinstance(obj, dict):
        return False
    return (
        obj.get('system') in (UnitSystem.METRIC.value, UnitSystem.IMPERIAL.value)
        and isinstance(obj.get('pace_unit'), str)
        and isinstance(obj.get('distance_unit'), str)
        and isinstance(obj.get('altitude_unit'), str)
    )


class SessionStore:
    """
    Unit-preference storage over a string-to-string mapping.

    The backend defaults to a fresh dict, which lives as long as the store.
    """

    def __init__(self, backend: Optional[MutableMapping[str, str]] = None):
        self.backend = backend if backend is not None else {}

    def save_unit_preferences(self, preferences: UnitPreferences) -> None:
        self.backend[STORAGE_KEYS['unit_preferences']] = json.dumps(preferences.to_dict())

    def load_unit_preferences(self) -> Optional[UnitPreferences]:
        """Stored preferences, or None when absent or invalid."""
        stored = self.backend.get(STORAGE_KEYS['unit_preferences'])
        if not stored:
            return None

        try:
            parsed = json.loads(stored)
        except json.JSONDecodeError as e:
            logger.error("Failed to load unit preferences from session storage: %s", e)
            return None

        if not is_valid_unit_preferences(parsed):
            logger.warning("Invalid unit preferences found in session storage, ignoring")
            return None

        return UnitPreferences.from_dict(parsed)

    def clear(self) -> None:
        """Remove every application key."""
        for key in STORAGE_KEYS.values():
            self.backend.pop(key, None)

    def is_available(self) -> bool:
        """Whether the backend accepts writes."""
        try:
            self.backend[_PROBE_KEY] = "test"
            del self.backend[_PROBE_KEY]
        except (OSError, TypeError, KeyError) as e:
            logger.debug("Session storage unavailable: %s", e)
            return False
        return True
