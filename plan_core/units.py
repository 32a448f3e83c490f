"""
Unit Conversion: distance, pace and altitude between metric and imperial.

Paces are "M:SS" strings per kilometer (metric) or per mile (imperial).
Conversions go through fixed factors; the two pace factors are used exactly
as listed rather than derived from each other, which keeps a metric ->
imperial -> metric round trip within one second.
"""

from dataclasses import dataclass, asdict
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Union
import locale
import logging
import os
import re

from .errors import InvalidUnitError, InvalidPaceFormatError

logger = logging.getLogger(__name__)


class UnitSystem(Enum):
    """Measurement system for paces, distances and altitude."""
    METRIC = "metric"
    IMPERIAL = "imperial"


class DistanceUnit(Enum):
    """Supported distance units."""
    KILOMETER = "km"
    MILE = "mi"
    METER = "m"
    FOOT = "ft"


CONVERSION_FACTORS: Mapping[str, float] = MappingProxyType({
    'km_to_miles': 0.621371,
    'miles_to_km': 1.609344,
    'meters_to_feet': 3.28084,
    'feet_to_meters': 0.3048,
    'pace_km_to_mile': 1.609344,   # multiply a per-km pace to get per-mile
    'pace_mile_to_km': 0.621371,   # multiply a per-mile pace to get per-km
})

# Region codes whose default is imperial
IMPERIAL_REGIONS = frozenset({"US", "LR", "MM"})

_PACE_PATTERN = re.compile(r"^\s*(\d+):(\d{1,2})\s*$")


@dataclass(frozen=True)
class UnitPreferences:
    """
    Display units derived from a unit system.

    Build with create_unit_preferences(); never edit fields individually.
    """
    system: UnitSystem
    pace_unit: str
    distance_unit: str
    altitude_unit: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        d = asdict(self)
        d['system'] = self.system.value
        return d

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'UnitPreferences':
        """Rebuild preferences from the stored unit system."""
        return create_unit_preferences(d['system'])


def coerce_unit_system(system: Union[UnitSystem, str]) -> UnitSystem:
    """Accept a UnitSystem or its string value."""
    if isinstance(system, UnitSystem):
        return system
    try:
        return UnitSystem(system)
    except ValueError:
        raise InvalidUnitError(system) from None


def coerce_distance_unit(unit: Union[DistanceUnit, str]) -> DistanceUnit:
    """Accept a DistanceUnit or its string value."""
    if isinstance(unit, DistanceUnit):
        return unit
    try:
        return DistanceUnit(unit)
    except ValueError:
        raise InvalidUnitError(unit) from None


def create_unit_preferences(system: Union[UnitSystem, str]) -> UnitPreferences:
    """
    Create unit preferences for a unit system.

    Args:
        system: 'metric' or 'imperial'

    Returns:
        UnitPreferences with matching pace, distance and altitude units
    """
    system = coerce_unit_system(system)
    is_metric = system == UnitSystem.METRIC
    return UnitPreferences(
        system=system,
        pace_unit="min/km" if is_metric else "min/mi",
        distance_unit="km" if is_metric else "mi",
        altitude_unit="m" if is_metric else "ft",
    )


def _to_meters(value: float, unit: DistanceUnit) -> float:
    if unit == DistanceUnit.KILOMETER:
        return value * 1000
    if unit == DistanceUnit.MILE:
        return value * CONVERSION_FACTORS['miles_to_km'] * 1000
    if unit == DistanceUnit.METER:
        return value
    return value * CONVERSION_FACTORS['feet_to_meters']


def _from_meters(meters: float, unit: DistanceUnit) -> float:
    if unit == DistanceUnit.KILOMETER:
        return meters / 1000
    if unit == DistanceUnit.MILE:
        return (meters / 1000) * CONVERSION_FACTORS['km_to_miles']
    if unit == DistanceUnit.METER:
        return meters
    return meters * CONVERSION_FACTORS['meters_to_feet']


def convert_distance(
    value: float,
    from_unit: Union[DistanceUnit, str],
    to_unit: Union[DistanceUnit, str]
) -> float:
    """
    Convert a distance between km, mi, m and ft.

    Converts through meters. A same-unit call returns `value` untouched.

    Raises:
        InvalidUnitError: if either unit is not supported
    """
    source = coerce_distance_unit(from_unit)
    target = coerce_distance_unit(to_unit)
    if source == target:
        return value
    return _from_meters(_to_meters(value, source), target)


def parse_pace(pace: str) -> int:
    """
    Parse "M:SS" into total seconds.

    Minutes may have any number of digits; seconds need not be zero-padded.

    Raises:
        InvalidPaceFormatError: for anything else, including seconds >= 60
    """
    if not isinstance(pace, str):
        raise InvalidPaceFormatError(pace)
    match = _PACE_PATTERN.match(pace)
    if match is None:
        raise InvalidPaceFormatError(pace)
    minutes, seconds = int(match.group(1)), int(match.group(2))
    if seconds >= 60:
        raise InvalidPaceFormatError(pace)
    return minutes * 60 + seconds


def format_pace(total_seconds: float) -> str:
    """Format seconds as "M:SS", rounding to the nearest whole second."""
    minutes, seconds = divmod(int(round(total_seconds)), 60)
    return f"{minutes}:{seconds:02d}"


def convert_pace(
    pace: str,
    from_system: Union[UnitSystem, str],
    to_system: Union[UnitSystem, str]
) -> str:
    """
    Convert a pace string between per-km and per-mile.

    Args:
        pace: Pace as "M:SS"
        from_system: System the pace is expressed in
        to_system: Target system

    Returns:
        Converted pace as "M:SS"; the input string itself for same-system calls
    """
    source = coerce_unit_system(from_system)
    target = coerce_unit_system(to_system)
    total_seconds = parse_pace(pace)
    if source == target:
        return pace

    if source == UnitSystem.METRIC:
        converted = total_seconds * CONVERSION_FACTORS['pace_km_to_mile']
    else:
        converted = total_seconds * CONVERSION_FACTORS['pace_mile_to_km']

    return format_pace(converted)


def convert_altitude(
    altitude: float,
    from_system: Union[UnitSystem, str],
    to_system: Union[UnitSystem, str]
) -> float:
    """Convert an altitude between meters (metric) and feet (imperial)."""
    source = coerce_unit_system(from_system)
    target = coerce_unit_system(to_system)
    if source == target:
        return altitude
    if source == UnitSystem.METRIC:
        return convert_distance(altitude, DistanceUnit.METER, DistanceUnit.FOOT)
    return convert_distance(altitude, DistanceUnit.FOOT, DistanceUnit.METER)


def format_distance(value: float, unit: str, precision: int = 1) -> str:
    """
    Format a distance with its unit.

    Whole numbers render without a decimal part ("5 km"); anything else
    uses `precision` digits ("5.1 mi").
    """
    if float(value).is_integer():
        return f"{int(value)} {unit}"
    return f"{value:.{precision}f} {unit}"


def _system_locale() -> Optional[str]:
    try:
        language, _ = locale.getlocale()
    except ValueError:
        language = None
    if language:
        return language
    for var in ('LC_ALL', 'LC_MESSAGES', 'LANG'):
        value = os.environ.get(var)
        if value:
            return value
    return None


def _region_from_locale(signal: str) -> Optional[str]:
    parts = re.split(r"[-_.@]", signal.strip())
    for part in parts[1:]:
        if len(part) == 2 and part.isalpha():
            return part.upper()
    return None


def detect_default_unit_system(locale_signal: Optional[str] = None) -> UnitSystem:
    """
    Guess a default unit system from a locale such as "en-US" or "en_US.UTF-8".

    Imperial for US, LR and MM; metric otherwise, and metric when no region
    can be read. When `locale_signal` is None the process locale and the
    LC_ALL / LC_MESSAGES / LANG environment variables are consulted. This is
    only a default and is always overridable.
    """
    if locale_signal is None:
        locale_signal = _system_locale()
    if not isinstance(locale_signal, str) or not locale_signal:
        return UnitSystem.METRIC

    region = _region_from_locale(locale_signal)
    if region is None:
        logger.debug("No region in locale %r, defaulting to metric", locale_signal)
        return UnitSystem.METRIC
    return UnitSystem.IMPERIAL if region in IMPERIAL_REGIONS else UnitSystem.METRIC


def generate_preview_examples(system: Union[UnitSystem, str]) -> Dict[str, str]:
    """Sample formatted values for previewing a unit system."""
    is_metric = coerce_unit_system(system) == UnitSystem.METRIC
    return {
        'easy_pace': "5:30 min/km" if is_metric else "8:51 min/mi",
        'tempo_pace': "4:15 min/km" if is_metric else "6:50 min/mi",
        'short_distance': "400 m" if is_metric else "400 yd",
        'medium_distance': "5.0 km" if is_metric else "3.1 mi",
        'long_distance': "21.1 km" if is_metric else "13.1 mi",
        'altitude': "1,500 m" if is_metric else "4,921 ft",
        'weekly_mileage': "50 km/week" if is_metric else "31 mi/week",
    }
