"""
Planner configuration: the fixed policy constants behind plan derivation.

These values are policy, not derived optimums. They live in one dataclass
so they can be inspected, saved and validated together.
"""

from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any, Dict, List, Tuple, Union
import json


@dataclass(frozen=True)
class PlannerConfig:
    """
    Policy constants for the plan structure generator and assembler.

    Phase-indexed values have one entry per phase, in order:
    Base Building, Tempo Introduction, Full Integration, Peak & Taper.
    """

    # ═══════════════════════════════════════════════════════════════════════════
    # PERIODIZATION
    # ═══════════════════════════════════════════════════════════════════════════

    phase_durations: Tuple[int, ...] = (6, 5, 5, 4)
    phase_mileage_multipliers: Tuple[float, ...] = (1.0, 1.1, 1.2, 0.8)

    # Quality sessions per phase, by plan level
    quality_sessions: Dict[str, Tuple[int, ...]] = field(default_factory=lambda: {
        'foundation': (0, 1, 1, 1),
        'intermediate': (1, 1, 2, 2),
        'advanced': (1, 2, 3, 3),
        'elite': (2, 3, 3, 3),
    })

    # ═══════════════════════════════════════════════════════════════════════════
    # WEEKLY VOLUME
    # ═══════════════════════════════════════════════════════════════════════════

    long_run_max_fraction: float = 0.25

    # Floor for the baseline when the plan level's minimum is zero,
    # in the user's distance unit
    baseline_mileage_floor: Dict[str, float] = field(default_factory=lambda: {
        'metric': 20.0,
        'imperial': 12.0,
    })

    # ═══════════════════════════════════════════════════════════════════════════
    # ALTITUDE
    # ═══════════════════════════════════════════════════════════════════════════

    altitude_seconds_per_400m: float = 4.0

    progression_principles: Tuple[str, ...] = (
        "Progressive overload with 10% weekly increase maximum",
        "Periodized approach through 4 distinct phases",
        "80/20 easy-to-hard training distribution",
        "Recovery weeks every 4th week",
    )

    @property
    def total_weeks(self) -> int:
        return sum(self.phase_durations)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        d = asdict(self)
        d['phase_durations'] = list(self.phase_durations)
        d['phase_mileage_multipliers'] = list(self.phase_mileage_multipliers)
        d['quality_sessions'] = {k: list(v) for k, v in self.quality_sessions.items()}
        d['progression_principles'] = list(self.progression_principles)
        return d

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'PlannerConfig':
        """Create configuration from dictionary; missing keys keep defaults."""
        d = dict(d)
        for key in ('phase_durations', 'phase_mileage_multipliers', 'progression_principles'):
            if key in d:
                d[key] = tuple(d[key])
        if 'quality_sessions' in d:
            d['quality_sessions'] = {k: tuple(v) for k, v in d['quality_sessions'].items()}
        return cls(**d)

    def validate(self) -> Tuple[bool, str]:
        """Validate configuration constraints."""
        issues: List[str] = []

        if len(self.phase_durations) != 4:
            issues.append("Exactly 4 phase durations are required")
        if any(weeks <= 0 for weeks in self.phase_durations):
            issues.append("Phase durations must be positive")

        if len(self.phase_mileage_multipliers) != 4:
            issues.append("Exactly 4 phase mileage multipliers are required")
        if any(m <= 0 for m in self.phase_mileage_multipliers):
            issues.append("Phase mileage multipliers must be positive")

        for level in ('foundation', 'intermediate', 'advanced', 'elite'):
            counts = self.quality_sessions.get(level)
            if counts is None:
                issues.append(f"Missing quality session counts for {level}")
            elif len(counts) != 4 or any(c < 0 or c > 6 for c in counts):
                issues.append(f"Quality sessions for {level}: 4 values in [0, 6]")

        if not (0 < self.long_run_max_fraction <= 0.5):
            issues.append("Long run fraction must be in (0, 0.5]")

        if self.altitude_seconds_per_400m < 0:
            issues.append("Altitude adjustment must not be negative")

        if issues:
            return False, "; ".join(issues)
        return True, "Valid"


DEFAULT_CONFIG = PlannerConfig()


def load_config(path: Union[str, Path]) -> PlannerConfig:
    """
    Load a configuration from a JSON file.

    Raises:
        ValueError: if the loaded values fail validation
    """
    with open(path) as f:
        config = PlannerConfig.from_dict(json.load(f))
    ok, message = config.validate()
    if not ok:
        raise ValueError(f"Invalid planner configuration in {path}: {message}")
    return config


def save_config(config: PlannerConfig, path: Union[str, Path]) -> None:
    """Write a configuration to a JSON file."""
    with open(path, 'w') as f:
        json.dump(config.to_dict(), f, indent=2)
