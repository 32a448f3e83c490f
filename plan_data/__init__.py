"""Static lookup tables: VDOT race/pace table and plan reference data."""

from .vdot_table import (
    VDOT_MIN,
    VDOT_MAX,
    VDOT_TABLE,
    VdotEntry,
    RACE_DISTANCES_M,
    PACE_ZONES,
    get_vdot_entry,
    format_clock,
    vdot_from_performance,
)
from .reference import (
    PLAN_LEVELS,
    GOAL_RACES,
    EXPERIENCE_LEVELS,
    MIN_TRAINING_DAYS,
    SESSION_DURATION_RANGES,
    EXPERIENCE_PACES,
    DEFAULT_PACES,
    PlanLevelInfo,
    GoalRaceInfo,
    ExperienceLevelInfo,
    MileageRange,
    SessionDurationRange,
)

__all__ = [
    # VDOT table
    'VDOT_MIN',
    'VDOT_MAX',
    'VDOT_TABLE',
    'VdotEntry',
    'RACE_DISTANCES_M',
    'PACE_ZONES',
    'get_vdot_entry',
    'format_clock',
    'vdot_from_performance',
    # Reference data
    'PLAN_LEVELS',
    'GOAL_RACES',
    'EXPERIENCE_LEVELS',
    'MIN_TRAINING_DAYS',
    'SESSION_DURATION_RANGES',
    'EXPERIENCE_PACES',
    'DEFAULT_PACES',
    'PlanLevelInfo',
    'GoalRaceInfo',
    'ExperienceLevelInfo',
    'MileageRange',
    'SessionDurationRange',
]
