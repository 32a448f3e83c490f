"""
Static reference data for plan derivation.

Plan levels, goal races, experience levels, session-duration ranges and the
experience-based pace table. Everything here is immutable and keyed by the
string ids used throughout the engine ("foundation", "5K", "beginner", ...).
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Tuple


@dataclass(frozen=True)
class MileageRange:
    """Weekly mileage range in one unit system."""
    min: float
    max: float
    unit: str


@dataclass(frozen=True)
class ExampleDistance:
    value: float
    unit: str
    description: str


@dataclass(frozen=True)
class PlanLevelInfo:
    """Descriptive and numeric data for one plan level."""
    id: str
    name: str
    target_group: str
    weekly_mileage_range: Mapping[str, MileageRange]
    quality_sessions: int
    training_days: str
    description: str
    suitable_for: Tuple[str, ...]
    example_distances: Mapping[str, Tuple[ExampleDistance, ...]]


@dataclass(frozen=True)
class GoalRaceInfo:
    id: str
    name: str
    distance: Mapping[str, Tuple[float, str]]
    description: str
    focus_areas: Tuple[str, ...]
    typical_duration: Mapping[str, str]


@dataclass(frozen=True)
class ExperienceLevelInfo:
    id: str
    name: str
    description: str
    weekly_mileage_range: Mapping[str, Tuple[float, float]]
    recommended_plan: str
    training_days: str
    characteristics: Tuple[str, ...]


@dataclass(frozen=True)
class SessionDurationRange:
    """Recommended session length in minutes."""
    min: int
    max: int
    optimal: int


def _freeze(mapping):
    return MappingProxyType(dict(mapping))


# =============================================================================
# Plan levels
# =============================================================================

PLAN_LEVELS: Mapping[str, PlanLevelInfo] = _freeze({
    "foundation": PlanLevelInfo(
        id="foundation",
        name="Foundation Plan",
        target_group="Beginner/Returning",
        weekly_mileage_range=_freeze({
            "metric": MileageRange(0, 32, "km/week"),
            "imperial": MileageRange(0, 20, "mi/week"),
        }),
        quality_sessions=1,
        training_days="3-4 days",
        description=(
            "Building running habit and basic aerobic fitness with minimal "
            "intensity work."
        ),
        suitable_for=(
            "New runners starting their journey",
            "Returning after extended break (6+ months)",
            "Focusing on injury prevention and base building",
            "Limited time availability (3-4 hours/week)",
        ),
        example_distances=_freeze({
            "metric": (
                ExampleDistance(3, "km", "typical easy run"),
                ExampleDistance(5, "km", "weekend long run"),
                ExampleDistance(400, "m", "stride intervals"),
            ),
            "imperial": (
                ExampleDistance(2, "mi", "typical easy run"),
                ExampleDistance(3, "mi", "weekend long run"),
                ExampleDistance(400, "yd", "stride intervals"),
            ),
        }),
    ),
    "intermediate": PlanLevelInfo(
        id="intermediate",
        name="Intermediate Plan",
        target_group="Recreational",
        weekly_mileage_range=_freeze({
            "metric": MileageRange(24, 56, "km/week"),
            "imperial": MileageRange(15, 35, "mi/week"),
        }),
        quality_sessions=2,
        training_days="4-5 days",
        description=(
            "Developing aerobic base with structured tempo and light "
            "interval training."
        ),
        suitable_for=(
            "Regular recreational runners (6+ months consistent)",
            "Comfortable with 4-5 training days per week",
            "Goal times: 5K 25-30min, 10K 52-62min, Half 2:00-2:20",
            "Available 4-6 hours per week for training",
        ),
        example_distances=_freeze({
            "metric": (
                ExampleDistance(5, "km", "typical easy run"),
                ExampleDistance(12, "km", "weekend long run"),
                ExampleDistance(3, "km", "tempo run"),
            ),
            "imperial": (
                ExampleDistance(3, "mi", "typical easy run"),
                ExampleDistance(7, "mi", "weekend long run"),
                ExampleDistance(2, "mi", "tempo run"),
            ),
        }),
    ),
    "advanced": PlanLevelInfo(
        id="advanced",
        name="Advanced Plan",
        target_group="Serious",
        weekly_mileage_range=_freeze({
            "metric": MileageRange(48, 88, "km/week"),
            "imperial": MileageRange(30, 55, "mi/week"),
        }),
        quality_sessions=3,
        training_days="5-6 days",
        description=(
            "Structured training with all intensity types for significant "
            "performance gains."
        ),
        suitable_for=(
            "Committed runners with 12+ months consistent training",
            "Comfortable with 5-6 training days per week",
            "Goal times: 5K 20-25min, 10K 42-52min, Half 1:30-2:00",
            "Available 6-8 hours per week for training",
        ),
        example_distances=_freeze({
            "metric": (
                ExampleDistance(8, "km", "typical easy run"),
                ExampleDistance(20, "km", "weekend long run"),
                ExampleDistance(5, "km", "tempo run"),
            ),
            "imperial": (
                ExampleDistance(5, "mi", "typical easy run"),
                ExampleDistance(12, "mi", "weekend long run"),
                ExampleDistance(3, "mi", "tempo run"),
            ),
        }),
    ),
    "elite": PlanLevelInfo(
        id="elite",
        name="Elite Plan",
        target_group="Competitive",
        weekly_mileage_range=_freeze({
            "metric": MileageRange(80, 128, "km/week"),
            "imperial": MileageRange(50, 80, "mi/week"),
        }),
        quality_sessions=3,
        training_days="6-7 days",
        description=(
            "High-volume training with sophisticated workout structure for "
            "competitive athletes."
        ),
        suitable_for=(
            "Competitive runners with 2+ years consistent high-volume training",
            "Comfortable with 6-7 training days per week",
            "Goal times: 5K sub-20min, 10K sub-42min, Half sub-1:30",
            "Available 8+ hours per week for training",
        ),
        example_distances=_freeze({
            "metric": (
                ExampleDistance(12, "km", "typical easy run"),
                ExampleDistance(32, "km", "weekend long run"),
                ExampleDistance(8, "km", "tempo run"),
            ),
            "imperial": (
                ExampleDistance(7, "mi", "typical easy run"),
                ExampleDistance(20, "mi", "weekend long run"),
                ExampleDistance(5, "mi", "tempo run"),
            ),
        }),
    ),
})

# Minimum training days by plan level
MIN_TRAINING_DAYS: Mapping[str, int] = _freeze({
    "foundation": 3,
    "intermediate": 4,
    "advanced": 5,
    "elite": 6,
})

SESSION_DURATION_RANGES: Mapping[str, SessionDurationRange] = _freeze({
    "foundation": SessionDurationRange(min=30, max=75, optimal=45),
    "intermediate": SessionDurationRange(min=45, max=105, optimal=75),
    "advanced": SessionDurationRange(min=60, max=135, optimal=90),
    "elite": SessionDurationRange(min=75, max=180, optimal=120),
})


# =============================================================================
# Goal races
# =============================================================================

GOAL_RACES: Mapping[str, GoalRaceInfo] = _freeze({
    "5K": GoalRaceInfo(
        id="5K",
        name="5K",
        distance=_freeze({"metric": (5, "km"), "imperial": (3.1, "mi")}),
        description="Fast-paced race requiring speed and anaerobic capacity",
        focus_areas=(
            "High speed work frequency",
            "Track-based interval training",
            "Moderate weekly mileage",
            "Lactate threshold development",
        ),
        typical_duration=_freeze({
            "beginner": "30-35 min",
            "intermediate": "22-28 min",
            "advanced": "18-22 min",
        }),
    ),
    "10K": GoalRaceInfo(
        id="10K",
        name="10K",
        distance=_freeze({"metric": (10, "km"), "imperial": (6.2, "mi")}),
        description="Balanced race combining speed endurance with aerobic power",
        focus_areas=(
            "Balanced tempo and marathon pace work",
            "Moderate-high weekly mileage",
            "VO2max interval training",
            "Race-specific pace practice",
        ),
        typical_duration=_freeze({
            "beginner": "60-70 min",
            "intermediate": "45-55 min",
            "advanced": "35-45 min",
        }),
    ),
    "Half Marathon": GoalRaceInfo(
        id="Half Marathon",
        name="Half Marathon",
        distance=_freeze({"metric": (21.1, "km"), "imperial": (13.1, "mi")}),
        description="Demanding endurance race emphasizing lactate threshold",
        focus_areas=(
            "Extensive tempo training",
            "Progressive long runs",
            "High weekly mileage",
            "Marathon pace integration",
        ),
        typical_duration=_freeze({
            "beginner": "2:30-3:00",
            "intermediate": "1:50-2:15",
            "advanced": "1:20-1:50",
        }),
    ),
    "Marathon": GoalRaceInfo(
        id="Marathon",
        name="Marathon",
        distance=_freeze({"metric": (42.2, "km"), "imperial": (26.2, "mi")}),
        description="Ultimate endurance challenge requiring high aerobic capacity",
        focus_areas=(
            "High mileage priority",
            "Long run emphasis (up to 3+ hours)",
            "Marathon pace focus",
            "Fueling and pacing strategies",
        ),
        typical_duration=_freeze({
            "beginner": "5:00-6:00",
            "intermediate": "3:45-4:30",
            "advanced": "2:45-3:30",
        }),
    ),
    "Ultra": GoalRaceInfo(
        id="Ultra",
        name="Ultra Marathon",
        distance=_freeze({"metric": (50, "km"), "imperial": (31, "mi")}),
        description="Extended endurance event focusing on time on feet",
        focus_areas=(
            "Very high weekly mileage",
            "Back-to-back long runs",
            "Fueling and hydration practice",
            "Mental endurance training",
        ),
        typical_duration=_freeze({
            "beginner": "6:00-8:00",
            "intermediate": "4:30-5:30",
            "advanced": "3:30-4:15",
        }),
    ),
})


# =============================================================================
# Experience levels
# =============================================================================

EXPERIENCE_LEVELS: Mapping[str, ExperienceLevelInfo] = _freeze({
    "beginner": ExperienceLevelInfo(
        id="beginner",
        name="Beginner/Returning",
        description="New to running or returning after extended break",
        weekly_mileage_range=_freeze({"metric": (0, 16), "imperial": (0, 10)}),
        recommended_plan="foundation",
        training_days="3-4 days",
        characteristics=(
            "Starting running journey or returning after 6+ months break",
            "Focus on building running habit and preventing injury",
            "Comfortable with 3-4 training sessions per week",
            "Looking to establish aerobic base safely",
        ),
    ),
    "recreational": ExperienceLevelInfo(
        id="recreational",
        name="Recreational",
        description="Regular runner with moderate weekly volume",
        weekly_mileage_range=_freeze({"metric": (16, 40), "imperial": (10, 25)}),
        recommended_plan="intermediate",
        training_days="4-5 days",
        characteristics=(
            "Running consistently for 6+ months",
            "Comfortable with 4-5 training days per week",
            "Ready for structured tempo and light interval work",
            "Goal times: 5K 25-30min, 10K 52-62min, Half 2:00-2:20",
        ),
    ),
    "serious": ExperienceLevelInfo(
        id="serious",
        name="Serious",
        description="Committed runner with higher training volume",
        weekly_mileage_range=_freeze({"metric": (40, 80), "imperial": (25, 50)}),
        recommended_plan="advanced",
        training_days="5-6 days",
        characteristics=(
            "Consistent training for 12+ months",
            "Comfortable with 5-6 training days per week",
            "Ready for all intensity types and higher volume",
            "Goal times: 5K 20-25min, 10K 42-52min, Half 1:30-2:00",
        ),
    ),
    "competitive": ExperienceLevelInfo(
        id="competitive",
        name="Competitive",
        description="High-volume competitive athlete",
        weekly_mileage_range=_freeze({"metric": (80, 160), "imperial": (50, 100)}),
        recommended_plan="elite",
        training_days="6-7 days",
        characteristics=(
            "Competitive runner with 2+ years high-volume training",
            "Comfortable with 6-7 training days per week",
            "Experienced with sophisticated workout structures",
            "Goal times: 5K sub-20min, 10K sub-42min, Half sub-1:30",
        ),
    ),
})


# =============================================================================
# Experience-based paces (min/mi), used when no fitness score is available
# =============================================================================

EXPERIENCE_PACES: Mapping[str, Mapping[str, str]] = _freeze({
    "beginner": _freeze({
        "easy": "8:30",
        "marathon": "8:00",
        "threshold": "7:15",
        "interval": "6:45",
        "repetition": "6:15",
    }),
    "recreational": _freeze({
        "easy": "7:30",
        "marathon": "7:00",
        "threshold": "6:20",
        "interval": "6:00",
        "repetition": "5:45",
    }),
    "serious": _freeze({
        "easy": "6:45",
        "marathon": "6:15",
        "threshold": "5:35",
        "interval": "5:15",
        "repetition": "4:55",
    }),
    "competitive": _freeze({
        "easy": "6:00",
        "marathon": "5:30",
        "threshold": "4:55",
        "interval": "4:35",
        "repetition": "4:15",
    }),
})

# Last-resort paces (min/mi)
DEFAULT_PACES: Mapping[str, str] = EXPERIENCE_PACES["recreational"]

# Unit system the two pace tables above are expressed in
EXPERIENCE_PACE_SYSTEM = "imperial"
