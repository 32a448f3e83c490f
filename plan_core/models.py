"""
Data model for plan derivation.

All records are frozen, request-scoped value objects: created once per
plan-generation call and never mutated afterwards. Closed sets of string
literals are Enums whose values are the ids used by the reference tables.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple, Union, TYPE_CHECKING

from .units import UnitSystem

if TYPE_CHECKING:
    from plan_data.reference import MileageRange
    from .workouts import ExampleWeek


class ExperienceLevel(Enum):
    """Runner experience classification."""
    BEGINNER = "beginner"           # New or returning after 6+ months
    RECREATIONAL = "recreational"   # 10-25 mi/week
    SERIOUS = "serious"             # 25-50 mi/week
    COMPETITIVE = "competitive"     # 50+ mi/week


class PlanLevel(Enum):
    """Training plan level."""
    FOUNDATION = "foundation"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    ELITE = "elite"


class GoalRace(Enum):
    """Goal race the plan prepares for."""
    FIVE_K = "5K"
    TEN_K = "10K"
    HALF_MARATHON = "Half Marathon"
    MARATHON = "Marathon"
    ULTRA = "Ultra"


class RaceDistance(Enum):
    """Race distances accepted for fitness assessment."""
    FIVE_K = "5K"
    TEN_K = "10K"
    HALF_MARATHON = "Half Marathon"
    MARATHON = "Marathon"


class Weekday(Enum):
    """Days of the week, indexed from Sunday."""
    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6

    @property
    def label(self) -> str:
        return self.name.capitalize()


class WorkoutType(Enum):
    """Day classification within an example week."""
    EASY = "easy"
    LONG = "long"
    QUALITY = "quality"
    REST = "rest"


class PaceZone(Enum):
    """The five named training paces."""
    EASY = "easy"
    MARATHON = "marathon"
    THRESHOLD = "threshold"
    INTERVAL = "interval"
    REPETITION = "repetition"


class PaceSource(Enum):
    """Where the base training paces came from."""
    VDOT_TABLE = "vdot_table"
    EXPERIENCE_ESTIMATE = "experience_estimate"
    DEFAULT = "default"


class PhaseKind(Enum):
    """The four fixed periodization phases."""
    BASE = "base"
    TEMPO = "tempo"
    INTEGRATION = "integration"
    PEAK = "peak"


# =============================================================================
# Inputs
# =============================================================================

@dataclass(frozen=True)
class RaceInput:
    """A recent race result used to derive the fitness score."""
    distance: RaceDistance
    time: str


@dataclass(frozen=True)
class FitnessAssessment:
    """
    Outcome of the fitness questions.

    `selected_plan_level` may differ from `recommended_plan_level`; that is a
    user override, allowed but flagged through `is_plan_override`.
    `current_weekly_mileage` is in the user's distance unit.
    """
    experience_level: ExperienceLevel
    current_weekly_mileage: float
    recommended_plan_level: PlanLevel
    selected_plan_level: Union[PlanLevel, str]
    race_input: Optional[RaceInput] = None
    calculated_fitness_score: Optional[int] = None
    fitness_score_approximate: bool = False
    fitness_notes: Tuple[str, ...] = ()

    @property
    def is_plan_override(self) -> bool:
        return self.selected_plan_level != self.recommended_plan_level


@dataclass(frozen=True)
class TrainingConstraints:
    """
    Schedule constraints.

    available_training_days has 7 entries, index 0 = Sunday. The altitude is
    in the user's altitude unit.
    """
    available_training_days: Tuple[bool, ...]
    session_duration: float
    goal_race: Union[GoalRace, str]
    training_altitude: Optional[float] = None

    def __post_init__(self):
        object.__setattr__(
            self, 'available_training_days', tuple(bool(d) for d in self.available_training_days)
        )

    @property
    def selected_day_count(self) -> int:
        return sum(self.available_training_days)

    def to_dict(self) -> Dict[str, Any]:
        goal = self.goal_race.value if isinstance(self.goal_race, GoalRace) else self.goal_race
        return {
            'available_training_days': list(self.available_training_days),
            'session_duration': self.session_duration,
            'goal_race': goal,
            'training_altitude': self.training_altitude,
        }


# =============================================================================
# Paces
# =============================================================================

@dataclass(frozen=True)
class TrainingPaces:
    """The five named paces as "M:SS" strings in one unit system."""
    easy: str
    marathon: str
    threshold: str
    interval: str
    repetition: str

    def get(self, zone: PaceZone) -> str:
        return getattr(self, zone.value)

    def items(self) -> Iterator[Tuple[PaceZone, str]]:
        for zone in PaceZone:
            yield zone, self.get(zone)

    def to_dict(self) -> Dict[str, str]:
        return {zone.value: pace for zone, pace in self.items()}

    @classmethod
    def from_mapping(cls, paces: Mapping[str, str]) -> 'TrainingPaces':
        return cls(**{zone.value: paces[zone.value] for zone in PaceZone})


@dataclass(frozen=True)
class PaceDetail:
    """A training pace with its display unit and explanation."""
    value: str
    unit: str
    description: str
    purpose: str

    def to_dict(self) -> Dict[str, str]:
        return {
            'value': self.value,
            'unit': self.unit,
            'description': self.description,
            'purpose': self.purpose,
        }


@dataclass(frozen=True)
class TrainingPacesWithUnits:
    easy: PaceDetail
    marathon: PaceDetail
    threshold: PaceDetail
    interval: PaceDetail
    repetition: PaceDetail

    def get(self, zone: PaceZone) -> PaceDetail:
        return getattr(self, zone.value)

    def items(self) -> Iterator[Tuple[PaceZone, PaceDetail]]:
        for zone in PaceZone:
            yield zone, self.get(zone)

    def values(self) -> TrainingPaces:
        """Bare pace strings."""
        return TrainingPaces(**{zone.value: detail.value for zone, detail in self.items()})

    def to_dict(self) -> Dict[str, Dict[str, str]]:
        return {zone.value: detail.to_dict() for zone, detail in self.items()}


@dataclass(frozen=True)
class AltitudeAdjustments:
    """
    Altitude correction applied to training paces.

    `applied` is True only at or above the baseline altitude; between the
    minimum and the baseline the block carries advice but `paces` equals the
    input paces.
    """
    applied: bool
    altitude: float
    unit: str
    offset_seconds: int
    paces: TrainingPaces
    adjustments: Mapping[str, str]
    explanation: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'applied': self.applied,
            'altitude': {'value': self.altitude, 'unit': self.unit},
            'offset_seconds': self.offset_seconds,
            'paces': self.paces.to_dict(),
            'adjustments': dict(self.adjustments),
            'explanation': self.explanation,
        }


# =============================================================================
# Validation
# =============================================================================

@dataclass(frozen=True)
class Compatibility:
    with_plan_level: bool = True
    with_experience: bool = True
    with_goal_race: bool = True


@dataclass(frozen=True)
class ConstraintValidation:
    """Advisory result of constraint validation; valid iff there are no warnings."""
    is_valid: bool
    warnings: Tuple[str, ...]
    compatibility: Compatibility

    def to_dict(self) -> Dict[str, Any]:
        return {
            'is_valid': self.is_valid,
            'warnings': list(self.warnings),
            'compatibility': {
                'with_plan_level': self.compatibility.with_plan_level,
                'with_experience': self.compatibility.with_experience,
                'with_goal_race': self.compatibility.with_goal_race,
            },
        }


# =============================================================================
# Plan
# =============================================================================

@dataclass(frozen=True)
class PlanPhase:
    """One of the four periodization phases."""
    id: int
    kind: PhaseKind
    name: str
    duration: int
    focus: str
    description: str
    quality_sessions: int
    characteristics: Tuple[str, ...]
    example_week: 'ExampleWeek'

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'kind': self.kind.value,
            'name': self.name,
            'duration': self.duration,
            'focus': self.focus,
            'description': self.description,
            'quality_sessions': self.quality_sessions,
            'characteristics': list(self.characteristics),
            'example_week': self.example_week.to_dict(),
        }


@dataclass(frozen=True)
class PlanMetadata:
    generated_at: datetime
    total_weeks: int
    weekly_mileage_range: 'MileageRange'
    estimated_time_commitment: str
    progression_principles: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'generated_at': self.generated_at.isoformat(),
            'total_weeks': self.total_weeks,
            'weekly_mileage_range': {
                'min': self.weekly_mileage_range.min,
                'max': self.weekly_mileage_range.max,
                'unit': self.weekly_mileage_range.unit,
            },
            'estimated_time_commitment': self.estimated_time_commitment,
            'progression_principles': list(self.progression_principles),
        }


@dataclass(frozen=True)
class GeneratedPlan:
    """
    Terminal output of plan generation.

    `notices` discloses every fallback taken while deriving the plan
    (approximate fitness score, experience-based paces, ...).
    """
    id: str
    plan_level: PlanLevel
    fitness_score: Optional[int]
    unit_system: UnitSystem
    training_paces: TrainingPacesWithUnits
    plan_structure: Tuple[PlanPhase, ...]
    constraints: TrainingConstraints
    metadata: PlanMetadata
    pace_source: PaceSource
    altitude_adjustments: Optional[AltitudeAdjustments] = None
    notices: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        return {
            'id': self.id,
            'plan_level': self.plan_level.value,
            'fitness_score': self.fitness_score,
            'unit_system': self.unit_system.value,
            'training_paces': self.training_paces.to_dict(),
            'plan_structure': [phase.to_dict() for phase in self.plan_structure],
            'altitude_adjustments': (
                self.altitude_adjustments.to_dict() if self.altitude_adjustments else None
            ),
            'constraints': self.constraints.to_dict(),
            'metadata': self.metadata.to_dict(),
            'pace_source': self.pace_source.value,
            'notices': list(self.notices),
        }
