"""
Plan derivation engine for 20-week running training plans.

This package provides:
- Unit conversion (distance, pace, altitude)
- Fitness scoring from race results
- Constraint validation
- Altitude pace adjustment
- Plan structure and example weeks
- Plan assembly
"""

from .errors import (
    PlannerError,
    InvalidUnitError,
    InvalidPaceFormatError,
    InvalidTimeFormatError,
    InvalidPlanLevelError,
    MissingPlanInputError,
)

from .config import (
    PlannerConfig,
    DEFAULT_CONFIG,
    load_config,
    save_config,
)

# Units
from .units import (
    UnitSystem,
    DistanceUnit,
    UnitPreferences,
    CONVERSION_FACTORS,
    create_unit_preferences,
    convert_distance,
    convert_pace,
    convert_altitude,
    parse_pace,
    format_pace,
    format_distance,
    detect_default_unit_system,
    generate_preview_examples,
)

# Data model
from .models import (
    ExperienceLevel,
    PlanLevel,
    GoalRace,
    RaceDistance,
    Weekday,
    WorkoutType,
    PaceZone,
    PaceSource,
    PhaseKind,
    RaceInput,
    FitnessAssessment,
    TrainingConstraints,
    TrainingPaces,
    PaceDetail,
    TrainingPacesWithUnits,
    AltitudeAdjustments,
    Compatibility,
    ConstraintValidation,
    PlanPhase,
    PlanMetadata,
    GeneratedPlan,
)

# Fitness scoring
from .fitness import (
    ClosestRaceMatch,
    FitnessScoreResult,
    parse_race_time,
    calculate_fitness_score,
    find_closest_race_time,
    resolve_fitness_score,
    get_training_paces,
    get_available_race_times,
    get_race_time_for_vdot,
    get_example_race_times,
    get_recommended_plan,
    validate_mileage_for_experience,
    format_race_time,
    create_fitness_assessment,
)

# Constraints and altitude
from .constraints import (
    validate_training_constraints,
    get_recommended_session_duration,
    format_constraint_impact,
)
from .altitude import (
    ALTITUDE_THRESHOLDS,
    is_above_altitude_threshold,
    generate_altitude_warning,
    adjust_pace,
    altitude_pace_offset,
    apply_altitude_pace_adjustments,
    calculate_altitude_adjustments,
)

# Plan structure and assembly
from .workouts import (
    SimpleWorkout,
    CompositeWorkout,
    RaceSpecificWorkout,
    WorkoutDefinition,
    DayEntry,
    ExampleWeek,
)
from .structure import generate_plan_structure
from .plan_generator import generate_training_plan

from .session_store import SessionStore, is_valid_unit_preferences

__all__ = [
    # Errors
    'PlannerError',
    'InvalidUnitError',
    'InvalidPaceFormatError',
    'InvalidTimeFormatError',
    'InvalidPlanLevelError',
    'MissingPlanInputError',
    # Config
    'PlannerConfig',
    'DEFAULT_CONFIG',
    'load_config',
    'save_config',
    # Units
    'UnitSystem',
    'DistanceUnit',
    'UnitPreferences',
    'CONVERSION_FACTORS',
    'create_unit_preferences',
    'convert_distance',
    'convert_pace',
    'convert_altitude',
    'parse_pace',
    'format_pace',
    'format_distance',
    'detect_default_unit_system',
    'generate_preview_examples',
    # Models
    'ExperienceLevel',
    'PlanLevel',
    'GoalRace',
    'RaceDistance',
    'Weekday',
    'WorkoutType',
    'PaceZone',
    'PaceSource',
    'PhaseKind',
    'RaceInput',
    'FitnessAssessment',
    'TrainingConstraints',
    'TrainingPaces',
    'PaceDetail',
    'TrainingPacesWithUnits',
    'AltitudeAdjustments',
    'Compatibility',
    'ConstraintValidation',
    'PlanPhase',
    'PlanMetadata',
    'GeneratedPlan',
    # Fitness
    'ClosestRaceMatch',
    'FitnessScoreResult',
    'parse_race_time',
    'calculate_fitness_score',
    'find_closest_race_time',
    'resolve_fitness_score',
    'get_training_paces',
    'get_available_race_times',
    'get_race_time_for_vdot',
    'get_example_race_times',
    'get_recommended_plan',
    'validate_mileage_for_experience',
    'format_race_time',
    'create_fitness_assessment',
    # Constraints and altitude
    'validate_training_constraints',
    'get_recommended_session_duration',
    'format_constraint_impact',
    'ALTITUDE_THRESHOLDS',
    'is_above_altitude_threshold',
    'generate_altitude_warning',
    'adjust_pace',
    'altitude_pace_offset',
    'apply_altitude_pace_adjustments',
    'calculate_altitude_adjustments',
    # Structure
    'SimpleWorkout',
    'CompositeWorkout',
    'RaceSpecificWorkout',
    'WorkoutDefinition',
    'DayEntry',
    'ExampleWeek',
    'generate_plan_structure',
    'generate_training_plan',
    # Session
    'SessionStore',
    'is_valid_unit_preferences',
]
