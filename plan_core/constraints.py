"""
Constraint Validation: schedule choices checked against plan and experience.

Every rule runs and contributes its own warning, so a runner sees all
issues at once. Nothing here blocks plan generation: the result is advisory
and `is_valid` simply means no rule fired.
"""

from typing import List, Optional, Union
import logging

from plan_data.reference import (
    GOAL_RACES,
    MIN_TRAINING_DAYS,
    PLAN_LEVELS,
    SESSION_DURATION_RANGES,
    SessionDurationRange,
)

from .altitude import generate_altitude_warning, get_altitude_threshold, format_altitude
from .errors import InvalidUnitError
from .models import (
    Compatibility,
    ConstraintValidation,
    ExperienceLevel,
    FitnessAssessment,
    GoalRace,
    PlanLevel,
    TrainingConstraints,
)
from .units import UnitSystem, coerce_unit_system

logger = logging.getLogger(__name__)

ABSOLUTE_MIN_TRAINING_DAYS = 3
DURATION_EXCESS_FACTOR = 1.5

BEGINNER_MAX_DAYS = 4
BEGINNER_MAX_SESSION_MINUTES = 90
COMPETITIVE_MIN_DAYS = 5

AMBITIOUS_FOUNDATION_RACES = ("Marathon", "Ultra")


def _enum_value(value) -> str:
    if isinstance(value, (PlanLevel, GoalRace, ExperienceLevel)):
        return value.value
    return value


def get_min_training_days(plan_level: Union[PlanLevel, str]) -> int:
    """Minimum weekly training days for a plan level (3 when unknown)."""
    return MIN_TRAINING_DAYS.get(_enum_value(plan_level), ABSOLUTE_MIN_TRAINING_DAYS)


def get_session_duration_range(plan_level: Union[PlanLevel, str]) -> SessionDurationRange:
    """Session range in minutes; the foundation range for unknown levels."""
    return SESSION_DURATION_RANGES.get(
        _enum_value(plan_level), SESSION_DURATION_RANGES['foundation']
    )


def _experience_warnings(
    constraints: TrainingConstraints,
    fitness_assessment: FitnessAssessment
) -> List[str]:
    warnings = []
    experience = _enum_value(fitness_assessment.experience_level)
    selected_days = constraints.selected_day_count

    if experience == ExperienceLevel.BEGINNER.value and selected_days > BEGINNER_MAX_DAYS:
        warnings.append(
            "As a beginner, starting with 3-4 training days may be more sustainable "
            "than 5+ days per week."
        )

    if experience == ExperienceLevel.COMPETITIVE.value and selected_days < COMPETITIVE_MIN_DAYS:
        warnings.append(
            "Competitive-level goals typically require 5-7 training days per week "
            "for optimal adaptation."
        )

    if (experience == ExperienceLevel.BEGINNER.value
            and constraints.session_duration > BEGINNER_MAX_SESSION_MINUTES):
        warnings.append(
            "Long sessions (90+ minutes) may be challenging for beginners. Consider "
            "shorter, more frequent sessions initially."
        )

    return warnings


def validate_training_constraints(
    constraints: TrainingConstraints,
    plan_level: Union[PlanLevel, str],
    unit_system: Union[UnitSystem, str],
    fitness_assessment: Optional[FitnessAssessment] = None
) -> ConstraintValidation:
    """
    Check training constraints against a plan level and the runner's experience.

    Args:
        constraints: Days, session duration, goal race and altitude
        plan_level: Selected plan level
        unit_system: System the altitude is measured in
        fitness_assessment: Enables the experience heuristics when given

    Returns:
        ConstraintValidation; `is_valid` is True iff `warnings` is empty
    """
    warnings: List[str] = []
    plan_compatible = True
    experience_compatible = True
    goal_race_compatible = True

    level = _enum_value(plan_level)
    if level not in PLAN_LEVELS:
        warnings.append(
            f"Unknown plan level '{level}'. Foundation plan thresholds were applied."
        )
        plan_compatible = False

    # Training days
    selected_days = constraints.selected_day_count
    min_days = get_min_training_days(level)

    if selected_days < min_days:
        warnings.append(
            f"The {level} plan typically requires {min_days}+ training days, but you've "
            f"selected {selected_days}. Consider adding more training days or selecting "
            f"a lower intensity plan."
        )
        plan_compatible = False

    if selected_days < ABSOLUTE_MIN_TRAINING_DAYS:
        warnings.append(
            "A minimum of 3 training days per week is recommended for effective "
            "progress and injury prevention."
        )
        plan_compatible = False

    # Session duration
    duration = constraints.session_duration
    duration_range = get_session_duration_range(level)
    if duration < duration_range.min:
        warnings.append(
            f"Your session duration ({duration:g} min) is below the typical range for "
            f"{level} plan ({duration_range.min}-{duration_range.max} min). Longer "
            f"sessions may be needed for effective training."
        )
        plan_compatible = False

    if duration > duration_range.max * DURATION_EXCESS_FACTOR:
        warnings.append(
            f"Your session duration ({duration:g} min) is significantly above the typical "
            f"range. Consider whether this is sustainable long-term."
        )

    # Goal race
    goal_race = _enum_value(constraints.goal_race)
    race_info = GOAL_RACES.get(goal_race)
    if race_info is None:
        warnings.append(
            f"Unknown goal race '{goal_race}'. Goal race checks were skipped."
        )
        goal_race_compatible = False
    else:
        if level == PlanLevel.FOUNDATION.value and goal_race in AMBITIOUS_FOUNDATION_RACES:
            warnings.append(
                f"The {race_info.name} is an ambitious goal for the Foundation plan. "
                f"Consider the Intermediate plan for better preparation."
            )
            goal_race_compatible = False

        if (level == PlanLevel.ELITE.value and goal_race == GoalRace.FIVE_K.value
                and selected_days < 6):
            warnings.append(
                "Elite-level 5K training typically benefits from 6-7 training days per "
                "week for optimal speed development."
            )

    # Altitude
    if constraints.training_altitude is not None:
        try:
            altitude_warning = generate_altitude_warning(
                constraints.training_altitude, unit_system
            )
        except InvalidUnitError:
            warnings.append(
                f"Unknown unit system '{unit_system}'. Altitude could not be checked."
            )
        else:
            if altitude_warning:
                warnings.append(altitude_warning)

    # Experience
    if fitness_assessment is not None:
        experience_warnings = _experience_warnings(constraints, fitness_assessment)
        warnings.extend(experience_warnings)
        if experience_warnings:
            experience_compatible = False

    if warnings:
        logger.debug("Constraint validation raised %d warning(s)", len(warnings))

    return ConstraintValidation(
        is_valid=not warnings,
        warnings=tuple(warnings),
        compatibility=Compatibility(
            with_plan_level=plan_compatible,
            with_experience=experience_compatible,
            with_goal_race=goal_race_compatible,
        ),
    )


def get_recommended_session_duration(
    plan_level: Union[PlanLevel, str],
    goal_race: Union[GoalRace, str]
) -> int:
    """
    Suggested session length in minutes.

    Shorter races take 15 min off the plan level's optimum (not below its
    minimum); Marathon and Ultra add 15 min (not above its maximum).
    """
    base = get_session_duration_range(plan_level)
    race = _enum_value(goal_race)
    if race not in GOAL_RACES:
        return base.optimal

    if race in (GoalRace.FIVE_K.value, GoalRace.TEN_K.value):
        return max(base.min, base.optimal - 15)
    if race in (GoalRace.MARATHON.value, GoalRace.ULTRA.value):
        return min(base.max, base.optimal + 15)
    return base.optimal


def format_constraint_impact(
    constraints: TrainingConstraints,
    plan_level: Union[PlanLevel, str],
    unit_system: Union[UnitSystem, str]
) -> List[str]:
    """Short summary lines describing how the constraints shape the plan."""
    impacts = [
        f"Training {constraints.selected_day_count} days per week with "
        f"{constraints.session_duration:g}-minute sessions"
    ]

    level_info = PLAN_LEVELS.get(_enum_value(plan_level))
    if level_info is not None:
        impacts.append(
            f"{level_info.name} with up to {level_info.quality_sessions} quality "
            f"sessions per week"
        )

    race_info = GOAL_RACES.get(_enum_value(constraints.goal_race))
    if race_info is not None:
        impacts.append(f"Optimized for {race_info.name} performance")
        impacts.extend(race_info.focus_areas[:2])

    altitude = constraints.training_altitude
    if altitude:
        threshold = get_altitude_threshold(coerce_unit_system(unit_system))
        if altitude >= threshold.minimum:
            impacts.append(
                f"Altitude-adjusted training paces for {format_altitude(altitude)} "
                f"{threshold.unit}"
            )

    return impacts
