"""
Plan Generator: assemble a complete training plan from the runner's inputs.

Pipeline:
    1. Resolve the selected plan level
    2. Base paces: fitness-score table, else experience estimate, else defaults
    3. Express the paces in the runner's unit system
    4. Slow them for altitude at or above the baseline threshold
    5. Build the 4-phase structure with example weeks
    6. Attach the altitude block and metadata, stamp time and id

Every fallback taken along the way is recorded in the plan's notices.
"""

from datetime import datetime
from typing import List, Optional, Tuple
import logging
import uuid

from plan_data.reference import (
    DEFAULT_PACES,
    EXPERIENCE_LEVELS,
    EXPERIENCE_PACE_SYSTEM,
    EXPERIENCE_PACES,
    PLAN_LEVELS,
)
from plan_data.vdot_table import VDOT_MAX, VDOT_MIN

from .altitude import calculate_altitude_adjustments
from .config import DEFAULT_CONFIG, PlannerConfig
from .errors import MissingPlanInputError
from .fitness import get_training_paces
from .models import (
    ExperienceLevel,
    FitnessAssessment,
    GeneratedPlan,
    PaceDetail,
    PaceSource,
    PaceZone,
    PlanMetadata,
    TrainingConstraints,
    TrainingPaces,
    TrainingPacesWithUnits,
)
from .structure import coerce_plan_level, generate_plan_structure
from .units import UnitPreferences, UnitSystem, convert_pace

logger = logging.getLogger(__name__)


# (description, purpose) for each named pace
PACE_DESCRIPTIONS = {
    PaceZone.EASY: (
        "Conversational pace for aerobic base building",
        "Develops aerobic capacity and promotes recovery between harder sessions",
    ),
    PaceZone.MARATHON: (
        "Comfortably hard race pace for sustained efforts",
        "Builds race-specific endurance and lactate clearance",
    ),
    PaceZone.THRESHOLD: (
        "Tempo pace for lactate threshold development",
        "Improves lactate threshold and teaches body to clear lactate efficiently",
    ),
    PaceZone.INTERVAL: (
        "Hard pace for VO2max development",
        "Maximizes aerobic power and improves running economy",
    ),
    PaceZone.REPETITION: (
        "Very fast pace for speed and neuromuscular development",
        "Develops speed, running form, and neuromuscular efficiency",
    ),
}


def generate_plan_id(now: Optional[datetime] = None) -> str:
    """Unique id of the form plan_<epoch ms>_<9 hex chars>."""
    now = now or datetime.now()
    return f"plan_{int(now.timestamp() * 1000)}_{uuid.uuid4().hex[:9]}"


def resolve_base_paces(
    fitness_assessment: FitnessAssessment,
    system: UnitSystem
) -> Tuple[TrainingPaces, UnitSystem, PaceSource, List[str]]:
    """
    Pick the base paces for a runner.

    Returns:
        (paces, system the paces are written in, source, notices)
    """
    notices: List[str] = []
    score = fitness_assessment.calculated_fitness_score

    if score is not None:
        paces = get_training_paces(score, system)
        if paces is not None:
            return paces, system, PaceSource.VDOT_TABLE, notices
        notices.append(
            f"Fitness score {score} is outside the pace table ({VDOT_MIN}-{VDOT_MAX}); "
            f"training paces are estimated from your experience level instead."
        )
        logger.debug("Fitness score %s outside table, falling back", score)

    experience = fitness_assessment.experience_level
    level_id = experience.value if isinstance(experience, ExperienceLevel) else experience
    pace_system = UnitSystem(EXPERIENCE_PACE_SYSTEM)

    estimated = EXPERIENCE_PACES.get(level_id)
    if estimated is not None:
        if score is None:
            name = EXPERIENCE_LEVELS[level_id].name
            notices.append(
                f"No fitness score available; training paces are estimated from the "
                f"{name} experience level."
            )
        return (TrainingPaces.from_mapping(estimated), pace_system,
                PaceSource.EXPERIENCE_ESTIMATE, notices)

    notices.append("Experience level not recognised; default training paces are used.")
    logger.debug("Unknown experience level %r, using default paces", level_id)
    return TrainingPaces.from_mapping(DEFAULT_PACES), pace_system, PaceSource.DEFAULT, notices


def convert_paces(
    paces: TrainingPaces,
    from_system: UnitSystem,
    to_system: UnitSystem
) -> TrainingPaces:
    """Convert all five paces between unit systems."""
    if from_system == to_system:
        return paces
    return TrainingPaces.from_mapping({
        zone.value: convert_pace(pace, from_system, to_system) for zone, pace in paces.items()
    })


def describe_paces(paces: TrainingPaces, pace_unit: str) -> TrainingPacesWithUnits:
    details = {}
    for zone, value in paces.items():
        description, purpose = PACE_DESCRIPTIONS[zone]
        details[zone.value] = PaceDetail(value, pace_unit, description, purpose)
    return TrainingPacesWithUnits(**details)


def generate_training_plan(
    fitness_assessment: Optional[FitnessAssessment],
    constraints: Optional[TrainingConstraints],
    unit_preferences: Optional[UnitPreferences],
    config: Optional[PlannerConfig] = None,
    now: Optional[datetime] = None,
    plan_id: Optional[str] = None
) -> GeneratedPlan:
    """
    Generate a complete 20-week training plan.

    Deterministic for identical inputs when `now` and `plan_id` are given.

    Args:
        fitness_assessment: Experience, mileage, fitness score and plan choice
        constraints: Training days, session length, goal race, altitude
        unit_preferences: Units the plan is expressed in
        config: Policy constants (DEFAULT_CONFIG when None)
        now: Generation timestamp (current time when None)
        plan_id: Plan id (generated when None)

    Returns:
        GeneratedPlan

    Raises:
        MissingPlanInputError: if any of the three inputs is None
        InvalidPlanLevelError: if the selected plan level is unknown
    """
    missing = [
        name for name, value in (
            ('fitness_assessment', fitness_assessment),
            ('constraints', constraints),
            ('unit_preferences', unit_preferences),
        )
        if value is None
    ]
    if missing:
        raise MissingPlanInputError(missing)

    config = config or DEFAULT_CONFIG
    level = coerce_plan_level(fitness_assessment.selected_plan_level)
    system = unit_preferences.system

    base_paces, pace_system, source, notices = resolve_base_paces(fitness_assessment, system)
    notices = list(fitness_assessment.fitness_notes) + notices

    user_paces = convert_paces(base_paces, pace_system, system)

    altitude_block = calculate_altitude_adjustments(
        user_paces,
        constraints.training_altitude,
        system,
        system,
        config.altitude_seconds_per_400m,
    )
    final_paces = altitude_block.paces if altitude_block is not None else user_paces

    plan_structure = generate_plan_structure(
        level,
        constraints.goal_race,
        unit_preferences,
        fitness_assessment.current_weekly_mileage,
        constraints.available_training_days,
        config,
    )

    now = now or datetime.now()
    metadata = PlanMetadata(
        generated_at=now,
        total_weeks=config.total_weeks,
        weekly_mileage_range=PLAN_LEVELS[level.value].weekly_mileage_range[system.value],
        estimated_time_commitment=(
            f"{constraints.selected_day_count} sessions/week, "
            f"{constraints.session_duration:g} min/session"
        ),
        progression_principles=tuple(config.progression_principles),
    )

    plan = GeneratedPlan(
        id=plan_id or generate_plan_id(now),
        plan_level=level,
        fitness_score=fitness_assessment.calculated_fitness_score,
        unit_system=system,
        training_paces=describe_paces(final_paces, unit_preferences.pace_unit),
        plan_structure=plan_structure,
        constraints=constraints,
        metadata=metadata,
        pace_source=source,
        altitude_adjustments=altitude_block,
        notices=tuple(notices),
    )

    logger.info(
        "Generated %s plan %s (%s paces, %s units)",
        level.value, plan.id, source.value, system.value
    )
    return plan
