"""
Plan Structure: the fixed 4-phase, 20-week periodization.

Phases and their lengths are policy, not derived optimums:

    Phase I    Base Building        6 weeks   volume x1.0
    Phase II   Tempo Introduction   5 weeks   volume x1.1
    Phase III  Full Integration     5 weeks   volume x1.2
    Phase IV   Peak & Taper         4 weeks   volume x0.8

Each phase carries an example week laid out on the runner's available days:
the long run goes on Sunday when possible, quality sessions are spaced away
from each other and from the long run, remaining available days are easy
runs and unavailable days are rest.

Weekly distance: the long run takes 25% of the weekly target and every other
run takes an equal share of the remainder, never more than the long run.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple, Union
import logging
import math

from plan_data.reference import PLAN_LEVELS

from .config import DEFAULT_CONFIG, PlannerConfig
from .errors import InvalidPlanLevelError
from .models import GoalRace, PhaseKind, PlanLevel, PlanPhase, Weekday, WorkoutType
from .units import UnitPreferences, UnitSystem
from .workouts import (
    PHASE_SESSIONS,
    DayEntry,
    ExampleWeek,
    SessionTemplate,
    session_for_race,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PhaseDefinition:
    kind: PhaseKind
    name: str
    focus: str
    description: str
    characteristics: Tuple[str, ...]


PHASE_DEFINITIONS: Tuple[PhaseDefinition, ...] = (
    PhaseDefinition(
        kind=PhaseKind.BASE,
        name="Phase I: Base Building",
        focus="Aerobic base development and injury prevention",
        description="Establish aerobic foundation with easy running and light strides",
        characteristics=(
            "Primarily easy-paced running",
            "Light strides 2-3 times per week",
            "Focus on consistency and habit formation",
            "Supplemental training introduction",
        ),
    ),
    PhaseDefinition(
        kind=PhaseKind.TEMPO,
        name="Phase II: Tempo Introduction",
        focus="Introduction of threshold running and light speed work",
        description="Add tempo runs while maintaining aerobic base",
        characteristics=(
            "Tempo runs introduced",
            "Continued easy running emphasis",
            "Light repetition work",
            "Progressive mileage increase",
        ),
    ),
    PhaseDefinition(
        kind=PhaseKind.INTEGRATION,
        name="Phase III: Full Integration",
        focus="All intensity types with maximum training stress",
        description="Complete intensity spectrum with interval training",
        characteristics=(
            "Interval training at VO2max",
            "Continued tempo work",
            "Peak weekly mileage",
            "Race simulation workouts",
        ),
    ),
    PhaseDefinition(
        kind=PhaseKind.PEAK,
        name="Phase IV: Peak & Taper",
        focus="Race preparation and controlled taper",
        description="Maintain fitness while reducing fatigue for peak performance",
        characteristics=(
            "Reduced volume with maintained intensity",
            "Race-specific workouts",
            "Emphasis on recovery and freshness",
            "Final preparation and taper",
        ),
    ),
)

# Quality sessions prefer midweek
_MIDWEEK = (Weekday.TUESDAY, Weekday.WEDNESDAY, Weekday.THURSDAY)
_MIDWEEK_BONUS = 0.3
_ADJACENT_HARD_PENALTY = 1.0


def coerce_plan_level(plan_level: Union[PlanLevel, str]) -> PlanLevel:
    """
    Accept a PlanLevel or its string value.

    Raises:
        InvalidPlanLevelError: for a value that names no plan level
    """
    if isinstance(plan_level, PlanLevel):
        return plan_level
    try:
        return PlanLevel(plan_level)
    except ValueError:
        raise InvalidPlanLevelError(plan_level) from None


def quality_sessions_for(
    plan_level: Union[PlanLevel, str],
    config: PlannerConfig = DEFAULT_CONFIG
) -> Tuple[int, ...]:
    """Quality sessions per phase for a plan level, one value per phase."""
    return tuple(config.quality_sessions[coerce_plan_level(plan_level).value])


def baseline_weekly_mileage(
    plan_level: Union[PlanLevel, str],
    system: UnitSystem,
    current_mileage: float,
    config: PlannerConfig = DEFAULT_CONFIG
) -> float:
    """
    Weekly volume the phase multipliers scale from.

    The larger of the runner's current mileage and the plan level's minimum;
    a zero minimum is replaced by the configured floor.
    """
    level = coerce_plan_level(plan_level)
    minimum = PLAN_LEVELS[level.value].weekly_mileage_range[system.value].min
    if not minimum:
        minimum = config.baseline_mileage_floor[system.value]
    return max(current_mileage or 0, minimum)


def weekly_target_mileages(
    plan_level: Union[PlanLevel, str],
    system: UnitSystem,
    current_mileage: float,
    config: PlannerConfig = DEFAULT_CONFIG
) -> Tuple[float, ...]:
    """Target weekly volume for each phase."""
    baseline = baseline_weekly_mileage(plan_level, system, current_mileage, config)
    return tuple(baseline * m for m in config.phase_mileage_multipliers)


def _round_down(value: float) -> float:
    return math.floor(value * 10 + 1e-9) / 10


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _adjacent(day: Weekday, other: Weekday) -> bool:
    return (day.value - other.value) % 7 in (1, 6)


def choose_long_run_day(available: Sequence[Weekday]) -> Optional[Weekday]:
    """Sunday, else Saturday, else the last available day."""
    if not available:
        return None
    for preferred in (Weekday.SUNDAY, Weekday.SATURDAY):
        if preferred in available:
            return preferred
    return available[-1]


def place_quality_sessions(
    count: int,
    candidates: Sequence[Weekday],
    hard_days: Sequence[Weekday]
) -> List[Weekday]:
    """
    Pick days for `count` quality sessions.

    Each session goes to the candidate day with the best score: a midweek
    bonus minus a penalty per adjacent hard day (long run or another
    quality session). Ties go to the earliest day of the week.
    """
    placed: List[Weekday] = []
    remaining = sorted(candidates, key=lambda d: d.value)

    for _ in range(min(count, len(remaining))):
        best_day = None
        best_score = float('-inf')
        for day in remaining:
            score = 1.0
            if day in _MIDWEEK:
                score += _MIDWEEK_BONUS
            for hard in list(hard_days) + placed:
                if _adjacent(day, hard):
                    score -= _ADJACENT_HARD_PENALTY
            if score > best_score:
                best_score = score
                best_day = day
        placed.append(best_day)
        remaining.remove(best_day)

    return sorted(placed, key=lambda d: d.value)


def build_example_week(
    phase: PhaseKind,
    quality_sessions: int,
    weekly_target: float,
    distance_unit: str,
    available_training_days: Optional[Sequence[bool]] = None,
    goal_race: Optional[GoalRace] = None,
    config: PlannerConfig = DEFAULT_CONFIG
) -> ExampleWeek:
    """
    Lay out one week of a phase on the available days.

    Args:
        phase: Phase whose session library is used
        quality_sessions: Quality sessions wanted this week
        weekly_target: Target weekly volume in distance_unit
        distance_unit: "km" or "mi"
        available_training_days: 7 booleans, Sunday first (all days when None)
        goal_race: Binds race-pace sessions to the goal race

    Returns:
        ExampleWeek with 7 days, Sunday first
    """
    if available_training_days is None:
        available_training_days = (True,) * 7
    available = [Weekday(i) for i, ok in enumerate(list(available_training_days)[:7]) if ok]
    sessions = PHASE_SESSIONS[phase]

    long_day = choose_long_run_day(available)
    others = [d for d in available if d != long_day]

    quality_count = min(quality_sessions, len(others), len(sessions.quality))
    if quality_count < quality_sessions:
        logger.debug(
            "%s: %d quality session(s) requested, %d scheduled on %d available day(s)",
            phase.value, quality_sessions, quality_count, len(available)
        )
    hard_days = [long_day] if long_day is not None else []
    quality_days = place_quality_sessions(quality_count, others, hard_days)

    # Distances
    long_distance = _round_down(weekly_target * config.long_run_max_fraction)
    other_count = len(others)
    other_distance = 0.0
    if other_count:
        share = (weekly_target - long_distance) / other_count
        other_distance = _round_down(min(share, long_distance))

    assigned: Dict[Weekday, Tuple[SessionTemplate, Optional[float]]] = {}
    if long_day is not None:
        assigned[long_day] = (sessions.long_run, long_distance)
    for i, day in enumerate(quality_days):
        assigned[day] = (session_for_race(sessions.quality[i], goal_race), other_distance)
    easy_index = 0
    for day in others:
        if day in assigned:
            continue
        template = sessions.easy[easy_index % len(sessions.easy)]
        assigned[day] = (template, other_distance)
        easy_index += 1

    days = []
    for weekday in Weekday:
        template, distance = assigned.get(weekday, (sessions.rest, None))
        days.append(DayEntry(
            weekday=weekday,
            workout_type=template.workout_type,
            workout=template.workout,
            pace_zone=template.pace_zone,
            purpose=template.purpose,
            distance=distance,
        ))

    planned = round(sum(d.distance for d in days if d.distance is not None), 1)
    return ExampleWeek(
        total_mileage=_round_half_up(weekly_target),
        target_mileage=round(weekly_target, 1),
        planned_mileage=planned,
        unit=distance_unit,
        days=tuple(days),
    )


def generate_plan_structure(
    plan_level: Union[PlanLevel, str],
    goal_race: Union[GoalRace, str, None],
    unit_preferences: UnitPreferences,
    current_mileage: float,
    available_training_days: Optional[Sequence[bool]] = None,
    config: Optional[PlannerConfig] = None
) -> Tuple[PlanPhase, ...]:
    """
    Build the four plan phases with their example weeks.

    Durations, quality-session counts and volume multipliers come from the
    configuration; the defaults give 6/5/5/4 weeks.

    Raises:
        InvalidPlanLevelError: for an unknown plan level
    """
    config = config or DEFAULT_CONFIG
    level = coerce_plan_level(plan_level)
    race = goal_race if isinstance(goal_race, GoalRace) else _goal_race_or_none(goal_race)

    quality = quality_sessions_for(level, config)
    targets = weekly_target_mileages(level, unit_preferences.system, current_mileage, config)

    phases = []
    for index, definition in enumerate(PHASE_DEFINITIONS):
        phases.append(PlanPhase(
            id=index + 1,
            kind=definition.kind,
            name=definition.name,
            duration=config.phase_durations[index],
            focus=definition.focus,
            description=definition.description,
            quality_sessions=quality[index],
            characteristics=definition.characteristics,
            example_week=build_example_week(
                definition.kind,
                quality[index],
                targets[index],
                unit_preferences.distance_unit,
                available_training_days,
                race,
                config,
            ),
        ))

    logger.debug("Built %d phases for %s (%s)", len(phases), level.value,
                 unit_preferences.system.value)
    return tuple(phases)


def _goal_race_or_none(goal_race: Optional[str]) -> Optional[GoalRace]:
    try:
        return GoalRace(goal_race)
    except ValueError:
        return None
