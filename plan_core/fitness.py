"""
Fitness Scoring: race performance -> fitness score -> training paces.

A fitness score is the integer VDOT row whose predicted time for the race
distance matches the runner's result. Exact matches are preferred; when
there is none the nearest table time is used and the result is flagged as
approximate so the caller can disclose it.

Race times are compared as total seconds, so "19:57" and "0:19:57" name the
same performance.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple, Union
import logging
import re

import numpy as np

from plan_data.vdot_table import (
    VDOT_TABLE,
    format_clock,
    get_vdot_entry,
    race_time_column,
    table_scores,
)
from plan_data.reference import EXPERIENCE_LEVELS

from .errors import InvalidTimeFormatError
from .models import (
    ExperienceLevel,
    FitnessAssessment,
    PlanLevel,
    RaceDistance,
    RaceInput,
    TrainingPaces,
)
from .units import UnitSystem, coerce_unit_system

logger = logging.getLogger(__name__)

_TIME_PATTERN = re.compile(r"^\s*(\d+):(\d{1,2})(?::(\d{1,2}))?\s*$")

# Scores used to illustrate typical results for a distance
EXAMPLE_SCORES = {
    'beginner': 40,
    'intermediate': 50,
    'advanced': 60,
}


@dataclass(frozen=True)
class ClosestRaceMatch:
    """Nearest table time for a race result."""
    time: str
    fitness_score: int
    difference_seconds: int


@dataclass(frozen=True)
class FitnessScoreResult:
    """
    Outcome of scoring a race result.

    `warning` is set whenever `is_approximate` is True.
    """
    fitness_score: int
    matched_time: str
    is_approximate: bool
    warning: Optional[str] = None


@dataclass(frozen=True)
class MileageCheck:
    is_valid: bool
    warning: Optional[str] = None


def _distance_id(race_distance: Union[RaceDistance, str]) -> str:
    if isinstance(race_distance, RaceDistance):
        return race_distance.value
    return race_distance


def parse_race_time(race_time: str) -> int:
    """
    Parse "MM:SS" or "H:MM:SS" into total seconds.

    Raises:
        InvalidTimeFormatError: if the string is neither form, or a minutes
            or seconds field is 60 or more where it must not be
    """
    if not isinstance(race_time, str):
        raise InvalidTimeFormatError(race_time)
    match = _TIME_PATTERN.match(race_time)
    if match is None:
        raise InvalidTimeFormatError(race_time)

    first, second, third = match.groups()
    if third is None:
        minutes, seconds = int(first), int(second)
        if seconds >= 60:
            raise InvalidTimeFormatError(race_time)
        return minutes * 60 + seconds

    hours, minutes, seconds = int(first), int(second), int(third)
    if minutes >= 60 or seconds >= 60:
        raise InvalidTimeFormatError(race_time)
    return hours * 3600 + minutes * 60 + seconds


def calculate_fitness_score(
    race_distance: Union[RaceDistance, str],
    race_time: str
) -> Optional[int]:
    """
    Exact table lookup of the fitness score for a race result.

    Args:
        race_distance: 5K, 10K, Half Marathon or Marathon
        race_time: "MM:SS" or "H:MM:SS"

    Returns:
        The fitness score, or None when the distance is unknown or no table
        row predicts exactly this time
    """
    column = race_time_column(_distance_id(race_distance))
    if column is None:
        return None

    seconds = parse_race_time(race_time)
    hits = np.flatnonzero(column == seconds)
    if hits.size == 0:
        return None
    return int(table_scores()[hits[0]])


def find_closest_race_time(
    race_distance: Union[RaceDistance, str],
    input_time: str
) -> Optional[ClosestRaceMatch]:
    """
    Nearest table time for a race result.

    Minimises the absolute difference in seconds; on a tie the row that
    comes first in table order wins.

    Returns:
        ClosestRaceMatch, or None for an unknown distance
    """
    race_id = _distance_id(race_distance)
    column = race_time_column(race_id)
    if column is None:
        return None

    seconds = parse_race_time(input_time)
    differences = np.abs(column - seconds)
    index = int(np.argmin(differences))
    score = int(table_scores()[index])

    return ClosestRaceMatch(
        time=VDOT_TABLE[score].race_times[race_id],
        fitness_score=score,
        difference_seconds=int(differences[index]),
    )


def resolve_fitness_score(
    race_distance: Union[RaceDistance, str],
    race_time: str
) -> Optional[FitnessScoreResult]:
    """
    Score a race result: exact match first, then the closest table time.

    Approximate matches always carry a warning describing the substitution.

    Returns:
        FitnessScoreResult, or None for an unknown distance

    Raises:
        InvalidTimeFormatError: if race_time is malformed
    """
    race_id = _distance_id(race_distance)
    exact = calculate_fitness_score(race_id, race_time)
    if exact is not None:
        return FitnessScoreResult(
            fitness_score=exact,
            matched_time=VDOT_TABLE[exact].race_times[race_id],
            is_approximate=False,
        )

    closest = find_closest_race_time(race_id, race_time)
    if closest is None:
        return None

    logger.debug(
        "No exact %s match for %s, using %s (score %d)",
        race_id, race_time, closest.time, closest.fitness_score
    )
    warning = (
        f"No exact match for a {race_id} time of {race_time.strip()}. "
        f"Using the closest table time, {closest.time} "
        f"(fitness score {closest.fitness_score}); training paces are approximate."
    )
    return FitnessScoreResult(
        fitness_score=closest.fitness_score,
        matched_time=closest.time,
        is_approximate=True,
        warning=warning,
    )


def get_training_paces(
    fitness_score: Optional[int],
    system: Union[UnitSystem, str] = UnitSystem.IMPERIAL
) -> Optional[TrainingPaces]:
    """
    Table paces for a fitness score.

    Returns None when the score is missing, not a whole number, or outside
    the table; callers fall back to experience-based paces.
    """
    system = coerce_unit_system(system)
    if fitness_score is None or fitness_score != int(fitness_score):
        return None
    entry = get_vdot_entry(int(fitness_score))
    if entry is None:
        return None
    return TrainingPaces.from_mapping(entry.paces_for(system.value))


def get_available_race_times(race_distance: Union[RaceDistance, str]) -> List[str]:
    """All table times for a distance, fastest first."""
    race_id = _distance_id(race_distance)
    column = race_time_column(race_id)
    if column is None:
        return []
    return [format_clock(int(seconds)) for seconds in np.sort(column)]


def get_race_time_for_vdot(
    fitness_score: int,
    race_distance: Union[RaceDistance, str]
) -> Optional[str]:
    entry = get_vdot_entry(fitness_score)
    if entry is None:
        return None
    return entry.race_times.get(_distance_id(race_distance))


def get_example_race_times(race_distance: Union[RaceDistance, str]) -> Dict[str, Optional[str]]:
    """Typical beginner / intermediate / advanced times for a distance."""
    return {
        label: get_race_time_for_vdot(score, race_distance)
        for label, score in EXAMPLE_SCORES.items()
    }


def get_recommended_plan(
    experience_level: Union[ExperienceLevel, str],
    fitness_score: Optional[int] = None
) -> PlanLevel:
    """
    Recommended plan level for an experience level.

    The fitness score is accepted for callers that have one but does not
    change the recommendation. Unknown levels get the foundation plan.
    """
    level_id = (
        experience_level.value if isinstance(experience_level, ExperienceLevel)
        else experience_level
    )
    info = EXPERIENCE_LEVELS.get(level_id)
    if info is None:
        return PlanLevel.FOUNDATION
    return PlanLevel(info.recommended_plan)


def validate_mileage_for_experience(
    experience_level: Union[ExperienceLevel, str],
    weekly_mileage: float,
    system: Union[UnitSystem, str]
) -> MileageCheck:
    """
    Compare current weekly mileage to the experience level's typical range.

    The check is advisory: known levels are always valid, with a warning
    when the mileage is below the range or above 1.5x its maximum.
    """
    system = coerce_unit_system(system)
    level_id = (
        experience_level.value if isinstance(experience_level, ExperienceLevel)
        else experience_level
    )
    info = EXPERIENCE_LEVELS.get(level_id)
    if info is None:
        return MileageCheck(is_valid=False)

    low, high = info.weekly_mileage_range[system.value]
    unit = "km" if system == UnitSystem.METRIC else "mi"
    name = info.name.lower()

    if weekly_mileage < low:
        return MileageCheck(
            is_valid=True,
            warning=(
                f"Your current mileage ({weekly_mileage:g} {unit}/week) is below the "
                f"typical {name} range. Consider the Foundation plan if you're just "
                f"starting out."
            ),
        )

    if weekly_mileage > high * 1.5:
        return MileageCheck(
            is_valid=True,
            warning=(
                f"Your current mileage ({weekly_mileage:g} {unit}/week) is significantly "
                f"above the typical {name} range. Consider a higher level plan for "
                f"better progression."
            ),
        )

    return MileageCheck(is_valid=True)


def format_race_time(time: str, time_format: str) -> str:
    """
    Normalise a race time to "MM:SS" or "H:MM:SS".

    Only drops or adds a zero hour field; anything else is returned as is.
    """
    parts = time.split(":")
    if time_format == "MM:SS":
        if len(parts) == 3 and int(parts[0]) == 0:
            return f"{parts[1]}:{parts[2]}"
    elif time_format == "H:MM:SS":
        if len(parts) == 2:
            return f"0:{time}"
    return time


def create_fitness_assessment(
    experience_level: Union[ExperienceLevel, str],
    current_weekly_mileage: float,
    race_input: Optional[RaceInput] = None,
    selected_plan_level: Optional[Union[PlanLevel, str]] = None
) -> FitnessAssessment:
    """
    Build a FitnessAssessment from the runner's answers.

    Scores the race result when one is given and fills in the recommended
    plan. `selected_plan_level` defaults to the recommendation; a string
    that names no plan level is kept as is and rejected later by plan
    generation.

    Raises:
        ValueError: for an unknown experience level
        InvalidTimeFormatError: for a malformed race time
    """
    experience = ExperienceLevel(experience_level)

    score: Optional[int] = None
    approximate = False
    notes: Tuple[str, ...] = ()
    if race_input is not None:
        result = resolve_fitness_score(race_input.distance, race_input.time)
        if result is not None:
            score = result.fitness_score
            approximate = result.is_approximate
            if result.warning:
                notes = (result.warning,)

    recommended = get_recommended_plan(experience, score)

    if selected_plan_level is None:
        selected: Union[PlanLevel, str] = recommended
    elif isinstance(selected_plan_level, PlanLevel):
        selected = selected_plan_level
    else:
        try:
            selected = PlanLevel(selected_plan_level)
        except ValueError:
            selected = selected_plan_level

    return FitnessAssessment(
        experience_level=experience,
        current_weekly_mileage=current_weekly_mileage,
        recommended_plan_level=recommended,
        selected_plan_level=selected,
        race_input=race_input,
        calculated_fitness_score=score,
        fitness_score_approximate=approximate,
        fitness_notes=notes,
    )
