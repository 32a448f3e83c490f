"""
Workout Definitions: the session library behind every example week.

A day's workout is one of three variants:
- SimpleWorkout: one continuous effort at one intensity (easy run, long run, rest)
- CompositeWorkout: ordered segments at different paces (tempo + repetitions)
- RaceSpecificWorkout: work at goal-race pace, resolved from the goal race

Each phase has a long run, a rest day, a pool of easy runs and an ordered
pool of quality sessions. The structure generator takes the first N quality
sessions for a phase, where N comes from the plan level's table.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from .models import GoalRace, PaceZone, PhaseKind, Weekday, WorkoutType


@dataclass(frozen=True)
class WorkoutSegment:
    """One part of a composite workout."""
    label: str
    pace_zone: PaceZone


@dataclass(frozen=True)
class SimpleWorkout:
    description: str
    duration: str
    intensity: str

    @property
    def kind(self) -> str:
        return "simple"

    def to_dict(self) -> Dict[str, Any]:
        return {
            'kind': self.kind,
            'description': self.description,
            'duration': self.duration,
            'intensity': self.intensity,
        }


@dataclass(frozen=True)
class CompositeWorkout:
    description: str
    duration: str
    intensity: str
    segments: Tuple[WorkoutSegment, ...]

    @property
    def kind(self) -> str:
        return "composite"

    def to_dict(self) -> Dict[str, Any]:
        return {
            'kind': self.kind,
            'description': self.description,
            'duration': self.duration,
            'intensity': self.intensity,
            'segments': [
                {'label': s.label, 'pace_zone': s.pace_zone.value} for s in self.segments
            ],
        }


@dataclass(frozen=True)
class RaceSpecificWorkout:
    """
    Goal-race pace work.

    `goal_race` is None in the library templates and filled in when the
    workout is scheduled for a concrete plan.
    """
    description: str
    duration: str
    intensity: str
    goal_race: Optional[GoalRace] = None

    @property
    def kind(self) -> str:
        return "race_specific"

    @property
    def pace_zone(self) -> PaceZone:
        return race_pace_zone(self.goal_race)

    def for_race(self, goal_race: Optional[GoalRace]) -> 'RaceSpecificWorkout':
        return RaceSpecificWorkout(self.description, self.duration, self.intensity, goal_race)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'kind': self.kind,
            'description': self.description,
            'duration': self.duration,
            'intensity': self.intensity,
            'goal_race': self.goal_race.value if self.goal_race else None,
            'pace_zone': self.pace_zone.value,
        }


WorkoutDefinition = Union[SimpleWorkout, CompositeWorkout, RaceSpecificWorkout]


# Named pace closest to race effort for each goal race
RACE_PACE_ZONES: Mapping[GoalRace, PaceZone] = MappingProxyType({
    GoalRace.FIVE_K: PaceZone.INTERVAL,
    GoalRace.TEN_K: PaceZone.THRESHOLD,
    GoalRace.HALF_MARATHON: PaceZone.THRESHOLD,
    GoalRace.MARATHON: PaceZone.MARATHON,
    GoalRace.ULTRA: PaceZone.MARATHON,
})


def race_pace_zone(goal_race: Optional[GoalRace]) -> PaceZone:
    """Pace zone used for race-pace work; marathon pace when the race is unknown."""
    if goal_race is None:
        return PaceZone.MARATHON
    return RACE_PACE_ZONES[goal_race]


@dataclass(frozen=True)
class SessionTemplate:
    """A workout with its day classification, target pace and purpose."""
    workout_type: WorkoutType
    workout: WorkoutDefinition
    pace_zone: Optional[PaceZone]
    purpose: str


@dataclass(frozen=True)
class PhaseSessions:
    long_run: SessionTemplate
    rest: SessionTemplate
    easy: Tuple[SessionTemplate, ...]
    quality: Tuple[SessionTemplate, ...]


def _easy(description, duration, purpose):
    return SessionTemplate(
        WorkoutType.EASY, SimpleWorkout(description, duration, "Easy"), PaceZone.EASY, purpose
    )


def _easy_strides(description, duration, purpose):
    workout = CompositeWorkout(description, duration, "Easy", (
        WorkoutSegment("Easy run", PaceZone.EASY),
        WorkoutSegment("Strides", PaceZone.REPETITION),
    ))
    return SessionTemplate(WorkoutType.EASY, workout, PaceZone.EASY, purpose)


def _rest(description, duration, purpose):
    return SessionTemplate(
        WorkoutType.REST, SimpleWorkout(description, duration, "Recovery"), None, purpose
    )


def _quality(description, duration, intensity, zone, purpose):
    return SessionTemplate(
        WorkoutType.QUALITY, SimpleWorkout(description, duration, intensity), zone, purpose
    )


# =============================================================================
# Session library
# =============================================================================

PHASE_SESSIONS: Mapping[PhaseKind, PhaseSessions] = MappingProxyType({
    PhaseKind.BASE: PhaseSessions(
        long_run=SessionTemplate(
            WorkoutType.LONG,
            SimpleWorkout("Long run (25% of weekly mileage)", "60-90 min", "Easy"),
            PaceZone.EASY,
            "Aerobic base development",
        ),
        rest=_rest("Rest or cross-training", "0-30 min", "Recovery and adaptation"),
        easy=(
            _easy_strides("Easy run + strides", "30-45 min", "Active recovery"),
            _easy("Easy run", "30-45 min", "Aerobic development"),
            _easy_strides("Easy run + strides", "30-45 min", "Base building"),
            _easy("Easy run", "30-40 min", "Preparation for long run"),
            _easy("Easy run or rest", "20-30 min", "Active recovery"),
        ),
        quality=(
            _quality("Steady threshold run", "40-50 min", "Threshold",
                     PaceZone.THRESHOLD, "Early lactate threshold stimulus"),
            _quality("Hill strides", "35-45 min", "Fast",
                     PaceZone.REPETITION, "Strength and running form"),
        ),
    ),
    PhaseKind.TEMPO: PhaseSessions(
        long_run=SessionTemplate(
            WorkoutType.LONG,
            SimpleWorkout("Long run (25% of weekly mileage)", "75-105 min", "Easy"),
            PaceZone.EASY,
            "Aerobic endurance",
        ),
        rest=_rest("Rest or cross-training", "0-30 min", "Recovery and adaptation"),
        easy=(
            _easy("Easy run", "30-45 min", "Recovery"),
            _easy_strides("Easy run + strides", "35-50 min", "Recovery between quality"),
            _easy("Easy run or rest", "25-35 min", "Pre-long run recovery"),
            _easy("Easy run", "30-40 min", "Active recovery"),
        ),
        quality=(
            _quality("Tempo run", "45-60 min", "Threshold",
                     PaceZone.THRESHOLD, "Lactate threshold development"),
            _quality("Repetition work", "40-55 min", "Fast",
                     PaceZone.REPETITION, "Speed and efficiency"),
            _quality("Cruise intervals", "45-60 min", "Threshold",
                     PaceZone.THRESHOLD, "Threshold volume with short recoveries"),
        ),
    ),
    PhaseKind.INTEGRATION: PhaseSessions(
        long_run=SessionTemplate(
            WorkoutType.LONG,
            CompositeWorkout("Long run with pickups", "90-120 min", "Easy + Fast", (
                WorkoutSegment("Long run", PaceZone.EASY),
                WorkoutSegment("Pickups", PaceZone.REPETITION),
            )),
            PaceZone.EASY,
            "Endurance with speed practice",
        ),
        rest=_rest("Rest or cross-training", "0-30 min", "Recovery and adaptation"),
        easy=(
            _easy("Easy run", "40-55 min", "Recovery"),
            _easy("Easy run", "35-50 min", "Active recovery"),
            _easy("Easy run", "30-40 min", "Recovery"),
        ),
        quality=(
            _quality("Interval training", "60-75 min", "Hard (VO2max)",
                     PaceZone.INTERVAL, "Aerobic power development"),
            SessionTemplate(
                WorkoutType.QUALITY,
                CompositeWorkout("Tempo + repetitions", "55-70 min", "Threshold + Fast", (
                    WorkoutSegment("Tempo", PaceZone.THRESHOLD),
                    WorkoutSegment("Repetitions", PaceZone.REPETITION),
                )),
                PaceZone.THRESHOLD,
                "Mixed system development",
            ),
            SessionTemplate(
                WorkoutType.QUALITY,
                RaceSpecificWorkout("Race simulation or tempo", "45-60 min", "Race pace"),
                None,
                "Race preparation",
            ),
        ),
    ),
    PhaseKind.PEAK: PhaseSessions(
        long_run=SessionTemplate(
            WorkoutType.LONG,
            SimpleWorkout("Moderate long run", "60-90 min", "Easy"),
            PaceZone.EASY,
            "Maintain endurance",
        ),
        rest=_rest("Rest or light jog", "0-20 min", "Pre-race recovery"),
        easy=(
            _easy("Easy run", "30-40 min", "Active recovery"),
            _easy("Easy run or rest", "20-35 min", "Recovery"),
            _easy_strides("Easy run + strides", "25-35 min", "Race preparation"),
        ),
        quality=(
            SessionTemplate(
                WorkoutType.QUALITY,
                RaceSpecificWorkout("Race pace + strides", "40-50 min", "Race pace"),
                None,
                "Race preparation",
            ),
            _quality("Short intervals", "35-45 min", "Fast",
                     PaceZone.INTERVAL, "Maintain sharpness"),
            _quality("Tempo run", "40-50 min", "Threshold",
                     PaceZone.THRESHOLD, "Hold threshold fitness"),
        ),
    ),
})


def session_for_race(template: SessionTemplate, goal_race: Optional[GoalRace]) -> SessionTemplate:
    """Bind race-specific templates to the plan's goal race."""
    if not isinstance(template.workout, RaceSpecificWorkout):
        return template
    workout = template.workout.for_race(goal_race)
    return SessionTemplate(template.workout_type, workout, workout.pace_zone, template.purpose)


# =============================================================================
# Example week
# =============================================================================

@dataclass(frozen=True)
class DayEntry:
    """One scheduled day; `distance` is None on rest days."""
    weekday: Weekday
    workout_type: WorkoutType
    workout: WorkoutDefinition
    pace_zone: Optional[PaceZone]
    purpose: str
    distance: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'day': self.weekday.label,
            'workout_type': self.workout_type.value,
            'workout': self.workout.to_dict(),
            'pace_zone': self.pace_zone.value if self.pace_zone else None,
            'purpose': self.purpose,
            'distance': self.distance,
        }


@dataclass(frozen=True)
class ExampleWeek:
    """
    Seven scheduled days, Sunday first.

    total_mileage is the rounded weekly target; planned_mileage is the sum
    of the per-day distances actually laid out.
    """
    total_mileage: int
    target_mileage: float
    planned_mileage: float
    unit: str
    days: Tuple[DayEntry, ...]

    @property
    def long_run(self) -> Optional[DayEntry]:
        for entry in self.days:
            if entry.workout_type == WorkoutType.LONG:
                return entry
        return None

    @property
    def quality_days(self) -> Tuple[DayEntry, ...]:
        return tuple(d for d in self.days if d.workout_type == WorkoutType.QUALITY)

    @property
    def running_days(self) -> Tuple[DayEntry, ...]:
        return tuple(d for d in self.days if d.workout_type != WorkoutType.REST)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'total_mileage': {'value': self.total_mileage, 'unit': self.unit},
            'target_mileage': self.target_mileage,
            'planned_mileage': self.planned_mileage,
            'days': [d.to_dict() for d in self.days],
        }
