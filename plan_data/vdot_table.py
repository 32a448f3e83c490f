"""
VDOT Lookup Table: race performance <-> fitness score <-> training paces.

Based on:
- Daniels, J. & Gilbert, J. (1979). Oxygen Power: Performance Tables for
  Distance Runners
- Daniels, J. (2013). Daniels' Running Formula, 3rd Edition

The table is built once at import time from the Daniels-Gilbert equations
and then frozen. Every integer fitness score from 30 to 85 has one row
holding predicted race times and the five named training paces in both
unit systems. Lookups are exact; rows are never interpolated.

Equations:
    VO2(v)    = -4.60 + 0.182258 v + 0.000104 v^2      (v in m/min)
    %max(t)   = 0.8 + 0.1894393 e^(-0.012778 t) + 0.2989558 e^(-0.1932605 t)
    VDOT      = VO2(d / t) / %max(t)                   (t in min)
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Mapping, Optional
import math

import numpy as np
from scipy.optimize import brentq


VDOT_MIN = 30
VDOT_MAX = 85

# Race distances in meters, keyed by race id
RACE_DISTANCES_M: Mapping[str, float] = MappingProxyType({
    "5K": 5000.0,
    "10K": 10000.0,
    "Half Marathon": 21097.5,
    "Marathon": 42195.0,
})

# Meters covered by one unit of pace, keyed by unit system
PACE_UNIT_METERS: Mapping[str, float] = MappingProxyType({
    "imperial": 1609.344,
    "metric": 1000.0,
})

# Fraction of VDOT sustained at each training intensity.
# Marathon pace is taken from the predicted marathon time instead.
PACE_FRACTIONS: Mapping[str, float] = MappingProxyType({
    "easy": 0.67,
    "threshold": 0.88,
    "interval": 0.975,
    "repetition": 1.05,
})

PACE_ZONES = ("easy", "marathon", "threshold", "interval", "repetition")

# Oxygen cost coefficients
_VO2_A = 0.000104
_VO2_B = 0.182258
_VO2_C = -4.60


@dataclass(frozen=True)
class VdotEntry:
    """
    One row of the VDOT table.

    race_times holds display strings ("19:57", "1:31:35"), race_seconds the
    same predictions as integer seconds. paces maps unit system -> pace zone
    -> "M:SS" per mile (imperial) or per kilometer (metric).
    """
    score: int
    race_times: Mapping[str, str]
    race_seconds: Mapping[str, int]
    paces: Mapping[str, Mapping[str, str]]

    def paces_for(self, system: str) -> Mapping[str, str]:
        """Training paces in the given unit system."""
        return self.paces[system]


def oxygen_cost(velocity: float) -> float:
    """VO2 (ml/kg/min) required to run at velocity (m/min)."""
    return _VO2_C + _VO2_B * velocity + _VO2_A * velocity ** 2


def fraction_of_max(minutes: float) -> float:
    """Fraction of VO2max that can be sustained for a race lasting `minutes`."""
    return (
        0.8
        + 0.1894393 * math.exp(-0.012778 * minutes)
        + 0.2989558 * math.exp(-0.1932605 * minutes)
    )


def vdot_from_performance(distance_m: float, seconds: float) -> float:
    """Calculate the VDOT value implied by a race performance."""
    minutes = seconds / 60.0
    return oxygen_cost(distance_m / minutes) / fraction_of_max(minutes)


def velocity_at_vo2(vo2) -> np.ndarray:
    """
    Invert the oxygen cost equation.

    Accepts scalars or arrays and returns velocity in m/min.
    """
    vo2 = np.asarray(vo2, dtype=float)
    discriminant = _VO2_B ** 2 + 4 * _VO2_A * (vo2 - _VO2_C)
    return (-_VO2_B + np.sqrt(discriminant)) / (2 * _VO2_A)


def predict_race_seconds(vdot: float, distance_m: float) -> float:
    """
    Solve the Daniels-Gilbert equation for the race time matching `vdot`.

    VDOT falls monotonically as race time grows, so the root is bracketed
    between velocities of 800 and 50 m/min.
    """
    def residual(minutes: float) -> float:
        return oxygen_cost(distance_m / minutes) / fraction_of_max(minutes) - vdot

    minutes = brentq(residual, distance_m / 800.0, distance_m / 50.0, xtol=1e-9)
    return minutes * 60.0


def format_clock(seconds: int) -> str:
    """Format whole seconds as M:SS, or H:MM:SS from one hour upwards."""
    hours, remainder = divmod(int(seconds), 3600)
    minutes, secs = divmod(remainder, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def _build_table() -> Mapping[int, VdotEntry]:
    scores = np.arange(VDOT_MIN, VDOT_MAX + 1, dtype=float)

    # Race predictions (seconds, unrounded) for every score and distance
    race_matrix = {
        race_id: np.array([predict_race_seconds(s, distance) for s in scores])
        for race_id, distance in RACE_DISTANCES_M.items()
    }

    # Velocities (m/min) for every training zone
    velocities = {
        zone: velocity_at_vo2(scores * fraction)
        for zone, fraction in PACE_FRACTIONS.items()
    }
    marathon_m = RACE_DISTANCES_M["Marathon"]
    velocities["marathon"] = marathon_m / (race_matrix["Marathon"] / 60.0)

    pace_seconds: Dict[str, Dict[str, np.ndarray]] = {}
    for system, unit_m in PACE_UNIT_METERS.items():
        pace_seconds[system] = {
            zone: np.rint(unit_m / velocities[zone] * 60.0).astype(int)
            for zone in PACE_ZONES
        }

    table: Dict[int, VdotEntry] = {}
    for i, score in enumerate(scores.astype(int)):
        race_seconds = {
            race_id: int(np.rint(times[i])) for race_id, times in race_matrix.items()
        }
        paces = {
            system: MappingProxyType({
                zone: format_clock(int(zones[zone][i])) for zone in PACE_ZONES
            })
            for system, zones in pace_seconds.items()
        }
        table[int(score)] = VdotEntry(
            score=int(score),
            race_times=MappingProxyType(
                {race_id: format_clock(sec) for race_id, sec in race_seconds.items()}
            ),
            race_seconds=MappingProxyType(race_seconds),
            paces=MappingProxyType(paces),
        )

    return MappingProxyType(table)


VDOT_TABLE: Mapping[int, VdotEntry] = _build_table()


def get_vdot_entry(score: int) -> Optional[VdotEntry]:
    """Row for an integer fitness score, or None outside the table."""
    return VDOT_TABLE.get(score)


def race_time_column(race_id: str) -> Optional[np.ndarray]:
    """
    Predicted times (seconds) for one distance, in table order.

    Returns None for an unknown race id.
    """
    if race_id not in RACE_DISTANCES_M:
        return None
    return np.array([entry.race_seconds[race_id] for entry in VDOT_TABLE.values()])


def table_scores() -> np.ndarray:
    """Fitness scores in table order."""
    return np.array(list(VDOT_TABLE.keys()))


if __name__ == '__main__':
    print("VDOT table")
    print("=" * 60)
    for score in (30, 40, 50, 60, 70, 85):
        entry = VDOT_TABLE[score]
        print(f"\nVDOT {score}")
        print(f"  Races: {dict(entry.race_times)}")
        print(f"  Paces (min/mi): {dict(entry.paces['imperial'])}")
        print(f"  Paces (min/km): {dict(entry.paces['metric'])}")
