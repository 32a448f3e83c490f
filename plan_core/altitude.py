"""
Altitude Adjustment: slow training paces to hold effort at elevation.

Reduced oxygen availability above roughly 3,000 ft makes the same pace
physiologically harder. Two thresholds per unit system:

    minimum   (914 m / 3000 ft):  performance warning, paces unchanged
    baseline  (2134 m / 7000 ft): paces slowed by 4 s per 400 m

The per-400 m offset is scaled to the unit the pace is written in
(+10 s per km, +16 s per mile). Repetition pace is never adjusted: its
reps are too short for the aerobic penalty to matter.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Union
import logging

from .errors import InvalidUnitError
from .models import AltitudeAdjustments, PaceZone, TrainingPaces
from .units import UnitSystem, coerce_unit_system, create_unit_preferences, format_pace, parse_pace

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AltitudeThreshold:
    minimum: float
    baseline: float
    unit: str


ALTITUDE_THRESHOLDS: Mapping[str, AltitudeThreshold] = MappingProxyType({
    'metric': AltitudeThreshold(minimum=914, baseline=2134, unit="m"),
    'imperial': AltitudeThreshold(minimum=3000, baseline=7000, unit="ft"),
})

DEFAULT_SECONDS_PER_400M = 4.0

# Distance covered by one pace unit, in meters
_PACE_UNIT_METERS: Mapping[str, float] = MappingProxyType({
    '400m': 400.0,
    'min/km': 1000.0,
    'min/mi': 1609.344,
})

ADJUSTED_ZONES = (PaceZone.EASY, PaceZone.MARATHON, PaceZone.THRESHOLD, PaceZone.INTERVAL)


def format_altitude(altitude: float) -> str:
    """Thousands-separated altitude, without a decimal part when whole."""
    if float(altitude).is_integer():
        return f"{int(altitude):,}"
    return f"{altitude:,.1f}"


def get_altitude_threshold(unit_system: Union[UnitSystem, str]) -> AltitudeThreshold:
    return ALTITUDE_THRESHOLDS[coerce_unit_system(unit_system).value]


def is_above_altitude_threshold(altitude: float, unit_system: Union[UnitSystem, str]) -> bool:
    """True at or above the unit system's minimum threshold."""
    return altitude >= get_altitude_threshold(unit_system).minimum


def generate_altitude_warning(
    altitude: float,
    unit_system: Union[UnitSystem, str]
) -> Optional[str]:
    """Performance warning for an altitude, or None below the minimum threshold."""
    threshold = get_altitude_threshold(unit_system)
    if altitude < threshold.minimum:
        return None

    unit = threshold.unit
    if altitude >= threshold.baseline:
        return (
            f"Training at {format_altitude(altitude)} {unit} will require pace adjustments. "
            f"At this altitude, training paces should be 4-6 seconds per 400m slower than "
            f"sea level to maintain the same physiological effort."
        )

    return (
        f"Training at {format_altitude(altitude)} {unit} may affect performance. "
        f"Consider pace adjustments for intense sessions, especially above "
        f"{format_altitude(threshold.baseline)} {unit}."
    )


def adjust_pace(pace: str, delta_seconds: int) -> str:
    """
    Shift an "M:SS" pace by delta_seconds, carrying into minutes.

    Example: adjust_pace("6:58", 4) -> "7:02"
    """
    return format_pace(max(0, parse_pace(pace) + delta_seconds))


def altitude_pace_offset(
    pace_unit: str,
    seconds_per_400m: float = DEFAULT_SECONDS_PER_400M
) -> int:
    """
    Whole-second slowdown for a pace written per `pace_unit`.

    Args:
        pace_unit: "400m", "min/km" or "min/mi"

    Returns:
        4 for 400m, 10 for min/km, 16 for min/mi at the default rate

    Raises:
        InvalidUnitError: for any other pace unit
    """
    meters = _PACE_UNIT_METERS.get(pace_unit)
    if meters is None:
        raise InvalidUnitError(pace_unit)
    return int(round(seconds_per_400m * meters / 400.0))


def apply_altitude_pace_adjustments(
    paces: TrainingPaces,
    altitude: float,
    unit_system: Union[UnitSystem, str],
    pace_system: Union[UnitSystem, str],
    seconds_per_400m: float = DEFAULT_SECONDS_PER_400M
) -> TrainingPaces:
    """
    Slow every pace but repetition when altitude is at or above baseline.

    Args:
        paces: Paces to adjust
        altitude: Training altitude, in unit_system's altitude unit
        unit_system: System the altitude is measured in
        pace_system: System the paces are written in

    Returns:
        Adjusted paces; `paces` itself below the baseline
    """
    threshold = get_altitude_threshold(unit_system)
    if altitude < threshold.baseline:
        return paces

    pace_unit = create_unit_preferences(pace_system).pace_unit
    offset = altitude_pace_offset(pace_unit, seconds_per_400m)

    adjusted = paces.to_dict()
    for zone in ADJUSTED_ZONES:
        adjusted[zone.value] = adjust_pace(paces.get(zone), offset)

    logger.debug("Altitude %s %s: paces slowed by %d s (%s)",
                 altitude, threshold.unit, offset, pace_unit)
    return TrainingPaces.from_mapping(adjusted)


def calculate_altitude_adjustments(
    paces: TrainingPaces,
    altitude: Optional[float],
    unit_system: Union[UnitSystem, str],
    pace_system: Union[UnitSystem, str],
    seconds_per_400m: float = DEFAULT_SECONDS_PER_400M
) -> Optional[AltitudeAdjustments]:
    """
    Altitude block for a plan.

    Returns None when there is no altitude or it is below the minimum
    threshold. Between minimum and baseline the block is advisory
    (`applied` False, paces unchanged); at or above baseline the adjusted
    paces and per-pace offsets are included.
    """
    if altitude is None or not is_above_altitude_threshold(altitude, unit_system):
        return None

    threshold = get_altitude_threshold(unit_system)
    applied = altitude >= threshold.baseline
    adjusted = apply_altitude_pace_adjustments(
        paces, altitude, unit_system, pace_system, seconds_per_400m
    )

    adjustments: Dict[str, str] = {}
    offset = 0
    if applied:
        pace_unit = create_unit_preferences(pace_system).pace_unit
        offset = altitude_pace_offset(pace_unit, seconds_per_400m)
        per_400 = altitude_pace_offset('400m', seconds_per_400m)
        for zone in ADJUSTED_ZONES:
            adjustments[zone.value] = (
                f"+{offset} s per {pace_unit.split('/')[-1]} (+{per_400} s per 400m)"
            )
        explanation = (
            f"Training at {format_altitude(altitude)} {threshold.unit} requires pace "
            f"adjustments to maintain the same physiological effort. These adjustments "
            f"help account for reduced oxygen availability."
        )
    else:
        for zone in ADJUSTED_ZONES:
            adjustments[zone.value] = "No change; ease off intense sessions by feel"
        explanation = generate_altitude_warning(altitude, unit_system)
    adjustments[PaceZone.REPETITION.value] = "No adjustment"

    return AltitudeAdjustments(
        applied=applied,
        altitude=altitude,
        unit=threshold.unit,
        offset_seconds=offset,
        paces=adjusted,
        adjustments=MappingProxyType(adjustments),
        explanation=explanation,
    )
