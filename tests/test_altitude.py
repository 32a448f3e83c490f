"""
Tests for altitude warnings and pace adjustments.

Run with: python -m pytest tests/test_altitude.py -v
"""

import pytest

from plan_core.altitude import (
    adjust_pace,
    altitude_pace_offset,
    apply_altitude_pace_adjustments,
    calculate_altitude_adjustments,
    format_altitude,
    generate_altitude_warning,
    is_above_altitude_threshold,
)
from plan_core.errors import InvalidUnitError
from plan_core.models import TrainingPaces
from plan_core.units import parse_pace


@pytest.fixture
def imperial_paces():
    return TrainingPaces(
        easy="7:30",
        marathon="7:00",
        threshold="6:20",
        interval="6:00",
        repetition="5:45",
    )


@pytest.fixture
def metric_paces():
    return TrainingPaces(
        easy="4:40",
        marathon="4:21",
        threshold="3:56",
        interval="3:44",
        repetition="3:34",
    )


# =============================================================================
# Helpers
# =============================================================================

class TestAdjustPace:

    def test_carries_into_minutes(self):
        assert adjust_pace("6:58", 4) == "7:02"

    def test_no_carry(self):
        assert adjust_pace("7:30", 16) == "7:46"

    def test_negative_delta(self):
        assert adjust_pace("7:02", -4) == "6:58"

    def test_clamps_at_zero(self):
        assert adjust_pace("0:02", -5) == "0:00"


class TestPaceOffset:

    @pytest.mark.parametrize("unit,expected", [
        ("400m", 4), ("min/km", 10), ("min/mi", 16),
    ])
    def test_default_rate(self, unit, expected):
        assert altitude_pace_offset(unit) == expected

    def test_custom_rate(self):
        assert altitude_pace_offset("min/km", 6) == 15

    def test_unknown_unit(self):
        with pytest.raises(InvalidUnitError):
            altitude_pace_offset("min/yd")


class TestThresholds:

    def test_format_altitude(self):
        assert format_altitude(7000) == "7,000"
        assert format_altitude(2133.6) == "2,133.6"

    @pytest.mark.parametrize("altitude,system,expected", [
        (914, "metric", True),
        (913, "metric", False),
        (3000, "imperial", True),
        (2999, "imperial", False),
    ])
    def test_minimum_threshold(self, altitude, system, expected):
        assert is_above_altitude_threshold(altitude, system) is expected

    def test_no_warning_below_minimum(self):
        assert generate_altitude_warning(2999, "imperial") is None

    def test_advisory_warning(self):
        warning = generate_altitude_warning(5000, "imperial")
        assert warning.startswith("Training at 5,000 ft may affect performance")

    def test_adjustment_warning(self):
        warning = generate_altitude_warning(2134, "metric")
        assert "4-6 seconds per 400m slower" in warning


# =============================================================================
# Pace adjustment
# =============================================================================

class TestApplyAdjustments:

    def test_imperial_at_baseline(self, imperial_paces):
        adjusted = apply_altitude_pace_adjustments(imperial_paces, 7000, "imperial", "imperial")
        assert adjusted.easy == "7:46"
        assert adjusted.threshold == "6:36"
        assert adjusted.repetition == "5:45"

    def test_metric_at_baseline(self, metric_paces):
        adjusted = apply_altitude_pace_adjustments(metric_paces, 2134, "metric", "metric")
        assert adjusted.easy == "4:50"
        assert adjusted.interval == "3:54"
        assert adjusted.repetition == "3:34"

    def test_offset_follows_pace_unit(self, imperial_paces):
        # Altitude in meters, paces per mile
        adjusted = apply_altitude_pace_adjustments(imperial_paces, 2500, "metric", "imperial")
        assert parse_pace(adjusted.marathon) - parse_pace(imperial_paces.marathon) == 16

    def test_below_baseline_unchanged(self, imperial_paces):
        adjusted = apply_altitude_pace_adjustments(imperial_paces, 6999, "imperial", "imperial")
        assert adjusted == imperial_paces

    def test_every_adjusted_pace_is_slower(self, metric_paces):
        adjusted = apply_altitude_pace_adjustments(metric_paces, 3000, "metric", "metric")
        for zone, pace in metric_paces.items():
            if zone.value == "repetition":
                assert adjusted.get(zone) == pace
            else:
                assert parse_pace(adjusted.get(zone)) > parse_pace(pace)


class TestCalculateAltitudeAdjustments:

    def test_none_without_altitude(self, imperial_paces):
        assert calculate_altitude_adjustments(imperial_paces, None, "imperial", "imperial") is None

    def test_none_below_minimum(self, imperial_paces):
        assert calculate_altitude_adjustments(imperial_paces, 2500, "imperial", "imperial") is None

    def test_applied_block(self, imperial_paces):
        block = calculate_altitude_adjustments(imperial_paces, 7000, "imperial", "imperial")
        assert block.applied is True
        assert block.unit == "ft"
        assert block.offset_seconds == 16
        assert block.paces.easy == "7:46"
        assert block.adjustments['easy'] == "+16 s per mi (+4 s per 400m)"
        assert block.adjustments['repetition'] == "No adjustment"
        assert "7,000 ft" in block.explanation

    def test_metric_block_text(self, metric_paces):
        block = calculate_altitude_adjustments(metric_paces, 2134, "metric", "metric")
        assert block.adjustments['threshold'] == "+10 s per km (+4 s per 400m)"

    def test_advisory_block(self, imperial_paces):
        block = calculate_altitude_adjustments(imperial_paces, 5000, "imperial", "imperial")
        assert block.applied is False
        assert block.offset_seconds == 0
        assert block.paces == imperial_paces
        assert block.explanation == generate_altitude_warning(5000, "imperial")
        assert block.adjustments['repetition'] == "No adjustment"
