"""
Tests for unit conversion and unit preferences.

Run with: python -m pytest tests/test_units.py -v
"""

import pytest

from plan_core.errors import InvalidPaceFormatError, InvalidUnitError
from plan_core.units import (
    DistanceUnit,
    UnitPreferences,
    UnitSystem,
    convert_altitude,
    convert_distance,
    convert_pace,
    create_unit_preferences,
    detect_default_unit_system,
    format_distance,
    format_pace,
    generate_preview_examples,
    parse_pace,
)
import plan_core.units as units


# =============================================================================
# Distance
# =============================================================================

class TestConvertDistance:
    """Tests for distance conversion."""

    def test_km_to_miles(self):
        assert convert_distance(5, "km", "mi") == pytest.approx(3.107, abs=0.01)

    def test_miles_to_km(self):
        assert convert_distance(26.2, "mi", "km") == pytest.approx(42.16, abs=0.01)

    def test_meters_to_feet(self):
        assert convert_distance(1000, "m", "ft") == pytest.approx(3280.84, abs=0.01)

    def test_feet_to_meters(self):
        assert convert_distance(7000, "ft", "m") == pytest.approx(2133.6, abs=0.01)

    @pytest.mark.parametrize("unit", ["km", "mi", "m", "ft"])
    def test_same_unit_is_identity(self, unit):
        value = 12.345678901
        assert convert_distance(value, unit, unit) is value

    def test_accepts_enum_members(self):
        assert convert_distance(1, DistanceUnit.KILOMETER, DistanceUnit.METER) == 1000

    def test_unknown_unit_raises(self):
        with pytest.raises(InvalidUnitError) as exc:
            convert_distance(5, "furlong", "km")
        assert exc.value.unit == "furlong"

    def test_unknown_unit_is_value_error(self):
        with pytest.raises(ValueError):
            convert_distance(5, "km", "yards")


# =============================================================================
# Pace
# =============================================================================

class TestPaceParsing:
    """Tests for pace parsing and formatting."""

    def test_parse_basic(self):
        assert parse_pace("7:30") == 450

    def test_parse_unpadded_seconds(self):
        assert parse_pace("7:5") == 425

    def test_parse_multi_digit_minutes(self):
        assert parse_pace("12:00") == 720

    @pytest.mark.parametrize("bad", ["", "7", "7:", "a:30", "7:3x", "7:60", "7:30:00", None])
    def test_malformed_pace_raises(self, bad):
        with pytest.raises(InvalidPaceFormatError):
            parse_pace(bad)

    def test_format_rounds_before_splitting(self):
        # 479.6 s must not render as "7:60"
        assert format_pace(479.6) == "8:00"

    def test_format_pads_seconds(self):
        assert format_pace(425) == "7:05"


class TestConvertPace:
    """Tests for pace conversion between min/km and min/mi."""

    def test_metric_to_imperial(self):
        assert convert_pace("5:00", "metric", "imperial") == "8:03"

    def test_imperial_to_metric(self):
        assert convert_pace("8:00", "imperial", "metric") == "4:58"

    @pytest.mark.parametrize("system", ["metric", "imperial"])
    def test_same_system_is_identity(self, system):
        assert convert_pace("6:07", system, system) == "6:07"

    def test_round_trip_within_one_second(self):
        """metric -> imperial -> metric stays within 1 s for every pace."""
        for seconds in range(120, 900, 7):
            pace = format_pace(seconds)
            back = convert_pace(convert_pace(pace, "metric", "imperial"), "imperial", "metric")
            assert abs(parse_pace(back) - seconds) <= 1, pace

    def test_malformed_pace_raises(self):
        with pytest.raises(InvalidPaceFormatError):
            convert_pace("fast", "metric", "imperial")

    def test_unknown_system_raises(self):
        with pytest.raises(InvalidUnitError):
            convert_pace("5:00", "metric", "nautical")


# =============================================================================
# Altitude, formatting, preferences
# =============================================================================

class TestConvertAltitude:

    def test_meters_to_feet(self):
        assert convert_altitude(2134, "metric", "imperial") == pytest.approx(7001.3, abs=0.1)

    def test_same_system(self):
        assert convert_altitude(1500, UnitSystem.METRIC, UnitSystem.METRIC) == 1500


class TestFormatDistance:

    def test_whole_number_has_no_decimals(self):
        assert format_distance(5, "km") == "5 km"
        assert format_distance(5.0, "km") == "5 km"

    def test_fraction_uses_precision(self):
        assert format_distance(3.107, "mi") == "3.1 mi"
        assert format_distance(3.107, "mi", precision=2) == "3.11 mi"


class TestUnitPreferences:
    """Tests for unit preference creation."""

    def test_imperial_preferences(self):
        prefs = create_unit_preferences("imperial")
        assert prefs.to_dict() == {
            'system': "imperial",
            'pace_unit': "min/mi",
            'distance_unit': "mi",
            'altitude_unit': "ft",
        }

    def test_metric_preferences(self):
        prefs = create_unit_preferences(UnitSystem.METRIC)
        assert prefs.system == UnitSystem.METRIC
        assert prefs.pace_unit == "min/km"
        assert prefs.distance_unit == "km"
        assert prefs.altitude_unit == "m"

    def test_preferences_are_frozen(self):
        prefs = create_unit_preferences("metric")
        with pytest.raises(AttributeError):
            prefs.pace_unit = "min/mi"

    def test_from_dict_rebuilds_from_system(self):
        prefs = UnitPreferences.from_dict({'system': "metric"})
        assert prefs == create_unit_preferences("metric")

    def test_unknown_system_raises(self):
        with pytest.raises(InvalidUnitError):
            create_unit_preferences("nautical")

    def test_preview_examples(self):
        assert generate_preview_examples("metric")['easy_pace'].endswith("min/km")
        assert generate_preview_examples("imperial")['easy_pace'].endswith("min/mi")


class TestDetectDefaultUnitSystem:
    """Tests for the locale heuristic."""

    @pytest.mark.parametrize("signal", ["en-US", "en_US.UTF-8", "en-LR", "my_MM"])
    def test_imperial_regions(self, signal):
        assert detect_default_unit_system(signal) == UnitSystem.IMPERIAL

    @pytest.mark.parametrize("signal", ["en-GB", "fr_FR.UTF-8", "de-DE", "zh-Hans-CN"])
    def test_metric_regions(self, signal):
        assert detect_default_unit_system(signal) == UnitSystem.METRIC

    @pytest.mark.parametrize("signal", ["", "C", "POSIX", "en"])
    def test_unparseable_is_metric(self, signal):
        assert detect_default_unit_system(signal) == UnitSystem.METRIC

    def test_unavailable_signal_is_metric(self, monkeypatch):
        monkeypatch.setattr(units, "_system_locale", lambda: None)
        assert detect_default_unit_system() == UnitSystem.METRIC

    def test_environment_signal(self, monkeypatch):
        monkeypatch.setattr(units, "_system_locale", lambda: "en_US.UTF-8")
        assert detect_default_unit_system() == UnitSystem.IMPERIAL
