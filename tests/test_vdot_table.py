"""
Tests for the VDOT table and reference data.

Run with: python -m pytest tests/test_vdot_table.py -v
"""

import pytest

import plan_core
import plan_data
from plan_core.units import parse_pace
from plan_data.reference import (
    DEFAULT_PACES,
    EXPERIENCE_PACES,
    MIN_TRAINING_DAYS,
    PLAN_LEVELS,
    SESSION_DURATION_RANGES,
)
from plan_data.vdot_table import (
    PACE_ZONES,
    RACE_DISTANCES_M,
    VDOT_MAX,
    VDOT_MIN,
    VDOT_TABLE,
    format_clock,
    get_vdot_entry,
    predict_race_seconds,
    vdot_from_performance,
)


class TestVdotTable:
    """Tests for the generated lookup table."""

    def test_covers_every_score(self):
        assert list(VDOT_TABLE.keys()) == list(range(VDOT_MIN, VDOT_MAX + 1))
        assert len(VDOT_TABLE) == 56

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            VDOT_TABLE[100] = VDOT_TABLE[50]

    def test_outside_range_is_none(self):
        assert get_vdot_entry(29) is None
        assert get_vdot_entry(86) is None

    @pytest.mark.parametrize("score", [30, 45, 50, 60, 85])
    @pytest.mark.parametrize("system", ["metric", "imperial"])
    def test_pace_ordering(self, score, system):
        """repetition < interval < threshold < marathon < easy (seconds per unit)."""
        paces = VDOT_TABLE[score].paces[system]
        seconds = [parse_pace(paces[zone]) for zone in
                   ("repetition", "interval", "threshold", "marathon", "easy")]
        assert seconds == sorted(seconds)
        assert len(set(seconds)) == 5

    def test_every_row_has_all_paces(self):
        for entry in VDOT_TABLE.values():
            for system in ("metric", "imperial"):
                assert set(entry.paces[system]) == set(PACE_ZONES)

    def test_race_times_get_faster_with_score(self):
        for race_id in RACE_DISTANCES_M:
            times = [VDOT_TABLE[s].race_seconds[race_id] for s in VDOT_TABLE]
            assert all(a > b for a, b in zip(times, times[1:]))

    def test_metric_paces_faster_than_imperial(self):
        entry = VDOT_TABLE[50]
        for zone in PACE_ZONES:
            assert parse_pace(entry.paces['metric'][zone]) < parse_pace(entry.paces['imperial'][zone])

    def test_vdot_50_reference_paces(self):
        paces = VDOT_TABLE[50].paces['imperial']
        assert paces['threshold'] == "6:51"
        assert paces['interval'] == "6:18"


class TestEquations:
    """Tests for the Daniels-Gilbert equations."""

    def test_prediction_inverts_vdot(self):
        seconds = predict_race_seconds(50, 5000)
        assert vdot_from_performance(5000, seconds) == pytest.approx(50, abs=1e-6)

    def test_longer_race_takes_longer(self):
        assert predict_race_seconds(50, 42195) > predict_race_seconds(50, 21097.5)

    def test_format_clock(self):
        assert format_clock(1197) == "19:57"
        assert format_clock(5495) == "1:31:35"
        assert format_clock(3600) == "1:00:00"


class TestReferenceData:
    """Tests for the plan reference tables."""

    def test_min_training_days(self):
        assert dict(MIN_TRAINING_DAYS) == {
            'foundation': 3, 'intermediate': 4, 'advanced': 5, 'elite': 6,
        }

    def test_session_ranges_are_ordered(self):
        for level, r in SESSION_DURATION_RANGES.items():
            assert r.min <= r.optimal <= r.max, level

    def test_plan_level_mileage(self):
        assert PLAN_LEVELS['foundation'].weekly_mileage_range['metric'].min == 0
        assert PLAN_LEVELS['elite'].weekly_mileage_range['imperial'].max == 80

    def test_experience_paces_ordered(self):
        for level, paces in EXPERIENCE_PACES.items():
            seconds = [parse_pace(paces[z]) for z in
                       ("repetition", "interval", "threshold", "marathon", "easy")]
            assert seconds == sorted(seconds), level

    def test_default_paces_are_recreational(self):
        assert DEFAULT_PACES == EXPERIENCE_PACES['recreational']

    @pytest.mark.parametrize("package", [plan_data, plan_core])
    def test_package_exports_resolve(self, package):
        for name in package.__all__:
            assert hasattr(package, name), name
