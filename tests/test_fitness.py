"""
Tests for fitness scoring, pace lookup and plan recommendation.

Run with: python -m pytest tests/test_fitness.py -v
"""

import pytest

from plan_core.errors import InvalidTimeFormatError
from plan_core.fitness import (
    calculate_fitness_score,
    create_fitness_assessment,
    find_closest_race_time,
    format_race_time,
    get_available_race_times,
    get_example_race_times,
    get_race_time_for_vdot,
    get_recommended_plan,
    get_training_paces,
    parse_race_time,
    resolve_fitness_score,
    validate_mileage_for_experience,
)
from plan_core.models import ExperienceLevel, PlanLevel, RaceDistance, RaceInput
from plan_data.vdot_table import (
    RACE_DISTANCES_M,
    VDOT_MAX,
    VDOT_MIN,
    VDOT_TABLE,
    format_clock,
)


def table_time(score, race="5K"):
    return VDOT_TABLE[score].race_times[race]


def shifted(score, race, delta):
    return format_clock(VDOT_TABLE[score].race_seconds[race] + delta)


# =============================================================================
# Race time parsing
# =============================================================================

class TestParseRaceTime:

    def test_minutes_seconds(self):
        assert parse_race_time("19:57") == 1197

    def test_hours_minutes_seconds(self):
        assert parse_race_time("1:31:35") == 5495

    def test_zero_hour_prefix(self):
        assert parse_race_time("0:19:57") == parse_race_time("19:57")

    @pytest.mark.parametrize("bad", ["", "fast", "19", "19:75", "1:75:00", "1:2:3:4"])
    def test_malformed_raises(self, bad):
        with pytest.raises(InvalidTimeFormatError):
            parse_race_time(bad)


# =============================================================================
# Fitness score lookup
# =============================================================================

class TestCalculateFitnessScore:
    """Tests for exact table lookup."""

    @pytest.mark.parametrize("score", [30, 50, 72, 85])
    def test_exact_match(self, score):
        assert calculate_fitness_score("5K", table_time(score)) == score

    def test_accepts_enum_distance(self):
        time = table_time(45, "Half Marathon")
        assert calculate_fitness_score(RaceDistance.HALF_MARATHON, time) == 45

    def test_zero_hour_prefix_matches(self):
        assert calculate_fitness_score("5K", "0:" + table_time(50)) == 50

    def test_no_exact_match(self):
        assert calculate_fitness_score("5K", shifted(50, "5K", 1)) is None

    def test_unknown_distance(self):
        assert calculate_fitness_score("15K", "1:00:00") is None

    def test_malformed_time_raises(self):
        with pytest.raises(InvalidTimeFormatError):
            calculate_fitness_score("5K", "nineteen")


class TestClosestRaceTime:
    """Tests for nearest-time matching."""

    def test_one_second_off(self):
        match = find_closest_race_time("10K", shifted(55, "10K", 1))
        assert match.fitness_score == 55
        assert match.time == table_time(55, "10K")
        assert match.difference_seconds == 1

    def test_slower_than_table(self):
        match = find_closest_race_time("5K", "59:59")
        assert match.fitness_score == 30

    def test_faster_than_table(self):
        match = find_closest_race_time("5K", "5:00")
        assert match.fitness_score == 85

    def test_tie_prefers_earlier_row(self):
        """A time exactly between two rows resolves to the lower score."""
        ties = [
            (race, score, VDOT_TABLE[score].race_seconds[race],
             VDOT_TABLE[score + 1].race_seconds[race])
            for race in RACE_DISTANCES_M
            for score in range(VDOT_MIN, VDOT_MAX)
            if (VDOT_TABLE[score].race_seconds[race]
                - VDOT_TABLE[score + 1].race_seconds[race]) % 2 == 0
        ]
        assert ties

        for race, score, slow, fast in ties:
            match = find_closest_race_time(race, format_clock((slow + fast) // 2))
            assert match.fitness_score == score, (race, score)
            assert match.difference_seconds == (slow - fast) // 2

    def test_unknown_distance(self):
        assert find_closest_race_time("Mile", "5:00") is None


class TestResolveFitnessScore:

    def test_exact_is_not_approximate(self):
        result = resolve_fitness_score("5K", table_time(50))
        assert result.fitness_score == 50
        assert result.is_approximate is False
        assert result.warning is None

    def test_approximate_carries_warning(self):
        result = resolve_fitness_score("5K", shifted(50, "5K", 2))
        assert result.fitness_score == 50
        assert result.is_approximate is True
        assert "Using the closest table time" in result.warning
        assert result.matched_time == table_time(50)

    def test_unknown_distance(self):
        assert resolve_fitness_score("Mile", "5:00") is None


# =============================================================================
# Paces and table helpers
# =============================================================================

class TestTrainingPaces:

    def test_table_paces(self):
        paces = get_training_paces(50, "imperial")
        assert paces.threshold == VDOT_TABLE[50].paces['imperial']['threshold']
        assert paces.easy == VDOT_TABLE[50].paces['imperial']['easy']

    def test_metric_paces(self):
        paces = get_training_paces(50, "metric")
        assert paces.marathon == VDOT_TABLE[50].paces['metric']['marathon']

    def test_defaults_to_imperial(self):
        assert get_training_paces(60) == get_training_paces(60, "imperial")

    @pytest.mark.parametrize("score", [None, 29, 86, 50.5])
    def test_unusable_score(self, score):
        assert get_training_paces(score) is None


class TestTableHelpers:

    def test_available_times_fastest_first(self):
        times = get_available_race_times("5K")
        assert len(times) == 56
        assert times[0] == table_time(85)
        assert times[-1] == table_time(30)

    def test_available_times_unknown_distance(self):
        assert get_available_race_times("Mile") == []

    def test_race_time_for_vdot(self):
        assert get_race_time_for_vdot(50, "10K") == table_time(50, "10K")
        assert get_race_time_for_vdot(20, "10K") is None

    def test_example_race_times(self):
        examples = get_example_race_times("5K")
        assert examples == {
            'beginner': table_time(40),
            'intermediate': table_time(50),
            'advanced': table_time(60),
        }


# =============================================================================
# Recommendation and assessment
# =============================================================================

class TestRecommendation:

    @pytest.mark.parametrize("experience,plan", [
        ("beginner", PlanLevel.FOUNDATION),
        ("recreational", PlanLevel.INTERMEDIATE),
        ("serious", PlanLevel.ADVANCED),
        ("competitive", PlanLevel.ELITE),
    ])
    def test_mapping(self, experience, plan):
        assert get_recommended_plan(experience) == plan

    def test_fitness_score_does_not_change_recommendation(self):
        assert get_recommended_plan(ExperienceLevel.BEGINNER, 80) == PlanLevel.FOUNDATION

    def test_unknown_experience(self):
        assert get_recommended_plan("olympian") == PlanLevel.FOUNDATION


class TestMileageCheck:

    def test_within_range(self):
        check = validate_mileage_for_experience("recreational", 20, "imperial")
        assert check.is_valid
        assert check.warning is None

    def test_below_range(self):
        check = validate_mileage_for_experience("serious", 10, "imperial")
        assert check.is_valid
        assert "below the typical serious range" in check.warning

    def test_far_above_range(self):
        # 25 mi max * 1.5 = 37.5
        check = validate_mileage_for_experience("recreational", 40, "imperial")
        assert "significantly above" in check.warning

    def test_slightly_above_range_is_fine(self):
        check = validate_mileage_for_experience("recreational", 35, "imperial")
        assert check.warning is None

    def test_metric_ranges(self):
        check = validate_mileage_for_experience("recreational", 10, "metric")
        assert "km/week" in check.warning

    def test_unknown_experience_is_invalid(self):
        assert validate_mileage_for_experience("olympian", 20, "metric").is_valid is False


class TestFormatRaceTime:

    def test_drop_zero_hour(self):
        assert format_race_time("0:19:57", "MM:SS") == "19:57"

    def test_add_zero_hour(self):
        assert format_race_time("59:30", "H:MM:SS") == "0:59:30"

    def test_unchanged(self):
        assert format_race_time("1:31:35", "MM:SS") == "1:31:35"
        assert format_race_time("1:31:35", "H:MM:SS") == "1:31:35"


class TestCreateFitnessAssessment:

    def test_without_race(self):
        assessment = create_fitness_assessment("recreational", 20)
        assert assessment.calculated_fitness_score is None
        assert assessment.recommended_plan_level == PlanLevel.INTERMEDIATE
        assert assessment.selected_plan_level == PlanLevel.INTERMEDIATE
        assert not assessment.is_plan_override

    def test_with_race(self):
        race = RaceInput(RaceDistance.FIVE_K, table_time(50))
        assessment = create_fitness_assessment("serious", 30, race)
        assert assessment.calculated_fitness_score == 50
        assert assessment.fitness_score_approximate is False
        assert assessment.fitness_notes == ()

    def test_approximate_race_adds_note(self):
        race = RaceInput(RaceDistance.FIVE_K, shifted(50, "5K", 2))
        assessment = create_fitness_assessment("serious", 30, race)
        assert assessment.fitness_score_approximate is True
        assert len(assessment.fitness_notes) == 1

    def test_override(self):
        assessment = create_fitness_assessment("beginner", 5, None, "advanced")
        assert assessment.selected_plan_level == PlanLevel.ADVANCED
        assert assessment.is_plan_override

    def test_unknown_override_kept(self):
        assessment = create_fitness_assessment("beginner", 5, None, "ultra-elite")
        assert assessment.selected_plan_level == "ultra-elite"

    def test_unknown_experience_raises(self):
        with pytest.raises(ValueError):
            create_fitness_assessment("olympian", 20)
