"""
Tests for training constraint validation.

Run with: python -m pytest tests/test_constraints.py -v
"""

import pytest

from plan_core.constraints import (
    format_constraint_impact,
    get_min_training_days,
    get_recommended_session_duration,
    get_session_duration_range,
    validate_training_constraints,
)
from plan_core.fitness import create_fitness_assessment
from plan_core.models import GoalRace, PlanLevel, TrainingConstraints

ALL_DAYS = (True,) * 7


def days(count):
    """First `count` days of the week available, starting Sunday."""
    return tuple(i < count for i in range(7))


def constraints(day_mask=ALL_DAYS, duration=60, goal="10K", altitude=None):
    return TrainingConstraints(
        available_training_days=day_mask,
        session_duration=duration,
        goal_race=goal,
        training_altitude=altitude,
    )


# =============================================================================
# Lookups
# =============================================================================

class TestLookups:

    @pytest.mark.parametrize("level,expected", [
        ("foundation", 3), ("intermediate", 4), ("advanced", 5), ("elite", 6),
    ])
    def test_min_training_days(self, level, expected):
        assert get_min_training_days(level) == expected

    def test_min_training_days_enum(self):
        assert get_min_training_days(PlanLevel.ELITE) == 6

    def test_min_training_days_unknown(self):
        assert get_min_training_days("mega") == 3

    def test_duration_range_unknown_is_foundation(self):
        assert get_session_duration_range("mega") == get_session_duration_range("foundation")


# =============================================================================
# Validation rules
# =============================================================================

class TestTrainingDays:
    """Tests for the training-day rules."""

    def test_beginner_two_days(self):
        result = validate_training_constraints(
            constraints(days(2), duration=45), "foundation", "metric"
        )
        assert result.is_valid is False
        assert len(result.warnings) == 2
        assert "requires 3+ training days" in result.warnings[0]
        assert "minimum of 3 training days" in result.warnings[1]
        assert result.compatibility.with_plan_level is False

    def test_elite_full_week_is_valid(self):
        result = validate_training_constraints(
            constraints(ALL_DAYS, duration=120), PlanLevel.ELITE, "metric"
        )
        assert result.is_valid
        assert result.warnings == ()
        assert result.compatibility.with_plan_level
        assert result.compatibility.with_goal_race

    def test_advanced_four_days(self):
        result = validate_training_constraints(
            constraints(days(4), duration=90), "advanced", "imperial"
        )
        assert len(result.warnings) == 1
        assert "advanced plan typically requires 5+" in result.warnings[0]


class TestSessionDuration:

    def test_below_range(self):
        result = validate_training_constraints(
            constraints(duration=20), "foundation", "metric"
        )
        assert "below the typical range" in result.warnings[0]
        assert result.compatibility.with_plan_level is False

    def test_far_above_range(self):
        # foundation max 75 min, 1.5x = 112.5
        result = validate_training_constraints(
            constraints(duration=120), "foundation", "metric"
        )
        assert len(result.warnings) == 1
        assert "significantly above" in result.warnings[0]
        assert result.compatibility.with_plan_level is True

    def test_edge_of_range(self):
        result = validate_training_constraints(
            constraints(duration=112.5), "foundation", "metric"
        )
        assert result.is_valid


class TestGoalRace:

    @pytest.mark.parametrize("goal", ["Marathon", GoalRace.ULTRA])
    def test_ambitious_for_foundation(self, goal):
        result = validate_training_constraints(
            constraints(duration=45, goal=goal), "foundation", "metric"
        )
        assert "ambitious goal for the Foundation plan" in result.warnings[0]
        assert result.compatibility.with_goal_race is False

    def test_half_marathon_fine_for_foundation(self):
        result = validate_training_constraints(
            constraints(duration=45, goal="Half Marathon"), "foundation", "metric"
        )
        assert result.is_valid

    def test_elite_5k_needs_six_days(self):
        result = validate_training_constraints(
            constraints(days(5), duration=90, goal="5K"), "elite", "metric"
        )
        assert any("Elite-level 5K" in w for w in result.warnings)

    def test_elite_5k_six_days(self):
        result = validate_training_constraints(
            constraints(days(6), duration=90, goal="5K"), "elite", "metric"
        )
        assert result.is_valid

    def test_unknown_goal_race(self):
        result = validate_training_constraints(
            constraints(goal="Mile"), "intermediate", "metric"
        )
        assert "Unknown goal race 'Mile'" in result.warnings[0]
        assert result.compatibility.with_goal_race is False


class TestAltitudeRule:

    def test_at_minimum_metric(self):
        result = validate_training_constraints(
            constraints(altitude=914), "intermediate", "metric"
        )
        assert result.warnings == (
            "Training at 914 m may affect performance. Consider pace adjustments for "
            "intense sessions, especially above 2,134 m.",
        )

    def test_at_baseline_imperial(self):
        result = validate_training_constraints(
            constraints(altitude=7000), "intermediate", "imperial"
        )
        assert "7,000 ft will require pace adjustments" in result.warnings[0]

    def test_below_minimum(self):
        result = validate_training_constraints(
            constraints(altitude=500), "intermediate", "metric"
        )
        assert result.is_valid

    def test_unknown_unit_system(self):
        result = validate_training_constraints(
            constraints(altitude=3000), "intermediate", "nautical"
        )
        assert "Altitude could not be checked" in result.warnings[0]


class TestExperienceRules:
    """Tests for the heuristics that need a fitness assessment."""

    def test_beginner_many_days(self):
        assessment = create_fitness_assessment("beginner", 5)
        result = validate_training_constraints(
            constraints(days(5), duration=45), "foundation", "metric", assessment
        )
        assert len(result.warnings) == 1
        assert result.warnings[0].startswith("As a beginner")
        assert result.compatibility.with_experience is False
        assert result.compatibility.with_plan_level is True

    def test_beginner_long_sessions(self):
        assessment = create_fitness_assessment("beginner", 5)
        result = validate_training_constraints(
            constraints(days(3), duration=100), "intermediate", "metric", assessment
        )
        assert any("challenging for beginners" in w for w in result.warnings)

    def test_competitive_few_days(self):
        assessment = create_fitness_assessment("competitive", 60)
        result = validate_training_constraints(
            constraints(days(4), duration=60), "intermediate", "metric", assessment
        )
        assert result.warnings == (
            "Competitive-level goals typically require 5-7 training days per week for "
            "optimal adaptation.",
        )

    def test_rules_skipped_without_assessment(self):
        result = validate_training_constraints(
            constraints(days(5), duration=45), "foundation", "metric"
        )
        assert result.is_valid
        assert result.compatibility.with_experience


class TestUnknownPlanLevel:

    def test_warns_and_uses_foundation_thresholds(self):
        result = validate_training_constraints(
            constraints(days(3), duration=45), "mega", "metric"
        )
        assert result.warnings == (
            "Unknown plan level 'mega'. Foundation plan thresholds were applied.",
        )
        assert result.compatibility.with_plan_level is False


# =============================================================================
# Recommendations and summaries
# =============================================================================

class TestRecommendedSessionDuration:

    @pytest.mark.parametrize("level,goal,expected", [
        ("intermediate", "10K", 60),
        ("elite", "Marathon", 135),
        ("foundation", "Half Marathon", 45),
        ("foundation", "5K", 30),
        ("advanced", "Ultra", 105),
    ])
    def test_values(self, level, goal, expected):
        assert get_recommended_session_duration(level, goal) == expected

    def test_unknown_goal_uses_optimal(self):
        assert get_recommended_session_duration("advanced", "Mile") == 90


class TestConstraintImpact:

    def test_summary_lines(self):
        lines = format_constraint_impact(
            constraints(days(5), duration=75, altitude=2500), "intermediate", "metric"
        )
        assert lines[0] == "Training 5 days per week with 75-minute sessions"
        assert "Optimized for 10K performance" in lines
        assert lines[-1] == "Altitude-adjusted training paces for 2,500 m"

    def test_no_altitude_line_below_threshold(self):
        lines = format_constraint_impact(constraints(altitude=500), "intermediate", "metric")
        assert not any("Altitude" in line for line in lines)
