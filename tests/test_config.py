"""
Tests for planner configuration.

Run with: python -m pytest tests/test_config.py -v
"""

import json

import pytest

from plan_core.config import DEFAULT_CONFIG, PlannerConfig, load_config, save_config


class TestPlannerConfig:

    def test_defaults_valid(self):
        ok, message = DEFAULT_CONFIG.validate()
        assert ok
        assert message == "Valid"

    def test_total_weeks(self):
        assert DEFAULT_CONFIG.total_weeks == 20

    def test_dict_round_trip(self):
        assert PlannerConfig.from_dict(DEFAULT_CONFIG.to_dict()) == DEFAULT_CONFIG

    def test_partial_dict_keeps_defaults(self):
        config = PlannerConfig.from_dict({'long_run_max_fraction': 0.3})
        assert config.long_run_max_fraction == 0.3
        assert config.phase_durations == (6, 5, 5, 4)

    def test_wrong_phase_count(self):
        ok, message = PlannerConfig(phase_durations=(6, 5, 5)).validate()
        assert not ok
        assert "4 phase durations" in message

    def test_bad_long_run_fraction(self):
        ok, message = PlannerConfig(long_run_max_fraction=0.8).validate()
        assert not ok
        assert "Long run fraction" in message

    def test_missing_quality_level(self):
        config = PlannerConfig(quality_sessions={'foundation': (0, 1, 1, 1)})
        ok, message = config.validate()
        assert not ok
        assert "intermediate" in message


class TestConfigFiles:

    def test_save_and_load(self, tmp_path):
        path = tmp_path / "planner.json"
        config = PlannerConfig(phase_durations=(4, 4, 4, 4))
        save_config(config, path)
        assert load_config(path) == config

    def test_load_invalid(self, tmp_path):
        path = tmp_path / "planner.json"
        path.write_text(json.dumps({'altitude_seconds_per_400m': -1}))
        with pytest.raises(ValueError):
            load_config(path)
