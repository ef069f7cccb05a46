"""Tests for threshold overrides and logging setup."""
import logging
from dataclasses import replace

import pytest

from config import ENV_PREFIX, get_thresholds, resolve_thresholds, setup_logging, thresholds_from_env
from constants import DEFAULT_THRESHOLDS, Thresholds


class TestThresholdsFromEnv:

    def test_no_overrides_gives_defaults(self):
        assert thresholds_from_env({}) == DEFAULT_THRESHOLDS

    def test_int_and_float_fields(self):
        t = thresholds_from_env({
            "INSIGHT_WINDOW_SIZE": "14",
            "INSIGHT_CONCERN_SLEEP_HOURS": "5.5",
            "INSIGHT_CORR_HIGH_STRESS": "7.5",
        })
        assert t.window_size == 14
        assert isinstance(t.window_size, int)
        assert t.concern_sleep_hours == pytest.approx(5.5)
        assert t.corr_high_stress == pytest.approx(7.5)

    def test_unparsable_value_is_ignored(self, caplog):
        with caplog.at_level(logging.WARNING, logger="config"):
            t = thresholds_from_env({"INSIGHT_WINDOW_SIZE": "a week"})
        assert t.window_size == DEFAULT_THRESHOLDS.window_size
        assert "INSIGHT_WINDOW_SIZE" in caplog.text

    def test_blank_value_is_ignored(self):
        assert thresholds_from_env({"INSIGHT_WARN_STRESS": "  "}) == DEFAULT_THRESHOLDS

    def test_unrelated_variables_are_ignored(self):
        assert thresholds_from_env({"WINDOW_SIZE": "3", "INSIGHT_NOT_A_FIELD": "1"}) == DEFAULT_THRESHOLDS

    def test_every_field_has_a_variable(self):
        for name in Thresholds.field_names():
            key = ENV_PREFIX + name.upper()
            value = getattr(DEFAULT_THRESHOLDS, name)
            assert getattr(thresholds_from_env({key: str(value)}), name) == value


class TestResolve:

    def test_environment_is_read_once(self, monkeypatch):
        monkeypatch.setenv("INSIGHT_MAX_RECOMMENDATIONS", "3")
        assert get_thresholds().max_recommendations == 3
        monkeypatch.setenv("INSIGHT_MAX_RECOMMENDATIONS", "4")
        assert get_thresholds().max_recommendations == 3
        get_thresholds.cache_clear()
        assert get_thresholds().max_recommendations == 4

    def test_explicit_thresholds_win(self, monkeypatch):
        monkeypatch.setenv("INSIGHT_MAX_RECOMMENDATIONS", "3")
        assert resolve_thresholds(DEFAULT_THRESHOLDS) is DEFAULT_THRESHOLDS
        assert resolve_thresholds().max_recommendations == 3


def test_setup_logging_accepts_unknown_level():
    # falls back to INFO instead of raising
    setup_logging("not-a-level")


class TestThresholdValidation:

    @pytest.mark.parametrize("overrides", [
        {"max_recommendations": 0},
        {"max_recommendations": 6},
        {"window_size": 0},
        {"warning_window": 0},
    ])
    def test_invariant_breaking_values_raise(self, overrides):
        with pytest.raises(ValueError):
            replace(DEFAULT_THRESHOLDS, **overrides)

    def test_out_of_range_env_value_keeps_default(self, caplog):
        with caplog.at_level(logging.WARNING, logger="config"):
            t = thresholds_from_env({
                "INSIGHT_MAX_RECOMMENDATIONS": "0",
                "INSIGHT_WINDOW_SIZE": "0",
                "INSIGHT_WARN_STRESS": "9",
            })
        assert t.max_recommendations == DEFAULT_THRESHOLDS.max_recommendations
        assert t.window_size == DEFAULT_THRESHOLDS.window_size
        assert t.warn_stress == 9
        assert "INSIGHT_MAX_RECOMMENDATIONS" in caplog.text
        assert "INSIGHT_WINDOW_SIZE" in caplog.text
