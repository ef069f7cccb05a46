"""
End-to-end tests for the public engine operations.

Covers: the insufficient-data sentinels, determinism, the healthy and the
chronic-stress weeks, the baseline boundary, and explicit thresholds.
"""
from dataclasses import replace

import pytest

from constants import (
    DEFAULT_THRESHOLDS,
    DISCLAIMER,
    RISK_HIGH,
    RISK_LOW,
    STRESS_AFFECTS_SLEEP,
)
from insight_engine import answer_question, detect_warnings, generate_insight
from models import Insight


HEALTHY_OPENING = "Berdasarkan analisis"
STRESS_SLEEP_OPENING = "Tingkat stres Anda menunjukkan"


class TestSentinels:

    def test_empty_history(self):
        assert generate_insight([]) is None
        assert generate_insight(None) is None
        assert detect_warnings([]) == []

    def test_single_record_still_yields_insight(self, make_history):
        insight = generate_insight(make_history(days=1))
        assert isinstance(insight, Insight)
        assert insight.analysed_days == 1
        assert insight.metrics.mood.trend is None
        assert insight.baseline is None

    def test_warnings_need_three_records(self, make_history):
        assert detect_warnings(make_history(days=2, stress_level=9, sleep_duration=4.0)) == []


class TestHealthyWeek:

    @pytest.fixture
    def insight(self, make_history):
        return generate_insight(make_history())

    def test_low_risk(self, insight):
        assert insight.risk_analysis.score == 0
        assert insight.risk_analysis.level == RISK_LOW

    def test_nothing_flagged(self, insight):
        assert insight.primary_concern is None
        assert insight.correlations == ()
        assert insight.pattern_breakdown == ()

    def test_healthy_template(self, insight):
        assert insight.summary.startswith(HEALTHY_OPENING)

    def test_plan_and_projection(self, insight):
        assert 1 <= len(insight.recommendations) <= 5
        assert insight.future_analysis.current_trajectory.startswith("Mempertahankan pola saat ini")
        assert insight.disclaimer == DISCLAIMER

    def test_no_warnings(self, make_history):
        assert detect_warnings(make_history()) == []


class TestChronicStressWeek:

    @pytest.fixture
    def records(self, make_history):
        # only stress and sleep were logged
        return make_history(base={}, stress_level=8, sleep_duration=5.0)

    def test_high_risk(self, records):
        insight = generate_insight(records)
        assert insight.risk_analysis.score >= 7
        assert insight.risk_analysis.level == RISK_HIGH

    def test_stress_is_primary_concern(self, records):
        assert generate_insight(records).primary_concern.factor == "stress"

    def test_stress_sleep_correlation(self, records):
        insight = generate_insight(records)
        assert STRESS_AFFECTS_SLEEP in [c.type for c in insight.correlations]
        assert insight.summary.startswith(STRESS_SLEEP_OPENING)

    def test_recommendations_follow_stress_plan(self, records):
        topics = [r.topic for r in generate_insight(records).recommendations]
        assert topics[0] == "breathing"
        assert "worry_time" in topics
        assert len(topics) <= 5

    def test_both_acute_warnings(self, records):
        titles = [w.title for w in detect_warnings(records)]
        assert "Peringatan: Stres Sangat Tinggi" in titles
        assert "Peringatan: Kurang Tidur Parah" in titles


class TestBaselineBoundary:

    def test_ten_records_compare(self, make_history):
        assert generate_insight(make_history(days=10)).baseline is not None

    def test_nine_records_do_not(self, make_history):
        assert generate_insight(make_history(days=9)).baseline is None


class TestDeterminism:

    def test_same_input_same_output(self, make_history):
        records = make_history(
            stress_level=[3, 5, 8, 9, 7, 8, 9],
            sleep_duration=[7.5, 7.0, 5.5, 5.0, 6.0, 5.0, 4.5],
            mood=["happy", "neutral", "anxious", "tired", "sad", "tired", "anxious"],
        )
        assert generate_insight(records).to_dict() == generate_insight(records).to_dict()
        assert detect_warnings(records) == detect_warnings(records)

    def test_input_is_not_mutated(self, make_history):
        records = make_history(days=8)
        before = list(records)
        generate_insight(records)
        assert records == before


class TestThresholdOverrides:

    def test_explicit_thresholds(self, make_history):
        strict = replace(DEFAULT_THRESHOLDS, risk_sleep_borderline=8.5)
        assert generate_insight(make_history(), strict).risk_analysis.score == 1

    def test_environment_thresholds(self, make_history, monkeypatch):
        monkeypatch.setenv("INSIGHT_WINDOW_SIZE", "3")
        assert generate_insight(make_history()).analysed_days == 3

    def test_explicit_beats_environment(self, make_history, monkeypatch):
        monkeypatch.setenv("INSIGHT_WINDOW_SIZE", "3")
        assert generate_insight(make_history(), DEFAULT_THRESHOLDS).analysed_days == 7

    @pytest.mark.parametrize("name", ["INSIGHT_WINDOW_SIZE", "INSIGHT_MAX_RECOMMENDATIONS"])
    def test_zero_from_environment_keeps_invariants(self, make_history, monkeypatch, name):
        monkeypatch.setenv(name, "0")
        insight = generate_insight(make_history())
        assert insight is not None
        assert insight.analysed_days == 7
        assert 1 <= len(insight.recommendations) <= 5


class TestChat:

    def test_delegates_to_chat(self, make_history):
        assert "8.0 jam" in answer_question("Bagaimana tidur saya?", make_history())

    def test_empty_records(self):
        assert "analisis pola" in answer_question("tidur", [])
