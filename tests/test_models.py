"""Tests for record construction and model serialization."""
from datetime import datetime, timezone

import pytest

from models import BaselineComparison, FieldBaseline, HealthRecord, TrendSummary


class TestHealthRecord:

    def test_unknown_mood_raises(self):
        with pytest.raises(ValueError, match="grumpy"):
            HealthRecord(mood="grumpy")

    def test_everything_optional(self):
        record = HealthRecord()
        assert record.sleep_duration is None
        assert record.mood is None

    def test_from_row_coerces_strings(self):
        record = HealthRecord.from_row({
            "created_at": "2026-03-01T08:00:00Z",
            "heart_rate": "72",
            "sleep_duration": "7.5",
            "water_intake": "8",
            "stress_level": 4.0,
            "activity_level": "",
            "mood": " Happy ",
        })
        assert record.timestamp == datetime(2026, 3, 1, 8, 0, tzinfo=timezone.utc)
        assert record.heart_rate == 72.0
        assert record.sleep_duration == 7.5
        assert record.water_intake == 8
        assert record.stress_level == 4
        assert record.activity_level is None
        assert record.mood == "happy"

    def test_from_row_prefers_timestamp(self):
        record = HealthRecord.from_row({"timestamp": "2026-03-02T10:00:00", "created_at": "2026-03-01T08:00:00"})
        assert record.timestamp == datetime(2026, 3, 2, 10, 0)

    def test_from_row_nan_is_missing(self):
        assert HealthRecord.from_row({"sleep_duration": float("nan")}).sleep_duration is None

    def test_from_row_rejects_garbage(self):
        with pytest.raises(ValueError):
            HealthRecord.from_row({"heart_rate": "fast"})

    def test_records_are_frozen(self):
        record = HealthRecord(sleep_duration=7.0)
        with pytest.raises(AttributeError):
            record.sleep_duration = 9.0


class TestSmallModels:

    def test_trend_summary_flags(self):
        assert TrendSummary(direction="menurun").is_declining
        assert TrendSummary(direction="meningkat").is_escalating
        assert TrendSummary().is_stable

    def test_baseline_lookup(self):
        comparison = BaselineComparison(by_field={
            "sleep_duration": FieldBaseline(baseline=6.0, change=1.0, percent_change=16.7, is_improvement=True),
        })
        assert comparison["sleep_duration"].is_improvement
        with pytest.raises(KeyError):
            comparison["heart_rate"]
