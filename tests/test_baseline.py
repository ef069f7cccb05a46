"""Tests for the current-vs-previous-week baseline comparison."""
import pytest

from analytics.baseline import compare_to_baseline, is_improvement
from analytics.metrics import calculate_metrics
from analytics.window import records_frame, select_window


def _metrics(records):
    return calculate_metrics(records_frame(select_window(records)))


class TestBaseline:

    def test_needs_ten_records(self, make_history):
        records = make_history(days=9)
        assert compare_to_baseline(_metrics(records), records) is None

    def test_compares_with_previous_week(self, make_history):
        # oldest 7 days slept 6h, newest 7 days slept 8h
        records = make_history(days=14, sleep_duration=[6.0] * 7 + [8.0] * 7)
        comparison = compare_to_baseline(_metrics(records), records)
        sleep = comparison["sleep_duration"]
        assert sleep.baseline == pytest.approx(6.0)
        assert sleep.change == pytest.approx(2.0)
        assert sleep.percent_change == pytest.approx(100 * 2 / 6)
        assert sleep.is_improvement

    def test_short_baseline_uses_what_exists(self, make_history):
        # 10 records: only 3 older ones sit beyond the current window
        records = make_history(days=10, stress_level=[8, 8, 8] + [4] * 7)
        comparison = compare_to_baseline(_metrics(records), records)
        stress = comparison["stress_level"]
        assert stress.baseline == pytest.approx(8.0)
        assert stress.change == pytest.approx(-4.0)
        assert stress.is_improvement

    def test_zero_baseline_has_no_percentage(self, make_history):
        records = make_history(days=14, activity_level=[0] * 7 + [30] * 7)
        comparison = compare_to_baseline(_metrics(records), records)
        assert comparison["activity_level"].percent_change is None
        assert comparison["activity_level"].change == pytest.approx(30.0)

    def test_every_field_is_compared(self, make_history):
        records = make_history(days=12)
        comparison = compare_to_baseline(_metrics(records), records)
        assert set(comparison.by_field) == {
            "heart_rate", "sleep_duration", "water_intake", "stress_level", "activity_level",
        }


class TestImprovementDirection:

    @pytest.mark.parametrize("field, diff, expected", [
        ("sleep_duration", 1.0, True),
        ("sleep_duration", -1.0, False),
        ("water_intake", 2.0, True),
        ("stress_level", -1.0, True),
        ("stress_level", 1.0, False),
        ("heart_rate", -5.0, True),
        ("heart_rate", 5.0, False),
        ("activity_level", 0.0, False),
    ])
    def test_direction(self, field, diff, expected):
        assert is_improvement(field, diff) is expected
