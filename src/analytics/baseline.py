"""Current window vs. the preceding 7 days of history."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from analytics.metrics import calculate_average
from constants import DEFAULT_THRESHOLDS, LOWER_IS_BETTER, METRIC_FIELDS, Thresholds
from models import BaselineComparison, FieldBaseline, HealthRecord, WindowMetrics

log = logging.getLogger("baseline")


def is_improvement(field: str, diff: float) -> bool:
    if field in LOWER_IS_BETTER:
        return diff < 0
    return diff > 0


def compare_to_baseline(
    metrics: WindowMetrics,
    records: Sequence[HealthRecord],
    thresholds: Thresholds = DEFAULT_THRESHOLDS,
) -> Optional[BaselineComparison]:
    """Compare window averages with the older window (newest-first index 7..13).

    Returns None when the history holds fewer than `baseline_min_records`
    records; that is a normal outcome, not an error.
    """
    if len(records) < thresholds.baseline_min_records:
        log.debug("No baseline: %d records < %d", len(records), thresholds.baseline_min_records)
        return None

    size = thresholds.window_size
    older = records[size:size * 2]
    by_field = {}
    for field in METRIC_FIELDS:
        baseline = calculate_average(getattr(r, field) for r in older)
        diff = metrics.summary_for(field).average - baseline
        by_field[field] = FieldBaseline(
            baseline=baseline,
            change=diff,
            percent_change=(diff / baseline) * 100 if baseline else None,
            is_improvement=is_improvement(field, diff),
        )
    return BaselineComparison(by_field=by_field)
