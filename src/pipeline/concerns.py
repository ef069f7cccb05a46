"""Concern identification: which single factor drives the narrative."""

from __future__ import annotations

from typing import List, Optional

from constants import DEFAULT_THRESHOLDS, Thresholds
from models import Concern, TrendReport, WindowMetrics


def identify_concerns(
    metrics: WindowMetrics,
    trends: TrendReport,
    thresholds: Thresholds = DEFAULT_THRESHOLDS,
) -> List[Concern]:
    """All concerns that fire, in tie-break order."""
    t = thresholds
    concerns: List[Concern] = []

    sleep = metrics.sleep_duration.average
    if sleep < t.concern_sleep_hours:
        concerns.append(Concern(
            factor="sleep",
            severity=3 if sleep < t.concern_severe_sleep_hours else 2,
            reason="Kurang tidur kronis",
        ))

    if metrics.stress_level.average >= t.concern_stress and trends.stress.consistency > t.chronic_consistency:
        concerns.append(Concern(factor="stress", severity=3, reason="Stres tinggi konsisten"))

    if metrics.heart_rate.average > t.concern_heart_rate:
        concerns.append(Concern(factor="heart_rate", severity=2, reason="Detak jantung istirahat tinggi"))

    if metrics.activity_level.average < t.concern_activity_minutes:
        concerns.append(Concern(factor="activity", severity=2, reason="Aktivitas fisik sangat rendah"))

    if metrics.water_intake.average < t.concern_water_glasses:
        concerns.append(Concern(factor="hydration", severity=1, reason="Hidrasi tidak memadai"))

    return concerns


def primary_concern(
    metrics: WindowMetrics,
    trends: TrendReport,
    thresholds: Thresholds = DEFAULT_THRESHOLDS,
) -> Optional[Concern]:
    """Highest-severity concern; the earliest wins a tie.  None if nothing fires."""
    best: Optional[Concern] = None
    for concern in identify_concerns(metrics, trends, thresholds):
        if best is None or concern.severity > best.severity:
            best = concern
    return best
