"""
Window statistics: per-field summaries, trend direction and consistency.

All helpers drop missing values before any arithmetic and return 0 (or the
"stable" label) instead of NaN when nothing is left.
"""

from __future__ import annotations

import math
import logging
from typing import Dict, Iterable, Optional, Sequence

import numpy as np
import pandas as pd

from constants import (
    DEFAULT_THRESHOLDS, METRIC_FIELDS, MOOD_NEGATIVE, MOOD_NEUTRAL,
    MOOD_POSITIVE, NEGATIVE_MOODS, POSITIVE_MOODS, TREND_DOWN, TREND_STABLE,
    TREND_UP, Thresholds,
)
from models import MetricSummary, MoodSummary, TrendReport, TrendSummary, WindowMetrics

log = logging.getLogger("metrics")


def _clean(values: Iterable) -> np.ndarray:
    arr = pd.to_numeric(pd.Series(list(values), dtype="object"), errors="coerce").to_numpy(dtype=np.float64)
    return arr[~np.isnan(arr)]


def calculate_average(values: Iterable) -> float:
    vals = _clean(values)
    return float(vals.mean()) if vals.size else 0.0


def calculate_variance(values: Iterable) -> float:
    """Population standard deviation (the "variance" reported per field)."""
    vals = _clean(values)
    return float(np.std(vals)) if vals.size else 0.0


def calculate_trend(values: Iterable) -> float:
    """mean(second half) - mean(first half); first half is the larger one."""
    vals = _clean(values)
    if vals.size < 2:
        return 0.0
    split = math.ceil(vals.size / 2)
    return float(vals[split:].mean() - vals[:split].mean())


def trend_direction(values: Iterable, stable_delta: float = DEFAULT_THRESHOLDS.trend_stable_delta) -> str:
    delta = calculate_trend(values)
    if abs(delta) < stable_delta:
        return TREND_STABLE
    return TREND_UP if delta > 0 else TREND_DOWN


def calculate_consistency(values: Iterable) -> float:
    """1 - coefficient of variation, clamped to [0, 1]."""
    vals = _clean(values)
    if not vals.size:
        return 0.0
    avg = float(vals.mean())
    if avg == 0:
        return 0.0
    cv = float(np.std(vals)) / avg
    return min(1.0, max(0.0, 1.0 - min(cv, 1.0)))


def summarize_field(values: Iterable) -> MetricSummary:
    vals = _clean(values)
    if not vals.size:
        return MetricSummary()
    return MetricSummary(
        current=float(vals[-1]),
        average=float(vals.mean()),
        min=float(vals.min()),
        max=float(vals.max()),
        trend_delta=calculate_trend(vals),
        variance=float(np.std(vals)),
    )


def mood_distribution(moods: Sequence[str]) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for m in moods:
        counts[m] = counts.get(m, 0) + 1
    return counts


def mood_trend(moods: Sequence[str]) -> Optional[str]:
    """Compare positive vs. negative moods among the last 3; None if < 3 logged."""
    if len(moods) < 3:
        return None
    recent = list(moods)[-3:]
    negative = sum(1 for m in recent if m in NEGATIVE_MOODS)
    positive = sum(1 for m in recent if m in POSITIVE_MOODS)
    if positive > negative:
        return MOOD_POSITIVE
    if negative > positive:
        return MOOD_NEGATIVE
    return MOOD_NEUTRAL


def logged_moods(df: pd.DataFrame):
    return [m for m in df["mood"].tolist() if isinstance(m, str) and m]


def calculate_metrics(df: pd.DataFrame) -> WindowMetrics:
    """Summaries for every numeric field plus the mood profile."""
    summaries = {f: summarize_field(df[f]) for f in METRIC_FIELDS}
    moods = logged_moods(df)
    mood = MoodSummary(distribution=mood_distribution(moods), trend=mood_trend(moods))
    log.debug("Aggregated %d days: %s", len(df),
              ", ".join(f"{f}={s.average:.2f}" for f, s in summaries.items()))
    return WindowMetrics(mood=mood, **summaries)


def analyze_trends(df: pd.DataFrame, thresholds: Thresholds = DEFAULT_THRESHOLDS) -> TrendReport:
    def summary(col: str) -> TrendSummary:
        return TrendSummary(
            direction=trend_direction(df[col], thresholds.trend_stable_delta),
            consistency=calculate_consistency(df[col]),
        )

    return TrendReport(
        sleep=summary("sleep_duration"),
        stress=summary("stress_level"),
        activity=summary("activity_level"),
        heart_rate=summary("heart_rate"),
        heart_rate_elevated=calculate_average(df["heart_rate"]) > thresholds.risk_heart_rate_high,
    )
