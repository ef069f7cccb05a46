"""Insight composition: window -> primitives -> concern -> text stages."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from analytics.baseline import compare_to_baseline
from analytics.correlations import detect_correlations
from analytics.metrics import analyze_trends, calculate_metrics
from analytics.window import records_frame, select_window
from constants import DEFAULT_THRESHOLDS, DISCLAIMER, Thresholds
from models import HealthRecord, Insight
from pipeline.concerns import primary_concern
from pipeline.context import AnalysisContext
from pipeline.narrative import build_pattern_breakdown, select_narrative
from pipeline.projection import build_projection
from pipeline.recommendations import build_recommendations
from pipeline.risk import assess_risk

log = logging.getLogger("composer")


def compose_insight(
    records: Sequence[HealthRecord],
    thresholds: Thresholds = DEFAULT_THRESHOLDS,
) -> Optional[Insight]:
    """Full Insight for a newest-first history, or None when it is empty."""
    window = select_window(records, thresholds.window_size)
    if not window:
        return None

    df = records_frame(window)
    metrics = calculate_metrics(df)
    trends = analyze_trends(df, thresholds)
    correlations = tuple(detect_correlations(df, thresholds))
    baseline = compare_to_baseline(metrics, records, thresholds)
    concern = primary_concern(metrics, trends, thresholds)

    ctx = AnalysisContext(
        metrics=metrics,
        trends=trends,
        correlations=correlations,
        concern=concern,
        days=len(window),
        thresholds=thresholds,
    )
    template, summary = select_narrative(ctx)
    risk = assess_risk(metrics, trends, correlations, concern, thresholds)

    log.debug(
        "Composed insight: days=%d concern=%s template=%s risk=%s/%d correlations=%d",
        len(window), concern.factor if concern else None, template,
        risk.level, risk.score, len(correlations),
    )
    return Insight(
        summary=summary,
        risk_analysis=risk,
        pattern_breakdown=tuple(build_pattern_breakdown(df, trends, correlations, thresholds)),
        recommendations=tuple(build_recommendations(ctx)),
        future_analysis=build_projection(ctx),
        disclaimer=DISCLAIMER,
        analysed_days=len(window),
        metrics=metrics,
        correlations=correlations,
        primary_concern=concern,
        baseline=baseline,
    )
