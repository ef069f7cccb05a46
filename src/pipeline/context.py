"""Shared inputs of the template stages (narrative, plan, projection)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from analytics.correlations import find_correlation
from constants import DEFAULT_THRESHOLDS, Thresholds
from models import Concern, Correlation, TrendReport, WindowMetrics


@dataclass(frozen=True)
class AnalysisContext:
    metrics: WindowMetrics
    trends: TrendReport
    correlations: Tuple[Correlation, ...]
    concern: Optional[Concern]
    days: int
    thresholds: Thresholds = DEFAULT_THRESHOLDS

    @property
    def factor(self) -> Optional[str]:
        return self.concern.factor if self.concern else None

    @property
    def sleep(self) -> float:
        return self.metrics.sleep_duration.average

    @property
    def stress(self) -> float:
        return self.metrics.stress_level.average

    @property
    def activity(self) -> float:
        return self.metrics.activity_level.average

    @property
    def heart_rate(self) -> float:
        return self.metrics.heart_rate.average

    @property
    def water(self) -> float:
        return self.metrics.water_intake.average

    def has(self, corr_type: str) -> bool:
        return find_correlation(list(self.correlations), corr_type) is not None

    def issues(self) -> List[str]:
        """Plain-language list of the areas below target, for narratives."""
        t = self.thresholds
        found = []
        if self.sleep < t.healthy_sleep_hours:
            found.append(f"tidur yang kurang memadai ({self.sleep:.1f} jam)")
        if self.stress >= t.risk_stress_moderate:
            found.append(f"stres yang perlu dikelola ({self.stress:.1f}/10)")
        if self.activity < t.target_activity_minutes:
            found.append(f"aktivitas fisik rendah ({self.activity:.0f} menit)")
        return found
