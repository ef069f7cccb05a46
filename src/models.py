"""
Data models for the wellness insight engine.

- HealthRecord: one self-reported daily entry (input, read-only)
- MetricSummary / MoodSummary / WindowMetrics: aggregated window statistics
- TrendSummary / TrendReport: direction and consistency per field
- Correlation, Concern, RiskAssessment, Recommendation, Projection
- BaselineComparison: current window vs. the older 7-day window
- Insight: the full result of one engine run
- HealthWarning: acute 3-day alert, independent of Insight

Every model is a frozen dataclass; results are rebuilt on every call.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Tuple

from constants import MOODS, TREND_DOWN, TREND_STABLE, TREND_UP


def _optional_number(value: Any, cast) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    number = float(value)
    if math.isnan(number):
        return None
    return cast(number)


def _optional_timestamp(value: Any) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    text = str(value).strip()
    if not text:
        return None
    # Supabase-style timestamps end with Z
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


@dataclass(frozen=True)
class HealthRecord:
    """One daily self-report.  Missing metrics are None."""
    timestamp: Optional[datetime] = None
    heart_rate: Optional[float] = None       # bpm
    sleep_duration: Optional[float] = None   # hours
    water_intake: Optional[int] = None       # glasses
    stress_level: Optional[int] = None       # 1-10
    activity_level: Optional[int] = None     # minutes
    mood: Optional[str] = None

    def __post_init__(self):
        if self.mood is not None and self.mood not in MOODS:
            raise ValueError(f"Unknown mood: {self.mood!r}")

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "HealthRecord":
        """Build a record from a storage row, coercing strings and ISO dates."""
        mood = row.get("mood") or None
        return cls(
            timestamp=_optional_timestamp(row.get("timestamp") or row.get("created_at")),
            heart_rate=_optional_number(row.get("heart_rate"), float),
            sleep_duration=_optional_number(row.get("sleep_duration"), float),
            water_intake=_optional_number(row.get("water_intake"), int),
            stress_level=_optional_number(row.get("stress_level"), int),
            activity_level=_optional_number(row.get("activity_level"), int),
            mood=mood.strip().lower() if isinstance(mood, str) else mood,
        )


@dataclass(frozen=True)
class MetricSummary:
    current: float = 0.0
    average: float = 0.0
    min: float = 0.0
    max: float = 0.0
    trend_delta: float = 0.0
    variance: float = 0.0  # population standard deviation


@dataclass(frozen=True)
class MoodSummary:
    distribution: Dict[str, int] = field(default_factory=dict)
    trend: Optional[str] = None  # None = fewer than 3 moods logged


@dataclass(frozen=True)
class WindowMetrics:
    heart_rate: MetricSummary = field(default_factory=MetricSummary)
    sleep_duration: MetricSummary = field(default_factory=MetricSummary)
    water_intake: MetricSummary = field(default_factory=MetricSummary)
    stress_level: MetricSummary = field(default_factory=MetricSummary)
    activity_level: MetricSummary = field(default_factory=MetricSummary)
    mood: MoodSummary = field(default_factory=MoodSummary)

    def summary_for(self, name: str) -> MetricSummary:
        return getattr(self, name)


@dataclass(frozen=True)
class TrendSummary:
    direction: str = TREND_STABLE
    consistency: float = 0.0

    @property
    def is_declining(self) -> bool:
        return self.direction == TREND_DOWN

    @property
    def is_improving(self) -> bool:
        return self.direction == TREND_UP

    # For stress a rising trend is the bad direction
    is_escalating = is_improving

    @property
    def is_stable(self) -> bool:
        return self.direction == TREND_STABLE


@dataclass(frozen=True)
class TrendReport:
    sleep: TrendSummary = field(default_factory=TrendSummary)
    stress: TrendSummary = field(default_factory=TrendSummary)
    activity: TrendSummary = field(default_factory=TrendSummary)
    heart_rate: TrendSummary = field(default_factory=TrendSummary)
    heart_rate_elevated: bool = False


@dataclass(frozen=True)
class Correlation:
    type: str
    strength: str
    description: str


@dataclass(frozen=True)
class FieldBaseline:
    baseline: float
    change: float
    percent_change: Optional[float]  # None when the baseline average is 0
    is_improvement: bool


@dataclass(frozen=True)
class BaselineComparison:
    by_field: Dict[str, FieldBaseline]

    def __getitem__(self, name: str) -> FieldBaseline:
        return self.by_field[name]


@dataclass(frozen=True)
class Concern:
    factor: str
    severity: int
    reason: str


@dataclass(frozen=True)
class RiskAssessment:
    level: str
    score: int
    justification: str


@dataclass(frozen=True)
class Recommendation:
    priority: int
    action: str
    rationale: str
    topic: str = ""


@dataclass(frozen=True)
class Projection:
    current_trajectory: str
    improved_trajectory: str


@dataclass(frozen=True)
class Insight:
    summary: str
    risk_analysis: RiskAssessment
    pattern_breakdown: Tuple[str, ...]
    recommendations: Tuple[Recommendation, ...]
    future_analysis: Projection
    disclaimer: str
    analysed_days: int
    metrics: WindowMetrics
    correlations: Tuple[Correlation, ...] = ()
    primary_concern: Optional[Concern] = None
    baseline: Optional[BaselineComparison] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class HealthWarning:
    severity: str
    type: str
    title: str
    description: str
    action: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def warnings_to_dicts(warnings: List[HealthWarning]) -> List[Dict[str, Any]]:
    return [w.to_dict() for w in warnings]
