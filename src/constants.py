"""
Shared constants used across multiple modules.
Single source of truth for metric fields, mood groups and rule thresholds.

The thresholds are fixed heuristics, not clinical cut-offs.  They live in a
frozen dataclass so a deployment can override them (see config.py) without
touching the rules that read them.
"""

from __future__ import annotations

from dataclasses import dataclass, fields

# Numeric fields of a daily record, in report order
METRIC_FIELDS = (
    "heart_rate", "sleep_duration", "water_intake",
    "stress_level", "activity_level",
)

# Fields where a lower value is the healthier direction
LOWER_IS_BETTER = {"stress_level", "heart_rate"}

MOODS = ("happy", "neutral", "sad", "anxious", "energetic", "tired")
POSITIVE_MOODS = {"happy", "energetic"}
NEGATIVE_MOODS = {"sad", "anxious", "tired"}
# Moods read as a sign of poor rest
FATIGUE_MOODS = {"tired", "anxious"}

# Trend direction labels
TREND_STABLE = "stabil"
TREND_UP = "meningkat"
TREND_DOWN = "menurun"

# Mood trend labels
MOOD_POSITIVE = "positif"
MOOD_NEGATIVE = "negatif"
MOOD_NEUTRAL = "netral"

# Correlation types and strengths
STRESS_AFFECTS_SLEEP = "stress_affects_sleep"
SLEEP_AFFECTS_MOOD = "sleep_affects_mood"
ACTIVITY_AFFECTS_MOOD = "activity_affects_mood"
HYDRATION_AFFECTS_ENERGY = "hydration_affects_energy"

STRENGTH_LOW = "ringan"
STRENGTH_MEDIUM = "sedang"
STRENGTH_HIGH = "tinggi"

# Concern factors, in tie-break order
CONCERN_FACTORS = ("sleep", "stress", "heart_rate", "activity", "hydration")

# Risk levels
RISK_LOW = "Rendah"
RISK_MEDIUM = "Sedang"
RISK_HIGH = "Tinggi"

# Warning severities / types
SEVERITY_HIGH = "high"
SEVERITY_MEDIUM = "medium"
WARNING_TYPE_ALERT = "alert"
WARNING_TYPE_WARNING = "warning"

DISCLAIMER = "Analisis ini bersifat informatif berdasarkan data Anda, bukan diagnosis medis."


@dataclass(frozen=True)
class Thresholds:
    """Every tunable cut-off used by the insight rules."""

    # Window sizes
    window_size: int = 7
    baseline_min_records: int = 10
    warning_window: int = 3

    # Trend analysis
    trend_stable_delta: float = 0.3
    chronic_consistency: float = 0.7

    # Correlation detection
    corr_high_stress: float = 7
    corr_min_stress_days: int = 2
    corr_sleep_gap_hours: float = 0.5
    corr_min_fatigue_days: int = 2
    corr_fatigue_sleep_hours: float = 6.5
    corr_low_activity_minutes: float = 20
    corr_min_low_activity_days: int = 3
    corr_min_negative_mood_days: int = 2
    corr_low_water_glasses: float = 6
    corr_min_low_water_days: int = 2
    corr_min_tired_days: int = 1

    # Reference values used in narratives and as fallbacks
    healthy_sleep_hours: float = 7
    calm_stress_level: float = 5
    target_activity_minutes: float = 30
    target_water_glasses: float = 8

    # Concern identification
    concern_sleep_hours: float = 6
    concern_severe_sleep_hours: float = 5
    concern_stress: float = 7
    concern_heart_rate: float = 95
    concern_activity_minutes: float = 15
    concern_water_glasses: float = 5

    # Risk scoring
    risk_sleep_critical: float = 5
    risk_sleep_low: float = 6.5
    risk_sleep_borderline: float = 7
    risk_stress_critical: float = 8
    risk_stress_high: float = 7
    risk_stress_moderate: float = 6
    risk_activity_critical: float = 15
    risk_activity_low: float = 25
    risk_heart_rate_critical: float = 100
    risk_heart_rate_high: float = 90
    risk_water_low: float = 5
    risk_level_high: int = 7
    risk_level_medium: int = 4

    # Recommendation conditions
    rec_stress_relaxation: float = 6
    rec_activity_walk_minutes: float = 25
    rec_water_bottle_glasses: float = 7
    max_recommendations: int = 5

    # Acute warnings
    warn_stress: float = 8
    warn_sleep_hours: float = 5
    warn_heart_rate: float = 110
    warn_min_days: int = 2

    # Risk wording: cut-offs quoted in the high-risk justification
    risk_text_inactive_minutes: float = 20
    risk_text_heart_rate: float = 95

    def __post_init__(self):
        if not 1 <= self.max_recommendations <= 5:
            raise ValueError(f"max_recommendations must be 1..5, got {self.max_recommendations}")
        for name in ("window_size", "warning_window"):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be at least 1, got {getattr(self, name)}")

    @classmethod
    def field_names(cls):
        return [f.name for f in fields(cls)]


DEFAULT_THRESHOLDS = Thresholds()
