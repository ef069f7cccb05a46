"""
Cross-metric pattern detection over the analysis window.

Each rule is double-gated: a minimum number of qualifying days (frequency)
and a difference of means or mood count (magnitude).  Rules are evaluated
independently and may all fire on the same window.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

import pandas as pd

from constants import (
    ACTIVITY_AFFECTS_MOOD, DEFAULT_THRESHOLDS, FATIGUE_MOODS,
    HYDRATION_AFFECTS_ENERGY, NEGATIVE_MOODS, SLEEP_AFFECTS_MOOD,
    STRENGTH_HIGH, STRENGTH_LOW, STRENGTH_MEDIUM, STRESS_AFFECTS_SLEEP,
    Thresholds,
)
from models import Correlation

log = logging.getLogger("correlations")


def stress_affects_sleep(df: pd.DataFrame, t: Thresholds = DEFAULT_THRESHOLDS) -> Optional[Correlation]:
    """Sleep on high-stress days vs. the window's usual sleep."""
    stress_days = df[df["stress_level"] >= t.corr_high_stress]
    if len(stress_days) < t.corr_min_stress_days:
        return None
    stress_sleep = stress_days["sleep_duration"].dropna()
    if stress_sleep.empty:
        return None

    # Without a single calmer night the window mean equals the stress-day mean,
    # so measure against the healthy minimum instead.
    other_sleep = df.loc[~df.index.isin(stress_days.index), "sleep_duration"].dropna()
    reference = df["sleep_duration"].mean() if not other_sleep.empty else t.healthy_sleep_hours

    avg_stress_sleep = float(stress_sleep.mean())
    gap = float(reference) - avg_stress_sleep
    if gap <= t.corr_sleep_gap_hours:
        return None
    return Correlation(
        type=STRESS_AFFECTS_SLEEP,
        strength=STRENGTH_HIGH,
        description=(
            f"Pada {len(stress_days)} hari dengan stres tinggi, Anda tidur rata-rata "
            f"{avg_stress_sleep:.1f} jam, lebih rendah {gap:.1f} jam dari rata-rata normal Anda."
        ),
    )


def sleep_affects_mood(df: pd.DataFrame, t: Thresholds = DEFAULT_THRESHOLDS) -> Optional[Correlation]:
    """Tired or anxious days that follow short sleep."""
    tired_days = df[df["mood"].isin(FATIGUE_MOODS)]
    if len(tired_days) < t.corr_min_fatigue_days:
        return None
    tired_sleep = tired_days["sleep_duration"].dropna()
    if tired_sleep.empty:
        return None
    avg_sleep = float(tired_sleep.mean())
    if avg_sleep >= t.corr_fatigue_sleep_hours:
        return None
    return Correlation(
        type=SLEEP_AFFECTS_MOOD,
        strength=STRENGTH_MEDIUM,
        description=(
            f'Mood "lelah" atau "cemas" muncul pada {len(tired_days)} hari, '
            f"dan rata-rata tidur saat itu hanya {avg_sleep:.1f} jam."
        ),
    )


def activity_affects_mood(df: pd.DataFrame, t: Thresholds = DEFAULT_THRESHOLDS) -> Optional[Correlation]:
    """Negative moods clustering on low-activity days."""
    low_days = df[df["activity_level"] < t.corr_low_activity_minutes]
    if len(low_days) < t.corr_min_low_activity_days:
        return None
    negative = int(low_days["mood"].isin(NEGATIVE_MOODS).sum())
    if negative < t.corr_min_negative_mood_days:
        return None
    return Correlation(
        type=ACTIVITY_AFFECTS_MOOD,
        strength=STRENGTH_MEDIUM,
        description=(
            f"Pada {len(low_days)} hari dengan aktivitas rendah "
            f"(< {t.corr_low_activity_minutes:g} menit), sebagian besar suasana hati cenderung negatif."
        ),
    )


def hydration_affects_energy(df: pd.DataFrame, t: Thresholds = DEFAULT_THRESHOLDS) -> Optional[Correlation]:
    """Tired days among low-water days."""
    dry_days = df[df["water_intake"] < t.corr_low_water_glasses]
    if len(dry_days) < t.corr_min_low_water_days:
        return None
    tired = int((dry_days["mood"] == "tired").sum())
    if tired < t.corr_min_tired_days:
        return None
    return Correlation(
        type=HYDRATION_AFFECTS_ENERGY,
        strength=STRENGTH_LOW,
        description=(
            f"Hidrasi rendah (< {t.corr_low_water_glasses:g} gelas) terdeteksi pada {len(dry_days)} hari, "
            f'dan mood "lelah" muncul di beberapa hari tersebut.'
        ),
    )


# Evaluation order is the order correlations are reported in
CORRELATION_RULES: List[Callable[[pd.DataFrame, Thresholds], Optional[Correlation]]] = [
    stress_affects_sleep,
    sleep_affects_mood,
    activity_affects_mood,
    hydration_affects_energy,
]


def detect_correlations(df: pd.DataFrame, thresholds: Thresholds = DEFAULT_THRESHOLDS) -> List[Correlation]:
    found = []
    for rule in CORRELATION_RULES:
        corr = rule(df, thresholds)
        if corr is not None:
            found.append(corr)
    log.debug("Correlations: %s", [c.type for c in found] or "none")
    return found


def find_correlation(correlations: List[Correlation], corr_type: str) -> Optional[Correlation]:
    return next((c for c in correlations if c.type == corr_type), None)
