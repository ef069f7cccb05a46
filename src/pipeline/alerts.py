"""
Acute warnings from the three most recent days.

Independent of the 7-day insight: each rule counts how many of the last
3 records breach an acute threshold and fires at `warn_min_days` or more.
"""

from __future__ import annotations

import logging
from typing import List, Sequence

from analytics.window import last_records
from constants import (
    DEFAULT_THRESHOLDS, SEVERITY_HIGH, SEVERITY_MEDIUM, WARNING_TYPE_ALERT,
    WARNING_TYPE_WARNING, Thresholds,
)
from models import HealthRecord, HealthWarning

log = logging.getLogger("alerts")


def _count(records: Sequence[HealthRecord], field: str, predicate) -> int:
    return sum(1 for r in records if getattr(r, field) is not None and predicate(getattr(r, field)))


def detect_acute_warnings(
    records: Sequence[HealthRecord],
    thresholds: Thresholds = DEFAULT_THRESHOLDS,
) -> List[HealthWarning]:
    """Warnings for the newest `warning_window` records of a newest-first history."""
    t = thresholds
    recent = last_records(records, t.warning_window)
    if not recent:
        return []

    warnings: List[HealthWarning] = []
    days = len(recent)

    high_stress = _count(recent, "stress_level", lambda v: v >= t.warn_stress)
    if high_stress >= t.warn_min_days:
        warnings.append(HealthWarning(
            severity=SEVERITY_HIGH,
            type=WARNING_TYPE_ALERT,
            title="Peringatan: Stres Sangat Tinggi",
            description=(
                f"Stres di level ≥{t.warn_stress:g} terdeteksi pada {high_stress} dari {days} hari terakhir. "
                "Pola ini dapat berdampak pada sistem cardiovascular dan kualitas tidur Anda."
            ),
            action="Segera terapkan teknik manajemen stres (pernapasan dalam, meditasi singkat)",
        ))

    # Nights at or below the limit count as severe deprivation
    short_sleep = _count(recent, "sleep_duration", lambda v: v <= t.warn_sleep_hours)
    if short_sleep >= t.warn_min_days:
        warnings.append(HealthWarning(
            severity=SEVERITY_HIGH,
            type=WARNING_TYPE_ALERT,
            title="Peringatan: Kurang Tidur Parah",
            description=(
                f"Tidur ≤{t.warn_sleep_hours:g} jam terjadi pada {short_sleep} dari {days} hari terakhir. "
                "Sleep deprivation akut dapat mempengaruhi fungsi kognitif dan sistem imun."
            ),
            action=f"Prioritaskan tidur minimal {t.healthy_sleep_hours:g} jam malam ini",
        ))

    fast_hr = _count(recent, "heart_rate", lambda v: v > t.warn_heart_rate)
    if fast_hr >= t.warn_min_days:
        warnings.append(HealthWarning(
            severity=SEVERITY_MEDIUM,
            type=WARNING_TYPE_WARNING,
            title="Detak Jantung Istirahat Tinggi",
            description=(
                f"Detak jantung >{t.warn_heart_rate:g} BPM terdeteksi pada {fast_hr} hari. Ini dapat "
                "mengindikasikan stres fisik/psikologis, dehidrasi, atau konsumsi stimulan berlebih."
            ),
            action="Monitor pola ini dan konsultasikan dengan profesional kesehatan jika berlanjut",
        ))

    if warnings:
        log.info("Acute warnings: %s", ", ".join(w.title for w in warnings))
    return warnings
