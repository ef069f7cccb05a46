"""
Risk scoring.

A finer-grained pass than concern identification: every metric adds points
on its own graded scale, and the total maps to Rendah / Sedang / Tinggi.
The sleep and stress cut-offs intentionally differ from the concern rules.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from constants import DEFAULT_THRESHOLDS, RISK_HIGH, RISK_LOW, RISK_MEDIUM, Thresholds
from models import Concern, Correlation, RiskAssessment, TrendReport, WindowMetrics

log = logging.getLogger("risk")


def risk_score(metrics: WindowMetrics, thresholds: Thresholds = DEFAULT_THRESHOLDS) -> int:
    t = thresholds
    score = 0

    sleep = metrics.sleep_duration.average
    if sleep < t.risk_sleep_critical:
        score += 3
    elif sleep < t.risk_sleep_low:
        score += 2
    elif sleep < t.risk_sleep_borderline:
        score += 1

    stress = metrics.stress_level.average
    if stress >= t.risk_stress_critical:
        score += 3
    elif stress >= t.risk_stress_high:
        score += 2
    elif stress >= t.risk_stress_moderate:
        score += 1

    activity = metrics.activity_level.average
    if activity < t.risk_activity_critical:
        score += 2
    elif activity < t.risk_activity_low:
        score += 1

    hr = metrics.heart_rate.average
    if hr > t.risk_heart_rate_critical:
        score += 2
    elif hr > t.risk_heart_rate_high:
        score += 1

    if metrics.water_intake.average < t.risk_water_low:
        score += 1

    return score


def risk_level(score: int, thresholds: Thresholds = DEFAULT_THRESHOLDS) -> str:
    if score >= thresholds.risk_level_high:
        return RISK_HIGH
    if score >= thresholds.risk_level_medium:
        return RISK_MEDIUM
    return RISK_LOW


def _high_risk_text(score: int, m: WindowMetrics, correlations: Sequence[Correlation], t: Thresholds) -> str:
    factors: List[str] = []
    if m.sleep_duration.average < t.risk_sleep_low:
        factors.append(f"kurang tidur kronis ({m.sleep_duration.average:.1f} jam)")
    if m.stress_level.average >= t.risk_stress_high:
        factors.append(f"stres berkelanjutan ({m.stress_level.average:.1f}/10)")
    if m.activity_level.average < t.risk_text_inactive_minutes:
        factors.append(f"inaktivitas fisik ({m.activity_level.average:.0f} menit/hari)")
    if m.heart_rate.average > t.risk_text_heart_rate:
        factors.append(f"detak jantung istirahat tinggi ({m.heart_rate.average:.0f} BPM)")

    text = f"Level risiko tinggi ditentukan berdasarkan akumulasi {score} poin dari berbagai faktor. "
    if factors:
        text += f"Kombinasi kritisnya mencakup: {', '.join(factors)}. "
    if correlations:
        text += (
            "Lebih signifikan lagi, terdeteksi pola saling mempengaruhi di mana "
            f"{correlations[0].description.lower()} "
            "Siklus negatif ini dapat mempercepat penurunan kondisi jika tidak segera ditangani."
        )
    else:
        text += (
            "Meski faktor-faktor ini tampak independen, akumulasinya membentuk beban signifikan "
            "terhadap sistem tubuh yang dapat meningkatkan risiko masalah kesehatan lifestyle jangka panjang."
        )
    return text


def _medium_risk_text(score: int, trends: TrendReport, concern: Optional[Concern]) -> str:
    text = (
        f"Level risiko sedang dengan skor {score} poin mengindikasikan adanya "
        "ketidakseimbangan pada beberapa aspek gaya hidup. "
    )
    if concern is not None:
        text += f"Area utama: {concern.reason.lower()}, yang menjadi prioritas untuk diperbaiki. "
    if trends.sleep.is_declining or trends.stress.is_escalating:
        text += "Tren yang memburuk terdeteksi, sehingga risiko dapat meningkat jika pola saat ini berlanjut. "
    text += "Pada level ini, intervensi dini melalui penyesuaian kebiasaan dapat efektif mencegah eskalasi risiko."
    return text


def _low_risk_text(score: int, m: WindowMetrics, t: Thresholds) -> str:
    if score == 0:
        return (
            f"Level risiko rendah (skor {score}) mencerminkan keseimbangan yang baik pada semua metrik "
            "kesehatan utama. Pola tidur, manajemen stres, aktivitas fisik, dan hidrasi berada dalam "
            "rentang yang mendukung kesehatan optimal. Fokus pada pemeliharaan konsistensi pola positif ini."
        )

    minor: List[str] = []
    if t.risk_sleep_low <= m.sleep_duration.average < t.risk_sleep_borderline:
        minor.append("tidur mendekati batas minimal")
    if t.calm_stress_level <= m.stress_level.average < t.risk_stress_moderate:
        minor.append("stres di level menengah")
    if t.risk_activity_low <= m.activity_level.average < t.target_activity_minutes:
        minor.append("aktivitas sedikit di bawah target")

    text = (
        f"Level risiko rendah dengan skor {score} poin menunjukkan kondisi yang umumnya sehat "
        "dengan ruang untuk optimalisasi minor. "
    )
    if minor:
        text += f"Perhatian kecil pada: {', '.join(minor)}. Penyesuaian ringan dapat membawa metrik ke zona optimal."
    else:
        text += "Profil kesehatan yang baik dengan fondasi kuat untuk kesejahteraan jangka panjang."
    return text


def assess_risk(
    metrics: WindowMetrics,
    trends: TrendReport,
    correlations: Sequence[Correlation],
    concern: Optional[Concern],
    thresholds: Thresholds = DEFAULT_THRESHOLDS,
) -> RiskAssessment:
    score = risk_score(metrics, thresholds)
    level = risk_level(score, thresholds)
    if level == RISK_HIGH:
        justification = _high_risk_text(score, metrics, correlations, thresholds)
    elif level == RISK_MEDIUM:
        justification = _medium_risk_text(score, trends, concern)
    else:
        justification = _low_risk_text(score, metrics, thresholds)
    log.debug("Risk score %d -> %s", score, level)
    return RiskAssessment(level=level, score=score, justification=justification)
