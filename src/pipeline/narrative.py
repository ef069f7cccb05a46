"""
Narrative composition.

The summary is picked from NARRATIVE_TEMPLATES, an ordered list of
(name, predicate, template).  The first predicate that holds wins, so the
list order is the priority order.
"""

from __future__ import annotations

import math
from typing import Callable, List, Sequence, Tuple

import pandas as pd

from analytics.correlations import find_correlation
from analytics.metrics import calculate_variance
from constants import (
    ACTIVITY_AFFECTS_MOOD, DEFAULT_THRESHOLDS, NEGATIVE_MOODS,
    STRESS_AFFECTS_SLEEP, TREND_DOWN, Thresholds,
)
from models import Correlation, TrendReport
from pipeline.context import AnalysisContext

# ─── Templates ─────────────────────────────────────────────


def _sleep_decline(ctx: AnalysisContext) -> str:
    if ctx.correlations:
        link = "tampak berkaitan dengan " + ctx.correlations[0].description.split(",")[0].lower()
    else:
        link = "dapat berdampak pada kesehatan jangka panjang"
    return (
        f"Analisis {ctx.days} hari terakhir menunjukkan pola tidur yang menurun dengan rata-rata "
        f"{ctx.sleep:.1f} jam per malam, berada di bawah standar minimal "
        f"{ctx.thresholds.healthy_sleep_hours:g} jam. Tren penurunan ini {link}. "
        "Data menunjukkan konsistensi rendah dalam durasi tidur, yang mengindikasikan pola "
        "istirahat yang tidak teratur."
    )


def _stress_sleep_cycle(ctx: AnalysisContext) -> str:
    direction = "cenderung meningkat" if ctx.trends.stress.is_escalating else "relatif stabil di level tinggi"
    return (
        f"Tingkat stres Anda menunjukkan rata-rata {ctx.stress:.1f}/10 dalam periode observasi, "
        f"dengan tren yang {direction}. Analisis korelasi mengidentifikasi dampak langsung: "
        "hari-hari dengan stres tinggi secara konsisten diikuti oleh penurunan kualitas tidur. "
        "Pola ini membentuk siklus negatif di mana stres mengganggu istirahat, yang kemudian dapat "
        "memperburuk kemampuan mengelola stres keesokan harinya."
    )


def _inactivity_mood(ctx: AnalysisContext) -> str:
    corr = find_correlation(list(ctx.correlations), ACTIVITY_AFFECTS_MOOD)
    return (
        f"Aktivitas fisik Anda tercatat rata-rata {ctx.activity:.0f} menit per hari, jauh di bawah "
        f"rekomendasi minimal {ctx.thresholds.target_activity_minutes:g} menit. Pola inaktivitas ini "
        f"menunjukkan korelasi dengan suasana hati: {corr.description} Kurangnya gerakan fisik dapat "
        "mengurangi produksi endorfin alami tubuh, yang berperan dalam regulasi mood dan energi."
    )


def _healthy(ctx: AnalysisContext) -> str:
    return (
        f"Berdasarkan analisis {ctx.days} hari terakhir, metrik kesehatan Anda menunjukkan keseimbangan "
        f"yang baik: tidur rata-rata {ctx.sleep:.1f} jam (memenuhi standar 7-9 jam), stres terkendali "
        f"di level {ctx.stress:.1f}/10, dan aktivitas fisik {ctx.activity:.0f} menit per hari. "
        "Konsistensi pola ini mengindikasikan kebiasaan yang mendukung kesehatan holistik. Namun, tetap "
        "penting untuk mempertahankan rutinitas ini dan waspada terhadap perubahan pola yang mungkin muncul."
    )


def _multi_issue(ctx: AnalysisContext) -> str:
    if ctx.correlations:
        tail = "Terdeteksi adanya hubungan antar-metrik, di mana satu faktor tampak mempengaruhi yang lain."
    else:
        tail = ("Meskipun tidak terdeteksi korelasi kuat antar-faktor, perbaikan pada satu area dapat "
                "memberikan efek positif keseluruhan.")
    return (
        f"Analisis data menunjukkan beberapa area yang memerlukan perhatian: {', '.join(ctx.issues())}. "
        "Kombinasi faktor-faktor ini dapat saling mempengaruhi dan membentuk pola yang kurang optimal "
        f"untuk kesejahteraan jangka panjang. {tail}"
    )


def _single_issue(ctx: AnalysisContext) -> str:
    if ctx.trends.sleep.is_improving or ctx.trends.stress.direction == TREND_DOWN:
        tail = "Tren terbaru menunjukkan arah yang positif."
    else:
        tail = ("Konsistensi dalam area yang sudah baik perlu dipertahankan sambil meningkatkan "
                "area prioritas.")
    return (
        "Secara keseluruhan, metrik kesehatan Anda menunjukkan performa yang cukup baik dengan satu "
        f"area yang memerlukan perhatian: {ctx.issues()[0]}. Faktor lainnya berada dalam rentang sehat, "
        f"yang merupakan fondasi baik untuk melakukan perbaikan terfokus. {tail}"
    )


def _balanced(ctx: AnalysisContext) -> str:
    return (
        f"Data dari {ctx.days} hari terakhir menunjukkan profil kesehatan yang seimbang dengan semua "
        "metrik utama berada dalam rentang yang mendukung kesejahteraan. Tidur, stres, dan aktivitas "
        "fisik menunjukkan pola yang sehat dan konsisten. Penting untuk mempertahankan kebiasaan "
        "positif ini sebagai investasi jangka panjang untuk kesehatan."
    )


NarrativeRule = Tuple[str, Callable[[AnalysisContext], bool], Callable[[AnalysisContext], str]]

NARRATIVE_TEMPLATES: List[NarrativeRule] = [
    ("sleep_decline",
     lambda c: c.factor == "sleep" and c.trends.sleep.is_declining,
     _sleep_decline),
    ("stress_sleep_cycle",
     lambda c: c.factor == "stress" and c.has(STRESS_AFFECTS_SLEEP),
     _stress_sleep_cycle),
    ("inactivity_mood",
     lambda c: c.activity < c.thresholds.corr_low_activity_minutes and c.has(ACTIVITY_AFFECTS_MOOD),
     _inactivity_mood),
    ("healthy",
     lambda c: (c.sleep >= c.thresholds.healthy_sleep_hours
                and c.stress <= c.thresholds.calm_stress_level
                and c.activity >= c.thresholds.target_activity_minutes),
     _healthy),
    ("multi_issue", lambda c: len(c.issues()) > 1, _multi_issue),
    ("single_issue", lambda c: len(c.issues()) == 1, _single_issue),
    ("balanced", lambda c: True, _balanced),
]


def select_narrative(ctx: AnalysisContext) -> Tuple[str, str]:
    """Return (template name, rendered summary) for the first matching rule."""
    for name, predicate, template in NARRATIVE_TEMPLATES:
        if predicate(ctx):
            return name, template(ctx)
    raise RuntimeError("NARRATIVE_TEMPLATES must end with a catch-all rule")


def compose_summary(ctx: AnalysisContext) -> str:
    return select_narrative(ctx)[1]


# ─── Pattern breakdown ─────────────────────────────────────


def build_pattern_breakdown(
    df: pd.DataFrame,
    trends: TrendReport,
    correlations: Sequence[Correlation],
    thresholds: Thresholds = DEFAULT_THRESHOLDS,
) -> List[str]:
    """Day-count observations over the window, in a fixed reporting order."""
    t = thresholds
    days = len(df)
    observations: List[str] = []
    if not days:
        return observations

    sleep = df["sleep_duration"].dropna()
    poor_sleep = int((sleep < t.concern_sleep_hours).sum())
    if poor_sleep >= 2:
        observations.append(
            f"Tidur kurang dari {t.concern_sleep_hours:g} jam terjadi pada {poor_sleep} dari {days} hari "
            f"({poor_sleep / days * 100:.0f}% periode)"
        )
    if trends.sleep.is_declining and len(sleep):
        observations.append(
            f"Durasi tidur menunjukkan tren menurun: dari {sleep.iloc[0]:.1f} jam di awal periode "
            f"menjadi {sleep.iloc[-1]:.1f} jam di hari terakhir"
        )
    sleep_spread = calculate_variance(sleep)
    if sleep_spread > 1.5:
        observations.append(
            f"Pola tidur tidak konsisten dengan variasi {sleep_spread:.1f} jam, "
            "menunjukkan jadwal yang tidak teratur"
        )

    stress = df["stress_level"].dropna()
    high_stress = int((stress >= t.corr_high_stress).sum())
    if high_stress >= 2:
        observations.append(
            f"Stres level tinggi (≥{t.corr_high_stress:g}) terdeteksi pada {high_stress} hari, "
            f"dengan puncak di {stress.max():g}/10"
        )
    if trends.stress.is_escalating and len(stress) >= 2:
        # same halves as calculate_trend: the first half is the larger one
        split = math.ceil(len(stress) / 2)
        early, late = stress.iloc[:split], stress.iloc[split:]
        observations.append(
            f"Tingkat stres menunjukkan eskalasi: rata-rata {early.mean():.1f} di {len(early)} hari pertama "
            f"meningkat menjadi {late.mean():.1f} di {len(late)} hari terakhir"
        )

    activity = df["activity_level"].dropna()
    inactive = int((activity < t.corr_low_activity_minutes).sum())
    if inactive >= 3:
        observations.append(
            f"Aktivitas fisik minimal (<{t.corr_low_activity_minutes:g} menit) terjadi pada {inactive} hari, "
            f"rata-rata hanya {activity.mean():.0f} menit/hari"
        )

    water = df["water_intake"].dropna()
    dry = int((water < t.corr_low_water_glasses).sum())
    if dry >= 2:
        observations.append(
            f"Asupan air di bawah {t.corr_low_water_glasses:g} gelas terjadi pada {dry} hari "
            f"(target minimal {t.target_water_glasses:g} gelas)"
        )

    hr = df["heart_rate"].dropna()
    avg_hr = float(hr.mean()) if len(hr) else 0.0
    if avg_hr > t.risk_heart_rate_high:
        where = ("berada di atas rentang normal (60-100 BPM)" if avg_hr > t.risk_heart_rate_critical
                 else "di ujung atas rentang normal")
        observations.append(f"Detak jantung istirahat rata-rata {avg_hr:.0f} BPM, {where}")

    for corr in correlations:
        observations.append(f"Korelasi {corr.strength}: {corr.description}")

    moods = [m for m in df["mood"].tolist() if isinstance(m, str) and m]
    negative = sum(1 for m in moods if m in NEGATIVE_MOODS)
    if negative >= 2:
        observations.append(
            f"Suasana hati negatif (lelah/sedih/cemas) muncul pada {negative} dari {len(moods)} "
            "hari yang tercatat"
        )

    return observations
