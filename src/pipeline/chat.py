"""
Keyword-based chat answers over the same primitives as the insight.

INTENTS is a dispatch table of (intent, keywords, handler).  The first intent
with a keyword contained in the lower-cased message wins.  A handler returns
None when it has nothing to say (no data), which falls back to the help text.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence, Tuple

from analytics.correlations import detect_correlations, find_correlation
from analytics.metrics import calculate_average, trend_direction
from analytics.window import records_frame, select_window
from constants import DEFAULT_THRESHOLDS, STRESS_AFFECTS_SLEEP, TREND_DOWN, Thresholds
from models import HealthRecord
from pipeline.composer import compose_insight

log = logging.getLogger("chat")

DEFAULT_ANSWER = (
    "Saya dapat menganalisis data kesehatan Anda untuk memberikan wawasan tentang pola tidur, stres, "
    "aktivitas, dan korelasinya. Tanyakan tentang metrik spesifik atau minta \"analisis pola\" untuk "
    "overview komprehensif. Ingat: ini informasi lifestyle, bukan diagnosis medis."
)

# WHO: 150 minutes/week
WHO_DAILY_ACTIVITY_MINUTES = 22

Handler = Callable[[Sequence[HealthRecord], Thresholds], Optional[str]]


def _sleep_answer(records: Sequence[HealthRecord], t: Thresholds) -> Optional[str]:
    window = select_window(records, t.window_size)
    if not window:
        return None
    df = records_frame(window)
    avg = calculate_average(df["sleep_duration"])
    trend = trend_direction(df["sleep_duration"], t.trend_stable_delta)

    parts = [f"Analisis tidur Anda ({len(window)} hari terakhir): rata-rata {avg:.1f} jam dengan tren {trend}."]
    if avg < t.healthy_sleep_hours:
        parts.append("Ini di bawah rekomendasi 7-9 jam. Kurang tidur kronis dapat berdampak pada memori, "
                     "mood, dan fungsi imun.")
    else:
        parts.append("Durasi ini memenuhi standar sehat.")
    if trend == TREND_DOWN:
        parts.append("Perhatikan tren penurunan yang dapat mengindikasikan stressor baru atau perubahan rutinitas.")
    return " ".join(parts)


def _stress_answer(records: Sequence[HealthRecord], t: Thresholds) -> Optional[str]:
    window = select_window(records, t.window_size)
    if not window:
        return None
    df = records_frame(window)
    avg = calculate_average(df["stress_level"])

    parts = [f"Tingkat stres rata-rata Anda {avg:.1f}/10 dalam periode observasi."]
    if avg >= t.concern_stress:
        parts.append("Level ini tergolong tinggi dan memerlukan perhatian.")
    if find_correlation(detect_correlations(df, t), STRESS_AFFECTS_SLEEP):
        parts.append("Data menunjukkan stres Anda berkorelasi dengan kualitas tidur: hari dengan stres "
                     "tinggi cenderung diikuti tidur yang lebih sedikit.")
    parts.append("Cobalah teknik pernapasan box breathing (4-4-4-4) atau meditasi mindfulness 10 menit "
                 "setiap hari.")
    return " ".join(parts)


def _activity_answer(records: Sequence[HealthRecord], t: Thresholds) -> Optional[str]:
    window = select_window(records, t.window_size)
    if not window:
        return None
    avg = calculate_average(records_frame(window)["activity_level"])
    text = (
        f"Aktivitas fisik rata-rata Anda {avg:.0f} menit/hari. Target minimal WHO adalah 150 menit/minggu "
        f"atau ~{WHO_DAILY_ACTIVITY_MINUTES} menit/hari. "
    )
    if avg < t.corr_low_activity_minutes:
        text += ("Anda berada di bawah target. Mulai dengan tambahan 10-15 menit jalan kaki dapat "
                 "memberikan manfaat signifikan.")
    else:
        text += ("Anda memenuhi atau mendekati target, yang mendukung kesehatan cardiovascular dan mental.")
    return text


def _pattern_answer(records: Sequence[HealthRecord], t: Thresholds) -> Optional[str]:
    insight = compose_insight(records, t)
    return insight.summary if insight else None


INTENTS: List[Tuple[str, Tuple[str, ...], Handler]] = [
    ("sleep", ("tidur", "sleep"), _sleep_answer),
    ("stress", ("stres", "stress"), _stress_answer),
    ("activity", ("aktivitas", "olahraga", "activity", "exercise"), _activity_answer),
    ("pattern", ("pola", "analisis", "pattern", "analysis"), _pattern_answer),
]


def resolve_intent(message: str) -> Optional[str]:
    text = (message or "").lower()
    for intent, keywords, _ in INTENTS:
        if any(k in text for k in keywords):
            return intent
    return None


def answer(message: str, records: Sequence[HealthRecord], thresholds: Thresholds = DEFAULT_THRESHOLDS) -> str:
    intent = resolve_intent(message)
    if intent is None:
        return DEFAULT_ANSWER
    handler = next(h for name, _, h in INTENTS if name == intent)
    reply = handler(records, thresholds)
    log.debug("Chat intent=%s answered=%s", intent, reply is not None)
    return reply if reply is not None else DEFAULT_ANSWER
