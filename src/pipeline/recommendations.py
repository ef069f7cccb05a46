"""
Recommendation planning.

Order of construction:
  1. rule set of the primary concern (sleep, stress, activity, heart_rate)
  2. correlation-driven additions, skipped when the topic is already covered
  3. generic fallbacks, each used at most once, until the plan is full
Priorities are kept as assigned, so they need not be contiguous.
"""

from __future__ import annotations

from typing import Callable, Dict, List

from constants import ACTIVITY_AFFECTS_MOOD, HYDRATION_AFFECTS_ENERGY, STRESS_AFFECTS_SLEEP
from models import Recommendation
from pipeline.context import AnalysisContext


def _covers(plan: List[Recommendation], topic: str) -> bool:
    return any(r.topic == topic for r in plan)


# ─── Concern rule sets ─────────────────────────────────────


def _sleep_plan(ctx: AnalysisContext) -> List[Recommendation]:
    t = ctx.thresholds
    plan = [Recommendation(
        priority=1,
        action="Tetapkan waktu tidur konsisten",
        rationale=(
            f"Data menunjukkan tidur Anda rata-rata {ctx.sleep:.1f} jam, di bawah kebutuhan minimal "
            f"{t.healthy_sleep_hours:g} jam. Tidur pada jam yang sama setiap malam membantu mengatur "
            "ritme sirkadian."
        ),
        topic="sleep",
    )]
    if ctx.stress >= t.rec_stress_relaxation:
        plan.append(Recommendation(
            priority=2,
            action="Lakukan rutinitas relaksasi 30 menit sebelum tidur",
            rationale=(
                "Tingkat stres Anda yang tinggi dapat mengganggu onset tidur. Teknik relaksasi seperti "
                "pernapasan dalam atau meditasi ringan dapat menurunkan kortisol."
            ),
            topic="relaxation",
        ))
    plan.append(Recommendation(
        priority=3,
        action="Hentikan paparan layar (HP, laptop) minimal 1 jam sebelum tidur",
        rationale=(
            "Cahaya biru dari layar menekan produksi melatonin, hormon yang mengatur tidur, "
            "memperpanjang waktu yang dibutuhkan untuk tertidur."
        ),
        topic="screen",
    ))
    return plan


def _stress_plan(ctx: AnalysisContext) -> List[Recommendation]:
    plan = [Recommendation(
        priority=1,
        action="Praktikkan teknik pernapasan box (4-4-4-4) 3x sehari",
        rationale=(
            f"Stres Anda konsisten di level {ctx.stress:.1f}/10. Pernapasan terkontrol mengaktifkan "
            "sistem saraf parasimpatik, menurunkan kortisol dan detak jantung."
        ),
        topic="breathing",
    )]
    if ctx.activity < ctx.thresholds.rec_activity_walk_minutes:
        plan.append(Recommendation(
            priority=2,
            action="Tambahkan 20 menit jalan kaki di pagi atau sore hari",
            rationale=(
                "Aktivitas fisik meningkatkan produksi endorfin yang berfungsi sebagai penstabil mood "
                "alami dan mengurangi hormon stres."
            ),
            topic="activity",
        ))
    plan.append(Recommendation(
        priority=3,
        action="Identifikasi dan catat 3 pemicu stres utama Anda",
        rationale=(
            "Memahami pola pemicu stres memungkinkan Anda mengembangkan strategi coping yang "
            "spesifik dan efektif."
        ),
        topic="journal",
    ))
    return plan


def _activity_plan(ctx: AnalysisContext) -> List[Recommendation]:
    plan = [
        Recommendation(
            priority=1,
            action="Mulai dengan target 15 menit aktivitas fisik setiap hari",
            rationale=(
                f"Aktivitas Anda saat ini {ctx.activity:.0f} menit/hari jauh di bawah rekomendasi. "
                "Mulai dari target kecil yang realistis meningkatkan konsistensi jangka panjang."
            ),
            topic="activity",
        ),
        Recommendation(
            priority=2,
            action="Jadwalkan aktivitas di waktu yang sama setiap hari",
            rationale=(
                "Konsistensi waktu membantu membentuk habit loop yang kuat, membuat aktivitas fisik "
                "menjadi otomatis dan tidak bergantung pada motivasi sesaat."
            ),
            topic="schedule",
        ),
    ]
    if ctx.has(ACTIVITY_AFFECTS_MOOD):
        plan.append(Recommendation(
            priority=3,
            action="Pilih aktivitas yang Anda nikmati (jalan, bersepeda, tari)",
            rationale=(
                "Data menunjukkan aktivitas rendah berkorelasi dengan mood negatif. Aktivitas yang "
                "menyenangkan memberikan manfaat ganda: fisik dan psikologis."
            ),
            topic="enjoyment",
        ))
    return plan


def _heart_rate_plan(ctx: AnalysisContext) -> List[Recommendation]:
    plan = [Recommendation(
        priority=1,
        action="Kurangi konsumsi kafein menjadi maksimal 1 cangkir sebelum jam 12 siang",
        rationale=(
            f"Detak jantung istirahat Anda {ctx.heart_rate:.0f} BPM lebih tinggi dari ideal. Kafein "
            "meningkatkan denyut jantung hingga 6-8 jam setelah konsumsi."
        ),
        topic="caffeine",
    )]
    if ctx.stress >= ctx.thresholds.rec_stress_relaxation:
        plan.append(Recommendation(
            priority=2,
            action="Praktikkan relaksasi progresif otot sebelum mengukur detak jantung",
            rationale=(
                "Stres Anda yang tinggi dapat meningkatkan detak jantung istirahat. Teknik relaksasi "
                "otot menurunkan aktivasi sistem saraf simpatik."
            ),
            topic="relaxation",
        ))
    plan.append(Recommendation(
        priority=3,
        action="Pantau detak jantung pada waktu dan kondisi yang sama setiap hari",
        rationale=(
            "Konsistensi pengukuran (misalnya setiap pagi sebelum bangun tidur) memberikan data yang "
            "lebih akurat untuk mendeteksi pola."
        ),
        topic="measurement",
    ))
    return plan


CONCERN_PLANS: Dict[str, Callable[[AnalysisContext], List[Recommendation]]] = {
    "sleep": _sleep_plan,
    "stress": _stress_plan,
    "activity": _activity_plan,
    "heart_rate": _heart_rate_plan,
}


# ─── Correlation additions ─────────────────────────────────


def _correlation_additions(ctx: AnalysisContext, plan: List[Recommendation]) -> None:
    for corr in ctx.correlations:
        if corr.type == STRESS_AFFECTS_SLEEP and not _covers(plan, "relaxation"):
            plan.append(Recommendation(
                priority=2,
                action='Pisahkan waktu "worry time" di sore hari, jauhkan dari waktu tidur',
                rationale=(
                    "Terdeteksi korelasi kuat: stres mengganggu tidur Anda. Mengalokasikan waktu khusus "
                    "untuk memikirkan kekhawatiran mencegah intrusi pikiran saat mencoba tidur."
                ),
                topic="worry_time",
            ))
        elif corr.type == HYDRATION_AFFECTS_ENERGY and not _covers(plan, "hydration"):
            plan.append(Recommendation(
                priority=3,
                action="Minum 2 gelas air saat bangun tidur dan sebelum setiap makan",
                rationale=(
                    "Data menunjukkan hidrasi rendah berkaitan dengan energi rendah. Jadwal terstruktur "
                    "memastikan asupan minimal 6 gelas tanpa bergantung pada rasa haus."
                ),
                topic="hydration",
            ))


# ─── Generic fallbacks ─────────────────────────────────────


def _water_bottle(ctx: AnalysisContext, plan: List[Recommendation]):
    if ctx.water >= ctx.thresholds.rec_water_bottle_glasses or _covers(plan, "hydration"):
        return None
    return Recommendation(
        priority=4,
        action="Bawa botol air 500ml dan isi ulang 3x sehari",
        rationale=(
            f"Asupan air Anda {ctx.water:.1f} gelas/hari. Target visual (botol yang harus dihabiskan) "
            "lebih efektif daripada menghitung gelas."
        ),
        topic="hydration",
    )


def _daily_logging(ctx: AnalysisContext, plan: List[Recommendation]):
    if _covers(plan, "logging"):
        return None
    return Recommendation(
        priority=5,
        action="Catat pola tidur, stres, dan mood di aplikasi ini setiap hari",
        rationale=(
            "Konsistensi pencatatan menghasilkan data yang lebih kaya untuk analisis pola dan "
            "identifikasi pemicu spesifik terhadap kondisi Anda."
        ),
        topic="logging",
    )


def _weekly_review(ctx: AnalysisContext, plan: List[Recommendation]):
    if _covers(plan, "review"):
        return None
    return Recommendation(
        priority=5,
        action="Evaluasi ulang metrik setelah 7 hari menerapkan 2 rekomendasi prioritas",
        rationale=(
            "Perubahan kebiasaan memerlukan waktu. Evaluasi mingguan memungkinkan Anda melihat dampak "
            "nyata dan menyesuaikan strategi jika diperlukan."
        ),
        topic="review",
    )


FALLBACK_RULES = [_water_bottle, _daily_logging, _weekly_review]


def build_recommendations(ctx: AnalysisContext) -> List[Recommendation]:
    """Priority-ordered action plan with 1 to `max_recommendations` items."""
    limit = ctx.thresholds.max_recommendations
    plan: List[Recommendation] = []

    concern_plan = CONCERN_PLANS.get(ctx.factor) if ctx.factor else None
    if concern_plan is not None:
        plan.extend(concern_plan(ctx))

    _correlation_additions(ctx, plan)

    for rule in FALLBACK_RULES:
        if len(plan) >= limit:
            break
        rec = rule(ctx, plan)
        if rec is not None:
            plan.append(rec)

    return plan[:limit]
