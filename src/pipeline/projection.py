"""Forward-looking projection: status quo vs. following the plan."""

from __future__ import annotations

from typing import Callable, Dict, Tuple

from models import Projection
from pipeline.context import AnalysisContext


def _sleep(ctx: AnalysisContext) -> Tuple[str, str]:
    current = (
        f"Jika pola tidur {ctx.sleep:.1f} jam per malam berlanjut, Anda berisiko mengalami akumulasi "
        "sleep debt yang dapat bermanifestasi sebagai penurunan konsentrasi, gangguan metabolisme, dan "
        "peningkatan reaktivitas emosional dalam 2-4 minggu ke depan."
    )
    if ctx.trends.sleep.is_declining:
        current += " Tren penurunan yang terdeteksi mengindikasikan risiko ini dapat terjadi lebih cepat."
    improved = (
        "Dengan meningkatkan tidur menjadi 7-8 jam konsisten dalam 7 hari ke depan, Anda dapat mulai "
        "merasakan peningkatan energi dan kemampuan mengelola stres. Dalam 2-3 minggu, perbaikan tidur "
        "dapat berdampak pada normalisasi detak jantung istirahat dan peningkatan performa kognitif."
    )
    return current, improved


def _stress(ctx: AnalysisContext) -> Tuple[str, str]:
    current = (
        f"Stres konsisten di level {ctx.stress:.1f}/10 tanpa intervensi dapat menyebabkan kelelahan "
        "kronis, gangguan tidur yang semakin memburuk, dan potensi burnout dalam 4-8 minggu."
    )
    if ctx.sleep < ctx.thresholds.healthy_sleep_hours:
        current += " Kombinasi dengan kurang tidur membentuk siklus yang mempercepat penurunan kesejahteraan."
    improved = (
        "Penerapan teknik manajemen stres harian (meditasi, pernapasan, aktivitas fisik) dapat "
        "menurunkan level stres sebesar 1-2 poin dalam 10-14 hari pertama. Penurunan stres membuka "
        "jalan untuk perbaikan kualitas tidur dan peningkatan energi secara beruntun."
    )
    return current, improved


def _activity(ctx: AnalysisContext) -> Tuple[str, str]:
    current = (
        f"Aktivitas fisik {ctx.activity:.0f} menit/hari berada jauh di bawah minimal. Jika pola ini "
        "berlanjut, risiko penurunan massa otot, metabolisme yang lambat, dan mood yang rendah akan "
        "meningkat dalam 4-6 minggu."
    )
    improved = (
        "Meningkatkan aktivitas bertahap ke 20-30 menit per hari dalam 2 minggu dapat meningkatkan "
        "produksi endorfin, memperbaiki kualitas tidur, dan memberikan energi yang lebih stabil. "
        "Progres konsisten lebih penting daripada intensitas tinggi."
    )
    return current, improved


def _heart_rate(ctx: AnalysisContext) -> Tuple[str, str]:
    current = (
        f"Detak jantung istirahat rata-rata {ctx.heart_rate:.0f} BPM yang bertahan tinggi menandakan "
        "beban berkelanjutan pada sistem kardiovaskular. Tanpa penyesuaian, pola ini dapat menetap "
        "dalam 3-6 minggu dan menurunkan toleransi terhadap aktivitas fisik."
    )
    improved = (
        "Mengurangi kafein dan menjaga pengukuran yang konsisten selama 14-21 hari membantu "
        "memisahkan pengaruh stimulan dari kondisi sebenarnya, dan biasanya menurunkan detak jantung "
        "istirahat beberapa BPM."
    )
    return current, improved


def _hydration(ctx: AnalysisContext) -> Tuple[str, str]:
    current = (
        f"Asupan air {ctx.water:.1f} gelas/hari yang berlanjut dapat memicu dehidrasi ringan kronis, "
        "dengan gejala seperti sakit kepala, sulit konsentrasi, dan rasa lelah dalam 2-3 minggu."
    )
    improved = (
        f"Mencapai {ctx.thresholds.target_water_glasses:g} gelas per hari secara konsisten dalam 7 hari "
        "dapat memperbaiki tingkat energi dan fokus, serta membantu stabilitas detak jantung."
    )
    return current, improved


def _no_concern(ctx: AnalysisContext) -> Tuple[str, str]:
    return (
        "Mempertahankan pola saat ini akan menjaga Anda di zona kesehatan yang baik. Namun, konsistensi "
        "jangka panjang memerlukan awareness terhadap perubahan kecil yang mungkin menjadi tren negatif.",
        "Optimalisasi lebih lanjut pada tidur, aktivitas, atau manajemen stres dapat meningkatkan "
        "resiliensi Anda terhadap stressor eksternal, memberikan buffer yang lebih besar saat "
        "menghadapi periode menantang di masa depan.",
    )


PROJECTIONS: Dict[str, Callable[[AnalysisContext], Tuple[str, str]]] = {
    "sleep": _sleep,
    "stress": _stress,
    "activity": _activity,
    "heart_rate": _heart_rate,
    "hydration": _hydration,
}


def build_projection(ctx: AnalysisContext) -> Projection:
    builder = PROJECTIONS.get(ctx.factor, _no_concern) if ctx.factor else _no_concern
    current, improved = builder(ctx)
    return Projection(current_trajectory=current.strip(), improved_trajectory=improved.strip())
