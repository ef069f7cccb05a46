"""
Wellness Insight Engine
=======================
Rule-based, deterministic analysis of a user's recent daily health records.

Public operations (records arrive newest-first, as the record store returns
them):

  generate_insight(records)          -> Insight, or None for an empty history
  detect_warnings(records)           -> list of acute HealthWarning (maybe empty)
  answer_question(message, records)  -> plain-text chat answer

Every operation is a pure function of its inputs plus the thresholds, which
come from config.get_thresholds() unless passed explicitly.  Nothing here
reads storage, authenticates users or renders output.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from config import resolve_thresholds
from constants import Thresholds
from models import HealthRecord, HealthWarning, Insight
from pipeline.alerts import detect_acute_warnings
from pipeline.chat import answer
from pipeline.composer import compose_insight

log = logging.getLogger("insight_engine")


def generate_insight(
    records: Sequence[HealthRecord],
    thresholds: Optional[Thresholds] = None,
) -> Optional[Insight]:
    """Build the full Insight.  None means "insufficient data" (no records)."""
    t = resolve_thresholds(thresholds)
    insight = compose_insight(list(records or []), t)
    if insight is None:
        log.info("No records: returning insufficient-data sentinel")
    else:
        log.info(
            "Insight over %d days: risk=%s (%d), %d recommendations",
            insight.analysed_days, insight.risk_analysis.level,
            insight.risk_analysis.score, len(insight.recommendations),
        )
    return insight


def detect_warnings(
    records: Sequence[HealthRecord],
    thresholds: Optional[Thresholds] = None,
) -> List[HealthWarning]:
    """Acute warnings from the 3 newest records; [] with fewer than 3."""
    return detect_acute_warnings(list(records or []), resolve_thresholds(thresholds))


def answer_question(
    message: str,
    records: Sequence[HealthRecord],
    thresholds: Optional[Thresholds] = None,
) -> str:
    """Keyword-routed answer about sleep, stress, activity or overall patterns."""
    return answer(message, list(records or []), resolve_thresholds(thresholds))
