"""Analysis-window selection and DataFrame loading for daily records."""

from __future__ import annotations

from dataclasses import asdict
from typing import Sequence, Tuple

import pandas as pd

from constants import METRIC_FIELDS
from models import HealthRecord

FRAME_COLUMNS = ["timestamp", *METRIC_FIELDS, "mood"]


def select_window(records: Sequence[HealthRecord], size: int = 7) -> Tuple[HealthRecord, ...]:
    """Most recent `size` records, oldest first.

    `records` arrive newest-first from storage.
    """
    if not records or size <= 0:
        return ()
    return tuple(reversed(records[:size]))


def last_records(records: Sequence[HealthRecord], count: int) -> Tuple[HealthRecord, ...]:
    """The `count` newest records in chronological order (empty if fewer exist)."""
    if count <= 0 or len(records) < count:
        return ()
    return select_window(records, count)


def records_frame(window: Sequence[HealthRecord]) -> pd.DataFrame:
    """Load records into a DataFrame; numeric columns become float with NaN gaps."""
    df = pd.DataFrame([asdict(r) for r in window], columns=FRAME_COLUMNS)
    for col in METRIC_FIELDS:
        df[col] = pd.to_numeric(df[col], errors="coerce").astype("float64")
    return df
