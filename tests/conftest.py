"""
Shared test configuration.

Adds both the project root and src/ to sys.path so that flat modules
(insight_engine, models, constants, ...) and the analytics/ and pipeline/
packages import the same way they do at runtime.

Also provides `make_history`, a factory for newest-first record lists built
from chronological (oldest -> newest) per-field series.
"""

import os
import sys
from datetime import datetime, timedelta

import pytest

_project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
_src_dir = os.path.join(_project_root, "src")

if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

if _src_dir not in sys.path:
    sys.path.insert(1, _src_dir)

from config import get_thresholds  # noqa: E402
from models import HealthRecord  # noqa: E402

HEALTHY_DAY = {
    "heart_rate": 70,
    "sleep_duration": 8.0,
    "water_intake": 9,
    "stress_level": 2,
    "activity_level": 40,
    "mood": "happy",
}


def _series(value, days):
    if isinstance(value, (list, tuple)):
        assert len(value) == days, f"series length {len(value)} != {days}"
        return list(value)
    return [value] * days


def build_history(days=7, base=None, **fields):
    """Newest-first records.  Each field is a scalar or a chronological list."""
    base = dict(HEALTHY_DAY if base is None else base)
    base.update(fields)
    columns = {k: _series(v, days) for k, v in base.items()}
    start = datetime(2026, 3, 1, 8, 0)
    chronological = [
        HealthRecord(timestamp=start + timedelta(days=i), **{k: columns[k][i] for k in columns})
        for i in range(days)
    ]
    return list(reversed(chronological))


@pytest.fixture
def make_history():
    return build_history


@pytest.fixture(autouse=True)
def _isolated_thresholds(monkeypatch):
    """Keep INSIGHT_* variables from the developer's shell out of the tests."""
    for key in list(os.environ):
        if key.startswith("INSIGHT_"):
            monkeypatch.delenv(key, raising=False)
    get_thresholds.cache_clear()
    yield
    get_thresholds.cache_clear()
