"""
Runtime configuration.
Single source of truth for threshold overrides and logging setup.

Any Thresholds field can be overridden with an environment variable named
INSIGHT_<FIELD_NAME> (e.g. INSIGHT_CONCERN_SLEEP_HOURS=5.5), either exported
or placed in a .env file.
"""

from __future__ import annotations

import logging
import os
from dataclasses import fields, replace
from functools import lru_cache
from typing import Any, Dict, Mapping, Optional

from dotenv import load_dotenv

from constants import DEFAULT_THRESHOLDS, Thresholds

ENV_PREFIX = "INSIGHT_"

log = logging.getLogger("config")


def setup_logging(level: Optional[str] = None) -> None:
    """Configure root logging once, level from LOG_LEVEL (default INFO)."""
    level_name = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def thresholds_from_env(env: Mapping[str, str]) -> Thresholds:
    """Build Thresholds from DEFAULT_THRESHOLDS plus INSIGHT_* overrides.

    Unparsable or out-of-range values are logged and ignored; the default
    stays in place.
    """
    overrides: Dict[str, Any] = {}
    for f in fields(Thresholds):
        raw = env.get(ENV_PREFIX + f.name.upper())
        if raw is None or not str(raw).strip():
            continue
        cast = int if f.type in ("int", int) else float
        try:
            value = cast(raw)
        except ValueError:
            log.warning("Ignoring %s%s=%r (not a number)", ENV_PREFIX, f.name.upper(), raw)
            continue
        try:
            replace(DEFAULT_THRESHOLDS, **{f.name: value})
        except ValueError as e:
            log.warning("Ignoring %s%s=%r (%s)", ENV_PREFIX, f.name.upper(), raw, e)
            continue
        overrides[f.name] = value
    if overrides:
        log.info("Threshold overrides: %s", ", ".join(sorted(overrides)))
    return replace(DEFAULT_THRESHOLDS, **overrides)


@lru_cache(maxsize=1)
def get_thresholds() -> Thresholds:
    """Thresholds for this process: .env and environment, read once."""
    load_dotenv()
    return thresholds_from_env(os.environ)


def resolve_thresholds(thresholds: Optional[Thresholds] = None) -> Thresholds:
    return thresholds if thresholds is not None else get_thresholds()
