"""
Runtime configuration for fixedmap.

Values are read once from the environment at import time:
- FIXEDMAP_CAPACITY: bucket count used when none is given (default 64).
- FIXEDMAP_LOG_LEVEL: logging level name for the CLI (default WARNING).

A malformed value is reported with a warning and replaced by its default.
"""

import logging
import os
import sys
from typing import Optional

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_CAPACITY_FALLBACK = 64
_LOG_LEVEL_FALLBACK = "WARNING"


def parse_capacity(raw: Optional[str]) -> int:
    """Turn a FIXEDMAP_CAPACITY value into a bucket count (>= 1)."""
    if raw is None:
        return _CAPACITY_FALLBACK
    try:
        capacity = int(raw)
    except ValueError:
        capacity = 0
    if capacity < 1:
        logger.warning("FIXEDMAP_CAPACITY=%r is not a positive integer; using %d",
                       raw, _CAPACITY_FALLBACK)
        return _CAPACITY_FALLBACK
    return capacity


def parse_log_level(raw: Optional[str]) -> str:
    """Turn a FIXEDMAP_LOG_LEVEL value into one of LOG_LEVELS."""
    if raw is None:
        return _LOG_LEVEL_FALLBACK
    level = raw.strip().upper()
    if level not in LOG_LEVELS:
        logger.warning("FIXEDMAP_LOG_LEVEL=%r is not one of %s; using %s",
                       raw, ", ".join(LOG_LEVELS), _LOG_LEVEL_FALLBACK)
        return _LOG_LEVEL_FALLBACK
    return level


DEFAULT_CAPACITY = parse_capacity(os.getenv("FIXEDMAP_CAPACITY"))
LOG_LEVEL = parse_log_level(os.getenv("FIXEDMAP_LOG_LEVEL"))


def configure_logging(level: Optional[str] = None) -> None:
    """Send log records to stderr at *level* (falls back to LOG_LEVEL)."""
    logging.basicConfig(
        stream=sys.stderr,
        level=(level or LOG_LEVEL).upper(),
        format=LOG_FORMAT,
        force=True,
    )
