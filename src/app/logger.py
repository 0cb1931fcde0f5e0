from __future__ import annotations

import logging
import os
import sys
from typing import Union

# Logs go to stderr; stdout carries the game transcript.
DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s:%(lineno)d] %(message)s"
LEVEL_ENV_VAR = "RPS_LOG_LEVEL"
LEVEL_NAMES = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
FALLBACK_LEVEL = "WARNING"


def default_level() -> str:
    """Level from $RPS_LOG_LEVEL; unknown names fall back to WARNING."""
    value = os.getenv(LEVEL_ENV_VAR, "").strip().upper()
    return value if value in LEVEL_NAMES else FALLBACK_LEVEL


def configure_logging(level: Union[str, int, None] = None) -> None:
    """
    Configure the root logger with a single stderr handler.

    Args:
        level: Logging level name or int. Falls back to $RPS_LOG_LEVEL, then WARNING.
    """
    if level is None:
        level = default_level()
    if isinstance(level, str):
        level = level.upper()
        if level not in LEVEL_NAMES:
            raise ValueError(f"unknown log level: {level!r} (expected one of {', '.join(LEVEL_NAMES)})")

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)
    root.addHandler(handler)

    logging.captureWarnings(True)


def get_logger(name: str) -> logging.Logger:
    """Return a namespaced logger; configure_logging() should be called once on startup."""
    return logging.getLogger(name)
