"""Logging configuration for fxledger."""

import logging
import os
import sys

LOG_LEVEL_ENVVAR = "FXLEDGER_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"


def setup_logging(level: str | None = None) -> None:
    """Configure application logging.

    Args:
        level: Level name (e.g. "INFO"); falls back to FXLEDGER_LOG_LEVEL, then WARNING.
            Log lines go to stderr so command output on stdout stays clean.
    """
    level_name = (level or os.environ.get(LOG_LEVEL_ENVVAR) or DEFAULT_LOG_LEVEL).upper()
    numeric_level = getattr(logging, level_name, None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: '{level_name}'")

    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )

    # Set third-party library log levels
    logging.getLogger("sqlalchemy").setLevel(logging.WARNING)
