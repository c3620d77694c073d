"""Logging helpers to mirror console output into a persistent log file."""

from __future__ import annotations

import sys
from datetime import datetime
from pathlib import Path

from loguru import logger


def configure_logging(logs_dir: Path, level: str = "INFO") -> Path | None:
    """
    Send loguru output to stderr and to a rotating file under ``logs_dir``.

    Returns the file path in use when file logging is available, otherwise None.
    """
    logger.remove()
    logger.add(sys.stderr, level=level, backtrace=True, diagnose=False)

    log_file: Path | None = None
    try:
        logs_dir.mkdir(parents=True, exist_ok=True)
        log_file = logs_dir / f"svwb_tracker_{datetime.now():%Y%m%d_%H%M%S}.log"
        logger.add(
            log_file,
            level=level,
            rotation="5 MB",
            retention=5,
            backtrace=True,
            diagnose=False,
        )
    except OSError as exc:
        logger.warning(f"File logging disabled; unable to write to {logs_dir}: {exc}")
        log_file = None

    return log_file
