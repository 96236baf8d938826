"""Diagnostic logging setup.

The terminal is in raw mode while the editor runs, so log records never go to
stdout or stderr: they are dropped unless a log file is requested.
"""

from __future__ import annotations

import logging
from pathlib import Path

LOGGER_NAME = "rawedit"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(log_file: Path | None, level: int = logging.DEBUG) -> logging.Handler | None:
    """Attach a file handler to the package logger when ``log_file`` is set."""
    if log_file is None:
        return None
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger = logging.getLogger(LOGGER_NAME)
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    return handler
