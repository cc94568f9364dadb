"""Logging setup for the ``tabsets`` logger tree."""

from __future__ import annotations

import logging as py_logging
import sys
from pathlib import Path
from typing import TextIO

LOG_LEVELS = {
    "DEBUG": py_logging.DEBUG,
    "INFO": py_logging.INFO,
    "WARN": py_logging.WARNING,
    "WARNING": py_logging.WARNING,
    "ERROR": py_logging.ERROR,
}
DEFAULT_LOG_PATH = Path("~/.config/tabsets/logs/tabsets.log")
_FORMAT = "%(asctime)s %(levelname)s %(name)s:%(lineno)d %(message)s"


def default_log_path() -> Path:
    return DEFAULT_LOG_PATH.expanduser()


def _file_handler(log_file: str | Path) -> py_logging.Handler | None:
    path = Path(log_file).expanduser().resolve()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        return py_logging.FileHandler(path, encoding="utf-8")
    except OSError:
        return None


def configure_logging(
    level: str = "INFO",
    stream: TextIO | None = None,
    *,
    log_file: str | Path | None = None,
) -> py_logging.Logger:
    """Route ``tabsets.*`` records to ``stream`` and, at DEBUG, to ``log_file``.

    An unknown level name means INFO. A log file that cannot be opened is
    skipped and only the stream handler is installed.
    """
    resolved = LOG_LEVELS.get(level.upper(), py_logging.INFO)
    formatter = py_logging.Formatter(_FORMAT)

    logger = py_logging.getLogger("tabsets")
    for existing in list(logger.handlers):
        existing.close()
    logger.handlers.clear()
    logger.propagate = False

    console = py_logging.StreamHandler(stream or sys.stderr)
    console.setLevel(resolved)
    console.setFormatter(formatter)
    logger.addHandler(console)

    file_handler = _file_handler(log_file) if log_file else None
    if file_handler is None:
        logger.setLevel(resolved)
        return logger

    file_handler.setLevel(py_logging.DEBUG)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)
    logger.setLevel(py_logging.DEBUG)
    return logger
