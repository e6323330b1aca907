"""Logging configuration for hosts that embed the content engine."""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"


def _log_dir() -> Path:
    return Path(os.getenv("PSEO_LOG_DIR", "logs"))


def _log_filename() -> str:
    return os.getenv("PSEO_LOG_FILENAME", "latest-run.log")


def normalise_level(level: Optional[str | int]) -> int:
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        value = level.strip().upper()
        if value.isdigit():
            return int(value)
        if value in logging._nameToLevel:  # type: ignore[attr-defined]
            return logging._nameToLevel[value]
    return logging.INFO


def configure_logging(level: Optional[str | int] = None, log_dir: Path | None = None) -> Path:
    """Send root logging to the console and to a log file truncated on each call.

    ``log_dir`` defaults to ``PSEO_LOG_DIR``; the file name comes from
    ``PSEO_LOG_FILENAME``. Returns the log file path.
    """
    log_level = normalise_level(level)
    directory = log_dir if log_dir is not None else _log_dir()
    directory.mkdir(parents=True, exist_ok=True)
    log_path = directory / _log_filename()

    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)
        handler.close()

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        handlers=[
            logging.StreamHandler(),
            logging.FileHandler(log_path, mode="w", encoding="utf-8"),
        ],
    )
    logging.getLogger(__name__).info(
        "Content engine logging at %s to %s", logging.getLevelName(log_level), log_path
    )
    return log_path
