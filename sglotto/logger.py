from __future__ import annotations

import logging
import sys
import time
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List, Optional

from .config import LogSettings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_FILE_NAME = "debug.log"

logger = logging.getLogger("sglotto")


def configure_logging(settings: LogSettings, verbose: bool = False) -> logging.Logger:
    """Send ``sglotto.*`` records to stdout and to ``<log_dir>/debug.log``.

    Safe to call more than once; handlers are only attached the first time.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger.setLevel(level)
    if logger.handlers:
        return logger

    formatter = logging.Formatter(LOG_FORMAT)

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    log_dir = Path(settings.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    file_handler = RotatingFileHandler(
        log_dir / LOG_FILE_NAME,
        maxBytes=settings.max_bytes,
        backupCount=100,
        encoding="utf-8",
    )
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)
    return logger


def clean_old_logs(log_dir: str, retention_days: int = 14, now: Optional[float] = None) -> List[str]:
    """Delete rotated log files older than ``retention_days``; the live log is kept."""
    directory = Path(log_dir)
    if not directory.is_dir():
        return []

    now = time.time() if now is None else now
    retention_seconds = retention_days * 24 * 60 * 60
    removed = []
    for path in directory.glob(f"{LOG_FILE_NAME}.*"):
        if now - path.stat().st_mtime > retention_seconds:
            path.unlink()
            removed.append(path.name)
            logger.info("Deleted old log file: %s", path.name)
    return sorted(removed)
