from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from study_copilot.core.config import settings

_CONFIGURED = False

LOG_MAX_BYTES = 5 * 1024 * 1024
LOG_BACKUP_COUNT = 5


def _parse_level(raw: str) -> int:
    name = (raw or "INFO").strip().upper()
    return getattr(logging, name, logging.INFO)


def configure_logging(
    service: str = "study_copilot",
    level: Optional[str] = None,
    log_dir: Optional[str] = None,
) -> logging.Logger:
    """
    Console logging always; a rotating file under `log_dir` only when one is
    configured (STUDY_COPILOT_LOG_DIR). Safe to call more than once.
    """
    global _CONFIGURED

    if _CONFIGURED:
        return logging.getLogger(service)

    log_level = _parse_level(level or settings.log_level)
    fmt = logging.Formatter(
        fmt="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    root = logging.getLogger()
    root.setLevel(log_level)
    root.handlers.clear()

    console = logging.StreamHandler()
    console.setLevel(log_level)
    console.setFormatter(fmt)
    root.addHandler(console)

    log_file = None
    target_dir = log_dir or settings.log_dir
    if target_dir:
        logs_path = Path(target_dir)
        logs_path.mkdir(parents=True, exist_ok=True)
        log_file = logs_path / f"{service}.log"

        file_handler = RotatingFileHandler(
            filename=str(log_file),
            maxBytes=LOG_MAX_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(fmt)
        root.addHandler(file_handler)

    _CONFIGURED = True
    logger = logging.getLogger(service)
    logger.info(
        "logging_configured level=%s log_file=%s",
        logging.getLevelName(log_level),
        log_file or "-",
    )
    return logger
