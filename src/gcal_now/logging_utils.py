from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler

from gcal_now.config import PROJECT_ROOT, get_log_level

LOG_DIR = PROJECT_ROOT / ".gcal_now" / "logs"
LOG_FILE = LOG_DIR / "gcal_now.log"
ROOT_LOGGER = "gcal_now"
STDERR_HANDLER = "gcal_now.stderr"


def _formatter() -> logging.Formatter:
    return logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        "%Y-%m-%d %H:%M:%S",
    )


def configure_logging() -> None:
    """Attach the log file and stderr handlers to the package logger once."""
    logger = logging.getLogger(ROOT_LOGGER)
    if logger.handlers:
        return

    LOG_DIR.mkdir(parents=True, exist_ok=True)
    logger.setLevel(get_log_level())

    file_handler = RotatingFileHandler(LOG_FILE, maxBytes=512_000, backupCount=2, encoding="utf-8")
    file_handler.setFormatter(_formatter())
    logger.addHandler(file_handler)

    # The table owns the terminal; stderr only carries warnings unless asked.
    stderr_handler = logging.StreamHandler()
    stderr_handler.set_name(STDERR_HANDLER)
    stderr_handler.setLevel(logging.WARNING)
    stderr_handler.setFormatter(_formatter())
    logger.addHandler(stderr_handler)


def set_console_level(level: int) -> None:
    configure_logging()
    for handler in logging.getLogger(ROOT_LOGGER).handlers:
        if handler.get_name() == STDERR_HANDLER:
            handler.setLevel(level)


def get_logger(name: str) -> logging.Logger:
    configure_logging()
    return logging.getLogger(name)
