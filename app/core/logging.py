"""
Logging configuration for the Attendance Tracker backend
"""
import logging
import sys
from typing import Optional

from app.core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Chatty third-party loggers and the level they are capped at
QUIET_LOGGERS = {
    "uvicorn.access": logging.WARNING,
    "sqlalchemy.engine": logging.WARNING,
    "alembic.runtime.migration": logging.INFO,
}


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure the root logger once with a stdout handler

    Args:
        level: Overrides settings.LOG_LEVEL (scripts pass "INFO" to see seed progress)
    """
    level_name = (level or settings.LOG_LEVEL).upper()
    log_level = getattr(logging, level_name, logging.INFO)

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )
    for name, cap in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(max(cap, log_level))

    logging.getLogger(__name__).info(
        "Logging configured: level=%s, env=%s, timezone=%s",
        level_name, settings.APP_ENV, settings.TIMEZONE
    )
