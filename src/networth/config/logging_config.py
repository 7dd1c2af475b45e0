"""Logging configuration."""

import logging
import sys
from typing import Optional

from networth.config.settings import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Chatty third-party loggers and the level they are capped at.
QUIET_LOGGERS = {
    "sqlalchemy.engine": logging.WARNING,
    "uvicorn": logging.INFO,
    "yfinance": logging.WARNING,
    "peewee": logging.WARNING,
    "urllib3": logging.WARNING,
}


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure root logging to stdout.

    ``level`` overrides ``settings.log_level``; unknown level names fall back to INFO.
    """
    name = (level or get_settings().log_level).upper()

    logging.basicConfig(
        level=getattr(logging, name, logging.INFO),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    for logger_name, logger_level in QUIET_LOGGERS.items():
        logging.getLogger(logger_name).setLevel(logger_level)
