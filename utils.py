# utils.py
"""
Utility functions for the Budbee client.
Provides logging configuration and shared formatting helpers.
"""

import logging
import sys
from datetime import date, datetime

import config


def setup_logging(level: int = logging.INFO, log_file: str | None = None) -> None:
    """
    Configure logging for console and file output.

    Args:
        level: Logging level (default: INFO).
        log_file: Log file path (default: config.LOG_FILE).
    """
    root = logging.getLogger()

    if root.handlers:
        return

    root.setLevel(level)

    formatter = logging.Formatter(
        "%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    file_handler = logging.FileHandler(log_file or config.LOG_FILE)
    file_handler.setFormatter(formatter)
    root.addHandler(file_handler)


def format_date(value: date) -> str:
    """
    Format a calendar date as YYYY-MM-DD, independent of locale.

    Datetimes are reduced to their own calendar date, no timezone shift.
    """
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()
