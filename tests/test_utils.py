"""Tests for utility helpers."""
import logging
from datetime import date, datetime, timezone

import utils


def test_format_date():
    assert utils.format_date(date(2024, 1, 7)) == "2024-01-07"
    assert utils.format_date(date(999, 2, 3)) == "0999-02-03"


def test_format_datetime_keeps_calendar_day():
    value = datetime(2024, 1, 7, 23, 59, tzinfo=timezone.utc)
    assert utils.format_date(value) == "2024-01-07"


def test_setup_logging_is_idempotent(monkeypatch, tmp_path):
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [])
    monkeypatch.setattr(root, "level", root.level)
    log_file = tmp_path / "budbee.log"

    utils.setup_logging(logging.DEBUG, log_file=str(log_file))
    handlers = list(root.handlers)
    utils.setup_logging(logging.DEBUG, log_file=str(log_file))

    assert len(handlers) == 2
    assert root.handlers == handlers
    for handler in handlers:
        handler.close()
