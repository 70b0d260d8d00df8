"""Tests for the CLI entry point."""
import json
from datetime import date
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

import main


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    monkeypatch.setattr(main, "setup_logging", lambda level: None)


@pytest.fixture
def credentials(monkeypatch):
    monkeypatch.setattr(main.config, "BUDBEE_API_KEY", "key")
    monkeypatch.setattr(main.config, "BUDBEE_API_SECRET", "secret")
    monkeypatch.setattr(main.config, "BUDBEE_TEST", False)


def test_parser_windows_count():
    args = main.build_parser().parse_args(["windows", "11453", "7"])
    assert args.postal_code == "11453"
    assert main._interval(args.interval) == 7
    assert args.country == "SE"


def test_parser_windows_dates():
    args = main.build_parser().parse_args(
        ["windows", "11453", "2024-01-01", "2024-01-07", "--country", "NO"]
    )
    assert main._interval(args.interval) == (date(2024, 1, 1), date(2024, 1, 7))
    assert args.country == "NO"


def test_interval_rejects_three_values():
    with pytest.raises(ValueError):
        main._interval(["1", "2", "3"])


@pytest.mark.asyncio
async def test_run_command_dispatch():
    client = MagicMock()
    client.lockers = AsyncMock(return_value=[])
    client.order_tracker = AsyncMock(return_value="https://t/1")

    args = main.build_parser().parse_args(["lockers", "--country", "FI"])
    assert await main.run_command(client, args) == []
    client.lockers.assert_awaited_once_with("FI")

    args = main.build_parser().parse_args(["order-tracking", "ORD-1"])
    assert await main.run_command(client, args) == {"url": "https://t/1"}


def test_main_prints_json(monkeypatch, credentials, capsys):
    async def fake_run(client, args):
        assert client.rest.test is True
        return ["11453"]

    monkeypatch.setattr(main, "run_command", fake_run)
    main.main(["--test", "postal-codes"])
    assert json.loads(capsys.readouterr().out) == ["11453"]


def test_main_reports_http_failure(monkeypatch, credentials, capsys):
    request = httpx.Request("GET", "https://api.budbee.com/boxes/L9")
    response = httpx.Response(404, text="not found", request=request)

    async def fake_run(client, args):
        raise main.HTTPFailure(response)

    monkeypatch.setattr(main, "run_command", fake_run)
    with pytest.raises(SystemExit) as exc_info:
        main.main(["locker", "L9"])
    assert exc_info.value.code == 1
    error = json.loads(capsys.readouterr().err)
    assert error["status"] == 404
    assert error["body"] == "not found"


def test_main_requires_credentials(monkeypatch, capsys):
    monkeypatch.setattr(main.config, "BUDBEE_API_KEY", None)
    with pytest.raises(SystemExit):
        main.main(["warehouses"])
    assert "BUDBEE_API_KEY" in json.loads(capsys.readouterr().err)["error"]
