# main.py
"""
CLI entry point for the Budbee API client.

Usage:
    python main.py warehouses
    python main.py windows 11453 7
    python main.py windows 11453 2024-01-01 2024-01-07 --country SE
    python main.py --test lockers --country NO
"""

import argparse
import asyncio
import json
import logging
import sys
from datetime import date
from typing import Any, Optional

import httpx
from pydantic import BaseModel

import config
from api_client import Client
from clients import APIError, HTTPFailure
from utils import setup_logging


def _to_jsonable(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", exclude_none=True)
    if isinstance(value, list):
        return [_to_jsonable(item) for item in value]
    if isinstance(value, httpx.Response):
        return {"status": value.status_code}
    return value


def _interval(values: list[str]) -> int | tuple[date, date]:
    """Parse the windows interval: one count, or two ISO dates."""
    if len(values) == 1:
        return int(values[0])
    if len(values) == 2:
        return date.fromisoformat(values[0]), date.fromisoformat(values[1])
    raise ValueError("interval must be a count or two dates")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Query the Budbee API.")
    parser.add_argument(
        "--test",
        action="store_true",
        default=None,
        help="Use the staging environment (default: BUDBEE_TEST)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("warehouses", help="List registered warehouses")

    p = sub.add_parser("postal-codes", help="List postal codes in a country")
    p.add_argument("country", nargs="?", default=config.DEFAULT_COUNTRY)

    p = sub.add_parser("warehouse", help="Closest warehouse for a postal code")
    p.add_argument("postal_code")
    p.add_argument("--country", default=config.DEFAULT_COUNTRY)

    p = sub.add_parser("windows", help="Delivery windows for a postal code")
    p.add_argument("postal_code")
    p.add_argument(
        "interval",
        nargs="+",
        help="Number of windows, or FROM TO dates (YYYY-MM-DD)",
    )
    p.add_argument("--country", default=config.DEFAULT_COUNTRY)

    for name, help_text in [
        ("order", "Retrieve an order"),
        ("cancel", "Cancel an order"),
        ("order-tracking", "Tracking URL of an order"),
    ]:
        p = sub.add_parser(name, help=help_text)
        p.add_argument("order_id")

    p = sub.add_parser("parcel-tracking", help="Tracking URL of a parcel")
    p.add_argument("parcel_id")

    p = sub.add_parser("locker", help="Retrieve a locker")
    p.add_argument("locker_id")

    p = sub.add_parser("lockers", help="List lockers in a country")
    p.add_argument("--country", default=config.DEFAULT_COUNTRY)

    p = sub.add_parser("lockers-in-region", help="Lockers for a postal code")
    p.add_argument("postal_code")
    p.add_argument("--country", default=config.DEFAULT_COUNTRY)

    return parser


async def run_command(client: Client, args: argparse.Namespace) -> Any:
    """Dispatch a parsed command to the matching client method."""
    command = args.command
    if command == "warehouses":
        return await client.warehouses()
    if command == "postal-codes":
        return await client.postal_codes(args.country)
    if command == "warehouse":
        return await client.warehouse_in_region(args.postal_code, args.country)
    if command == "windows":
        return await client.delivery_windows(
            args.postal_code, _interval(args.interval), args.country
        )
    if command == "order":
        return await client.order(args.order_id)
    if command == "cancel":
        return await client.cancel_order(args.order_id)
    if command == "order-tracking":
        return {"url": await client.order_tracker(args.order_id)}
    if command == "parcel-tracking":
        return {"url": await client.parcel_tracker(args.parcel_id)}
    if command == "locker":
        return await client.locker(args.locker_id)
    if command == "lockers":
        return await client.lockers(args.country)
    if command == "lockers-in-region":
        return await client.lockers_in_region(args.postal_code, args.country)
    raise ValueError(f"Unknown command: {command}")


def main(argv: Optional[list[str]] = None) -> None:
    """Parse arguments, call the API, and print the JSON result."""
    args = build_parser().parse_args(argv)

    setup_logging(level=logging.DEBUG if args.debug else logging.INFO)
    logger = logging.getLogger(__name__)

    try:
        key, secret = config.require_credentials()
        test = config.BUDBEE_TEST if args.test is None else args.test
        client = Client(key, secret, test)
        logger.info(
            "Running %s against %s", args.command, client.rest.base_url
        )
        result = asyncio.run(run_command(client, args))
        print(json.dumps(_to_jsonable(result), indent=2))

    except HTTPFailure as e:
        logger.error("Command failed: %s", e)
        error = {"error": str(e), "status": e.status_code, "body": e.response.text}
        print(json.dumps(error), file=sys.stderr)
        sys.exit(1)
    except (APIError, httpx.HTTPError, ValueError) as e:
        logger.error("Command failed: %s", e)
        print(json.dumps({"error": str(e)}), file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
