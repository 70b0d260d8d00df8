# file: api_client.py
"""Budbee API endpoint methods."""

import asyncio
import json
import logging
from collections.abc import Sequence
from datetime import date
from typing import Any, Optional

import httpx
from pydantic import BaseModel, TypeAdapter

import config
from clients import RESTClient
from schemas import (
    BetweenDates,
    CountryCode,
    DeliveryInfoUpdate,
    DropOff,
    DropOffPayload,
    Interval,
    Locker,
    LockerList,
    LockersQuery,
    Order,
    OrderPayload,
    Parcel,
    ParcelPayload,
    Pickup,
    PickupPayload,
    TrackingLink,
    Warehouse,
)
from utils import format_date

logger = logging.getLogger(__name__)

# Media types are versioned per endpoint; the server behaves differently
# per version.
USERS_V1 = "application/vnd.budbee.users-v1+json"
POSTALCODES_V1 = "application/vnd.budbee.postalcodes-v1+json"
POSTALCODES_V2 = "application/vnd.budbee.postalcodes-v2+json"
INTERVALS_V2 = "application/vnd.budbee.intervals-v2+json"
ORDERS_V1 = "application/vnd.budbee.multiple.orders-v1+json"
ORDERS_V2 = "application/vnd.budbee.multiple.orders-v2+json"
PARCELS_V1 = "application/vnd.budbee.parcels-v1+json"
RETURNS_V1 = "application/vnd.budbee.returns-v1+json"
BOX_RETURNS_V1 = "application/vnd.budbee.standalone-box-returns-v1+json"
BOXES_V1 = "application/vnd.budbee.boxes-v1+json"

BOX_PRODUCT_CODE = "DLVBOX"

Country = CountryCode | str
DateRange = BetweenDates | tuple[date, date]

_warehouses = TypeAdapter(list[Warehouse])
_postal_codes = TypeAdapter(list[str])
_intervals = TypeAdapter(list[Interval])
_parcels = TypeAdapter(list[Parcel])


def _content_type(media_type: str) -> dict[str, str]:
    return {"Content-Type": media_type}


def _dump(payload: BaseModel | dict[str, Any]) -> Any:
    """Convert a payload model to JSON-ready data. Dicts pass through."""
    if isinstance(payload, BaseModel):
        return payload.model_dump(mode="json", by_alias=True, exclude_none=True)
    return payload


def _serialize(payload: Any) -> str:
    if isinstance(payload, (list, tuple)):
        return json.dumps([_dump(item) for item in payload])
    return json.dumps(_dump(payload))


def interval_segment(interval: int | DateRange) -> str:
    """
    Render the interval part of a delivery window path.

    Args:
        interval: Number of upcoming windows, or a date range.

    Returns:
        "7" for a count, "2024-01-01/2024-01-07" for a range.
    """
    if isinstance(interval, bool):
        raise TypeError("interval must be an int or a date range")
    if isinstance(interval, int):
        return str(interval)
    if isinstance(interval, BetweenDates):
        start, end = interval.from_, interval.to
    else:
        start, end = interval
    return "/".join([format_date(start), format_date(end)])


class Client:
    """
    Typed Budbee API client.

    Holds a RESTClient for authentication and transport; every method maps
    to exactly one request.

    Args:
        key: API key.
        secret: API secret.
        test: Target the staging environment.
        rest: Prebuilt request layer, replaces key/secret/test when given.
        **rest_options: Passed to RESTClient (timeout, transport).
    """

    def __init__(
        self,
        key: Optional[str] = None,
        secret: Optional[str] = None,
        test: bool = False,
        *,
        rest: Optional[RESTClient] = None,
        **rest_options: Any,
    ) -> None:
        if rest is None:
            if key is None or secret is None:
                raise ValueError("key and secret are required")
            rest = RESTClient(key, secret, test, **rest_options)
        self.rest = rest

    @classmethod
    def from_env(cls, **rest_options: Any) -> "Client":
        """
        Build a client from BUDBEE_* settings.

        Raises:
            ValueError: If credentials are not configured.
        """
        key, secret = config.require_credentials()
        logger.debug("Building client from environment, test=%s", config.BUDBEE_TEST)
        return cls(key, secret, config.BUDBEE_TEST, **rest_options)

    async def warehouses(
        self, *, signal: Optional[asyncio.Event] = None
    ) -> list[Warehouse]:
        """List the merchant's registered warehouses."""
        res = await self.rest.get(
            "users/collection-points",
            headers=_content_type(USERS_V1),
            signal=signal,
        )
        return _warehouses.validate_python(res.json())

    async def warehouse_in_region(
        self,
        postal_code: str | int,
        country_code: Country = config.DEFAULT_COUNTRY,
        *,
        signal: Optional[asyncio.Event] = None,
    ) -> Warehouse:
        """
        Retrieve the closest warehouse serving a postal code.

        Validate the delivery postal code this way before creating an order.
        """
        res = await self.rest.get(
            f"postalcodes/validate/{country_code}/{postal_code}",
            headers=_content_type(POSTALCODES_V2),
            signal=signal,
        )
        return Warehouse.model_validate(res.json())

    async def postal_codes(
        self,
        country_code: Country = config.DEFAULT_COUNTRY,
        *,
        signal: Optional[asyncio.Event] = None,
    ) -> list[str]:
        """List all postal codes served in a country."""
        res = await self.rest.get(
            f"postalcodes/{country_code}",
            headers=_content_type(POSTALCODES_V1),
            signal=signal,
        )
        return _postal_codes.validate_python(res.json())

    async def delivery_windows(
        self,
        postal_code: str | int,
        interval: int | DateRange,
        country_code: Country = config.DEFAULT_COUNTRY,
        *,
        signal: Optional[asyncio.Event] = None,
    ) -> list[Interval]:
        """
        List upcoming delivery windows for a postal code.

        Window bounds are Unix epoch milliseconds, always UTC.

        Args:
            postal_code: Recipient postal code.
            interval: Number of windows to return, or a date range.
            country_code: Recipient country.
        """
        res = await self.rest.get(
            f"intervals/{country_code}/{postal_code}/{interval_segment(interval)}",
            headers=_content_type(INTERVALS_V2),
            signal=signal,
        )
        return _intervals.validate_python(res.json())

    async def order(
        self, order_id: str, *, signal: Optional[asyncio.Event] = None
    ) -> Order:
        res = await self.rest.get(
            f"multiple/orders/{order_id}",
            headers=_content_type(ORDERS_V1),
            signal=signal,
        )
        return Order.model_validate(res.json())

    async def create_order(
        self,
        order: OrderPayload | dict[str, Any],
        *,
        signal: Optional[asyncio.Event] = None,
    ) -> Order:
        """
        Create an order.

        The delivery postal code must be validated with warehouse_in_region
        first.
        """
        res = await self.rest.post(
            "multiple/orders",
            body=_serialize(order),
            headers=_content_type(ORDERS_V2),
            signal=signal,
        )
        return Order.model_validate(res.json())

    async def update_delivery_consumer_info(
        self,
        order_id: str,
        info: DeliveryInfoUpdate | dict[str, Any],
        *,
        signal: Optional[asyncio.Event] = None,
    ) -> Order:
        """Update the consumer details of an order and return the updated order."""
        res = await self.rest.put(
            f"multiple/orders/{order_id}",
            body=_serialize(info),
            headers=_content_type(ORDERS_V1),
            signal=signal,
        )
        return Order.model_validate(res.json())

    async def cancel_order(
        self, order_id: str, *, signal: Optional[asyncio.Event] = None
    ) -> httpx.Response:
        """Cancel an active order. The response body is not parsed."""
        return await self.rest.delete(
            f"multiple/orders/{order_id}",
            headers=_content_type(ORDERS_V1),
            signal=signal,
        )

    async def add_parcels(
        self,
        order_id: str,
        parcels: Sequence[ParcelPayload | dict[str, Any]],
        *,
        signal: Optional[asyncio.Event] = None,
    ) -> list[Parcel]:
        res = await self.rest.post(
            f"multiple/orders/{order_id}/parcels",
            body=_serialize(list(parcels)),
            headers=_content_type(ORDERS_V2),
            signal=signal,
        )
        return _parcels.validate_python(res.json())

    async def remove_parcel(
        self,
        order_id: str,
        parcel_id: int | str,
        *,
        signal: Optional[asyncio.Event] = None,
    ) -> httpx.Response:
        """
        Remove a parcel from an order.

        Only possible before the carrier has picked the parcel up.
        """
        return await self.rest.delete(
            f"multiple/orders/{order_id}/parcels/{parcel_id}",
            headers=_content_type(ORDERS_V1),
            signal=signal,
        )

    async def order_tracker(
        self, order_id: str, *, signal: Optional[asyncio.Event] = None
    ) -> str:
        """Retrieve the tracking URL of an order."""
        res = await self.rest.get(
            f"multiple/orders/{order_id}/tracking-url",
            headers=_content_type(ORDERS_V1),
            signal=signal,
        )
        return TrackingLink.model_validate(res.json()).url

    async def parcel_tracker(
        self, parcel_id: str, *, signal: Optional[asyncio.Event] = None
    ) -> str:
        """Retrieve the tracking URL of a parcel."""
        res = await self.rest.get(
            f"parcels/{parcel_id}/tracking-url",
            headers=_content_type(PARCELS_V1),
            signal=signal,
        )
        return TrackingLink.model_validate(res.json()).url

    async def create_pickup(
        self,
        pickup: PickupPayload | dict[str, Any],
        *,
        signal: Optional[asyncio.Event] = None,
    ) -> Pickup:
        """Book a standalone return pickup."""
        res = await self.rest.post(
            "returns",
            body=_serialize(pickup),
            headers=_content_type(RETURNS_V1),
            signal=signal,
        )
        return Pickup.model_validate(res.json())

    async def create_drop_off(
        self,
        drop_off: DropOffPayload | dict[str, Any],
        *,
        signal: Optional[asyncio.Event] = None,
    ) -> DropOff:
        """Book a standalone box return drop-off."""
        res = await self.rest.post(
            "box/return",
            body=_serialize(drop_off),
            headers=_content_type(BOX_RETURNS_V1),
            signal=signal,
        )
        return DropOff.model_validate(res.json())

    async def locker(
        self, locker_id: str, *, signal: Optional[asyncio.Event] = None
    ) -> Locker:
        res = await self.rest.get(
            f"boxes/{locker_id}",
            headers=_content_type(BOXES_V1),
            signal=signal,
        )
        return Locker.model_validate(res.json())

    async def lockers(
        self,
        country_code: Country = config.DEFAULT_COUNTRY,
        *,
        signal: Optional[asyncio.Event] = None,
    ) -> list[Locker]:
        """List all lockers in a country."""
        res = await self.rest.get(
            f"boxes/all/{country_code}",
            headers=_content_type(BOXES_V1),
            signal=signal,
        )
        return LockerList.model_validate(res.json()).lockers

    async def lockers_in_region(
        self,
        postal_code: str | int,
        country_code: Country = config.DEFAULT_COUNTRY,
        query: Optional[LockersQuery] = None,
        *,
        signal: Optional[asyncio.Event] = None,
    ) -> list[Locker]:
        """
        List lockers to offer at checkout, best option first.

        The postal code must already be validated. Optional query filters are
        sent as URL parameters.
        """
        res = await self.rest.get(
            f"boxes/postalcodes/validate/{country_code}/{postal_code}",
            headers=_content_type(BOXES_V1),
            params=query.to_params() if query is not None else None,
            signal=signal,
        )
        return LockerList.model_validate(res.json()).lockers

    async def create_box_order(
        self,
        locker_id: Optional[str],
        delivery: OrderPayload | dict[str, Any],
        *,
        signal: Optional[asyncio.Event] = None,
    ) -> Order:
        """
        Create an order delivered to a locker.

        The postal code must be validated with lockers_in_region first.
        """
        logger.debug("Creating box order for locker %s", locker_id)
        payload = {
            **_dump(delivery),
            "productCodes": [BOX_PRODUCT_CODE],
            "boxDelivery": {"selectedBox": locker_id},
        }
        res = await self.rest.post(
            "multiple/orders",
            body=json.dumps(payload),
            headers=_content_type(ORDERS_V2),
            signal=signal,
        )
        return Order.model_validate(res.json())
