"""Pytest configuration and fixtures for the Budbee client tests."""
import json

import httpx
import pytest

from api_client import Client
from clients import RESTClient


class FakeBudbee:
    """httpx transport handler that records requests and replays responses."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.payload = None
        self.content = b""

    def respond(self, payload=None, status_code=200, content=None):
        self.payload = payload
        self.status_code = status_code
        self.content = content if content is not None else b""

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.payload is not None:
            return httpx.Response(self.status_code, json=self.payload)
        return httpx.Response(self.status_code, content=self.content)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self):
        return json.loads(self.last.content)


@pytest.fixture
def fake_api():
    """Fresh fake server."""
    return FakeBudbee()


@pytest.fixture
def rest(fake_api):
    """Request layer wired to the fake server (production host)."""
    return RESTClient("key", "secret", transport=httpx.MockTransport(fake_api))


@pytest.fixture
def client(rest):
    """Endpoint client composed over the fake request layer."""
    return Client(rest=rest)


@pytest.fixture
def sample_delivery():
    """Delivery details as sent in order payloads."""
    return {
        "name": "Anna Svensson",
        "telephoneNumber": "+46701234567",
        "email": "anna@example.com",
        "address": {
            "street": "Storgatan 1",
            "postalCode": "11453",
            "city": "Stockholm",
            "country": "SE",
        },
    }


@pytest.fixture
def sample_order(sample_delivery):
    """Order resource as returned by the API."""
    return {
        "id": "ORD-1",
        "token": "tok-1",
        "createdAt": 1704067200000,
        "updatedAt": 1704067200000,
        "cart": {"cartId": "cart-1"},
        "delivery": sample_delivery,
        "signatureRequired": False,
        "parcels": [
            {"id": 10, "shipmentId": "S1", "packageId": "P1", "label": "https://l/1"}
        ],
        "homeDelivery": True,
        "productCodes": ["DLVHOME"],
    }


@pytest.fixture
def sample_locker():
    """Locker resource as returned by the API."""
    return {
        "id": "L1",
        "name": "Budbee Box ICA Kvantum",
        "label": "ICA Kvantum",
        "distance": 412.5,
        "address": {
            "street": "Sveavägen 10",
            "postalCode": "11157",
            "city": "Stockholm",
            "country": "SE",
            "coordinate": {"latitude": 59.33, "longitude": 18.06},
        },
        "openingHours": {
            "periods": [
                {
                    "open": {"day": "MONDAY", "time": "08:00"},
                    "close": {"day": "MONDAY", "time": "22:00"},
                }
            ],
            "weekdayText": ["Monday: 08:00 - 22:00"],
        },
    }
