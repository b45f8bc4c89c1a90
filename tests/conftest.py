from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Callable, Iterator

import httpx
import pytest
from fastapi.testclient import TestClient

from fuel_exporter.main import create_app
from fuel_exporter.models.station import Station
from fuel_exporter.services.price_store import PriceStore
from fuel_exporter.services.upstream_client import FuelPriceClient

UPSTREAM_URL = "https://upstream.test/GetNearestStations"


def make_station(
    name: str = "Acme",
    distance: str = "0.5",
    *,
    petrol: bool = True,
    diesel: bool = False,
    petrol_price: float = 1359,
    diesel_price: float = 1420,
) -> Station:
    return Station(
        name=name,
        distance=distance,
        sells_petrol=petrol,
        sells_diesel=diesel,
        petrol_price=petrol_price,
        diesel_price=diesel_price,
    )


def station_json(
    name: str = "Acme",
    distance: str = "0.5",
    *,
    petrol: bool = True,
    diesel: bool = True,
    petrol_price: float = 1359,
    diesel_price: float = 1420,
) -> dict:
    """A station object exactly as the upstream API sends it."""
    return {
        "Station": name,
        "Distance": distance,
        "Petrol": petrol,
        "Diesel": diesel,
        "PetrolPrice": petrol_price,
        "DieselPrice": diesel_price,
    }


def build_store(prices: dict[str, list[Station]]) -> PriceStore:
    store = PriceStore()

    async def _fill() -> None:
        for postcode, stations in prices.items():
            await store.insert(postcode, stations)

    asyncio.run(_fill())
    return store


Handler = Callable[[httpx.Request], httpx.Response]


def mock_client(handler: Handler) -> tuple[FuelPriceClient, httpx.AsyncClient]:
    """FuelPriceClient wired to an in-process fake of the upstream API."""
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return FuelPriceClient(http, UPSTREAM_URL), http


def json_response(payload: object, status_code: int = 200) -> httpx.Response:
    return httpx.Response(
        status_code,
        content=json.dumps(payload).encode(),
        headers={"Content-Type": "application/json"},
    )


@pytest.fixture
def store() -> PriceStore:
    return build_store({"AB1 2CD": [make_station()]})


@pytest.fixture
def client(store: PriceStore) -> TestClient:
    return TestClient(create_app(store))


@pytest.fixture(autouse=True)
def restore_root_logging() -> Iterator[None]:
    """Undo setup_logging() calls so handlers don't outlive a test's stdout."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
