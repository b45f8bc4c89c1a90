"""Process entry point.

RUN:  fuel-price-exporter          (or: python -m fuel_exporter.server)

Startup is all-or-nothing:

  1. Read PORT, POSTCODES and RADIUS from the environment or a .env
     file (a bad value raises ValueError)
  2. Fetch every postcode in order into the price store
  3. Only then bind 0.0.0.0:<PORT> and serve GET /metrics

A failed fetch for any postcode propagates out of serve() before the
listener is created, so a broken upstream means no server at all rather
than a server with partial data.
"""

from __future__ import annotations

import asyncio
import logging

import httpx
import uvicorn

from fuel_exporter.core.config import Settings, load_env_file, load_settings
from fuel_exporter.core.logging import setup_logging
from fuel_exporter.main import create_app
from fuel_exporter.services.price_loader import load_prices
from fuel_exporter.services.price_store import PriceStore
from fuel_exporter.services.upstream_client import FuelPriceClient

logger = logging.getLogger(__name__)

HOST = "0.0.0.0"


def _http_client(settings: Settings) -> httpx.AsyncClient:
    # No timeout unless UPSTREAM_TIMEOUT is set.
    return httpx.AsyncClient(timeout=settings.upstream_timeout)


async def bootstrap(settings: Settings) -> PriceStore:
    """Populate a fresh store from the upstream API."""
    store = PriceStore()
    async with _http_client(settings) as http:
        client = FuelPriceClient(http, settings.upstream_url)
        await load_prices(client, settings.postcodes, settings.radius, store)
    return store


async def serve(settings: Settings) -> None:
    store = await bootstrap(settings)
    logger.info(
        "Holding %d stations for %d postcodes: %s",
        store.station_count(),
        len(store),
        ", ".join(store.postcodes),
    )
    app = create_app(store)

    # log_config=None keeps uvicorn on the handlers set up by setup_logging().
    server = uvicorn.Server(
        uvicorn.Config(app, host=HOST, port=settings.port, log_config=None)
    )
    logger.info("Running on %s:%d/metrics", HOST, settings.port)
    await server.serve()


def main() -> None:
    load_env_file()
    settings = load_settings()
    setup_logging(settings.log_level, json_format=settings.log_json)
    logger.info(
        "fuel-price-exporter starting  postcodes=%s radius=%d port=%d",
        ",".join(settings.postcodes),
        settings.radius,
        settings.port,
    )
    asyncio.run(serve(settings))


if __name__ == "__main__":
    main()
