from __future__ import annotations

import logging
from collections.abc import Sequence

from fuel_exporter.services.price_store import PriceStore
from fuel_exporter.services.upstream_client import FuelPriceClient

logger = logging.getLogger(__name__)


async def load_prices(
    client: FuelPriceClient,
    postcodes: Sequence[str],
    radius: int,
    store: PriceStore,
) -> None:
    """Fetch every postcode in order and store the results.

    Stops at the first UpstreamFetchError and re-raises it; postcodes
    after the failing one are never requested.
    """
    for postcode in postcodes:
        stations = await client.fetch(postcode, radius)
        logger.info(
            "Loaded %d stations for %s",
            len(stations),
            postcode,
            extra={"postcode": postcode, "stations": len(stations)},
        )
        await store.insert(postcode, stations)
