"""Client for the upstream nearest-stations API.

One GET per postcode:

  GET <url>?location=<postcode>&radius=<radius>
  → 200 [{"Station": ..., "Distance": ..., "Petrol": ..., "Diesel": ...,
          "PetrolPrice": ..., "DieselPrice": ...}, ...]

Anything else (transport failure, non-2xx status, a body that is not a
JSON array of stations) raises UpstreamFetchError.  There is no retry:
the caller decides what a failure means.
"""

from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from fuel_exporter.core.config import DEFAULT_UPSTREAM_URL
from fuel_exporter.models.station import STATION_LIST, Station

logger = logging.getLogger(__name__)


class UpstreamFetchError(Exception):
    """Fetching or decoding station prices for a postcode failed."""

    def __init__(self, postcode: str, reason: str) -> None:
        super().__init__(f"fetching prices for {postcode!r} failed: {reason}")
        self.postcode = postcode
        self.reason = reason


class FuelPriceClient:
    def __init__(self, http: httpx.AsyncClient, url: str = DEFAULT_UPSTREAM_URL) -> None:
        self._http = http
        self._url = url

    async def fetch(self, postcode: str, radius: int) -> list[Station]:
        params = {"location": postcode, "radius": str(radius)}
        logger.debug("GET %s params=%s", self._url, params)

        try:
            resp = await self._http.get(self._url, params=params)
            resp.raise_for_status()
        except httpx.HTTPStatusError as err:
            raise UpstreamFetchError(
                postcode, f"HTTP {err.response.status_code}"
            ) from err
        except httpx.HTTPError as err:
            raise UpstreamFetchError(postcode, f"transport error: {err}") from err

        try:
            stations = STATION_LIST.validate_json(resp.content)
        except ValidationError as err:
            raise UpstreamFetchError(
                postcode, f"unexpected response body ({err.error_count()} errors)"
            ) from err

        logger.debug("Upstream returned %d stations for %s", len(stations), postcode)
        return stations
