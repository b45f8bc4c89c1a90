"""In-process store of the latest fetched prices, keyed by postcode.

A single asyncio.Lock guards the whole mapping.  Writers replace a
postcode's station list wholesale; readers get a copy taken under the
lock, so rendering never iterates the live dict.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable

from fuel_exporter.models.station import Station

Entry = tuple[str, tuple[Station, ...]]


class PriceStore:
    def __init__(self) -> None:
        self._lock = asyncio.Lock()
        self._prices: dict[str, tuple[Station, ...]] = {}

    async def insert(self, postcode: str, stations: Iterable[Station]) -> None:
        """Replace the station list held for a postcode."""
        frozen = tuple(stations)
        async with self._lock:
            self._prices[postcode] = frozen

    async def snapshot(self) -> list[Entry]:
        """Return every (postcode, stations) pair held right now."""
        async with self._lock:
            return list(self._prices.items())

    # The helpers below never await, so they cannot interleave with insert().

    def __len__(self) -> int:
        return len(self._prices)

    @property
    def postcodes(self) -> tuple[str, ...]:
        return tuple(self._prices)

    def station_count(self) -> int:
        return sum(len(stations) for stations in self._prices.values())
