"""Render the price store as Prometheus text exposition.

Example output:

  # HELP fuel_price Fuel price
  # TYPE fuel_price gauge
  fuel_price{postcode="AB1 2CD", type="petrol", provider="Acme", distance="0.5" } 135.9

One line per fuel type a station sells.  Upstream prices are in tenths,
so every value is divided by 10; whole values print without a decimal
part (142, not 142.0).  The body is rebuilt on each call.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from decimal import Decimal

from fuel_exporter.services.price_store import Entry, PriceStore

METRIC_NAME = "fuel_price"

HEADER = (
    f"# HELP {METRIC_NAME} Fuel price",
    f"# TYPE {METRIC_NAME} gauge",
)


def _escape(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")


def format_value(value: float) -> str:
    """Shortest round-trip digits, never an exponent, no trailing `.0`.

    135.9 -> "135.9", 142.0 -> "142", 1e16 -> "10000000000000000".
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    text = format(Decimal(repr(value)), "f")
    return text[:-2] if text.endswith(".0") else text


def _line(postcode: str, fuel_type: str, provider: str, distance: str, price: float) -> str:
    return (
        f'{METRIC_NAME}{{postcode="{_escape(postcode)}", type="{fuel_type}", '
        f'provider="{_escape(provider)}", distance="{_escape(distance)}" }} '
        f"{format_value(price / 10)}"
    )


def render_lines(entries: Iterable[Entry]) -> str:
    lines = list(HEADER)
    for postcode, stations in entries:
        for station in stations:
            if station.sells_petrol:
                lines.append(
                    _line(postcode, "petrol", station.name, station.distance, station.petrol_price)
                )
            if station.sells_diesel:
                lines.append(
                    _line(postcode, "diesel", station.name, station.distance, station.diesel_price)
                )
    return "\n".join(lines)


async def render(store: PriceStore) -> str:
    """Render the store's current contents."""
    return render_lines(await store.snapshot())
