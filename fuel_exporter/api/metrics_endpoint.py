"""Prometheus scrape endpoint.

Returns the fuel prices held in the store as plain-text exposition.
Always 200, including when the store is empty (header lines only).
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST

from fuel_exporter.services.price_store import PriceStore
from fuel_exporter.services.renderer import render

router = APIRouter(tags=["observability"])


def get_price_store(request: Request) -> PriceStore:
    return request.app.state.price_store


@router.get("/metrics", include_in_schema=False)
async def metrics(store: Annotated[PriceStore, Depends(get_price_store)]) -> Response:
    """Render the fuel price gauge for every stored station."""
    return Response(content=await render(store), media_type=CONTENT_TYPE_LATEST)
