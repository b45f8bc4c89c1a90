from __future__ import annotations

from fastapi import FastAPI

from fuel_exporter.api.metrics_endpoint import router as metrics_router
from fuel_exporter.middleware.request_context import RequestContextMiddleware
from fuel_exporter.services.price_store import PriceStore


def create_app(store: PriceStore) -> FastAPI:
    """Build the HTTP app around an already-populated store.

    /metrics is the only route: the OpenAPI schema and docs pages are
    switched off.
    """
    app = FastAPI(
        title="fuel-price-exporter",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.price_store = store

    app.add_middleware(RequestContextMiddleware)

    app.include_router(metrics_router)
    return app
