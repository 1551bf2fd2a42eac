"""HTTP routes for quoting, rate settings, and the product list.

Services are read from ``request.app.state.services`` (set up by
``pricepro.app.initialize_services``): ``rates_store`` and ``catalog``.
"""

from __future__ import annotations

from typing import Any

import structlog
from fastapi import APIRouter, HTTPException, Request

from pricepro.api.models import QuoteRequest, QuoteResponse, RateUpdateRequest
from pricepro.catalog.products import Product, find_product, search_products
from pricepro.domain.errors import RateConfigError, UnknownProductError
from pricepro.observability.metrics import record_quote
from pricepro.pricing.evaluator import evaluate
from pricepro.pricing.report import build_quote_report
from pricepro.state.serializers import rate_config_to_dict
from pricepro.state.store import RateSettingsStore

logger = structlog.get_logger()

router = APIRouter()


def _rates_store(request: Request) -> RateSettingsStore:
    store: RateSettingsStore = request.app.state.services["rates_store"]
    return store


@router.post("/quote", response_model=QuoteResponse)
async def quote(body: QuoteRequest, request: Request) -> QuoteResponse:
    """Evaluate one quote against the current rate snapshot."""
    rates = _rates_store(request).snapshot()
    result = evaluate(body.price, body.group_discount, body.tier, body.channel, rates)
    record_quote(body.channel, result)
    logger.info(
        "quote_evaluated",
        tier=str(body.tier),
        channel=str(body.channel),
        net_rate=str(result.net_rate),
        is_loss=result.is_loss,
    )
    return QuoteResponse(
        result=result,
        report=build_quote_report(result, body.tier, body.channel),
    )


@router.get("/rates")
async def get_rates(request: Request) -> dict[str, Any]:
    """Return the current rate configuration with rates as strings."""
    return rate_config_to_dict(_rates_store(request).snapshot())


@router.put("/rates")
async def update_rates(body: RateUpdateRequest, request: Request) -> dict[str, Any]:
    """Apply a partial rate update and return the new configuration."""
    changes = body.model_dump(exclude_unset=True, exclude_none=True)
    if not changes:
        raise HTTPException(status_code=422, detail="No rate changes supplied")
    try:
        config = _rates_store(request).update(**changes)
    except RateConfigError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return rate_config_to_dict(config)


@router.delete("/rates")
async def reset_rates(request: Request) -> dict[str, Any]:
    """Restore the shipped default rates."""
    return rate_config_to_dict(_rates_store(request).reset())


@router.get("/products", response_model=list[Product])
async def list_products(request: Request, q: str | None = None) -> list[Product]:
    """List catalog products, optionally filtered by a search query."""
    catalog: list[Product] = request.app.state.services["catalog"]
    return search_products(catalog, q)


@router.get("/products/{model:path}", response_model=Product)
async def get_product(model: str, request: Request) -> Product:
    """Return one catalog product by model number."""
    catalog: list[Product] = request.app.state.services["catalog"]
    try:
        return find_product(catalog, model)
    except UnknownProductError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
