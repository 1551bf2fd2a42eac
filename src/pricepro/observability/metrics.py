"""Prometheus metrics instrumentation for the pricing service.

Provides:
- ``setup_metrics(app)``: Attach prometheus-fastapi-instrumentator to a FastAPI app,
  exposing ``/metrics`` with HTTP request duration/count plus custom business counters.
- ``QUOTES_EVALUATED``: Counter of quotes evaluated, labelled by sales channel.
- ``LOSS_QUOTES``: Counter of quotes whose actual profit is negative.
"""

from __future__ import annotations

from fastapi import FastAPI
from prometheus_client import Counter
from prometheus_fastapi_instrumentator import Instrumentator

from pricepro.pricing.evaluator import PricingResult

QUOTES_EVALUATED: Counter = Counter(
    "pricepro_quotes_total",
    "Total number of quotes evaluated",
    ["channel"],
)

LOSS_QUOTES: Counter = Counter(
    "pricepro_loss_quotes_total",
    "Total number of quotes whose group discount exceeds the maximum discount",
)


def record_quote(channel: str, result: PricingResult) -> None:
    """Update business counters for one evaluated quote."""
    QUOTES_EVALUATED.labels(channel=channel).inc()
    if result.is_loss:
        LOSS_QUOTES.inc()


def setup_metrics(app: FastAPI) -> None:
    """Instrument *app* with Prometheus HTTP metrics and expose ``/metrics``.

    Excludes health/ready/metrics endpoints from instrumentation.

    Args:
        app: The FastAPI application to instrument.
    """
    Instrumentator(
        should_group_status_codes=True,
        should_ignore_untemplated=True,
        excluded_handlers=["/health", "/ready", "/metrics"],
    ).instrument(app).expose(app, include_in_schema=False, should_gzip=True)
