"""Tests for Prometheus metrics endpoint and quote counters."""

from __future__ import annotations

from decimal import Decimal

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from prometheus_client import REGISTRY

from pricepro.domain.types import ChannelType, ProductTier
from pricepro.observability.metrics import record_quote, setup_metrics
from pricepro.pricing.evaluator import evaluate
from pricepro.pricing.rates import DEFAULT_RATE_CONFIG


def _sample(name: str, labels: dict[str, str] | None = None) -> float:
    return REGISTRY.get_sample_value(name, labels or {}) or 0.0


@pytest.fixture()
def metrics_app() -> FastAPI:
    """Create a minimal FastAPI app with Prometheus instrumentation."""
    app = FastAPI()

    @app.get("/hello")
    async def hello():
        return {"msg": "hello"}

    @app.get("/health")
    async def health():
        return {"status": "healthy"}

    setup_metrics(app)
    return app


@pytest.fixture()
def metrics_client(metrics_app: FastAPI) -> TestClient:
    """TestClient for the metrics-enabled app."""
    return TestClient(metrics_app)


def test_metrics_endpoint_returns_prometheus_format(metrics_client: TestClient) -> None:
    metrics_client.get("/hello")
    record_quote(
        ChannelType.NORMAL,
        evaluate(Decimal("3699"), Decimal("0"), ProductTier.ORDINARY, ChannelType.NORMAL, DEFAULT_RATE_CONFIG),
    )

    resp = metrics_client.get("/metrics")

    assert resp.status_code == 200
    assert "http_request" in resp.text
    assert "pricepro_quotes_total" in resp.text


def test_health_not_in_metrics(metrics_client: TestClient) -> None:
    metrics_client.get("/health")
    body = metrics_client.get("/metrics").text
    lines = [
        line
        for line in body.splitlines()
        if "http_request_duration" in line and 'handler="' in line
    ]
    for line in lines:
        assert '/health"' not in line, f"/health found in metrics: {line}"


def test_record_quote_counts_by_channel() -> None:
    before = _sample("pricepro_quotes_total", {"channel": "livestream"})
    result = evaluate(
        Decimal("3699"), Decimal("0"), ProductTier.MID_RANGE, ChannelType.LIVESTREAM, DEFAULT_RATE_CONFIG
    )

    record_quote(ChannelType.LIVESTREAM, result)

    assert _sample("pricepro_quotes_total", {"channel": "livestream"}) == before + 1.0


def test_record_quote_counts_losses() -> None:
    before = _sample("pricepro_loss_quotes_total")
    profitable = evaluate(
        Decimal("3699"), Decimal("0"), ProductTier.MID_RANGE, ChannelType.NORMAL, DEFAULT_RATE_CONFIG
    )
    loss = evaluate(
        Decimal("3699"), Decimal("100"), ProductTier.MID_RANGE, ChannelType.NORMAL, DEFAULT_RATE_CONFIG
    )

    record_quote(ChannelType.NORMAL, profitable)
    record_quote(ChannelType.NORMAL, loss)

    assert _sample("pricepro_loss_quotes_total") == before + 1.0
