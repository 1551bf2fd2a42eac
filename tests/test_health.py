"""Tests for /health and /ready endpoints.

Uses FastAPI TestClient with in-memory SQLite connections to verify
liveness and readiness probes without external dependencies.
"""

from __future__ import annotations

import sqlite3

from fastapi import FastAPI
from fastapi.testclient import TestClient

from pricepro.health import register_health_routes
from pricepro.state.schema import init_rate_config_table
from pricepro.state.store import RateSettingsStore

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _make_app(services: dict | None = None) -> FastAPI:
    """Create a minimal FastAPI app with health routes and given services."""
    app = FastAPI()
    app.state.services = services or {}
    register_health_routes(app)
    return app


def _rates_services() -> dict:
    conn = sqlite3.connect(":memory:", check_same_thread=False)
    init_rate_config_table(conn)
    return {"rates_conn": conn, "rates_store": RateSettingsStore(conn)}


# ---------------------------------------------------------------------------
# /health (liveness)
# ---------------------------------------------------------------------------

class TestHealthEndpoint:
    """GET /health liveness probe."""

    def test_health_returns_200(self) -> None:
        client = TestClient(_make_app())

        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


# ---------------------------------------------------------------------------
# /ready (readiness)
# ---------------------------------------------------------------------------

class TestReadyEndpoint:
    """GET /ready readiness probe."""

    def test_ready_returns_200_when_services_ok(self) -> None:
        services = _rates_services()
        client = TestClient(_make_app(services))

        response = client.get("/ready")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ready"
        assert body["checks"] == {"rates_db": "ok", "rate_config": "ok"}

        services["rates_conn"].close()

    def test_ready_returns_503_when_db_missing(self) -> None:
        client = TestClient(_make_app({"rates_conn": None, "rates_store": None}))

        response = client.get("/ready")

        assert response.status_code == 503
        body = response.json()
        assert body["status"] == "not_ready"
        assert body["checks"]["rates_db"] == "fail"
        assert body["checks"]["rate_config"] == "fail"

    def test_ready_returns_503_when_db_connection_broken(self) -> None:
        """A closed connection that raises on execute -> rates_db fails."""
        services = _rates_services()
        services["rates_conn"].close()
        client = TestClient(_make_app(services))

        response = client.get("/ready")

        assert response.status_code == 503
        assert response.json()["checks"]["rates_db"] == "fail"

    def test_ready_returns_503_when_stored_config_invalid(self) -> None:
        services = _rates_services()
        conn = services["rates_conn"]
        conn.execute("INSERT INTO rate_config (id, config_json) VALUES (1, 'garbage')")
        conn.commit()
        client = TestClient(_make_app(services))

        response = client.get("/ready")

        assert response.status_code == 503
        body = response.json()
        assert body["checks"]["rates_db"] == "ok"
        assert body["checks"]["rate_config"] == "fail"

        conn.close()
