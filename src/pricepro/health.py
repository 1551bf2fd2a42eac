"""Health and readiness endpoints.

Provides two top-level routes:

- ``GET /health`` -- Liveness probe.  Returns 200 if the process is alive.
- ``GET /ready``  -- Readiness probe.  Returns 200 only when the rate settings
  database answers **and** the stored rate configuration loads.  Returns 503
  with per-check details otherwise.
"""

from __future__ import annotations

import asyncio
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from pricepro.domain.errors import RateConfigError


def register_health_routes(app: FastAPI) -> None:
    """Register ``/health`` and ``/ready`` endpoints on *app*.

    Args:
        app: The FastAPI application instance.
    """

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Liveness probe -- always returns 200 if the process is running."""
        return {"status": "healthy"}

    @app.get("/ready")
    async def ready(request: Request) -> JSONResponse:
        """Readiness probe -- checks the rates DB and the stored configuration."""
        services: dict[str, Any] = request.app.state.services
        checks: dict[str, str] = {}

        # Check 1: rates DB connection
        rates_conn = services.get("rates_conn")
        if rates_conn is not None:
            try:
                await asyncio.to_thread(rates_conn.execute, "SELECT 1")
                checks["rates_db"] = "ok"
            except Exception:
                checks["rates_db"] = "fail"
        else:
            checks["rates_db"] = "fail"

        # Check 2: stored rate configuration is valid
        rates_store = services.get("rates_store")
        if rates_store is not None and checks["rates_db"] == "ok":
            try:
                await asyncio.to_thread(rates_store.load)
                checks["rate_config"] = "ok"
            except RateConfigError:
                checks["rate_config"] = "fail"
        else:
            checks["rate_config"] = "fail"

        all_ok = all(v == "ok" for v in checks.values())
        status = "ready" if all_ok else "not_ready"
        code = 200 if all_ok else 503

        return JSONResponse(content={"status": status, "checks": checks}, status_code=code)
