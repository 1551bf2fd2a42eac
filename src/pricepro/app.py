"""Application entry point serving the pricing HTTP API.

Configures:
- **structlog** with JSON rendering (production) or colored console (development)
- **Rate settings store** on a SQLite database
- **Product catalog** loaded once at startup
- **Prometheus metrics**, request IDs, and health probes
"""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

import structlog
import uvicorn
from fastapi import FastAPI

from pricepro.api.routes import router as api_router
from pricepro.catalog.products import load_catalog
from pricepro.config import Settings, get_settings
from pricepro.health import register_health_routes
from pricepro.observability.metrics import setup_metrics
from pricepro.observability.middleware import SERVICE_NAME, RequestIdMiddleware
from pricepro.state.schema import close_rates_db, init_rates_db
from pricepro.state.store import RateSettingsStore

logger = structlog.get_logger()


def configure_logging(production: bool = False) -> None:
    """Configure structlog for production (JSON) or development (console).

    Production mode (*production=True*): JSON rendering at INFO level.
    Development mode: colored console rendering at DEBUG level.

    Args:
        production: Enable production mode if ``True``.
    """
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if production:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
        log_level = logging.INFO
    else:
        renderer = structlog.dev.ConsoleRenderer()
        log_level = logging.DEBUG

    structlog.configure(
        processors=[*shared_processors, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    structlog.contextvars.bind_contextvars(service=SERVICE_NAME)


def initialize_services(settings: Settings | None = None) -> dict[str, Any]:
    """Set up the shared services for the application.

    Opens the rate settings database, loads the current rate snapshot (so an
    invalid stored configuration fails at startup rather than mid-request),
    and loads the product catalog.

    Args:
        settings: Application settings.  If ``None``, ``get_settings()`` is used.

    Returns:
        A dict of initialized service instances keyed by name.

    Raises:
        RateConfigError: If the stored rate configuration is invalid.
    """
    if settings is None:
        settings = get_settings()

    services: dict[str, Any] = {"_settings": settings}

    db_path = settings.rates_db_path
    if str(db_path) != ":memory:":
        db_path.parent.mkdir(parents=True, exist_ok=True)
    rates_conn = init_rates_db(db_path)
    services["rates_conn"] = rates_conn

    rates_store = RateSettingsStore(rates_conn)
    rates_store.load()
    services["rates_store"] = rates_store

    services["catalog"] = load_catalog(settings.catalog_path)

    logger.info(
        "services_initialized",
        rates_db=str(db_path),
        products=len(services["catalog"]),
    )
    return services


def shutdown_services(services: dict[str, Any]) -> None:
    """Release resources held by *services*."""
    rates_conn = services.get("rates_conn")
    if rates_conn is not None:
        close_rates_db(rates_conn)
        logger.info("Rates database connection closed on shutdown")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Close service resources when the application shuts down."""
    yield
    shutdown_services(app.state.services)


def create_app(services: dict[str, Any]) -> FastAPI:
    """Create the FastAPI app with quote/rates/product routes and probes.

    Args:
        services: The initialized services dict from ``initialize_services``.

    Returns:
        The configured FastAPI application.
    """
    fastapi_app = FastAPI(title="Gree Price Pro", lifespan=lifespan)
    fastapi_app.state.services = services
    fastapi_app.state.settings = services.get("_settings") or get_settings()
    fastapi_app.add_middleware(RequestIdMiddleware)
    fastapi_app.include_router(api_router)
    register_health_routes(fastapi_app)
    setup_metrics(fastapi_app)
    return fastapi_app


def main() -> None:
    """Main entry point: configure logging, initialize services, run uvicorn."""
    settings = get_settings()
    configure_logging(production=settings.production)
    logger.info("Application starting")

    services = initialize_services(settings)
    fastapi_app = create_app(services)

    uvicorn.run(
        fastapi_app,
        host=settings.api_host,
        port=settings.api_port,
        log_level="info",
    )


if __name__ == "__main__":
    main()
