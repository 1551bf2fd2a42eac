"""HTTP API for quoting and rate settings."""

from pricepro.api.routes import router

__all__ = ["router"]
