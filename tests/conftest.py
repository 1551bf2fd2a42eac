"""Shared pytest fixtures for the pricing service test suite."""

from __future__ import annotations

import sqlite3
from collections.abc import Iterator
from decimal import Decimal

import pytest
import structlog

from pricepro.pricing.rates import DEFAULT_RATE_CONFIG, RateConfig
from pricepro.state.schema import init_rate_config_table
from pricepro.state.store import RateSettingsStore


@pytest.fixture(autouse=True)
def _reset_structlog_config() -> Iterator[None]:
    """Reset structlog after each test so a stream captured by one test isn't reused by the next."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def default_rates() -> RateConfig:
    """The shipped default rate configuration."""
    return DEFAULT_RATE_CONFIG


@pytest.fixture
def sample_price() -> Decimal:
    """A mid-range wall unit list price below the subsidy cap."""
    return Decimal("3699")


@pytest.fixture
def rates_conn() -> Iterator[sqlite3.Connection]:
    """In-memory SQLite connection with the rate_config table initialized."""
    connection = sqlite3.connect(":memory:", check_same_thread=False)
    init_rate_config_table(connection)
    yield connection
    connection.close()


@pytest.fixture
def rates_store(rates_conn: sqlite3.Connection) -> RateSettingsStore:
    """RateSettingsStore backed by the in-memory connection."""
    return RateSettingsStore(rates_conn)
