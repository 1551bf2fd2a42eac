"""SQLite-backed rate settings store handing out immutable snapshots.

Accepts a sqlite3.Connection, uses parameterized queries exclusively, and
commits synchronously after writes. The current ``RateConfig`` is cached as
an immutable snapshot; a write replaces the snapshot only after the row is
committed, so concurrent readers always see a complete rate set.
"""

from __future__ import annotations

import sqlite3
import threading
from datetime import UTC, datetime
from decimal import Decimal
from typing import Any

import structlog

from pricepro.domain.errors import RateConfigError
from pricepro.domain.types import ProductTier
from pricepro.pricing.rates import DEFAULT_RATE_CONFIG, RateConfig
from pricepro.state.serializers import deserialize_rate_config, serialize_rate_config

logger = structlog.get_logger()


class RateSettingsStore:
    """Persist and retrieve the rate configuration in SQLite.

    The table holds at most one row. When it is empty the shipped defaults
    are in effect.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        """Initialize with an open database connection.

        Args:
            conn: An open sqlite3.Connection whose database already has the
                  ``rate_config`` table (see ``init_rate_config_table``).
        """
        self._conn = conn
        self._lock = threading.RLock()
        self._snapshot: RateConfig | None = None

    # ------------------------------------------------------------------
    # Read operations
    # ------------------------------------------------------------------

    def load(self) -> RateConfig:
        """Read the persisted configuration, falling back to the defaults.

        Returns:
            The stored ``RateConfig``, or ``DEFAULT_RATE_CONFIG`` if none is saved.

        Raises:
            RateConfigError: If the stored payload is corrupt or holds invalid rates.
        """
        with self._lock:
            row = self._conn.execute(
                "SELECT config_json FROM rate_config WHERE id = 1"
            ).fetchone()
            if row is None:
                config = DEFAULT_RATE_CONFIG
            else:
                try:
                    config = deserialize_rate_config(row[0])
                except RateConfigError as exc:
                    logger.error("rate_config_load_failed", error=str(exc))
                    raise
            self._snapshot = config
            return config

    def snapshot(self) -> RateConfig:
        """Return the current configuration snapshot, loading it on first use."""
        config = self._snapshot
        if config is None:
            return self.load()
        return config

    def updated_at(self) -> str | None:
        """Return the ISO timestamp of the last save, or None if never saved."""
        with self._lock:
            row = self._conn.execute(
                "SELECT updated_at FROM rate_config WHERE id = 1"
            ).fetchone()
        return row[0] if row else None

    # ------------------------------------------------------------------
    # Write operations
    # ------------------------------------------------------------------

    def save(self, config: RateConfig) -> RateConfig:
        """Persist *config* and publish it as the current snapshot.

        Args:
            config: The configuration to store.

        Returns:
            The stored configuration.
        """
        now = datetime.now(tz=UTC).strftime("%Y-%m-%dT%H:%M:%SZ")
        with self._lock:
            self._conn.execute(
                "INSERT OR REPLACE INTO rate_config (id, config_json, updated_at) VALUES (1, ?, ?)",
                (serialize_rate_config(config), now),
            )
            self._conn.commit()
            self._snapshot = config
        logger.info("rate_config_saved", updated_at=now)
        return config

    def update(self, **changes: Any) -> RateConfig:
        """Apply *changes* to the current snapshot and persist the result.

        Raises:
            RateConfigError: If a change names an unknown rate or is not finite.
                Nothing is written in that case.
        """
        with self._lock:
            config = self.snapshot().with_updates(**changes)
            logger.info("rate_config_updated", fields=sorted(changes))
            return self.save(config)

    def set_tier_commission(self, tier: ProductTier, rate: Decimal) -> RateConfig:
        """Replace the commission rate for one tier and persist the result."""
        return self.update(tier_commission={tier: rate})

    def reset(self) -> RateConfig:
        """Delete the stored configuration, restoring the shipped defaults."""
        with self._lock:
            self._conn.execute("DELETE FROM rate_config WHERE id = 1")
            self._conn.commit()
            self._snapshot = DEFAULT_RATE_CONFIG
        logger.info("rate_config_reset")
        return DEFAULT_RATE_CONFIG
