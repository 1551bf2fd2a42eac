"""SQLite schema for rate settings persistence."""

from __future__ import annotations

import sqlite3
from pathlib import Path


def init_rates_db(db_path: Path | str) -> sqlite3.Connection:
    """Open the rate settings database with WAL mode and create its table.

    Args:
        db_path: Path to the SQLite database file, or ``":memory:"``.

    Returns:
        An open sqlite3.Connection usable from any thread.
    """
    conn = sqlite3.connect(str(db_path), check_same_thread=False)
    conn.execute("PRAGMA journal_mode=WAL")
    init_rate_config_table(conn)
    return conn


def init_rate_config_table(conn: sqlite3.Connection) -> None:
    """Create the rate_config table if it does not already exist.

    Uses a ``CHECK (id = 1)`` constraint to enforce a singleton row pattern --
    only one rate configuration is stored at a time.

    Args:
        conn: An open sqlite3.Connection.
    """
    conn.execute("""
        CREATE TABLE IF NOT EXISTS rate_config (
            id INTEGER PRIMARY KEY CHECK (id = 1),
            config_json TEXT NOT NULL,
            updated_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ', 'now'))
        )
    """)

    conn.commit()


def close_rates_db(conn: sqlite3.Connection) -> None:
    """Close the rate settings database connection."""
    conn.close()
