"""Rate settings persistence package.

Provides SQLite-backed storage for the rate configuration and serialization
helpers for ``RateConfig``.
"""

from pricepro.state.schema import close_rates_db, init_rate_config_table, init_rates_db
from pricepro.state.serializers import (
    deserialize_rate_config,
    rate_config_to_dict,
    serialize_rate_config,
)
from pricepro.state.store import RateSettingsStore

__all__ = [
    "RateSettingsStore",
    "close_rates_db",
    "deserialize_rate_config",
    "init_rate_config_table",
    "init_rates_db",
    "rate_config_to_dict",
    "serialize_rate_config",
]
