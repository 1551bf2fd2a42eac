"""Serialization helpers for rate configurations.

Decimal rates are written as strings so no precision is lost on the way
through JSON; ``build_rate_config`` turns them back into ``Decimal``.
"""

from __future__ import annotations

import json
from decimal import Decimal
from typing import Any

from pricepro.domain.errors import RateConfigError
from pricepro.pricing.rates import RateConfig, build_rate_config


def rate_config_to_dict(config: RateConfig) -> dict[str, Any]:
    """Convert a configuration to a JSON-safe dict with string rates.

    Args:
        config: The configuration to serialize.

    Returns:
        A dict with tier keys as strings and Decimal values as strings.
    """
    data = config.model_dump()
    data["tier_commission"] = {
        str(tier): str(rate) for tier, rate in data["tier_commission"].items()
    }
    return {k: str(v) if isinstance(v, Decimal) else v for k, v in data.items()}


def serialize_rate_config(config: RateConfig) -> str:
    """JSON-encode a configuration with Decimal rates as strings."""
    return json.dumps(rate_config_to_dict(config), sort_keys=True)


def deserialize_rate_config(json_str: str) -> RateConfig:
    """Decode a configuration produced by ``serialize_rate_config``.

    Rate names absent from the payload take their default values, so
    configurations saved by older versions still load.

    Args:
        json_str: JSON string from the ``rate_config`` table.

    Returns:
        The reconstructed ``RateConfig``.

    Raises:
        RateConfigError: If the payload is not a JSON object or holds invalid rates.
    """
    try:
        data = json.loads(json_str)
    except json.JSONDecodeError as exc:
        raise RateConfigError(f"Stored rate configuration is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise RateConfigError("Stored rate configuration must be a JSON object")
    return build_rate_config(data)
