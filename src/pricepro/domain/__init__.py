"""Domain types and errors for the pricing service."""

from pricepro.domain.errors import (
    CatalogError,
    InvalidAmountError,
    PriceProError,
    RateConfigError,
    UnknownProductError,
)
from pricepro.domain.types import (
    CHANNEL_LABELS,
    LINE_ITEM_LABELS,
    TIER_LABELS,
    ChannelType,
    LineItemKind,
    ProductTier,
)

__all__ = [
    "CHANNEL_LABELS",
    "CatalogError",
    "LINE_ITEM_LABELS",
    "TIER_LABELS",
    "ChannelType",
    "InvalidAmountError",
    "LineItemKind",
    "PriceProError",
    "ProductTier",
    "RateConfigError",
    "UnknownProductError",
]
