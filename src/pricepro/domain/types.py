"""Domain enumerations for air-conditioner pricing: tiers, channels, line items."""

from enum import StrEnum


class ProductTier(StrEnum):
    """Product tier, which selects the commission rate earned per sale."""

    LOW_WALL = "low_wall"
    LOW_CABINET = "low_cabinet"
    ORDINARY = "ordinary"
    MID_RANGE = "mid_range"
    HIGH_RANGE = "high_range"

    @property
    def label(self) -> str:
        """Human-readable name of the tier."""
        return TIER_LABELS[self]


class ChannelType(StrEnum):
    """Sales channel, which selects the deduction schedule."""

    NORMAL = "normal"
    LIVESTREAM = "livestream"
    CPS_SELF = "cps_self"
    CPS_EXTERNAL = "cps_external"

    @property
    def label(self) -> str:
        """Human-readable name of the channel."""
        return CHANNEL_LABELS[self]


class LineItemKind(StrEnum):
    """Named income and cost components of a pricing breakdown."""

    # Income
    TIER_COMMISSION = "tierCommission"
    SUBSIDY_PLATFORM_FEE = "subsidyPlatformFee"
    # Cost
    TRANSACTION_FEE = "transactionFee"
    PLATFORM_BASE_DEDUCTION = "platformBaseDeduction"
    REBATE_FRAMEWORK_FEE = "rebateFrameworkFee"
    REDUCED_DEDUCTION = "reducedDeduction"
    CPS_EXTERNAL_COMMISSION = "cpsExternalCommission"

    @property
    def is_income(self) -> bool:
        """Whether this component is earned (income) rather than deducted (cost)."""
        return self in INCOME_ITEMS

    @property
    def label(self) -> str:
        """Human-readable name of the line item."""
        return LINE_ITEM_LABELS[self]


TIER_LABELS: dict[ProductTier, str] = {
    ProductTier.LOW_WALL: "Low-end wall unit",
    ProductTier.LOW_CABINET: "Low-end cabinet unit",
    ProductTier.ORDINARY: "Ordinary",
    ProductTier.MID_RANGE: "Mid-range",
    ProductTier.HIGH_RANGE: "High-end",
}

CHANNEL_LABELS: dict[ChannelType, str] = {
    ChannelType.NORMAL: "Standard listing",
    ChannelType.LIVESTREAM: "Livestream",
    ChannelType.CPS_SELF: "CPS (commission kept)",
    ChannelType.CPS_EXTERNAL: "CPS (commission shared)",
}

INCOME_ITEMS: frozenset[LineItemKind] = frozenset(
    {LineItemKind.TIER_COMMISSION, LineItemKind.SUBSIDY_PLATFORM_FEE}
)

LINE_ITEM_LABELS: dict[LineItemKind, str] = {
    LineItemKind.TIER_COMMISSION: "Tier commission",
    LineItemKind.SUBSIDY_PLATFORM_FEE: "Subsidy platform fee",
    LineItemKind.TRANSACTION_FEE: "Transaction service fee",
    LineItemKind.PLATFORM_BASE_DEDUCTION: "Platform base deduction",
    LineItemKind.REBATE_FRAMEWORK_FEE: "Rebate framework fee",
    LineItemKind.REDUCED_DEDUCTION: "Reduced deduction",
    LineItemKind.CPS_EXTERNAL_COMMISSION: "CPS external commission",
}
