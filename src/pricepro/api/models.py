"""Request and response bodies for the pricing HTTP API."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, field_validator

from pricepro.domain.types import ChannelType, ProductTier
from pricepro.pricing.evaluator import PricingResult
from pricepro.pricing.report import QuoteReport


def _float_to_decimal(v: object) -> object:
    if isinstance(v, float):
        return Decimal(str(v))
    return v


class QuoteRequest(BaseModel):
    """Inputs for one quote. Tier and channel default to the calculator's defaults."""

    price: Decimal = Decimal("0")
    group_discount: Decimal = Decimal("0")
    tier: ProductTier = ProductTier.MID_RANGE
    channel: ChannelType = ChannelType.NORMAL

    @field_validator("price", "group_discount", mode="before")
    @classmethod
    def convert_float_amounts(cls, v: object) -> object:
        """Read JSON numbers through ``str`` so 3144.15 stays exactly 3144.15."""
        return _float_to_decimal(v)


class QuoteResponse(BaseModel):
    """Full-precision result plus the rounded display report."""

    result: PricingResult
    report: QuoteReport


class RateUpdateRequest(BaseModel):
    """Partial rate update. Only the fields sent are changed."""

    tier_commission: dict[ProductTier, Decimal] | None = None
    subsidy_platform_fee: Decimal | None = None
    transaction_service_fee: Decimal | None = None
    platform_base_deduction: Decimal | None = None
    rebate_framework_fee: Decimal | None = None
    reduced_deduction: Decimal | None = None
    cps_external_commission: Decimal | None = None

    @field_validator(
        "subsidy_platform_fee",
        "transaction_service_fee",
        "platform_base_deduction",
        "rebate_framework_fee",
        "reduced_deduction",
        "cps_external_commission",
        mode="before",
    )
    @classmethod
    def convert_float_rates(cls, v: object) -> object:
        """Read JSON numbers through ``str``."""
        return _float_to_decimal(v)

    @field_validator("tier_commission", mode="before")
    @classmethod
    def convert_float_commissions(cls, v: object) -> object:
        """Read JSON numbers in the tier mapping through ``str``."""
        if isinstance(v, dict):
            return {k: _float_to_decimal(rate) for k, rate in v.items()}
        return v
