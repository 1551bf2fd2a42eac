"""Pricing-rule evaluator: the discount and profit breakdown for one quote.

``evaluate`` is a pure function. Given the same inputs it returns an equal
``PricingResult``; it reads the rate configuration but never mutates it, and
it has no failure path. No rounding happens here: every value stays a full
precision ``Decimal`` until it is presented.
"""

from collections.abc import Callable, Mapping
from decimal import Decimal
from types import MappingProxyType

from pydantic import BaseModel, field_serializer, field_validator

from pricepro.domain.types import ChannelType, LineItemKind, ProductTier
from pricepro.pricing.rates import RateConfig
from pricepro.pricing.subsidy import subsidy_base_price

RateGetter = Callable[[RateConfig], Decimal]

# Deduction rates added on top of the transaction fee, per channel.
# Exactly one entry applies to each evaluation.
CHANNEL_DEDUCTIONS: dict[ChannelType, tuple[tuple[LineItemKind, RateGetter], ...]] = {
    ChannelType.NORMAL: (
        (LineItemKind.PLATFORM_BASE_DEDUCTION, lambda r: r.platform_base_deduction),
        (LineItemKind.REBATE_FRAMEWORK_FEE, lambda r: r.rebate_framework_fee),
    ),
    ChannelType.LIVESTREAM: (
        (LineItemKind.REDUCED_DEDUCTION, lambda r: r.reduced_deduction),
    ),
    ChannelType.CPS_SELF: (
        (LineItemKind.REDUCED_DEDUCTION, lambda r: r.reduced_deduction),
    ),
    ChannelType.CPS_EXTERNAL: (
        (LineItemKind.REDUCED_DEDUCTION, lambda r: r.reduced_deduction),
        (LineItemKind.CPS_EXTERNAL_COMMISSION, lambda r: r.cps_external_commission),
    ),
}


class PricingResult(BaseModel, frozen=True):
    """Result of evaluating one price against the rate configuration.

    Attributes:
        subsidy_base_price: Price after the subsidy discount.
        max_potential_discount: Theoretical maximum discount (base * net rate).
        group_price: Final group-buy price (base - group discount).
        actual_profit: Maximum discount minus the group discount given.
        net_rate: Income rate minus deduction rate. May be negative.
        total_income_rate: Sum of income rates.
        total_deduction_rate: Sum of deduction rates.
        line_items: Amount of each income and cost component, as
            ``subsidy_base_price * rate``.
    """

    subsidy_base_price: Decimal
    max_potential_discount: Decimal
    group_price: Decimal
    actual_profit: Decimal
    net_rate: Decimal
    total_income_rate: Decimal
    total_deduction_rate: Decimal
    line_items: Mapping[LineItemKind, Decimal]

    @field_validator("line_items")
    @classmethod
    def freeze_line_items(cls, v: Mapping[LineItemKind, Decimal]) -> Mapping[LineItemKind, Decimal]:
        return MappingProxyType(dict(v))

    @field_serializer("line_items")
    def dump_line_items(self, v: Mapping[LineItemKind, Decimal]) -> dict[LineItemKind, Decimal]:
        return dict(v)

    @property
    def income_items(self) -> dict[LineItemKind, Decimal]:
        """Income line items, in evaluation order."""
        return {k: v for k, v in self.line_items.items() if k.is_income}

    @property
    def cost_items(self) -> dict[LineItemKind, Decimal]:
        """Cost line items, in evaluation order."""
        return {k: v for k, v in self.line_items.items() if not k.is_income}

    @property
    def is_loss(self) -> bool:
        """Whether the group discount given exceeds the maximum discount."""
        return self.actual_profit < 0


def evaluate(
    original_price: Decimal,
    group_discount: Decimal,
    tier: ProductTier,
    channel: ChannelType,
    rates: RateConfig,
) -> PricingResult:
    """Evaluate the discount and profit breakdown for one quote.

    Steps:
    1. Base price = original price minus the capped subsidy.
    2. Income rate = tier commission + subsidy platform fee.
    3. Deduction rate = transaction fee + the channel's deductions.
    4. Net rate = income rate - deduction rate.
    5. Max discount = base * net rate; group price = base - group discount;
       actual profit = max discount - group discount.

    Args:
        original_price: The official list price.
        group_discount: Discount actually given to the group buyer. Callers
            substitute zero for absent input.
        tier: Product tier, selecting the commission rate.
        channel: Sales channel, selecting the deduction schedule.
        rates: Rate configuration snapshot.

    Returns:
        The full ``PricingResult``.
    """
    base = subsidy_base_price(original_price)

    income: list[tuple[LineItemKind, Decimal]] = [
        (LineItemKind.TIER_COMMISSION, rates.commission_for(tier)),
        (LineItemKind.SUBSIDY_PLATFORM_FEE, rates.subsidy_platform_fee),
    ]
    deductions: list[tuple[LineItemKind, Decimal]] = [
        (LineItemKind.TRANSACTION_FEE, rates.transaction_service_fee),
    ]
    deductions.extend((kind, rate_of(rates)) for kind, rate_of in CHANNEL_DEDUCTIONS[channel])

    total_income_rate = sum((rate for _, rate in income), Decimal("0"))
    total_deduction_rate = sum((rate for _, rate in deductions), Decimal("0"))
    net_rate = total_income_rate - total_deduction_rate
    max_potential_discount = base * net_rate

    return PricingResult(
        subsidy_base_price=base,
        max_potential_discount=max_potential_discount,
        group_price=base - group_discount,
        actual_profit=max_potential_discount - group_discount,
        net_rate=net_rate,
        total_income_rate=total_income_rate,
        total_deduction_rate=total_deduction_rate,
        line_items={kind: base * rate for kind, rate in [*income, *deductions]},
    )
