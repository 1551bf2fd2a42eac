"""Presentation-ready view of a pricing result.

Turns a ``PricingResult`` into labelled income and cost rows the way the
calculator screen shows them: costs are displayed as negative amounts and all
figures are rounded to cents. Rounding happens only here, never in the
evaluator.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from pydantic import BaseModel

from pricepro.domain.errors import InvalidAmountError
from pricepro.domain.types import ChannelType, LineItemKind, ProductTier
from pricepro.pricing.evaluator import PricingResult

TWO_PLACES = Decimal("0.01")


def quantize_amount(value: Decimal) -> Decimal:
    """Round a monetary value to two decimal places with ROUND_HALF_UP."""
    return value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def parse_amount(text: str | None) -> Decimal:
    """Parse user-entered amount text.

    Absent or blank input counts as zero. Thousands separators are ignored.

    Raises:
        InvalidAmountError: If the text is not a finite number.
    """
    if text is None or not text.strip():
        return Decimal("0")
    try:
        value = Decimal(text.strip().replace(",", ""))
    except InvalidOperation:
        raise InvalidAmountError(text) from None
    if not value.is_finite():
        raise InvalidAmountError(text)
    return value


class ReportLine(BaseModel, frozen=True):
    """One displayed line of the breakdown.

    ``amount`` is signed for display: income positive, costs negative.
    """

    kind: LineItemKind
    label: str
    amount: Decimal


class QuoteReport(BaseModel, frozen=True):
    """Rounded headline figures and breakdown rows for one quote."""

    tier: ProductTier
    channel: ChannelType
    subsidy_base_price: Decimal
    group_price: Decimal
    max_potential_discount: Decimal
    actual_profit: Decimal
    net_rate: Decimal
    is_loss: bool
    income: list[ReportLine]
    costs: list[ReportLine]


def build_quote_report(
    result: PricingResult, tier: ProductTier, channel: ChannelType
) -> QuoteReport:
    """Build the display report for *result*.

    Args:
        result: The evaluator output.
        tier: Tier the quote was evaluated for.
        channel: Channel the quote was evaluated for.

    Returns:
        A ``QuoteReport`` with cent-rounded amounts.
    """
    income = [
        ReportLine(kind=kind, label=kind.label, amount=quantize_amount(value))
        for kind, value in result.income_items.items()
    ]
    costs = [
        ReportLine(kind=kind, label=kind.label, amount=quantize_amount(Decimal("0") - value))
        for kind, value in result.cost_items.items()
    ]
    return QuoteReport(
        tier=tier,
        channel=channel,
        subsidy_base_price=quantize_amount(result.subsidy_base_price),
        group_price=quantize_amount(result.group_price),
        max_potential_discount=quantize_amount(result.max_potential_discount),
        actual_profit=quantize_amount(result.actual_profit),
        net_rate=result.net_rate,
        is_loss=result.is_loss,
        income=income,
        costs=costs,
    )
