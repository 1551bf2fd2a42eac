"""Government subsidy rule applied before any rate-based calculation.

The subsidy is 15% of the original price, capped at a fixed absolute amount.
Both constants are fixed business policy and are not part of ``RateConfig``.
"""

from decimal import Decimal

SUBSIDY_RATE = Decimal("0.15")
SUBSIDY_CAP = Decimal("2000")


def subsidy_amount(original_price: Decimal) -> Decimal:
    """Return the subsidy granted on *original_price*.

    Formula: min(original_price * 0.15, 2000).
    """
    return min(original_price * SUBSIDY_RATE, SUBSIDY_CAP)


def subsidy_base_price(original_price: Decimal) -> Decimal:
    """Return the price after the subsidy, the basis for all rate calculations.

    Formula: original_price - min(original_price * 0.15, 2000). Prices up to
    13333.33 get the full 15% off; above that the subsidy is flat 2000.

    Args:
        original_price: The official list price.

    Returns:
        The subsidised base price, unrounded.
    """
    return original_price - subsidy_amount(original_price)
