"""Pricing rules: rate configuration, subsidy, evaluator, and display report.

Re-exports key functions and types for convenient access:
    from pricepro.pricing import evaluate, RateConfig, DEFAULT_RATE_CONFIG
"""

from pricepro.pricing.evaluator import CHANNEL_DEDUCTIONS, PricingResult, evaluate
from pricepro.pricing.rates import (
    DEFAULT_RATE_CONFIG,
    DEFAULT_TIER_COMMISSION,
    RATE_FIELDS,
    RateConfig,
    build_rate_config,
)
from pricepro.pricing.report import (
    QuoteReport,
    ReportLine,
    build_quote_report,
    parse_amount,
    quantize_amount,
)
from pricepro.pricing.subsidy import (
    SUBSIDY_CAP,
    SUBSIDY_RATE,
    subsidy_amount,
    subsidy_base_price,
)

__all__ = [
    "CHANNEL_DEDUCTIONS",
    "DEFAULT_RATE_CONFIG",
    "DEFAULT_TIER_COMMISSION",
    "RATE_FIELDS",
    "SUBSIDY_CAP",
    "SUBSIDY_RATE",
    "PricingResult",
    "QuoteReport",
    "RateConfig",
    "ReportLine",
    "build_quote_report",
    "build_rate_config",
    "evaluate",
    "parse_amount",
    "quantize_amount",
    "subsidy_amount",
    "subsidy_base_price",
]
