"""Command-line interface for quoting and rate settings.

Provides an argparse-based tool with three commands:

- ``quote``    -- evaluate one price and print the breakdown (table or JSON)
- ``rates``    -- show, change, or reset the stored fee rates
- ``products`` -- list or search the product catalog

Usage::

    pricepro quote --price 3699 --group-discount 100 --tier mid_range
    pricepro rates set reduced_deduction=1.2% mid_range=0.045
    pricepro products --search cabinet --format json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

import structlog

from pricepro.catalog.products import Product, find_product, load_catalog, search_products
from pricepro.config import get_settings
from pricepro.domain.errors import PriceProError, RateConfigError
from pricepro.domain.types import ChannelType, ProductTier
from pricepro.pricing.evaluator import evaluate
from pricepro.pricing.rates import RATE_FIELDS, RateConfig
from pricepro.pricing.report import QuoteReport, build_quote_report, parse_amount
from pricepro.state.schema import close_rates_db, init_rates_db
from pricepro.state.serializers import rate_config_to_dict
from pricepro.state.store import RateSettingsStore


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser with ``quote``, ``rates`` and ``products`` commands.

    Returns:
        A configured :class:`argparse.ArgumentParser`.
    """
    parser = argparse.ArgumentParser(
        prog="pricepro",
        description="Air-conditioner group-buy discount and profit calculator",
    )
    parser.add_argument(
        "--db",
        type=str,
        default=None,
        help="Path to the rate settings database (default: RATES_DB_PATH setting)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show informational log output on stderr",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    quote = subparsers.add_parser("quote", help="Evaluate a price")
    quote.add_argument("--price", type=str, default="", help="Official list price (blank = 0)")
    quote.add_argument(
        "--group-discount",
        type=str,
        default="",
        help="Group-buy discount actually given (blank = 0)",
    )
    quote.add_argument(
        "--tier",
        type=str,
        choices=[t.value for t in ProductTier],
        default=ProductTier.MID_RANGE.value,
        help="Product tier (default: mid_range)",
    )
    quote.add_argument(
        "--channel",
        type=str,
        choices=[c.value for c in ChannelType],
        default=ChannelType.NORMAL.value,
        help="Sales channel (default: normal)",
    )
    _add_format_argument(quote)

    rates = subparsers.add_parser("rates", help="Show or change fee rates")
    rates_sub = rates.add_subparsers(dest="rates_command", required=True)
    show = rates_sub.add_parser("show", help="Print the current rates")
    _add_format_argument(show)
    set_rates = rates_sub.add_parser("set", help="Change one or more rates")
    set_rates.add_argument(
        "assignments",
        nargs="+",
        metavar="NAME=VALUE",
        help=(
            "Rate name (or a tier name for its commission) and a fraction "
            'or percentage, e.g. "reduced_deduction=0.014" or "mid_range=4%%"'
        ),
    )
    rates_sub.add_parser("reset", help="Restore the default rates")

    products = subparsers.add_parser("products", help="List catalog products")
    products.add_argument("--search", type=str, default=None, help="Filter by name, model, or category")
    products.add_argument("--model", type=str, default=None, help="Show a single product by model number")
    products.add_argument("--catalog", type=str, default=None, help="Path to a catalog YAML file")
    _add_format_argument(products)

    return parser


def _add_format_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--format",
        type=str,
        choices=["table", "json"],
        default="table",
        dest="output_format",
        help="Output format (default: table)",
    )


def configure_cli_logging(verbose: bool = False) -> None:
    """Send structlog output to stderr so it never mixes with command output."""
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.INFO if verbose else logging.WARNING
        ),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def parse_rate_value(text: str) -> Decimal:
    """Parse a rate given as a fraction (``0.037``) or a percentage (``3.7%``).

    Raises:
        RateConfigError: If the text is not a number.
    """
    raw = text.strip()
    percent = raw.endswith("%")
    if percent:
        raw = raw[:-1].strip()
    try:
        value = Decimal(raw)
    except InvalidOperation:
        raise RateConfigError(f"Not a valid rate: {text!r}") from None
    return value / 100 if percent else value


def parse_assignments(assignments: list[str]) -> dict[str, Any]:
    """Turn ``NAME=VALUE`` strings into ``RateConfig.with_updates`` keyword arguments.

    Tier names set that tier's commission; other names must be rate fields.

    Raises:
        RateConfigError: On a malformed assignment or unknown name.
    """
    tier_values = {t.value for t in ProductTier}
    changes: dict[str, Any] = {}
    tier_changes: dict[ProductTier, Decimal] = {}
    for item in assignments:
        name, sep, value = item.partition("=")
        name = name.strip()
        if not sep or not name:
            raise RateConfigError(f"Expected NAME=VALUE, got {item!r}")
        if name in tier_values:
            tier_changes[ProductTier(name)] = parse_rate_value(value)
        elif name in RATE_FIELDS:
            changes[name] = parse_rate_value(value)
        else:
            raise RateConfigError(
                f"Unknown rate {name!r}. Valid names: "
                f"{', '.join([*RATE_FIELDS, *sorted(tier_values)])}"
            )
    if tier_changes:
        changes["tier_commission"] = tier_changes
    return changes


def _percent(rate: Decimal) -> str:
    return f"{(rate * 100).normalize():f}%"


def format_quote_table(report: QuoteReport) -> str:
    """Format a quote report as human-readable text.

    Headline figures first, then the income and cost breakdowns. Costs are
    shown as negative amounts.
    """
    width = 28
    lines = [
        f"{'Tier':<{width}}{report.tier.label}",
        f"{'Channel':<{width}}{report.channel.label}",
        f"{'Subsidy base price':<{width}}{report.subsidy_base_price:>12}",
        f"{'Group price':<{width}}{report.group_price:>12}",
        f"{'Max potential discount':<{width}}{report.max_potential_discount:>12}",
        f"{'Actual profit':<{width}}{report.actual_profit:>12}"
        + ("  (loss)" if report.is_loss else ""),
        f"{'Net rate':<{width}}{_percent(report.net_rate):>12}",
        "",
        "Income",
        "-" * (width + 12),
    ]
    lines.extend(f"{row.label:<{width}}{row.amount:>12}" for row in report.income)
    lines.extend(["", "Costs", "-" * (width + 12)])
    lines.extend(f"{row.label:<{width}}{row.amount:>12}" for row in report.costs)
    return "\n".join(lines)


def format_rates_table(config: RateConfig) -> str:
    """Format a rate configuration as a two-column table of percentages."""
    width = 28
    lines = [f"{'Rate':<{width}}{'Value':>10}", "-" * (width + 10)]
    lines.extend(f"{name:<{width}}{_percent(getattr(config, name)):>10}" for name in RATE_FIELDS)
    lines.extend(
        f"{'commission: ' + tier.value:<{width}}{_percent(config.commission_for(tier)):>10}"
        for tier in ProductTier
    )
    return "\n".join(lines)


def format_products_table(products: list[Product]) -> str:
    """Format products as a table. Returns a notice when the list is empty."""
    if not products:
        return "No products found."

    headers = ["Name", "Model", "Category", "Tier", "Price", "Subsidised"]
    widths = [18, 18, 10, 12, 10, 12]
    rows = [
        [p.name, p.model, p.category, p.tier.value, str(p.price), str(p.subsidy_price)]
        for p in products
    ]
    header_line = "  ".join(h.ljust(w) for h, w in zip(headers, widths, strict=True))
    lines = [header_line, "-" * len(header_line)]
    lines.extend(
        "  ".join(c.ljust(w) for c, w in zip(row, widths, strict=True)) for row in rows
    )
    return "\n".join(lines)


def format_json(data: Any) -> str:
    """Format data as pretty-printed JSON, writing Decimals as strings."""
    return json.dumps(data, indent=2, ensure_ascii=False, default=str)


def _open_store(db: str | None) -> tuple[Any, RateSettingsStore]:
    db_path = Path(db) if db else get_settings().rates_db_path
    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = init_rates_db(db_path)
    return conn, RateSettingsStore(conn)


def _run_quote(args: argparse.Namespace) -> str:
    price = parse_amount(args.price)
    group_discount = parse_amount(args.group_discount)
    tier = ProductTier(args.tier)
    channel = ChannelType(args.channel)

    conn, store = _open_store(args.db)
    try:
        rates = store.load()
    finally:
        close_rates_db(conn)

    result = evaluate(price, group_discount, tier, channel, rates)
    report = build_quote_report(result, tier, channel)
    if args.output_format == "json":
        return format_json(
            {"result": result.model_dump(mode="json"), "report": report.model_dump(mode="json")}
        )
    return format_quote_table(report)


def _run_rates(args: argparse.Namespace) -> str:
    conn, store = _open_store(args.db)
    try:
        if args.rates_command == "set":
            config = store.update(**parse_assignments(args.assignments))
        elif args.rates_command == "reset":
            config = store.reset()
        else:
            config = store.load()
    finally:
        close_rates_db(conn)

    if getattr(args, "output_format", "table") == "json":
        return format_json(rate_config_to_dict(config))
    return format_rates_table(config)


def _run_products(args: argparse.Namespace) -> str:
    catalog_path = Path(args.catalog) if args.catalog else get_settings().catalog_path
    catalog = load_catalog(catalog_path)
    if args.model:
        products = [find_product(catalog, args.model)]
    else:
        products = search_products(catalog, args.search)

    if args.output_format == "json":
        return format_json([p.model_dump(mode="json") for p in products])
    return format_products_table(products)


def main(argv: list[str] | None = None) -> int:
    """Parse arguments, run the command, and print its output.

    Returns:
        Process exit code: 0 on success, 1 on a domain error.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_cli_logging(verbose=args.verbose)

    handlers = {"quote": _run_quote, "rates": _run_rates, "products": _run_products}
    try:
        output = handlers[args.command](args)
    except PriceProError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
