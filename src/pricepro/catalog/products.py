"""Product list loaded from YAML, with search and lookup by model number."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

import structlog
import yaml  # type: ignore[import-untyped]
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from pricepro.domain.errors import CatalogError, UnknownProductError
from pricepro.domain.types import ProductTier

logger = structlog.get_logger()

DEFAULT_CATALOG_PATH = Path(__file__).resolve().parent / "products.yaml"


class Product(BaseModel):
    """A listed air-conditioner product.

    ``subsidy_price`` is the listed post-subsidy price as published, not a
    value derived by the subsidy rule.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    model: str
    category: str
    tier: ProductTier
    price: Decimal
    subsidy_price: Decimal

    @field_validator("price", "subsidy_price", mode="before")
    @classmethod
    def convert_float_prices(cls, v: object) -> object:
        """Convert float prices (unquoted YAML numbers) through ``str``."""
        if isinstance(v, float):
            return Decimal(str(v))
        return v


def load_catalog(path: Path | None = None) -> list[Product]:
    """Load the product list from a YAML file.

    The file holds either a mapping with a ``products`` list or a bare list
    of product entries.

    Args:
        path: Path to the YAML file. Defaults to the bundled product list.

    Returns:
        Products in file order. An empty file yields an empty list.

    Raises:
        CatalogError: If the file is missing or cannot be read as a product list.
    """
    catalog_path = path or DEFAULT_CATALOG_PATH
    if not catalog_path.exists():
        raise CatalogError(f"Product catalog not found: {catalog_path}")

    try:
        raw = yaml.safe_load(catalog_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise CatalogError(f"Invalid YAML in product catalog {catalog_path}: {exc}") from exc

    if raw is None:
        return []
    entries = raw.get("products") if isinstance(raw, dict) else raw
    if entries is None:
        return []
    if not isinstance(entries, list):
        raise CatalogError(f"Product catalog {catalog_path} must contain a list of products")

    try:
        products = [Product.model_validate(entry) for entry in entries]
    except ValidationError as exc:
        raise CatalogError(f"Invalid product in catalog {catalog_path}: {exc}") from exc
    logger.debug("catalog_loaded", path=str(catalog_path), count=len(products))
    return products


def search_products(products: list[Product], query: str | None) -> list[Product]:
    """Filter *products* by a case-insensitive substring of name, model, or category.

    A blank query returns every product.
    """
    if not query or not query.strip():
        return list(products)
    needle = query.strip().casefold()
    return [
        p
        for p in products
        if needle in p.name.casefold()
        or needle in p.model.casefold()
        or needle in p.category.casefold()
    ]


def find_product(products: list[Product], model: str) -> Product:
    """Look up a product by exact model number (case-insensitive).

    Raises:
        UnknownProductError: If no product has that model number.
    """
    wanted = model.strip().casefold()
    for product in products:
        if product.model.casefold() == wanted:
            return product
    raise UnknownProductError(model)
