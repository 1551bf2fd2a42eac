"""Read-only product catalog."""

from pricepro.catalog.products import (
    DEFAULT_CATALOG_PATH,
    Product,
    find_product,
    load_catalog,
    search_products,
)

__all__ = [
    "DEFAULT_CATALOG_PATH",
    "Product",
    "find_product",
    "load_catalog",
    "search_products",
]
