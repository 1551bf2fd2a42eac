"""Tests for the YAML product catalog."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

import pytest
from pricepro.catalog.products import (
    DEFAULT_CATALOG_PATH,
    Product,
    find_product,
    load_catalog,
    search_products,
)
from pricepro.domain.errors import CatalogError, UnknownProductError
from pricepro.domain.types import ProductTier


@pytest.fixture
def catalog() -> list[Product]:
    """The bundled product list."""
    return load_catalog()


class TestLoadCatalog:
    def test_bundled_catalog_exists(self):
        assert DEFAULT_CATALOG_PATH.exists()

    def test_bundled_catalog_contents(self, catalog: list[Product]):
        assert [p.model for p in catalog] == [
            "KFR-26GW/NhMa1BG",
            "KFR-35GW/NhMa1BG",
            "KFR-26GW/NhMb1BG",
            "KFR-50LW/NhQa1BG",
        ]
        assert catalog[0].price == Decimal("2999")
        assert catalog[0].subsidy_price == Decimal("2549.15")
        assert catalog[-1].tier is ProductTier.HIGH_RANGE

    def test_custom_file(self, tmp_path: Path):
        path = tmp_path / "products.yaml"
        path.write_text(
            "products:\n"
            "  - name: Test 72\n"
            "    model: KFR-72LW\n"
            "    category: cabinet\n"
            "    tier: ordinary\n"
            "    price: 8999\n"
            "    subsidy_price: 7649.15\n",
            encoding="utf-8",
        )

        products = load_catalog(path)

        assert len(products) == 1
        assert products[0].price == Decimal("8999")
        assert products[0].subsidy_price == Decimal("7649.15")

    def test_empty_file_yields_empty_list(self, tmp_path: Path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")

        assert load_catalog(path) == []

    def test_missing_file_raises(self, tmp_path: Path):
        with pytest.raises(CatalogError, match="not found"):
            load_catalog(tmp_path / "nope.yaml")

    def test_unknown_tier_raises(self, tmp_path: Path):
        path = tmp_path / "bad.yaml"
        path.write_text(
            "products:\n"
            "  - {name: X, model: Y, category: wall, tier: deluxe, price: '1', subsidy_price: '1'}\n",
            encoding="utf-8",
        )

        with pytest.raises(CatalogError, match="Invalid product"):
            load_catalog(path)

    def test_bare_list_is_accepted(self, tmp_path: Path):
        path = tmp_path / "list.yaml"
        path.write_text(
            "- {name: X, model: KFR-35GW, category: wall, tier: low_wall, price: '2999', subsidy_price: '2549.15'}\n",
            encoding="utf-8",
        )

        products = load_catalog(path)

        assert [p.model for p in products] == ["KFR-35GW"]
        assert products[0].tier is ProductTier.LOW_WALL

    def test_invalid_yaml_raises(self, tmp_path: Path):
        path = tmp_path / "broken.yaml"
        path.write_text("products: [unclosed\n", encoding="utf-8")

        with pytest.raises(CatalogError, match="Invalid YAML"):
            load_catalog(path)

    def test_products_must_be_a_list(self, tmp_path: Path):
        path = tmp_path / "scalar.yaml"
        path.write_text("products: 42\n", encoding="utf-8")

        with pytest.raises(CatalogError, match="list of products"):
            load_catalog(path)


class TestSearchProducts:
    @pytest.mark.parametrize("query", [None, "", "  "], ids=["none", "empty", "blank"])
    def test_blank_query_returns_everything(self, catalog: list[Product], query: str | None):
        assert search_products(catalog, query) == catalog

    def test_matches_name_case_insensitively(self, catalog: list[Product]):
        results = search_products(catalog, "yunjia")
        assert [p.name for p in results] == ["Yunjia Pro 26", "Yunjia Pro 35"]

    def test_matches_model(self, catalog: list[Product]):
        assert [p.name for p in search_products(catalog, "nhmb1")] == ["Yunjin Pro 26"]

    def test_matches_category(self, catalog: list[Product]):
        assert [p.category for p in search_products(catalog, "cabinet")] == ["cabinet"]

    def test_no_match(self, catalog: list[Product]):
        assert search_products(catalog, "portable") == []


class TestFindProduct:
    def test_finds_by_model(self, catalog: list[Product]):
        assert find_product(catalog, "kfr-50lw/nhqa1bg").name == "Quannengwang 50"

    def test_unknown_model_raises(self, catalog: list[Product]):
        with pytest.raises(UnknownProductError):
            find_product(catalog, "KFR-00")
