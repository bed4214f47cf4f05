"""Tests for the StoreCatalog query service."""

import pytest

from storeorder.application.product_cache import ProductCache
from storeorder.application.store_catalog import StoreCatalog
from storeorder.domain.exceptions import EntityNotFoundError
from storeorder.domain.model.product import ProductStatus, StorePrice
from storeorder.domain.model.value_objects import Money
from tests.fakes import (
    FakeCatalogGateway,
    InMemoryKeyValueStore,
    make_product,
    make_variant,
)


def _setup():
    gateway = FakeCatalogGateway(
        products=[
            make_product("p1", "Widget", wholesale="100", retail="150"),
            make_product("p2", "Gadget", wholesale="50", retail="80"),
            make_product("p3", "Relic", status=ProductStatus.DISCONTINUED),
        ],
        variants=[
            make_variant("v1", "p1", wholesale="120"),
            make_variant("v2", "p1", name="Blue / M", wholesale="125"),
            make_variant("v9", "p2"),
        ],
        store_prices={
            "s1": [
                StorePrice("p1", wholesale_price=Money.of("90")),
                StorePrice("p1", "v2", wholesale_price=Money.of("111")),
                StorePrice("p3", wholesale_price=Money.of("1")),
            ],
        },
    )
    cache = ProductCache(InMemoryKeyValueStore(), gateway)
    cache.refresh()
    return StoreCatalog(cache, gateway), gateway


class TestProductsForStore:

    def test_without_store_uses_base_prices_and_no_remote_call(self):
        catalog, gateway = _setup()

        priced = catalog.products_for_store(None)

        assert [p.id for p in priced] == ["p1", "p2"]
        assert priced[0].wholesale_price == Money.of("100")
        assert not priced[0].has_store_price
        assert gateway.store_price_fetches == []

    def test_store_override_replaces_wholesale_only(self):
        catalog, gateway = _setup()

        priced = {p.id: p for p in catalog.products_for_store("s1")}

        assert priced["p1"].wholesale_price == Money.of("90")
        assert priced["p1"].retail_price == Money.of("150")
        assert priced["p1"].has_store_price
        assert priced["p2"].wholesale_price == Money.of("50")
        assert not priced["p2"].has_store_price
        assert gateway.store_price_fetches == ["s1"]

    def test_inactive_products_hidden_even_with_override(self):
        catalog, _ = _setup()
        assert "p3" not in {p.id for p in catalog.products_for_store("s1")}

    def test_store_without_overrides(self):
        catalog, _ = _setup()
        priced = catalog.products_for_store("s2")
        assert [p.wholesale_price for p in priced] == [Money.of("100"), Money.of("50")]


class TestProductForStore:

    def test_single_product(self):
        catalog, _ = _setup()
        assert catalog.product_for_store("s1", "p1").wholesale_price == Money.of("90")

    def test_missing_product_raises(self):
        catalog, _ = _setup()
        with pytest.raises(EntityNotFoundError, match="nope"):
            catalog.product_for_store("s1", "nope")


class TestVariantsForStore:

    def test_variant_override_or_own_price(self):
        catalog, _ = _setup()

        variants = {v.id: v for v in catalog.variants_for_store("s1", "p1")}

        assert set(variants) == {"v1", "v2"}
        assert variants["v1"].effective_wholesale_price == Money.of("120")
        assert variants["v2"].effective_wholesale_price == Money.of("111")

    def test_without_store(self):
        catalog, gateway = _setup()
        variants = catalog.variants_for_store(None, "p2")
        assert [v.effective_wholesale_price for v in variants] == [Money.of("120")]
        assert gateway.store_price_fetches == []
