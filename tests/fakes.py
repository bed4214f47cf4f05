"""In-memory fakes for testing.

These implement the same abstract interfaces as the file store and the
HTTP gateways but keep everything in dicts and lists. No file I/O, no
network, and every call is recorded so tests can assert on traffic.
"""

from __future__ import annotations

from typing import Any

from storeorder.domain.exceptions import BackendError
from storeorder.domain.model.catalog import VersionCheck
from storeorder.domain.model.product import (
    Product,
    ProductStatus,
    ProductVariant,
    StorePrice,
)
from storeorder.domain.model.value_objects import Money
from storeorder.domain.repository.catalog_gateway import CatalogGateway
from storeorder.domain.repository.key_value_store import KeyValueStore
from storeorder.domain.repository.order_gateway import OrderGateway


def make_product(
    product_id: str = "p1",
    name: str = "Widget",
    wholesale: str = "100",
    retail: str = "150",
    status: ProductStatus = ProductStatus.ACTIVE,
    sku: str | None = None,
) -> Product:
    return Product(
        id=product_id,
        sku=sku or f"SKU-{product_id}",
        name=name,
        base_wholesale_price=Money.of(wholesale),
        base_retail_price=Money.of(retail),
        status=status,
    )


def make_variant(
    variant_id: str = "v1",
    product_id: str = "p1",
    name: str = "Red / L",
    wholesale: str = "120",
    effective: str | None = None,
    options: tuple[str | None, str | None, str | None] = ("Red", "L", None),
) -> ProductVariant:
    return ProductVariant(
        id=variant_id,
        product_id=product_id,
        sku=f"SKU-{product_id}-{variant_id}",
        name=name,
        wholesale_price=Money.of(wholesale),
        retail_price=Money.of("200"),
        option_1=options[0],
        option_2=options[1],
        option_3=options[2],
        effective_wholesale_price=Money.optional(effective),
    )


class InMemoryKeyValueStore(KeyValueStore):

    def __init__(self, initial: dict[str, bytes] | None = None) -> None:
        self._store: dict[str, bytes] = dict(initial or {})
        self.writes_by_key: dict[str, int] = {}

    def get(self, key: str) -> bytes | None:
        return self._store.get(key)

    def set(self, key: str, value: bytes) -> None:
        self.writes_by_key[key] = self.writes_by_key.get(key, 0) + 1
        self._store[key] = value

    def delete(self, key: str) -> None:
        self._store.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._store)


class FakeCatalogGateway(CatalogGateway):
    """A backend whose catalog is a list of products at a given version."""

    def __init__(
        self,
        products: list[Product] | None = None,
        version: int = 1,
        variants: list[ProductVariant] | None = None,
        store_prices: dict[str, list[StorePrice]] | None = None,
    ) -> None:
        self.products = list(products or [])
        self.version = version
        self.variants = list(variants or [])
        self.store_prices = dict(store_prices or {})
        self.fail_version_check = False
        self.fail_fetch = False
        self.version_checks: list[int | None] = []
        self.data_transfers = 0
        self.direct_fetches = 0
        self.store_price_fetches: list[str] = []

    def check_data_version(self, table_name: str, client_version: int | None) -> VersionCheck:
        self.version_checks.append(client_version)
        if self.fail_version_check:
            raise BackendError("check-data-version unreachable")
        if client_version is not None and client_version == self.version:
            return VersionCheck(needs_update=False, version=self.version, data=None)
        self.data_transfers += 1
        return VersionCheck(needs_update=True, version=self.version, data=list(self.products))

    def fetch_all_products(self) -> list[Product]:
        self.direct_fetches += 1
        if self.fail_fetch:
            raise BackendError("products table unreachable")
        return sorted(self.products, key=lambda p: p.name)

    def fetch_variants(self, product_id: str) -> list[ProductVariant]:
        return [v for v in self.variants if v.product_id == product_id]

    def fetch_store_prices(self, store_id: str) -> list[StorePrice]:
        self.store_price_fetches.append(store_id)
        return list(self.store_prices.get(store_id, []))


class FakeOrderGateway(OrderGateway):

    def __init__(self) -> None:
        self.orders: list[dict[str, Any]] = []
        self.order_items: list[dict[str, Any]] = []
        self.fail_items = False

    def insert_order(self, row: dict[str, Any]) -> dict[str, Any]:
        created = {"id": f"order-{len(self.orders) + 1}", **row}
        self.orders.append(created)
        return created

    def insert_order_items(self, rows: list[dict[str, Any]]) -> None:
        if self.fail_items:
            raise BackendError("order_items insert rejected")
        self.order_items.extend(rows)
