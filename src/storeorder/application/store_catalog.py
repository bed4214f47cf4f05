"""Application service: Store Catalog (query).

Merges one store's price overrides onto the cached product list.
Without a store, active products are shown at base prices and no
remote call is made.
"""

from __future__ import annotations

from storeorder.application.product_cache import ProductCache
from storeorder.domain.exceptions import EntityNotFoundError
from storeorder.domain.model.product import PricedProduct, ProductVariant, StorePrice
from storeorder.domain.repository.catalog_gateway import CatalogGateway
from storeorder.domain.service.pricing import price_product, price_variant


class StoreCatalog:

    def __init__(self, cache: ProductCache, gateway: CatalogGateway) -> None:
        self._cache = cache
        self._gateway = gateway

    def store_prices(self, store_id: str | None) -> list[StorePrice]:
        if not store_id:
            return []
        return self._gateway.fetch_store_prices(store_id)

    def products_for_store(self, store_id: str | None) -> list[PricedProduct]:
        """Active products priced for ``store_id`` (base prices if None)."""
        overrides = self.store_prices(store_id)
        source = self._cache.products if store_id else self._cache.active_products
        priced = [price_product(p, overrides) for p in source]
        return [p for p in priced if p.product.is_active]

    def product_for_store(self, store_id: str | None, product_id: str) -> PricedProduct:
        product = self._cache.get_product_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product '{product_id}' not found")
        return price_product(product, self.store_prices(store_id))

    def variants_for_store(self, store_id: str | None, product_id: str) -> list[ProductVariant]:
        """The product's variants, each carrying the store's effective price."""
        overrides = self.store_prices(store_id)
        variants = self._gateway.fetch_variants(product_id)
        return [price_variant(v, overrides) for v in variants]
