"""Abstract read access to the backend's product catalog."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storeorder.domain.model.catalog import VersionCheck
from storeorder.domain.model.product import Product, ProductVariant, StorePrice


class CatalogGateway(ABC):

    @abstractmethod
    def check_data_version(self, table_name: str, client_version: int | None) -> VersionCheck:
        """Compare ``client_version`` with the server's; ship data only on mismatch.

        Raises BackendError if the call fails.
        """

    @abstractmethod
    def fetch_all_products(self) -> list[Product]:
        """Read every product directly, ordered by name."""

    @abstractmethod
    def fetch_variants(self, product_id: str) -> list[ProductVariant]:
        """Return the variants of one product, ordered by name."""

    @abstractmethod
    def fetch_store_prices(self, store_id: str) -> list[StorePrice]:
        """Return the price overrides configured for one store."""
