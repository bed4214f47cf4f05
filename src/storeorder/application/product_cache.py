"""Application service: ProductCache.

Serves the global product list from local storage first, then
revalidates it against the backend with a cheap version check.  The
server only ships the full list when the client's version is behind.

If the version check itself fails, the cache degrades to a direct read
of the product table and reports ``RefreshStatus.DEGRADED``; a failure
of that direct read propagates to the caller.

The time of the last successful version check is persisted next to the
cache, so short-lived processes share one freshness window.
"""

from __future__ import annotations

import json
import logging
import math
import time
from typing import Callable

from storeorder.domain.exceptions import BackendError, ValidationError
from storeorder.domain.model.catalog import (
    ProductCacheEntry,
    RefreshResult,
    RefreshStatus,
)
from storeorder.domain.model.product import Product
from storeorder.domain.repository.catalog_gateway import CatalogGateway
from storeorder.domain.repository.key_value_store import KeyValueStore

logger = logging.getLogger(__name__)

CACHE_KEY = "products_cache_v2"
CHECKED_AT_KEY = "products_cache_checked_at"
PRODUCTS_TABLE = "products"
DEFAULT_FRESHNESS_SECONDS = 300.0


class ProductCache:

    def __init__(
        self,
        storage: KeyValueStore,
        gateway: CatalogGateway,
        freshness_seconds: float = DEFAULT_FRESHNESS_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._storage = storage
        self._gateway = gateway
        self._freshness_seconds = freshness_seconds
        self._clock = clock
        self._entry: ProductCacheEntry | None = None
        self._products: list[Product] = []
        self._version: int | None = None
        self._refreshed_at: float | None = None
        self._loaded = False

    # --- Snapshot -------------------------------------------------------------

    @property
    def products(self) -> list[Product]:
        return list(self._products)

    @property
    def version(self) -> int | None:
        return self._version

    @property
    def active_products(self) -> list[Product]:
        return [p for p in self._products if p.is_active]

    @property
    def is_stale(self) -> bool:
        """True when no refresh has succeeded within the freshness window."""
        if self._refreshed_at is None:
            return True
        elapsed = self._clock() - self._refreshed_at
        # A check time in the future means the clock moved; revalidate
        return elapsed < 0 or elapsed >= self._freshness_seconds

    def get_product_by_id(self, product_id: str) -> Product | None:
        for product in self._products:
            if product.id == product_id:
                return product
        return None

    def get_product_by_sku(self, sku: str) -> Product | None:
        for product in self._products:
            if product.sku == sku:
                return product
        return None

    # --- Lifecycle ------------------------------------------------------------

    def load(self) -> RefreshResult:
        """Read the persisted cache for optimistic display.

        A corrupt blob is dropped and treated as a cold start.
        """
        self._loaded = True
        self._entry = self._read_entry()
        if self._entry is None:
            self._products = []
            self._version = None
            self._refreshed_at = None
        else:
            self._products = list(self._entry.products)
            self._version = self._entry.version
            self._refreshed_at = self._read_checked_at()
            logger.debug(
                "Loaded %d cached products at version %s",
                len(self._products),
                self._version,
            )
        return self._result(RefreshStatus.STALE)

    def refresh(self) -> RefreshResult:
        """Revalidate against the server's version for the products table."""
        if not self._loaded:
            self.load()
        client_version = self._entry.version if self._entry is not None else None
        logger.info("Checking product version with server, client version: %s", client_version)

        try:
            check = self._gateway.check_data_version(PRODUCTS_TABLE, client_version)
        except BackendError as exc:
            logger.error("Version check failed, falling back to direct fetch: %s", exc)
            return self._degraded_fetch(client_version)

        self._mark_checked()

        if not check.needs_update and self._entry is not None:
            logger.info("Using cached products, version: %s", check.version)
            if check.version != self._entry.version:
                self._store(ProductCacheEntry(check.version, self._entry.products))
            return self._result(RefreshStatus.FRESH)

        products = tuple(check.data or ())
        logger.info(
            "Received %d products from server, version: %s",
            len(products),
            check.version,
        )
        self._store(ProductCacheEntry(check.version, products))
        return self._result(RefreshStatus.FRESH, replaced=True)

    def force_refresh(self) -> RefreshResult:
        """Discard the local cache entirely, then refresh unconditionally."""
        self._storage.delete(CACHE_KEY)
        self._storage.delete(CHECKED_AT_KEY)
        self._loaded = True
        self._entry = None
        self._version = None
        self._refreshed_at = None
        return self.refresh()

    def refresh_if_stale(self) -> RefreshResult:
        """Stale-while-revalidate: only hit the server once the window expires."""
        if not self.is_stale:
            return self._result(RefreshStatus.FRESH)
        return self.refresh()

    # --- Internal helpers -----------------------------------------------------

    def _degraded_fetch(self, client_version: int | None) -> RefreshResult:
        # Not persisted: the fetched list is not tied to a server version.
        self._products = self._gateway.fetch_all_products()
        self._version = client_version or 0
        return self._result(RefreshStatus.DEGRADED, replaced=True)

    def _mark_checked(self) -> None:
        self._refreshed_at = self._clock()
        self._storage.set(CHECKED_AT_KEY, json.dumps(self._refreshed_at).encode("utf-8"))

    def _read_checked_at(self) -> float | None:
        blob = self._storage.get(CHECKED_AT_KEY)
        if blob is None:
            return None
        try:
            checked_at = float(json.loads(blob))
            if not math.isfinite(checked_at):
                raise ValueError(f"not a timestamp: {checked_at}")
            return checked_at
        except (ValueError, TypeError) as exc:
            logger.warning("Discarding corrupt cache check time: %s", exc)
            self._storage.delete(CHECKED_AT_KEY)
            return None

    def _store(self, entry: ProductCacheEntry) -> None:
        payload = json.dumps(entry.to_json()).encode("utf-8")
        self._storage.set(CACHE_KEY, payload)
        self._entry = entry
        self._products = list(entry.products)
        self._version = entry.version

    def _read_entry(self) -> ProductCacheEntry | None:
        blob = self._storage.get(CACHE_KEY)
        if blob is None:
            return None
        try:
            return ProductCacheEntry.from_json(json.loads(blob))
        except (ValueError, ValidationError) as exc:
            # json.JSONDecodeError and UnicodeDecodeError are ValueErrors
            logger.warning("Discarding corrupt product cache: %s", exc)
            self._storage.delete(CACHE_KEY)
            return None

    def _result(self, status: RefreshStatus, replaced: bool = False) -> RefreshResult:
        return RefreshResult(
            status=status,
            version=self._version,
            products=list(self._products),
            replaced=replaced,
        )
