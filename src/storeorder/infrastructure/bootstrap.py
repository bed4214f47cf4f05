"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.  Services are built
per call so tests (and each CLI command) get isolated instances instead
of sharing process-wide state.
"""

from __future__ import annotations

import logging

from storeorder.application.order_drafts import OrderDraftStore
from storeorder.application.product_cache import ProductCache
from storeorder.application.store_catalog import StoreCatalog
from storeorder.application.submit_draft import SubmitDraftHandler
from storeorder.domain.exceptions import BackendError
from storeorder.infrastructure.backend.client import BackendClient
from storeorder.infrastructure.backend.http_catalog_gateway import HttpCatalogGateway
from storeorder.infrastructure.backend.http_order_gateway import HttpOrderGateway
from storeorder.infrastructure.config import get_settings
from storeorder.infrastructure.persistence.file_key_value_store import (
    FileKeyValueStore,
)

logger = logging.getLogger(__name__)


def key_value_store() -> FileKeyValueStore:
    return FileKeyValueStore(get_settings().data_dir)


def backend_client() -> BackendClient:
    return BackendClient(get_settings())


def product_cache(client: BackendClient, revalidate: bool = True) -> ProductCache:
    """Load the persisted cache and, unless told not to, revalidate it once stale.

    A failed revalidation is logged and the persisted (stale) list is served.
    """
    cache = ProductCache(
        storage=key_value_store(),
        gateway=HttpCatalogGateway(client),
        freshness_seconds=get_settings().cache_freshness_seconds,
    )
    cache.load()
    if revalidate:
        try:
            cache.refresh_if_stale()
        except BackendError as exc:
            logger.warning("Product refresh failed, serving cached list: %s", exc)
    return cache


def store_catalog(cache: ProductCache, client: BackendClient) -> StoreCatalog:
    return StoreCatalog(cache, HttpCatalogGateway(client))


def draft_store() -> OrderDraftStore:
    return OrderDraftStore(key_value_store())


def submit_draft_handler(drafts: OrderDraftStore, client: BackendClient) -> SubmitDraftHandler:
    return SubmitDraftHandler(drafts, HttpOrderGateway(client))
