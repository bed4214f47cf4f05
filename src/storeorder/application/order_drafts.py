"""Application service: OrderDraftStore.

Keeps one editable draft order per store and persists the whole
collection after every mutation.  All operations are total: a missing
store key behaves like an empty draft, and quantities of zero or less
are the removal path, not an error.
"""

from __future__ import annotations

import copy
import json
import logging
import time
from typing import Callable

from storeorder.domain.exceptions import ValidationError
from storeorder.domain.model.draft import OrderDraft, OrderDraftItem, item_key
from storeorder.domain.model.product import PricedProduct, Product, ProductVariant
from storeorder.domain.model.value_objects import Money
from storeorder.domain.repository.key_value_store import KeyValueStore
from storeorder.domain.service.pricing import effective_price

logger = logging.getLogger(__name__)

DRAFTS_KEY = "order-drafts-storage"


def _epoch_ms() -> int:
    return int(time.time() * 1000)


class OrderDraftStore:

    def __init__(
        self,
        storage: KeyValueStore,
        clock: Callable[[], int] = _epoch_ms,
    ) -> None:
        self._storage = storage
        self._clock = clock
        self._drafts: dict[str, OrderDraft] = self._load()

    # --- Queries --------------------------------------------------------------

    def get_draft(self, store_id: str) -> OrderDraft:
        """Return a copy of the store's draft, or a fresh (unsaved) empty one."""
        return copy.deepcopy(self._peek(store_id))

    def store_ids(self) -> list[str]:
        return list(self._drafts)

    def get_total_items(self, store_id: str) -> int:
        return self._peek(store_id).total_items

    def get_total_amount(self, store_id: str) -> Money:
        return self._peek(store_id).total_amount

    def get_item_quantity(
        self, store_id: str, product_id: str, variant_id: str | None = None
    ) -> int:
        return self._peek(store_id).quantity_of(product_id, variant_id)

    def get_total_product_quantity(self, store_id: str, product_id: str) -> int:
        return self._peek(store_id).product_quantity(product_id)

    # --- Mutations ------------------------------------------------------------

    def add_item(
        self,
        store_id: str,
        product: Product | PricedProduct,
        variant: ProductVariant | None = None,
    ) -> OrderDraftItem:
        """Add one unit of ``product`` (as ``variant``) to the store's draft.

        A repeat add of the same product/variant bumps the quantity and
        keeps the price captured on the first add.
        """
        draft = self._draft_for_update(store_id)
        if variant is None:
            candidate = OrderDraftItem(
                id=item_key(product.id),
                product_id=product.id,
                name=product.name,
                sku=product.sku,
                price=effective_price(product),
            )
        else:
            candidate = OrderDraftItem(
                id=item_key(product.id, variant.id),
                product_id=product.id,
                variant_id=variant.id,
                name=f"{product.name} - {variant.name}",
                variant_name=variant.name,
                sku=variant.sku or product.sku,
                price=effective_price(product, variant),
                options=variant.options,
            )
        item = draft.add(candidate)
        logger.debug("Store %s: %s quantity now %d", store_id, item.id, item.quantity)
        self._commit(store_id, draft)
        return item

    def update_quantity(self, store_id: str, item_id: str, quantity: int) -> None:
        draft = self._drafts.get(store_id)
        if draft is None:
            return
        draft.set_quantity(item_id, quantity)
        self._commit(store_id, draft)

    def remove_item(self, store_id: str, item_id: str) -> None:
        draft = self._drafts.get(store_id)
        if draft is None:
            return
        draft.remove(item_id)
        self._commit(store_id, draft)

    def update_notes(self, store_id: str, notes: str) -> None:
        draft = self._draft_for_update(store_id)
        draft.notes = notes
        self._commit(store_id, draft)

    def clear_draft(self, store_id: str) -> None:
        """Drop the store's draft entirely, not just its items."""
        self._drafts.pop(store_id, None)
        self._persist()

    # --- Per-store accessor ---------------------------------------------------

    def for_store(self, store_id: str | None) -> StoreDraft | InertStoreDraft:
        """Bind the operations to one store; inert when no store is selected."""
        if not store_id:
            return InertStoreDraft()
        return StoreDraft(self, store_id)

    # --- Internal helpers -----------------------------------------------------

    def _peek(self, store_id: str) -> OrderDraft:
        draft = self._drafts.get(store_id)
        if draft is None:
            return OrderDraft(updated_at=self._clock())
        return draft

    def _draft_for_update(self, store_id: str) -> OrderDraft:
        return self._drafts.get(store_id) or OrderDraft(updated_at=self._clock())

    def _commit(self, store_id: str, draft: OrderDraft) -> None:
        draft.touch(self._clock())
        self._drafts[store_id] = draft
        self._persist()

    def _persist(self) -> None:
        payload = {"drafts": {sid: d.to_json() for sid, d in self._drafts.items()}}
        self._storage.set(DRAFTS_KEY, json.dumps(payload).encode("utf-8"))

    def _load(self) -> dict[str, OrderDraft]:
        blob = self._storage.get(DRAFTS_KEY)
        if blob is None:
            return {}
        try:
            raw = json.loads(blob)
            return {sid: OrderDraft.from_json(d) for sid, d in raw["drafts"].items()}
        except (ValueError, KeyError, TypeError, AttributeError, ValidationError) as exc:
            logger.warning("Discarding corrupt order drafts: %s", exc)
            self._storage.delete(DRAFTS_KEY)
            return {}


class StoreDraft:
    """The draft operations of one store, with ``store_id`` already bound."""

    def __init__(self, store: OrderDraftStore, store_id: str) -> None:
        self._store = store
        self.store_id = store_id

    @property
    def draft(self) -> OrderDraft:
        return self._store.get_draft(self.store_id)

    @property
    def items(self) -> list[OrderDraftItem]:
        return self.draft.items

    @property
    def notes(self) -> str:
        return self.draft.notes

    @property
    def total_items(self) -> int:
        return self._store.get_total_items(self.store_id)

    @property
    def total_amount(self) -> Money:
        return self._store.get_total_amount(self.store_id)

    def add_item(
        self, product: Product | PricedProduct, variant: ProductVariant | None = None
    ) -> OrderDraftItem:
        return self._store.add_item(self.store_id, product, variant)

    def update_quantity(self, item_id: str, quantity: int) -> None:
        self._store.update_quantity(self.store_id, item_id, quantity)

    def remove_item(self, item_id: str) -> None:
        self._store.remove_item(self.store_id, item_id)

    def update_notes(self, notes: str) -> None:
        self._store.update_notes(self.store_id, notes)

    def clear_draft(self) -> None:
        self._store.clear_draft(self.store_id)

    def get_item_quantity(self, product_id: str, variant_id: str | None = None) -> int:
        return self._store.get_item_quantity(self.store_id, product_id, variant_id)

    def get_total_product_quantity(self, product_id: str) -> int:
        return self._store.get_total_product_quantity(self.store_id, product_id)


class InertStoreDraft:
    """Stand-in used before a store is selected: reads are empty, writes do nothing."""

    store_id = None

    @property
    def draft(self) -> OrderDraft:
        return OrderDraft()

    @property
    def items(self) -> list[OrderDraftItem]:
        return []

    @property
    def notes(self) -> str:
        return ""

    @property
    def total_items(self) -> int:
        return 0

    @property
    def total_amount(self) -> Money:
        return Money.zero()

    def add_item(
        self, product: Product | PricedProduct, variant: ProductVariant | None = None
    ) -> None:
        return None

    def update_quantity(self, item_id: str, quantity: int) -> None:
        return None

    def remove_item(self, item_id: str) -> None:
        return None

    def update_notes(self, notes: str) -> None:
        return None

    def clear_draft(self) -> None:
        return None

    def get_item_quantity(self, product_id: str, variant_id: str | None = None) -> int:
        return 0

    def get_total_product_quantity(self, product_id: str) -> int:
        return 0
