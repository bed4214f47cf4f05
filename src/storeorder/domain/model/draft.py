"""OrderDraft aggregate: the in-progress order (cart) of one store.

A draft owns its line items.  Items are keyed by product + variant
identity, so adding the same combination twice bumps the quantity
instead of creating a second line.  Unlike the submitted order, a draft
has no failure states: every mutation is total.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any

from storeorder.domain.model.value_objects import Money

BASE_VARIANT_KEY = "base"


def item_key(product_id: str, variant_id: str | None = None) -> str:
    """Deduplication key of a draft line: ``<product>-<variant|base>``."""
    return f"{product_id}-{variant_id or BASE_VARIANT_KEY}"


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass
class OrderDraftItem:
    """A draft line.  ``price`` is frozen at the moment the item was added."""

    id: str
    product_id: str
    name: str
    sku: str
    price: Money
    quantity: int = 1
    variant_id: str | None = None
    variant_name: str | None = None
    options: list[str] | None = None

    @property
    def line_total(self) -> Money:
        return self.price * self.quantity

    def to_json(self) -> dict[str, Any]:
        raw: dict[str, Any] = {
            "id": self.id,
            "productId": self.product_id,
            "name": self.name,
            "sku": self.sku,
            "price": self.price.to_json(),
            "quantity": self.quantity,
        }
        if self.variant_id is not None:
            raw["variantId"] = self.variant_id
        if self.variant_name is not None:
            raw["variantName"] = self.variant_name
        if self.options is not None:
            raw["options"] = list(self.options)
        return raw

    @staticmethod
    def from_json(raw: dict[str, Any]) -> OrderDraftItem:
        return OrderDraftItem(
            id=raw["id"],
            product_id=raw["productId"],
            name=raw["name"],
            sku=raw["sku"],
            price=Money.of(raw["price"]),
            quantity=int(raw["quantity"]),
            variant_id=raw.get("variantId"),
            variant_name=raw.get("variantName"),
            options=raw.get("options"),
        )


@dataclass
class OrderDraft:
    items: list[OrderDraftItem] = field(default_factory=list)
    notes: str = ""
    updated_at: int = field(default_factory=_now_ms)  # epoch milliseconds

    # --- Mutations ------------------------------------------------------------

    def add(self, item: OrderDraftItem) -> OrderDraftItem:
        """Append ``item`` or, if its key is already present, bump that line by one."""
        existing = self.find(item.id)
        if existing is not None:
            existing.quantity += 1
            return existing
        self.items.append(item)
        return item

    def set_quantity(self, item_id: str, quantity: int) -> None:
        """Set a line's quantity; zero or below removes the line."""
        if quantity <= 0:
            self.remove(item_id)
            return
        existing = self.find(item_id)
        if existing is not None:
            existing.quantity = quantity

    def remove(self, item_id: str) -> None:
        self.items = [item for item in self.items if item.id != item_id]

    def touch(self, now_ms: int) -> None:
        self.updated_at = now_ms

    # --- Queries --------------------------------------------------------------

    def find(self, item_id: str) -> OrderDraftItem | None:
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def total_items(self) -> int:
        return sum(item.quantity for item in self.items)

    @property
    def total_amount(self) -> Money:
        result = Money.zero()
        for item in self.items:
            result = result + item.line_total
        return result

    def quantity_of(self, product_id: str, variant_id: str | None = None) -> int:
        item = self.find(item_key(product_id, variant_id))
        return item.quantity if item is not None else 0

    def product_quantity(self, product_id: str) -> int:
        """Quantity of ``product_id`` summed across all of its variants."""
        return sum(item.quantity for item in self.items if item.product_id == product_id)

    # --- Serialization --------------------------------------------------------

    def to_json(self) -> dict[str, Any]:
        return {
            "items": [item.to_json() for item in self.items],
            "notes": self.notes,
            "updatedAt": self.updated_at,
        }

    @staticmethod
    def from_json(raw: dict[str, Any]) -> OrderDraft:
        return OrderDraft(
            # Lines saved with quantity < 1 are not valid draft lines
            items=[
                item
                for item in (OrderDraftItem.from_json(i) for i in raw.get("items", []))
                if item.quantity >= 1
            ],
            notes=raw.get("notes") or "",
            updated_at=int(raw.get("updatedAt") or 0),
        )
