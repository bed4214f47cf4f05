"""Order rows that a draft is projected into at checkout.

The order itself lives on the backend; the client only builds the
insert payloads.  Each order item copies the draft line's frozen price
as ``unit_price``, so what the user saw in the cart is what is ordered.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from storeorder.domain.exceptions import ValidationError
from storeorder.domain.model.draft import OrderDraft, OrderDraftItem
from storeorder.domain.model.value_objects import Money


class OrderSource(Enum):
    FRONTEND = "frontend"
    ADMIN_PROXY = "admin_proxy"


@dataclass(frozen=True)
class NewOrder:
    store_id: str
    created_by: str
    notes: str | None
    source_type: OrderSource

    def to_row(self) -> dict[str, Any]:
        return {
            "store_id": self.store_id,
            "created_by": self.created_by,
            "notes": self.notes,
            "source_type": self.source_type.value,
        }


@dataclass(frozen=True)
class NewOrderItem:
    product_id: str
    variant_id: str | None
    store_id: str
    quantity: int
    unit_price: Money

    @staticmethod
    def from_draft_item(item: OrderDraftItem, store_id: str) -> NewOrderItem:
        return NewOrderItem(
            product_id=item.product_id,
            variant_id=item.variant_id,
            store_id=store_id,
            quantity=item.quantity,
            unit_price=item.price,
        )

    def to_row(self, order_id: str) -> dict[str, Any]:
        return {
            "order_id": order_id,
            "product_id": self.product_id,
            "variant_id": self.variant_id,
            "store_id": self.store_id,
            "quantity": self.quantity,
            "unit_price": self.unit_price.to_json(),
        }


@dataclass(frozen=True)
class OrderSubmission:
    """Everything needed to turn one store's draft into an order."""

    order: NewOrder
    items: tuple[NewOrderItem, ...]

    @property
    def total(self) -> Money:
        result = Money.zero()
        for item in self.items:
            result = result + item.unit_price * item.quantity
        return result

    @staticmethod
    def from_draft(
        store_id: str,
        created_by: str,
        draft: OrderDraft,
        source_type: OrderSource,
    ) -> OrderSubmission:
        """Build the insert payloads, enforcing the checkout preconditions."""
        if draft.is_empty:
            raise ValidationError("Cart is empty")
        if not store_id or not created_by:
            raise ValidationError("Store and user are required to submit an order")

        notes = draft.notes.strip() or None
        return OrderSubmission(
            order=NewOrder(
                store_id=store_id,
                created_by=created_by,
                notes=notes,
                source_type=source_type,
            ),
            items=tuple(NewOrderItem.from_draft_item(i, store_id) for i in draft.items),
        )
