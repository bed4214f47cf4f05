"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry display-ready data from the application layer to the CLI
without exposing domain internals.
"""

from __future__ import annotations

from dataclasses import dataclass

from storeorder.domain.model.draft import OrderDraft


@dataclass(frozen=True)
class DraftLineDTO:
    item_id: str
    name: str
    sku: str
    quantity: int
    unit_price: str  # formatted, e.g. "$15.00"
    line_total: str
    options: list[str]


@dataclass(frozen=True)
class DraftDTO:
    store_id: str
    notes: str
    items: list[DraftLineDTO]
    total_items: int
    total: str

    @staticmethod
    def from_draft(store_id: str, draft: OrderDraft) -> DraftDTO:
        return DraftDTO(
            store_id=store_id,
            notes=draft.notes,
            items=[
                DraftLineDTO(
                    item_id=item.id,
                    name=item.name,
                    sku=item.sku,
                    quantity=item.quantity,
                    unit_price=str(item.price),
                    line_total=str(item.line_total),
                    options=list(item.options or []),
                )
                for item in draft.items
            ],
            total_items=draft.total_items,
            total=str(draft.total_amount),
        )


@dataclass(frozen=True)
class SubmittedOrderDTO:
    order_id: str
    store_id: str
    item_count: int
    total: str
