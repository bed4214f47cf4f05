"""Unit tests for projecting a draft into order rows."""

import pytest

from storeorder.domain.exceptions import ValidationError
from storeorder.domain.model.draft import OrderDraft, OrderDraftItem
from storeorder.domain.model.order import OrderSource, OrderSubmission
from storeorder.domain.model.value_objects import Money


def _draft(notes: str = "") -> OrderDraft:
    return OrderDraft(
        items=[
            OrderDraftItem(
                id="p1-base", product_id="p1", name="Widget", sku="W", price=Money.of("100"), quantity=2
            ),
            OrderDraftItem(
                id="p2-v1",
                product_id="p2",
                variant_id="v1",
                name="Gadget - Red",
                sku="G-R",
                price=Money.of("45.5"),
            ),
        ],
        notes=notes,
    )


class TestOrderSubmission:

    def test_rows_copy_frozen_prices(self):
        submission = OrderSubmission.from_draft("s1", "u1", _draft(), OrderSource.FRONTEND)
        rows = [item.to_row("o1") for item in submission.items]
        assert rows[0] == {
            "order_id": "o1",
            "product_id": "p1",
            "variant_id": None,
            "store_id": "s1",
            "quantity": 2,
            "unit_price": 100,
        }
        assert rows[1]["variant_id"] == "v1"
        assert rows[1]["unit_price"] == 45.5
        assert submission.total == Money.of("245.5")

    def test_blank_notes_become_null(self):
        submission = OrderSubmission.from_draft("s1", "u1", _draft("   "), OrderSource.ADMIN_PROXY)
        assert submission.order.to_row() == {
            "store_id": "s1",
            "created_by": "u1",
            "notes": None,
            "source_type": "admin_proxy",
        }

    def test_notes_are_trimmed(self):
        submission = OrderSubmission.from_draft("s1", "u1", _draft("  rush \n"), OrderSource.FRONTEND)
        assert submission.order.notes == "rush"

    def test_empty_draft_rejected(self):
        with pytest.raises(ValidationError, match="empty"):
            OrderSubmission.from_draft("s1", "u1", OrderDraft(), OrderSource.FRONTEND)

    def test_missing_user_rejected(self):
        with pytest.raises(ValidationError, match="required"):
            OrderSubmission.from_draft("s1", "", _draft(), OrderSource.FRONTEND)
