"""Application service: Submit Draft (checkout) use case.

Projects a store's draft into one order row plus its item rows, inserts
them through the order gateway, and only then clears the draft.  If
either insert fails the BackendError propagates and the draft is kept,
so the user can retry without rebuilding the cart.
"""

from __future__ import annotations

import logging

from storeorder.application.dto import SubmittedOrderDTO
from storeorder.application.order_drafts import OrderDraftStore
from storeorder.domain.exceptions import BackendError
from storeorder.domain.model.order import OrderSource, OrderSubmission
from storeorder.domain.repository.order_gateway import OrderGateway

logger = logging.getLogger(__name__)


class SubmitDraftHandler:

    def __init__(self, draft_store: OrderDraftStore, order_gateway: OrderGateway) -> None:
        self._draft_store = draft_store
        self._order_gateway = order_gateway

    def handle(
        self,
        store_id: str,
        created_by: str,
        source_type: OrderSource = OrderSource.FRONTEND,
    ) -> SubmittedOrderDTO:
        draft = self._draft_store.get_draft(store_id)
        submission = OrderSubmission.from_draft(store_id, created_by, draft, source_type)

        order = self._order_gateway.insert_order(submission.order.to_row())
        order_id = order.get("id")
        if not order_id:
            raise BackendError("Order insert returned no id", details={"order": order})

        self._order_gateway.insert_order_items(
            [item.to_row(str(order_id)) for item in submission.items]
        )
        logger.info(
            "Submitted order %s for store %s (%d lines)",
            order_id,
            store_id,
            len(submission.items),
        )

        self._draft_store.clear_draft(store_id)

        return SubmittedOrderDTO(
            order_id=str(order_id),
            store_id=store_id,
            item_count=len(submission.items),
            total=str(submission.total),
        )
