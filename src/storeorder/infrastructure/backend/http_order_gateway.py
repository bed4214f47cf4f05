"""Backend-backed implementation of OrderGateway."""

from __future__ import annotations

from typing import Any

from storeorder.domain.exceptions import BackendError
from storeorder.domain.repository.order_gateway import OrderGateway
from storeorder.infrastructure.backend.client import BackendClient

_RETURN_ROWS = {"Prefer": "return=representation"}


class HttpOrderGateway(OrderGateway):

    def __init__(self, client: BackendClient) -> None:
        self._client = client

    def insert_order(self, row: dict[str, Any]) -> dict[str, Any]:
        created = self._client.post("/rest/v1/orders", json=row, headers=_RETURN_ROWS)
        # PostgREST answers inserts with a list of the created rows
        if isinstance(created, list) and created:
            return created[0]
        if isinstance(created, dict):
            return created
        raise BackendError("Order insert returned no row", details={"body": created})

    def insert_order_items(self, rows: list[dict[str, Any]]) -> None:
        self._client.post("/rest/v1/order_items", json=rows)
