"""Abstract write access to the backend's order tables."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class OrderGateway(ABC):

    @abstractmethod
    def insert_order(self, row: dict[str, Any]) -> dict[str, Any]:
        """Insert one order row and return it as created (including ``id``)."""

    @abstractmethod
    def insert_order_items(self, rows: list[dict[str, Any]]) -> None:
        """Insert the order's item rows in one call."""
