"""Versioned product-list snapshots exchanged with the backend."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from storeorder.domain.exceptions import ValidationError
from storeorder.domain.model.product import Product


@dataclass(frozen=True)
class ProductCacheEntry:
    """The persisted cache: a product list and the version it belongs to.

    Invariant: ``products`` and ``version`` are only ever replaced
    together.  The entry is immutable so nothing can patch it in place.
    """

    version: int
    products: tuple[Product, ...]

    def to_json(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "products": [p.to_row() for p in self.products],
        }

    @staticmethod
    def from_json(raw: Any) -> ProductCacheEntry:
        """Rebuild an entry from its persisted JSON form.

        Raises ValidationError if the blob does not have the expected
        shape; callers treat that the same as unparsable JSON.
        """
        if not isinstance(raw, dict):
            raise ValidationError("Product cache must be a JSON object")
        version = raw.get("version")
        products = raw.get("products")
        if not isinstance(version, int) or not isinstance(products, list):
            raise ValidationError("Product cache is missing version or products")
        try:
            rows = tuple(Product.from_row(row) for row in products)
        except (KeyError, TypeError, ValueError) as exc:
            raise ValidationError(f"Product cache row is malformed: {exc}") from exc
        return ProductCacheEntry(version=version, products=rows)


@dataclass(frozen=True)
class VersionCheck:
    """Reply of the backend's ``check-data-version`` function."""

    needs_update: bool
    version: int
    data: list[Product] | None = None


class RefreshStatus(Enum):
    # Confirmed current by the version check (new payload or version match)
    FRESH = "fresh"
    # Served from local storage without asking the server
    STALE = "stale"
    # Version check failed; list came from a direct fetch, untracked version
    DEGRADED = "degraded"


@dataclass(frozen=True)
class RefreshResult:
    status: RefreshStatus
    version: int | None
    products: list[Product] = field(default_factory=list)
    replaced: bool = False
