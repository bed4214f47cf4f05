"""Catalog records as the hosted backend serves them.

Products and variants are owned by the backend; the client only reads
them.  ``from_row``/``to_row`` convert between backend JSON rows
(snake_case keys) and the domain objects.  Unknown keys are ignored so
new server columns never break an older client cache.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

from storeorder.domain.model.value_objects import Money


class ProductStatus(Enum):
    ACTIVE = "active"
    DISCONTINUED = "discontinued"
    PREORDER = "preorder"
    SOLD_OUT = "sold_out"


_DESCRIPTIVE_FIELDS = (
    "brand",
    "model",
    "series",
    "category",
    "color",
    "barcode",
    "description",
)


@dataclass(frozen=True)
class Product:
    """A product in the global catalog."""

    id: str
    sku: str
    name: str
    base_wholesale_price: Money
    base_retail_price: Money
    status: ProductStatus = ProductStatus.ACTIVE
    has_variants: bool = False
    brand: str | None = None
    model: str | None = None
    series: str | None = None
    category: str | None = None
    color: str | None = None
    barcode: str | None = None
    description: str | None = None

    @property
    def is_active(self) -> bool:
        return self.status == ProductStatus.ACTIVE

    @staticmethod
    def from_row(row: dict[str, Any]) -> Product:
        return Product(
            id=str(row["id"]),
            sku=row["sku"],
            name=row["name"],
            base_wholesale_price=Money.of(row.get("base_wholesale_price") or 0),
            base_retail_price=Money.of(row.get("base_retail_price") or 0),
            status=ProductStatus(row.get("status") or ProductStatus.ACTIVE.value),
            has_variants=bool(row.get("has_variants")),
            **{name: row.get(name) for name in _DESCRIPTIVE_FIELDS},
        )

    def to_row(self) -> dict[str, Any]:
        row: dict[str, Any] = {
            "id": self.id,
            "sku": self.sku,
            "name": self.name,
            "base_wholesale_price": self.base_wholesale_price.to_json(),
            "base_retail_price": self.base_retail_price.to_json(),
            "status": self.status.value,
            "has_variants": self.has_variants,
        }
        for name in _DESCRIPTIVE_FIELDS:
            row[name] = getattr(self, name)
        return row


@dataclass(frozen=True)
class ProductVariant:
    """A sellable variation of a product (e.g. a colour/size combination).

    ``effective_wholesale_price`` carries a store-specific override once
    store pricing has been applied; it is ``None`` for a raw variant.
    """

    id: str
    product_id: str
    sku: str
    name: str
    wholesale_price: Money
    retail_price: Money
    status: ProductStatus = ProductStatus.ACTIVE
    option_1: str | None = None
    option_2: str | None = None
    option_3: str | None = None
    effective_wholesale_price: Money | None = None

    @property
    def options(self) -> list[str]:
        """The non-empty option labels, in order."""
        return [o for o in (self.option_1, self.option_2, self.option_3) if o]

    def with_effective_price(self, price: Money | None) -> ProductVariant:
        return replace(self, effective_wholesale_price=price)

    @staticmethod
    def from_row(row: dict[str, Any]) -> ProductVariant:
        return ProductVariant(
            id=str(row["id"]),
            product_id=str(row["product_id"]),
            sku=row["sku"],
            name=row["name"],
            wholesale_price=Money.of(row.get("wholesale_price") or 0),
            retail_price=Money.of(row.get("retail_price") or 0),
            status=ProductStatus(row.get("status") or ProductStatus.ACTIVE.value),
            option_1=row.get("option_1"),
            option_2=row.get("option_2"),
            option_3=row.get("option_3"),
            effective_wholesale_price=Money.optional(row.get("effective_wholesale_price")),
        )


@dataclass(frozen=True)
class StorePrice:
    """A per-store price override row (``store_products`` table)."""

    product_id: str
    variant_id: str | None = None
    wholesale_price: Money | None = None
    retail_price: Money | None = None

    @staticmethod
    def from_row(row: dict[str, Any]) -> StorePrice:
        variant_id = row.get("variant_id")
        return StorePrice(
            product_id=str(row["product_id"]),
            variant_id=str(variant_id) if variant_id is not None else None,
            wholesale_price=Money.optional(row.get("wholesale_price")),
            retail_price=Money.optional(row.get("retail_price")),
        )


@dataclass(frozen=True)
class PricedProduct:
    """A product with the selected store's prices merged in."""

    product: Product
    wholesale_price: Money
    retail_price: Money
    has_store_price: bool = False

    @property
    def id(self) -> str:
        return self.product.id

    @property
    def sku(self) -> str:
        return self.product.sku

    @property
    def name(self) -> str:
        return self.product.name

    @property
    def status(self) -> ProductStatus:
        return self.product.status
