"""Domain service: pricing.

All wholesale-price reads go through ``effective_price`` so there is a
single place that decides which price a draft line freezes.
"""

from __future__ import annotations

from storeorder.domain.model.product import (
    PricedProduct,
    Product,
    ProductVariant,
    StorePrice,
)
from storeorder.domain.model.value_objects import Money


def effective_price(
    product: Product | PricedProduct,
    variant: ProductVariant | None = None,
) -> Money:
    """Wholesale price of ``product`` (optionally as ``variant``).

    A variant's store override wins; otherwise the product's price
    applies (store-merged if ``product`` is priced, base if not).
    """
    if variant is not None and variant.effective_wholesale_price is not None:
        return variant.effective_wholesale_price
    if isinstance(product, PricedProduct):
        return product.wholesale_price
    return product.base_wholesale_price


def price_product(product: Product, overrides: list[StorePrice]) -> PricedProduct:
    """Merge the product-level store override (if any) onto ``product``."""
    override = next(
        (o for o in overrides if o.product_id == product.id and o.variant_id is None),
        None,
    )
    if override is None:
        return PricedProduct(
            product=product,
            wholesale_price=product.base_wholesale_price,
            retail_price=product.base_retail_price,
        )
    return PricedProduct(
        product=product,
        wholesale_price=override.wholesale_price or product.base_wholesale_price,
        retail_price=override.retail_price or product.base_retail_price,
        has_store_price=True,
    )


def price_variant(variant: ProductVariant, overrides: list[StorePrice]) -> ProductVariant:
    """Return ``variant`` with its store override as the effective price.

    Without a variant-level override the variant's own wholesale price is
    used, so a variant always carries an effective price once priced.
    """
    override = next(
        (
            o
            for o in overrides
            if o.variant_id == variant.id and o.wholesale_price is not None
        ),
        None,
    )
    price = override.wholesale_price if override is not None else variant.wholesale_price
    return variant.with_effective_price(price)
