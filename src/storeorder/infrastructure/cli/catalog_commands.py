"""CLI commands for the product catalog cache."""

from __future__ import annotations

import click

from storeorder.domain.exceptions import DomainException
from storeorder.domain.model.catalog import RefreshStatus
from storeorder.infrastructure.bootstrap import (
    backend_client,
    product_cache,
    store_catalog,
)


@click.command("refresh")
@click.option("--force", is_flag=True, default=False, help="Discard the local cache first.")
def catalog_refresh(force: bool) -> None:
    """Revalidate the local product cache against the server."""
    with backend_client() as client:
        cache = product_cache(client, revalidate=False)
        try:
            result = cache.force_refresh() if force else cache.refresh()
        except DomainException as exc:
            raise click.ClickException(str(exc))

    if result.status == RefreshStatus.DEGRADED:
        click.echo(
            f"Version check unavailable, loaded {len(result.products)} products directly."
        )
    elif result.replaced:
        click.echo(f"Product cache updated to version {result.version} ({len(result.products)} products).")
    else:
        click.echo(f"Product cache is current (version {result.version}).")


@click.command("list")
@click.option("--all", "show_all", is_flag=True, default=False, help="Include inactive products.")
@click.option("--store", "store_id", default=None, help="Price the list for this store.")
def catalog_list(show_all: bool, store_id: str | None) -> None:
    """List cached products."""
    with backend_client() as client:
        cache = product_cache(client)

        if store_id:
            try:
                rows = [
                    (p.id, p.sku, p.name, p.status.value, str(p.wholesale_price))
                    for p in store_catalog(cache, client).products_for_store(store_id)
                ]
            except DomainException as exc:
                raise click.ClickException(str(exc))
        else:
            products = cache.products if show_all else cache.active_products
            rows = [
                (p.id, p.sku, p.name, p.status.value, str(p.base_wholesale_price))
                for p in products
            ]

    if not rows:
        click.echo("No products cached. Run 'catalog refresh' first.")
        return

    click.echo(f"{'ID':<10} {'SKU':<14} {'Name':<28} {'Status':<13} {'Wholesale':>12}")
    click.echo("-" * 81)
    for product_id, sku, name, status, price in rows:
        click.echo(f"{product_id:<10} {sku:<14} {name:<28} {status:<13} {price:>12}")


@click.command("show")
@click.option("--id", "product_id", default=None, help="Product ID.")
@click.option("--sku", default=None, help="Product SKU.")
def catalog_show(product_id: str | None, sku: str | None) -> None:
    """Show one cached product."""
    if not product_id and not sku:
        raise click.ClickException("Pass --id or --sku")

    with backend_client() as client:
        cache = product_cache(client)
    product = cache.get_product_by_id(product_id) if product_id else cache.get_product_by_sku(sku)
    if product is None:
        raise click.ClickException(f"Product not found: {product_id or sku}")

    click.echo(f"{product.name}  ({product.sku}, status={product.status.value})")
    click.echo(f"ID:         {product.id}")
    click.echo(f"Wholesale:  {product.base_wholesale_price}")
    click.echo(f"Retail:     {product.base_retail_price}")
    for label in ("brand", "model", "series", "category", "color", "barcode"):
        value = getattr(product, label)
        if value:
            click.echo(f"{label.capitalize() + ':':<12}{value}")
    if product.has_variants:
        click.echo("Has variants")
