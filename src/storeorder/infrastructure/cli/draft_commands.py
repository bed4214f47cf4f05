"""CLI commands for per-store order drafts."""

from __future__ import annotations

import click

from storeorder.application.dto import DraftDTO
from storeorder.domain.exceptions import DomainException
from storeorder.domain.model.order import OrderSource
from storeorder.infrastructure.bootstrap import (
    backend_client,
    draft_store,
    product_cache,
    store_catalog,
    submit_draft_handler,
)


def _display_draft(dto: DraftDTO) -> None:
    """Shared formatting for displaying a draft."""
    click.echo(f"Draft for store {dto.store_id}")
    if not dto.items:
        click.echo("  (empty)")
    else:
        click.echo(f"  {'Item':<24} {'Name':<30} {'Qty':>5} {'Price':>12} {'Total':>12}")
        click.echo(f"  {'-'*87}")
        for item in dto.items:
            click.echo(
                f"  {item.item_id:<24} {item.name:<30} {item.quantity:>5} "
                f"{item.unit_price:>12} {item.line_total:>12}"
            )
            if item.options:
                click.echo(f"  {'':<24} {' / '.join(item.options)}")
        click.echo(f"  {'-'*87}")
    click.echo(f"  {'Items':<24} {dto.total_items:>36}")
    click.echo(f"  {'Draft Total':<24} {dto.total:>62}")
    if dto.notes:
        click.echo(f"Notes: {dto.notes}")


@click.command("show")
@click.option("--store", "store_id", required=True, help="Store ID.")
def draft_show(store_id: str) -> None:
    """Show a store's draft order."""
    drafts = draft_store()
    _display_draft(DraftDTO.from_draft(store_id, drafts.get_draft(store_id)))


@click.command("list")
def draft_list() -> None:
    """List stores that have a draft in progress."""
    drafts = draft_store()
    store_ids = drafts.store_ids()
    if not store_ids:
        click.echo("No drafts in progress.")
        return

    click.echo(f"{'Store':<20} {'Items':>6} {'Total':>14}")
    click.echo("-" * 42)
    for store_id in store_ids:
        click.echo(
            f"{store_id:<20} {drafts.get_total_items(store_id):>6} "
            f"{str(drafts.get_total_amount(store_id)):>14}"
        )


@click.command("add")
@click.option("--store", "store_id", required=True, help="Store ID.")
@click.option("--product", "product_ref", required=True, help="Product ID or SKU.")
@click.option("--variant", "variant_ref", default=None, help="Variant ID or SKU.")
@click.option("--quantity", default=1, type=int, show_default=True, help="Units to add.")
def draft_add(store_id: str, product_ref: str, variant_ref: str | None, quantity: int) -> None:
    """Add a product (optionally a variant) to a store's draft."""
    drafts = draft_store()

    with backend_client() as client:
        cache = product_cache(client)
        product = cache.get_product_by_id(product_ref) or cache.get_product_by_sku(product_ref)
        if product is None:
            raise click.ClickException(f"Product not found in cache: '{product_ref}'")

        catalog = store_catalog(cache, client)
        try:
            priced = catalog.product_for_store(store_id, product.id)
            variant = None
            if variant_ref:
                variants = catalog.variants_for_store(store_id, product.id)
                variant = next(
                    (v for v in variants if variant_ref in (v.id, v.sku)), None
                )
                if variant is None:
                    raise click.ClickException(
                        f"Variant '{variant_ref}' not found for product '{product.name}'"
                    )
        except DomainException as exc:
            raise click.ClickException(str(exc))

    item = None
    for _ in range(quantity):
        item = drafts.add_item(store_id, priced, variant)

    if item is None:
        click.echo("Nothing added.")
        return
    click.echo(f"{item.name} x{item.quantity} in draft for store {store_id} at {item.price}")


@click.command("set-qty")
@click.option("--store", "store_id", required=True, help="Store ID.")
@click.option("--item", "item_id", required=True, help="Draft item ID (product-variant).")
@click.option("--quantity", required=True, type=int, help="New quantity; 0 or less removes.")
def draft_set_quantity(store_id: str, item_id: str, quantity: int) -> None:
    """Set the quantity of a draft line."""
    drafts = draft_store()
    drafts.update_quantity(store_id, item_id, quantity)
    if quantity <= 0:
        click.echo(f"Removed {item_id} from draft for store {store_id}.")
    else:
        click.echo(f"{item_id} set to {quantity}.")


@click.command("remove")
@click.option("--store", "store_id", required=True, help="Store ID.")
@click.option("--item", "item_id", required=True, help="Draft item ID (product-variant).")
def draft_remove(store_id: str, item_id: str) -> None:
    """Remove a line from a store's draft."""
    draft_store().remove_item(store_id, item_id)
    click.echo(f"Removed {item_id} from draft for store {store_id}.")


@click.command("notes")
@click.option("--store", "store_id", required=True, help="Store ID.")
@click.option("--text", required=True, help="Notes for the order.")
def draft_notes(store_id: str, text: str) -> None:
    """Replace the notes of a store's draft."""
    draft_store().update_notes(store_id, text)
    click.echo(f"Notes updated for store {store_id}.")


@click.command("clear")
@click.option("--store", "store_id", required=True, help="Store ID.")
def draft_clear(store_id: str) -> None:
    """Discard a store's draft."""
    draft_store().clear_draft(store_id)
    click.echo(f"Draft for store {store_id} cleared.")


@click.command("submit")
@click.option("--store", "store_id", required=True, help="Store ID.")
@click.option("--user", "user_id", required=True, help="ID of the submitting user.")
@click.option(
    "--source",
    type=click.Choice([s.value for s in OrderSource]),
    default=OrderSource.FRONTEND.value,
    show_default=True,
    help="Where the order was placed from.",
)
def draft_submit(store_id: str, user_id: str, source: str) -> None:
    """Submit a store's draft as an order, then clear it."""
    drafts = draft_store()

    with backend_client() as client:
        handler = submit_draft_handler(drafts, client)
        try:
            dto = handler.handle(store_id, user_id, OrderSource(source))
        except DomainException as exc:
            raise click.ClickException(str(exc))

    click.echo(f"Order {dto.order_id} created for store {dto.store_id}")
    click.echo(f"  {dto.item_count} lines, total {dto.total}")
