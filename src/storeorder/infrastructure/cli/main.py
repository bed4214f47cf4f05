import click

from storeorder.infrastructure.cli.catalog_commands import (
    catalog_list,
    catalog_refresh,
    catalog_show,
)
from storeorder.infrastructure.cli.draft_commands import (
    draft_add,
    draft_clear,
    draft_list,
    draft_notes,
    draft_remove,
    draft_set_quantity,
    draft_show,
    draft_submit,
)
from storeorder.infrastructure.logger import setup_logger


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log debug output.")
def cli(verbose: bool) -> None:
    """storeorder: product cache and per-store order drafts"""
    setup_logger(level="DEBUG" if verbose else None)


@cli.group()
def catalog() -> None:
    """Manage the local product cache."""


@cli.group()
def draft() -> None:
    """Manage per-store draft orders."""


# Register subcommands
catalog.add_command(catalog_list)
catalog.add_command(catalog_refresh)
catalog.add_command(catalog_show)
draft.add_command(draft_add)
draft.add_command(draft_clear)
draft.add_command(draft_list)
draft.add_command(draft_notes)
draft.add_command(draft_remove)
draft.add_command(draft_set_quantity)
draft.add_command(draft_show)
draft.add_command(draft_submit)
