"""CLI commands for browsing the catalog."""

from __future__ import annotations

import click

from storefront.domain import events
from storefront.infrastructure.cli.console_view import ConsoleView
from storefront.infrastructure.cli.session import run, storefront_session


@click.command("list")
def product_list() -> None:
    """List all products in the catalog (* marks basket items)."""

    async def _list() -> None:
        async with storefront_session(ConsoleView(show_catalog=True)):
            pass

    run(_list)


@click.command("show")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_show(product_id: str) -> None:
    """Show details of one product."""

    async def _show() -> None:
        async with storefront_session() as app:
            if app.catalog.get(product_id) is None:
                raise click.ClickException(f"Product with ID '{product_id}' not found")
            app.bus.emit(events.PRODUCT_SELECT, {"id": product_id})

    run(_show)
