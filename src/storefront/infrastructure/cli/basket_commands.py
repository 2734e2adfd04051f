"""CLI commands for the basket.

The basket survives between commands through the session snapshot.
"""

from __future__ import annotations

import click

from storefront.domain import events
from storefront.infrastructure.cli.console_view import format_price
from storefront.infrastructure.cli.session import run, storefront_session


@click.command("add")
@click.option("--id", "product_id", required=True, help="Product ID to add.")
def basket_add(product_id: str) -> None:
    """Put a product in the basket."""

    async def _add() -> None:
        async with storefront_session() as app:
            product = app.catalog.get(product_id)
            if product is None:
                raise click.ClickException(f"Product with ID '{product_id}' not found")
            if app.basket.has(product_id):
                click.echo(f"'{product.title}' is already in the basket.")
                return
            app.bus.emit(events.BASKET_ADD, {"id": product_id})
            click.echo(
                f"Added '{product.title}'  ({app.basket.item_count} item(s), "
                f"total {format_price(app.basket.total)})"
            )

    run(_add)


@click.command("remove")
@click.option("--id", "product_id", required=True, help="Product ID to remove.")
def basket_remove(product_id: str) -> None:
    """Take a product out of the basket."""

    async def _remove() -> None:
        async with storefront_session() as app:
            if not app.basket.has(product_id):
                raise click.ClickException(f"Product '{product_id}' is not in the basket")
            app.bus.emit(events.BASKET_REMOVE, {"id": product_id})
            click.echo(
                f"Removed  ({app.basket.item_count} item(s), "
                f"total {format_price(app.basket.total)})"
            )

    run(_remove)


@click.command("show")
def basket_show() -> None:
    """Show the basket and its total."""

    async def _show() -> None:
        async with storefront_session() as app:
            app.bus.emit(events.BASKET_OPEN)
            app.bus.emit(events.MODAL_CLOSE)

    run(_show)


@click.command("clear")
def basket_clear() -> None:
    """Empty the basket."""

    async def _clear() -> None:
        async with storefront_session() as app:
            app.bus.emit(events.BASKET_CLEAR)
            click.echo("Basket cleared.")

    run(_clear)
