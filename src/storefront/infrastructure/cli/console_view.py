"""Terminal rendering of the storefront for the CLI.

A console has no live form to keep in sync, so per-keystroke renders
(validity, counter, locking) are only logged; the command that drove the
flow reports the outcome itself.
"""

from __future__ import annotations

import logging

import click

from storefront.application.view import StorefrontView
from storefront.domain.model.basket import BasketState
from storefront.domain.model.order import OrderDraft, ValidationResult
from storefront.domain.model.product import Product

logger = logging.getLogger(__name__)


def format_price(price: int | float | None) -> str:
    if price is None:
        return "Priceless"
    return f"{price} synapses"


class ConsoleView(StorefrontView):

    def __init__(self, show_catalog: bool = False) -> None:
        self._show_catalog = show_catalog

    def render_catalog(self, products: list[Product], basket_ids: list[str]) -> None:
        if not self._show_catalog:
            return
        if not products:
            click.echo("No products found.")
            return

        picked = set(basket_ids)
        click.echo(f"  {'ID':<38} {'Title':<30} {'Category':<14} {'Price':>16}")
        click.echo(f"  {'-'*101}")
        for p in products:
            mark = "*" if p.id in picked else " "
            click.echo(
                f"{mark} {p.id:<38} {p.title:<30} {p.category:<14} {format_price(p.price):>16}"
            )

    def render_preview(self, product: Product, in_basket: bool) -> None:
        click.echo(f"{product.title}  [{product.category}]")
        click.echo(f"Price: {format_price(product.price)}")
        if product.description:
            click.echo()
            click.echo(product.description)
        click.echo()
        if product.price is None:
            click.echo("Not for sale.")
        elif in_basket:
            click.echo("In your basket.")

    def render_basket(self, state: BasketState) -> None:
        if state.is_empty:
            click.echo("Your basket is empty.")
            return

        click.echo(f"  {'#':>3}  {'Title':<30} {'Price':>16}")
        click.echo(f"  {'-'*51}")
        for index, item in enumerate(state.items, start=1):
            click.echo(f"  {index:>3}  {item.title:<30} {format_price(item.price):>16}")
        click.echo(f"  {'-'*51}")
        click.echo(f"  {'Total':<35} {format_price(state.total):>16}")

    def render_counter(self, count: int) -> None:
        logger.debug("Basket counter: %d", count)

    def render_delivery_form(self, draft: OrderDraft) -> None:
        logger.debug("Delivery form opened")

    def render_delivery_validity(self, result: ValidationResult) -> None:
        logger.debug("Delivery form valid=%s %s", result.is_valid, result.message)

    def render_contacts_form(self, draft: OrderDraft) -> None:
        logger.debug("Contacts form opened")

    def render_contacts_validity(self, result: ValidationResult) -> None:
        logger.debug("Contacts form valid=%s %s", result.is_valid, result.message)

    def render_success(self, total: int | float) -> None:
        click.echo("Order placed.")
        click.echo(f"Charged {format_price(total)}")

    def show_order_error(self, message: str) -> None:
        click.echo(f"Order failed: {message}", err=True)

    def show_catalog_error(self, message: str) -> None:
        click.echo(f"Could not load products: {message}", err=True)

    def set_locked(self, locked: bool) -> None:
        logger.debug("Page locked=%s", locked)

    def set_submit_pending(self, pending: bool) -> None:
        logger.debug("Submit pending=%s", pending)
