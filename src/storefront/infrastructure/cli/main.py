import logging

import click

from storefront.infrastructure.cli.basket_commands import (
    basket_add,
    basket_clear,
    basket_remove,
    basket_show,
)
from storefront.infrastructure.cli.checkout_commands import checkout
from storefront.infrastructure.cli.product_commands import product_list, product_show


@click.group()
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log debug output.")
def cli(verbose: bool) -> None:
    """Storefront: browse the shop, fill a basket, place an order."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.group()
def product() -> None:
    """Browse products."""


@cli.group()
def basket() -> None:
    """Manage the basket."""


# Register subcommands
product.add_command(product_list)
product.add_command(product_show)
basket.add_command(basket_add)
basket.add_command(basket_clear)
basket.add_command(basket_remove)
basket.add_command(basket_show)
cli.add_command(checkout)
