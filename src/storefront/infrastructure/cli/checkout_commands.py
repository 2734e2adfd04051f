"""CLI command that walks the basket through the checkout steps."""

from __future__ import annotations

import click

from storefront.application.controller import CheckoutStep
from storefront.domain import events
from storefront.domain.model.order import PaymentMethod, ValidationGroup
from storefront.infrastructure.cli.session import run, storefront_session


@click.command("checkout")
@click.option(
    "--payment",
    required=True,
    type=click.Choice([m.value for m in PaymentMethod]),
    help="Payment method.",
)
@click.option("--address", required=True, help="Delivery address.")
@click.option("--email", required=True, help="Contact email.")
@click.option("--phone", required=True, help="Contact phone number.")
def checkout(payment: str, address: str, email: str, phone: str) -> None:
    """Place an order for everything in the basket."""

    async def _checkout() -> None:
        async with storefront_session() as app:
            if app.basket.is_empty:
                raise click.ClickException("Your basket is empty")

            bus, controller = app.bus, app.controller
            bus.emit(events.BASKET_OPEN)
            bus.emit(events.ORDER_OPEN)

            bus.emit(events.ORDER_PAYMENT, {"payment": payment})
            bus.emit(events.ORDER_ADDRESS, {"address": address})
            bus.emit(events.ORDER_SUBMIT)
            if controller.step is not CheckoutStep.CONTACTS:
                raise click.ClickException(
                    app.draft.result(ValidationGroup.DELIVERY).message
                )

            bus.emit(events.CONTACTS_EMAIL, {"email": email})
            bus.emit(events.CONTACTS_PHONE, {"phone": phone})
            bus.emit(events.CONTACTS_SUBMIT)
            if controller.pending_submission is None:
                raise click.ClickException(
                    app.draft.result(ValidationGroup.CONTACTS).message
                )
            await controller.pending_submission

            if controller.step is not CheckoutStep.SUCCESS:
                # The view has already reported the service's message.
                raise click.exceptions.Exit(1)
            bus.emit(events.SUCCESS_CLOSE)

    run(_checkout)
