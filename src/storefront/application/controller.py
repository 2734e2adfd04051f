"""Storefront controller: wires shopper intents to stores and back to the view.

The controller is the only component that talks to the shop service and
the only one that knows about the checkout sequence::

    BROWSE --basket:open--> BASKET --order:open--> DELIVERY
        --order:submit--> CONTACTS --contacts:submit--> (remote) --> SUCCESS
        --success:close--> BROWSE

``modal:close`` abandons the flow from any step.  Each pass through the
sequence gets a new flow-session token; a remote answer that arrives after
its session has ended is logged and dropped.

The basket and draft are cleared only after the service has accepted the
order.  A rejected submission keeps the shopper on the contacts step with
everything they entered.
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Any, Callable

from storefront.application.view import StorefrontView
from storefront.domain import events
from storefront.domain.events import EventBus
from storefront.domain.exceptions import InvariantViolationError, RemoteServiceError
from storefront.domain.gateway.shop_gateway import ShopGateway
from storefront.domain.model.basket import BasketState
from storefront.domain.model.order import Order, OrderResult, ValidationGroup
from storefront.domain.repository.basket_snapshot_repository import (
    BasketSnapshotRepository,
)
from storefront.domain.store.basket_store import BasketStore
from storefront.domain.store.catalog_store import CatalogStore
from storefront.domain.store.order_draft_store import OrderDraftStore

logger = logging.getLogger(__name__)


class CheckoutStep(Enum):
    BROWSE = "browse"
    BASKET = "basket"
    DELIVERY = "delivery"
    CONTACTS = "contacts"
    SUCCESS = "success"


class StorefrontController:

    def __init__(
        self,
        bus: EventBus,
        catalog: CatalogStore,
        basket: BasketStore,
        draft: OrderDraftStore,
        gateway: ShopGateway,
        view: StorefrontView,
        snapshots: BasketSnapshotRepository | None = None,
    ) -> None:
        self._bus = bus
        self._catalog = catalog
        self._basket = basket
        self._draft = draft
        self._gateway = gateway
        self._view = view
        self._snapshots = snapshots

        self._step = CheckoutStep.BROWSE
        self._flow_session = 0
        self._locked = False
        self._previewed_id: str | None = None
        self._submitting = False
        self._pending: asyncio.Task | None = None
        self._restore_pending: dict[str, Any] | None = None
        self._unsubscribers: list[Callable[[], None]] = []
        self._subscribe()

    # --- Lifecycle ------------------------------------------------------------

    async def start(self) -> bool:
        """Load the catalog and bring back the basket saved last session.

        The saved basket is restored as soon as a catalog is available to
        check its ids against, before the catalog is rendered.
        """
        if self._snapshots is not None:
            self._restore_pending = self._snapshots.load()
        return await self.load_catalog()

    async def load_catalog(self) -> bool:
        try:
            products = await self._gateway.fetch_catalog()
        except RemoteServiceError as exc:
            logger.warning("Catalog load failed: %s", exc.error)
            self._bus.emit(events.CATALOG_ERROR, {"error": exc.error})
            return False

        logger.info("Loaded %d product(s)", len(products))
        self._catalog.replace(products)
        return True

    def close(self) -> None:
        """Detach every bus subscription this controller made."""
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()

    # --- Read-only state ------------------------------------------------------

    @property
    def step(self) -> CheckoutStep:
        return self._step

    @property
    def flow_session(self) -> int:
        return self._flow_session

    @property
    def submitting(self) -> bool:
        return self._submitting

    @property
    def pending_submission(self) -> asyncio.Task | None:
        """The task started by the last ``contacts:submit``, if any."""
        return self._pending

    # --- Subscriptions --------------------------------------------------------

    def _subscribe(self) -> None:
        handlers: dict[str, Callable[[Any], None]] = {
            # shopper intents
            events.PRODUCT_SELECT: self._on_product_select,
            events.BASKET_ADD: self._on_basket_add,
            events.BASKET_REMOVE: self._on_basket_remove,
            events.BASKET_CLEAR: self._on_basket_clear,
            events.BASKET_OPEN: self._on_basket_open,
            events.ORDER_OPEN: self._on_order_open,
            events.ORDER_PAYMENT: self._on_order_payment,
            events.ORDER_ADDRESS: self._on_order_address,
            events.ORDER_SUBMIT: self._on_order_submit,
            events.CONTACTS_EMAIL: self._on_contacts_email,
            events.CONTACTS_PHONE: self._on_contacts_phone,
            events.CONTACTS_SUBMIT: self._on_contacts_submit,
            events.SUCCESS_CLOSE: self._on_success_close,
            events.MODAL_CLOSE: self._on_modal_close,
            # state changes
            events.CATALOG_LOADED: self._on_catalog_loaded,
            events.CATALOG_ERROR: self._on_catalog_error,
            events.BASKET_CHANGED: self._on_basket_changed,
            events.ORDER_VALID: self._view.render_delivery_validity,
            events.CONTACTS_VALID: self._view.render_contacts_validity,
            events.ORDER_PENDING: self._on_order_pending,
            events.ORDER_SUCCESS: self._on_order_success,
            events.ORDER_ERROR: self._on_order_error,
            events.PAGE_LOCKED: self._on_page_locked,
        }
        for event, handler in handlers.items():
            self._unsubscribers.append(self._bus.on(event, handler))

    # --- Shopper intents: browsing and basket ---------------------------------

    def _on_product_select(self, payload: dict[str, Any]) -> None:
        product = self._catalog.get(payload["id"])
        if product is None:
            logger.warning("Selected unknown product %r", payload["id"])
            return
        self._previewed_id = product.id
        self._lock(True)
        self._view.render_preview(product, self._basket.has(product.id))

    def _on_basket_add(self, payload: dict[str, Any]) -> None:
        self._basket.add(payload["id"])

    def _on_basket_remove(self, payload: dict[str, Any]) -> None:
        self._basket.remove(payload["id"])

    def _on_basket_clear(self, _payload: Any = None) -> None:
        self._basket.clear()

    def _on_basket_open(self, _payload: Any = None) -> None:
        if self._step in (CheckoutStep.BROWSE, CheckoutStep.SUCCESS):
            self._flow_session += 1
        self._previewed_id = None
        self._step = CheckoutStep.BASKET
        self._lock(True)
        self._view.render_basket(self._basket.state)

    # --- Shopper intents: checkout forms --------------------------------------

    def _on_order_open(self, _payload: Any = None) -> None:
        if self._step is not CheckoutStep.BASKET:
            logger.warning("Ignoring order:open outside the basket step (%s)", self._step.value)
            return
        if self._basket.is_empty:
            logger.warning("Ignoring order:open with an empty basket")
            return
        self._draft.clear()
        self._step = CheckoutStep.DELIVERY
        self._view.render_delivery_form(self._draft.draft)

    def _on_order_payment(self, payload: dict[str, Any]) -> None:
        self._draft.set_field("payment", payload["payment"])

    def _on_order_address(self, payload: dict[str, Any]) -> None:
        self._draft.set_field("address", payload["address"])

    def _on_order_submit(self, _payload: Any = None) -> None:
        if self._step is not CheckoutStep.DELIVERY:
            logger.warning("Ignoring order:submit outside the delivery step (%s)", self._step.value)
            return
        if not self._draft.is_valid(ValidationGroup.DELIVERY):
            logger.warning("Ignoring order:submit: delivery details are not valid")
            self._draft.validate_delivery()
            return
        self._step = CheckoutStep.CONTACTS
        self._view.render_contacts_form(self._draft.draft)

    def _on_contacts_email(self, payload: dict[str, Any]) -> None:
        self._draft.set_field("email", payload["email"])

    def _on_contacts_phone(self, payload: dict[str, Any]) -> None:
        self._draft.set_field("phone", payload["phone"])

    def _on_contacts_submit(self, _payload: Any = None) -> None:
        loop = asyncio.get_running_loop()
        order = self._begin_submission()
        if order is None:
            return
        self._pending = loop.create_task(self._send(order, self._flow_session))

    def _on_success_close(self, _payload: Any = None) -> None:
        if self._step is not CheckoutStep.SUCCESS:
            return
        self._leave_flow()

    def _on_modal_close(self, _payload: Any = None) -> None:
        if self._step is CheckoutStep.BROWSE:
            self._previewed_id = None
            self._lock(False)
            return
        logger.debug("Checkout abandoned at the %s step", self._step.value)
        self._leave_flow()

    # --- Submission -----------------------------------------------------------

    async def submit(self) -> OrderResult | None:
        """Awaitable form of ``contacts:submit``.

        Returns the service's result, or None when the submission was
        refused locally, rejected remotely or outlived its flow session.
        """
        order = self._begin_submission()
        if order is None:
            return None
        return await self._send(order, self._flow_session)

    def _begin_submission(self) -> Order | None:
        if self._step is not CheckoutStep.CONTACTS:
            logger.warning("Ignoring contacts:submit outside the contacts step (%s)", self._step.value)
            return None
        if self._submitting:
            logger.warning("Ignoring contacts:submit: an order is already in flight")
            return None
        if not self._draft.is_valid(ValidationGroup.CONTACTS):
            logger.warning("Ignoring contacts:submit: contact details are not valid")
            self._draft.validate_contacts()
            return None
        if self._basket.is_empty:
            logger.warning("Ignoring contacts:submit: the basket is empty")
            self._step = CheckoutStep.BASKET
            self._view.render_basket(self._basket.state)
            return None
        if not self._draft.is_valid(ValidationGroup.DELIVERY):
            logger.warning("Ignoring contacts:submit: delivery details are not valid")
            self._step = CheckoutStep.DELIVERY
            self._view.render_delivery_form(self._draft.draft)
            self._draft.validate_delivery()
            return None

        order = self._build_order()
        self._submitting = True
        self._bus.emit(events.ORDER_PENDING, {"pending": True})
        return order

    def _build_order(self) -> Order:
        for group in ValidationGroup:
            if not self._draft.is_valid(group):
                raise InvariantViolationError(
                    f"Cannot build an order while the {group.value} details are not valid"
                )
        if self._basket.is_empty:
            raise InvariantViolationError("Cannot build an order from an empty basket")
        return self._draft.build_order(self._basket.item_ids, self._basket.total)

    async def _send(self, order: Order, session: int) -> OrderResult | None:
        logger.info("Submitting order for %d item(s), total %s", len(order.items), order.total)
        try:
            result = await self._gateway.submit_order(order)
        except RemoteServiceError as exc:
            if self._is_current(session):
                logger.warning("Order rejected: %s", exc.error)
                self._bus.emit(events.ORDER_ERROR, {"error": exc.error})
            else:
                logger.warning("Ignoring order rejection from an abandoned checkout: %s", exc.error)
            return None
        finally:
            self._submitting = False
            self._bus.emit(events.ORDER_PENDING, {"pending": False})

        if not self._is_current(session):
            logger.warning("Ignoring confirmation of order %s from an abandoned checkout", result.id)
            return None

        logger.info("Order %s accepted", result.id)
        self._step = CheckoutStep.SUCCESS
        self._bus.emit(events.ORDER_SUCCESS, {"total": result.total})
        self._basket.clear()
        self._draft.clear()
        return result

    def _is_current(self, session: int) -> bool:
        return session == self._flow_session and self._step is CheckoutStep.CONTACTS

    # --- State changes -> view ------------------------------------------------

    def _on_catalog_loaded(self, _payload: Any = None) -> None:
        if self._restore_pending is not None:
            snapshot, self._restore_pending = self._restore_pending, None
            self._basket.restore(snapshot)
        self._basket.update_totals(self._catalog)
        self._view.render_catalog(self._catalog.products, self._basket.item_ids)

    def _on_catalog_error(self, payload: dict[str, Any]) -> None:
        self._view.show_catalog_error(payload["error"])

    def _on_basket_changed(self, state: BasketState) -> None:
        self._view.render_counter(state.item_count)
        if self._step is CheckoutStep.BASKET:
            self._view.render_basket(state)
        elif self._step is CheckoutStep.BROWSE and self._previewed_id is not None:
            product = self._catalog.get(self._previewed_id)
            if product is not None:
                self._view.render_preview(product, self._basket.has(product.id))
        if self._snapshots is None:
            return
        if state.is_empty:
            self._snapshots.clear()
        else:
            self._snapshots.save(state.to_dict())

    def _on_order_pending(self, payload: dict[str, Any]) -> None:
        self._view.set_submit_pending(payload["pending"])

    def _on_order_success(self, payload: dict[str, Any]) -> None:
        self._view.render_success(payload["total"])

    def _on_order_error(self, payload: dict[str, Any]) -> None:
        self._view.show_order_error(payload["error"])

    def _on_page_locked(self, payload: dict[str, Any]) -> None:
        self._view.set_locked(payload["locked"])

    # --- Internal helpers -----------------------------------------------------

    def _leave_flow(self) -> None:
        self._flow_session += 1
        self._step = CheckoutStep.BROWSE
        self._previewed_id = None
        self._lock(False)

    def _lock(self, locked: bool) -> None:
        if locked == self._locked:
            return
        self._locked = locked
        self._bus.emit(events.PAGE_LOCKED, {"locked": locked})
