"""The presentation collaborator the controller renders through.

Implementations draw; they never touch the stores.  Everything they need
arrives as arguments, and everything the shopper does goes back over the
event bus.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.basket import BasketState
from storefront.domain.model.order import OrderDraft, ValidationResult
from storefront.domain.model.product import Product


class StorefrontView(ABC):

    @abstractmethod
    def render_catalog(self, products: list[Product], basket_ids: list[str]) -> None:
        """Show the product gallery; *basket_ids* marks what is already picked."""

    @abstractmethod
    def render_preview(self, product: Product, in_basket: bool) -> None:
        """Show one product in detail with an add or remove action."""

    @abstractmethod
    def render_basket(self, state: BasketState) -> None:
        """Show the basket contents and total."""

    @abstractmethod
    def render_counter(self, count: int) -> None:
        """Update the header basket counter."""

    @abstractmethod
    def render_delivery_form(self, draft: OrderDraft) -> None: ...

    @abstractmethod
    def render_delivery_validity(self, result: ValidationResult) -> None: ...

    @abstractmethod
    def render_contacts_form(self, draft: OrderDraft) -> None: ...

    @abstractmethod
    def render_contacts_validity(self, result: ValidationResult) -> None: ...

    @abstractmethod
    def render_success(self, total: int | float) -> None: ...

    @abstractmethod
    def show_order_error(self, message: str) -> None: ...

    @abstractmethod
    def show_catalog_error(self, message: str) -> None: ...

    @abstractmethod
    def set_locked(self, locked: bool) -> None:
        """Lock page scrolling while a checkout window is open."""

    @abstractmethod
    def set_submit_pending(self, pending: bool) -> None:
        """Disable the final submit action while an order is in flight."""
