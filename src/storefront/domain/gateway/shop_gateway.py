"""Abstract gateway to the remote shop service.

Defined in the domain layer so the controller never depends on the HTTP
client.  These two coroutines are the only places the storefront waits.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.order import Order, OrderResult
from storefront.domain.model.product import Product


class ShopGateway(ABC):

    @abstractmethod
    async def fetch_catalog(self) -> list[Product]:
        """Return the full product list.

        Raises RemoteServiceError when the service cannot deliver it.
        """

    @abstractmethod
    async def submit_order(self, order: Order) -> OrderResult:
        """Place *order*.

        Raises RemoteServiceError carrying the service's message on rejection.
        """

    async def aclose(self) -> None:
        """Release network resources; nothing to release by default."""
