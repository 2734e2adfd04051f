"""CatalogStore: the product list as last fetched from the shop service."""

from __future__ import annotations

import logging

from storefront.domain.events import CATALOG_LOADED, EventBus
from storefront.domain.model.product import Product

logger = logging.getLogger(__name__)


class CatalogStore:
    """Owns product identity.

    The catalog is never patched in place: ``replace()`` swaps the whole
    list at once and then announces it with ``catalog:loaded``.
    """

    def __init__(self, bus: EventBus) -> None:
        self._bus = bus
        self._products: list[Product] = []
        self._by_id: dict[str, Product] = {}

    def replace(self, products: list[Product]) -> None:
        by_id = {product.id: product for product in products}
        self._products = list(by_id.values())
        self._by_id = by_id
        logger.debug("Catalog replaced with %d product(s)", len(self._products))
        self._bus.emit(CATALOG_LOADED)

    def get(self, product_id: str) -> Product | None:
        """Return the product, or None when the catalog has no such id."""
        return self._by_id.get(product_id)

    @property
    def products(self) -> list[Product]:
        return list(self._products)

    def __len__(self) -> int:
        return len(self._products)

    def __contains__(self, product_id: object) -> bool:
        return product_id in self._by_id
