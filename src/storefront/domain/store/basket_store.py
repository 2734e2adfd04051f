"""BasketStore: which products the shopper has picked, and what they cost.

Entries are keyed by product id, so a product can be in the basket at
most once.  Every mutation recomputes the derived ``BasketState`` before
announcing it with ``basket:changed``; the total is never left stale.

The basket does not listen to catalog refreshes.  After the catalog has
been replaced, the caller decides when prices are re-read by calling
``update_totals()``.
"""

from __future__ import annotations

import logging
from typing import Any

from storefront.domain.events import BASKET_CHANGED, EventBus
from storefront.domain.model.basket import BasketEntry, BasketState
from storefront.domain.store.catalog_store import CatalogStore

logger = logging.getLogger(__name__)


class BasketStore:

    def __init__(self, bus: EventBus, catalog: CatalogStore) -> None:
        self._bus = bus
        self._catalog = catalog
        self._entries: dict[str, BasketEntry] = {}
        self._state = BasketState.derive([])

    # --- Mutations ------------------------------------------------------------

    def add(self, product_id: str) -> bool:
        """Add a catalog product.  False if already present or unknown."""
        if product_id in self._entries:
            return False
        product = self._catalog.get(product_id)
        if product is None:
            logger.debug("Ignoring add of unknown product %r", product_id)
            return False
        self._entries[product_id] = BasketEntry.of(product)
        self._changed()
        return True

    def remove(self, product_id: str) -> bool:
        if self._entries.pop(product_id, None) is None:
            return False
        self._changed()
        return True

    def clear(self) -> None:
        """Empty the basket.  Always announces, even when already empty."""
        self._entries.clear()
        self._changed()

    def update_totals(self, catalog: CatalogStore | None = None) -> BasketState:
        """Re-read titles and prices from *catalog* (default: our own).

        Entries whose product has vanished from the catalog are dropped.
        ``basket:changed`` is only emitted when the state actually moved.
        """
        if catalog is None:
            catalog = self._catalog
        refreshed: dict[str, BasketEntry] = {}
        for product_id in self._entries:
            product = catalog.get(product_id)
            if product is None:
                logger.info("Dropping %r from basket: no longer in catalog", product_id)
                continue
            refreshed[product_id] = BasketEntry.of(product)

        if refreshed != self._entries:
            self._entries = refreshed
            self._changed()
        return self._state

    # --- Session snapshot -----------------------------------------------------

    def serialize(self) -> dict[str, Any]:
        return self._state.to_dict()

    def restore(self, snapshot: dict[str, Any]) -> BasketState:
        """Rebuild the basket from ``serialize()`` output.

        Only ``itemIds`` is trusted.  Ids missing from the current catalog
        (or repeated) are skipped; totals are recomputed from the catalog.
        """
        entries: dict[str, BasketEntry] = {}
        for product_id in snapshot.get("itemIds") or []:
            product = self._catalog.get(str(product_id))
            if product is None or product.id in entries:
                logger.debug("Skipping %r while restoring basket", product_id)
                continue
            entries[product.id] = BasketEntry.of(product)
        self._entries = entries
        self._changed()
        return self._state

    # --- Queries --------------------------------------------------------------

    def has(self, product_id: str) -> bool:
        return product_id in self._entries

    @property
    def state(self) -> BasketState:
        return self._state

    @property
    def total(self) -> int | float:
        return self._state.total

    @property
    def item_ids(self) -> list[str]:
        return list(self._state.item_ids)

    @property
    def item_count(self) -> int:
        return self._state.item_count

    @property
    def is_empty(self) -> bool:
        return self._state.is_empty

    # --- Internal helpers -----------------------------------------------------

    def _changed(self) -> None:
        self._state = BasketState.derive(list(self._entries.values()))
        logger.debug(
            "Basket now holds %d item(s), total %s",
            self._state.item_count,
            self._state.total,
        )
        self._bus.emit(BASKET_CHANGED, self._state)
