"""Basket value objects.

The basket itself lives in BasketStore; these are the immutable pieces it
hands out.  ``BasketState`` is always derived from the current entries and
never stored independently of them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from storefront.domain.model.product import Product


@dataclass(frozen=True)
class BasketEntry:
    """The slice of a Product the checkout needs to display."""

    id: str
    title: str
    price: int | float | None

    @staticmethod
    def of(product: Product) -> BasketEntry:
        return BasketEntry(id=product.id, title=product.title, price=product.price)


@dataclass(frozen=True)
class BasketState:
    """Read-only view of the basket, recomputed after every mutation.

    Invariants:
    - ``total`` is the sum of entry prices, a missing price counting as 0
    - ``item_count == len(item_ids)``
    - ``is_empty == (item_count == 0)``
    """

    item_ids: tuple[str, ...]
    items: tuple[BasketEntry, ...]
    total: int | float
    item_count: int
    is_empty: bool

    @staticmethod
    def derive(entries: list[BasketEntry]) -> BasketState:
        total = sum(entry.price or 0 for entry in entries)
        return BasketState(
            item_ids=tuple(entry.id for entry in entries),
            items=tuple(entries),
            total=total,
            item_count=len(entries),
            is_empty=not entries,
        )

    def to_dict(self) -> dict[str, Any]:
        """Session snapshot layout; everything but ``itemIds`` is a cache."""
        return {
            "itemIds": list(self.item_ids),
            "total": self.total,
            "itemCount": self.item_count,
            "isEmpty": self.is_empty,
        }
