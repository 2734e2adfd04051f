"""Product entity.

Products are owned by the catalog and replaced wholesale on every fetch.
A product with no price is "priceless": it can be shown but counts as zero
in every total.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class Product:
    """A product in the catalog, keyed by its immutable ``id``."""

    id: str
    title: str
    category: str
    price: int | float | None
    description: str = ""
    image: str = ""

    @property
    def is_priceless(self) -> bool:
        return self.price is None

    @staticmethod
    def from_raw(raw: dict[str, Any], cdn_url: str = "") -> Product:
        """Build a Product from the shop API's JSON representation."""
        return Product(
            id=str(raw["id"]),
            title=raw.get("title", ""),
            category=raw.get("category", ""),
            price=raw.get("price"),
            description=raw.get("description", ""),
            image=f"{cdn_url}{raw.get('image', '')}",
        )
