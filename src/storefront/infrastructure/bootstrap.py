"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Settings come from the environment:

- ``STOREFRONT_API_URL``  shop API root
- ``STOREFRONT_CDN_URL``  prefix for product image paths
- ``STOREFRONT_DATA_DIR`` where the basket snapshot is kept
- ``STOREFRONT_TIMEOUT``  HTTP timeout in seconds
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from storefront.application.controller import StorefrontController
from storefront.application.view import StorefrontView
from storefront.domain.events import EventBus
from storefront.domain.gateway.shop_gateway import ShopGateway
from storefront.domain.repository.basket_snapshot_repository import (
    BasketSnapshotRepository,
)
from storefront.domain.store.basket_store import BasketStore
from storefront.domain.store.catalog_store import CatalogStore
from storefront.domain.store.order_draft_store import OrderDraftStore
from storefront.infrastructure.api.http_shop_gateway import HttpShopGateway
from storefront.infrastructure.persistence.json_basket_snapshot_repository import (
    JsonBasketSnapshotRepository,
)

DEFAULT_API_URL = "http://localhost:3000/api/weblarek"
DEFAULT_CDN_URL = "http://localhost:3000/content/weblarek"
DEFAULT_TIMEOUT = 30.0


@dataclass
class Storefront:
    """Everything one storefront session needs, already wired together."""

    bus: EventBus
    catalog: CatalogStore
    basket: BasketStore
    draft: OrderDraftStore
    gateway: ShopGateway
    controller: StorefrontController

    async def aclose(self) -> None:
        self.controller.close()
        await self.gateway.aclose()


def data_dir() -> Path:
    # Resolve data directory relative to the project root unless overridden.
    default = Path(__file__).resolve().parents[3] / "data"
    return Path(os.environ.get("STOREFRONT_DATA_DIR", default))


def shop_gateway() -> HttpShopGateway:
    return HttpShopGateway(
        base_url=os.environ.get("STOREFRONT_API_URL", DEFAULT_API_URL),
        cdn_url=os.environ.get("STOREFRONT_CDN_URL", DEFAULT_CDN_URL),
        timeout=float(os.environ.get("STOREFRONT_TIMEOUT", DEFAULT_TIMEOUT)),
    )


def snapshot_repository() -> JsonBasketSnapshotRepository:
    return JsonBasketSnapshotRepository(data_dir() / "basket.json")


def build_storefront(
    view: StorefrontView,
    gateway: ShopGateway | None = None,
    snapshots: BasketSnapshotRepository | None = None,
) -> Storefront:
    bus = EventBus()
    catalog = CatalogStore(bus)
    basket = BasketStore(bus, catalog)
    draft = OrderDraftStore(bus)
    gateway = gateway or shop_gateway()
    controller = StorefrontController(
        bus=bus,
        catalog=catalog,
        basket=basket,
        draft=draft,
        gateway=gateway,
        view=view,
        snapshots=snapshots if snapshots is not None else snapshot_repository(),
    )
    return Storefront(
        bus=bus,
        catalog=catalog,
        basket=basket,
        draft=draft,
        gateway=gateway,
        controller=controller,
    )
