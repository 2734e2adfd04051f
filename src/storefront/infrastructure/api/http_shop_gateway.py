"""httpx-backed implementation of ShopGateway."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from storefront.domain.exceptions import RemoteServiceError
from storefront.domain.gateway.shop_gateway import ShopGateway
from storefront.domain.model.order import Order, OrderResult
from storefront.domain.model.product import Product

logger = logging.getLogger(__name__)


class HttpShopGateway(ShopGateway):
    """Client for the shop API.

    ``GET /product`` answers ``{"total": n, "items": [...]}``;
    ``POST /order`` takes the order as JSON and answers ``{"id", "total"}``.
    Failed requests answer with ``{"error": "..."}`` when the service has
    something to say, otherwise the HTTP reason phrase is used.
    """

    def __init__(
        self,
        base_url: str,
        cdn_url: str = "",
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize the gateway.

        Args:
            base_url: API root, e.g. ``https://shop.example.com/api``
            cdn_url: Prefix prepended to every product image path
            timeout: Request timeout in seconds (ignored when *client* is given)
            client: Pre-built client, mainly for tests with a mock transport
        """
        self.cdn_url = cdn_url
        self.client = client or httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            headers={"Content-Type": "application/json"},
        )

    async def __aenter__(self) -> HttpShopGateway:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()

    # --- ShopGateway interface ------------------------------------------------

    async def fetch_catalog(self) -> list[Product]:
        data = await self._request("GET", "/product")
        try:
            items = data["items"]
            return [Product.from_raw(raw, self.cdn_url) for raw in items]
        except (KeyError, TypeError) as exc:
            raise RemoteServiceError(f"Malformed catalog response: {exc}") from exc

    async def submit_order(self, order: Order) -> OrderResult:
        data = await self._request("POST", "/order", json=order.to_payload())
        try:
            return OrderResult.from_raw(data)
        except (KeyError, TypeError) as exc:
            raise RemoteServiceError(f"Malformed order response: {exc}") from exc

    # --- Internal helpers -----------------------------------------------------

    async def _request(self, method: str, uri: str, **kwargs: Any) -> Any:
        logger.debug("%s %s", method, uri)
        try:
            response = await self.client.request(method, uri, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, uri, exc)
            raise RemoteServiceError(str(exc) or type(exc).__name__) from exc
        return self._handle_response(response)

    @staticmethod
    def _handle_response(response: httpx.Response) -> Any:
        if response.is_success:
            try:
                return response.json()
            except ValueError as exc:
                raise RemoteServiceError("Invalid JSON in response") from exc

        logger.warning(
            "%s %s -> %d", response.request.method, response.request.url, response.status_code
        )
        try:
            body = response.json()
        except ValueError:
            body = None
        error = body.get("error") if isinstance(body, dict) else None
        raise RemoteServiceError(error or response.reason_phrase or str(response.status_code))
