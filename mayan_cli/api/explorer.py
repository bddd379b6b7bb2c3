"""Client for the Mayan explorer order-id lookup."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Mapping
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from mayan_cli.config import Settings, get_settings
from mayan_cli.errors import (
    InvalidAddressError,
    InvalidAuctionStateAddressError,
    MalformedResolutionResponseError,
    MissingAuctionStateAddressError,
    ResolutionStatusError,
    ResolutionTransportError,
)
from mayan_cli.logging import get_logger
from mayan_cli.solana.address import Address, OrderId


class OrderResponse(BaseModel):
    """The only part of the order payload the CLI relies on."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    auction_state_addr: str = Field(alias="auctionStateAddr")


class MayanExplorerClient:
    """Resolve swap order ids to auction-state addresses.

    One GET per order id; a failed attempt is final.
    """

    def __init__(
        self,
        *,
        settings: Settings | None = None,
        client: httpx.AsyncClient | None = None,
        default_headers: Mapping[str, str] | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self._client = client
        self._default_headers = dict(default_headers or {})
        self._default_headers.setdefault("User-Agent", self.settings.explorer_user_agent)
        self._default_headers.setdefault("Accept", "application/json")
        self._logger = get_logger(__name__).bind(component="mayan_explorer_client")

    @property
    def base_url(self) -> str:
        return self.settings.explorer_base_url.rstrip("/")

    @asynccontextmanager
    async def lifecycle(self) -> AsyncIterator["MayanExplorerClient"]:
        """Ensure an AsyncClient is available for the duration of the context."""

        if self._client is not None:
            yield self
            return

        timeout = httpx.Timeout(self.settings.request_timeout_seconds)
        async with httpx.AsyncClient(timeout=timeout) as client:
            self._client = client
            try:
                yield self
            finally:
                self._client = None

    def order_url(self, order_id: str) -> str:
        return f"{self.base_url}/{quote(order_id, safe='')}"

    async def fetch_order(self, order_id: str) -> OrderResponse:
        """Fetch and validate the order payload."""

        if self._client is None:
            raise RuntimeError("MayanExplorerClient.lifecycle must be entered before requesting")

        url = self.order_url(order_id)
        self._logger.debug("order_lookup", url=url)

        try:
            response = await self._client.get(url, headers=self._default_headers)
        except httpx.RequestError as exc:
            self._logger.warning("order_lookup_transport_failed", url=url, error=str(exc))
            raise ResolutionTransportError(order_id, str(exc) or type(exc).__name__) from exc

        if not response.is_success:
            self._logger.warning("order_lookup_failed", url=url, status_code=response.status_code)
            raise ResolutionStatusError(order_id, response.status_code)

        try:
            body = response.json()
        except ValueError as exc:
            raise MalformedResolutionResponseError(order_id, f"body is not JSON ({exc})") from exc
        if not isinstance(body, dict):
            raise MalformedResolutionResponseError(
                order_id, f"expected a JSON object, got {type(body).__name__}"
            )
        value = body.get("auctionStateAddr")
        if value is None:
            raise MissingAuctionStateAddressError(order_id)
        if not isinstance(value, str):
            raise InvalidAuctionStateAddressError(order_id, str(value))

        try:
            return OrderResponse.model_validate(body)
        except ValidationError as exc:
            raise MalformedResolutionResponseError(order_id, str(exc)) from exc

    async def resolve(self, order_id: OrderId | str) -> Address:
        """Return the auction-state address recorded for ``order_id``."""

        order = await self.fetch_order(order_id)
        try:
            address = Address.from_base58(order.auction_state_addr)
        except InvalidAddressError as exc:
            raise InvalidAuctionStateAddressError(order_id, order.auction_state_addr) from exc

        self._logger.info("order_resolved", order_id=order_id, address=str(address))
        return address


__all__ = ["MayanExplorerClient", "OrderResponse"]
