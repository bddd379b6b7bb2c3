"""Minimal Solana JSON-RPC client over httpx."""

from __future__ import annotations

import base64
import binascii
import itertools
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Mapping, Sequence

import httpx
from pydantic import BaseModel, ConfigDict, ValidationError

from mayan_cli.config import Settings, get_settings
from mayan_cli.errors import (
    AccountNotFoundError,
    FetchTransportError,
    MalformedRpcResponseError,
    RpcResponseError,
)
from mayan_cli.logging import get_logger
from mayan_cli.solana.address import Address


class AccountInfo(BaseModel):
    """``getAccountInfo`` value with ``encoding=base64``."""

    model_config = ConfigDict(extra="ignore")

    data: tuple[str, str]
    owner: str | None = None
    lamports: int | None = None
    executable: bool | None = None


class SolanaRpcClient:
    """Read-only Solana JSON-RPC client.

    The endpoint is taken from ``endpoint`` when given, otherwise from
    ``settings.rpc_url``; nothing is read from process-wide state at call time.
    """

    def __init__(
        self,
        *,
        endpoint: str | None = None,
        settings: Settings | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.endpoint = endpoint or self.settings.rpc_url
        self._client = client
        self._ids = itertools.count(1)
        self._logger = get_logger(__name__).bind(component="solana_rpc_client")

    @asynccontextmanager
    async def lifecycle(self) -> AsyncIterator["SolanaRpcClient"]:
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

    async def call(self, method: str, params: Sequence[Any]) -> Any:
        """Perform one JSON-RPC call and return its ``result`` member."""

        if self._client is None:
            raise RuntimeError("SolanaRpcClient.lifecycle must be entered before requesting")

        payload = {"jsonrpc": "2.0", "id": next(self._ids), "method": method, "params": list(params)}
        self._logger.debug("rpc_request", method=method, endpoint=self.endpoint)

        try:
            response = await self._client.post(self.endpoint, json=payload)
        except httpx.RequestError as exc:
            self._logger.warning("rpc_transport_failed", method=method, error=str(exc))
            raise FetchTransportError(self.endpoint, str(exc) or type(exc).__name__) from exc

        if not response.is_success:
            self._logger.warning("rpc_request_failed", method=method, status_code=response.status_code)
            raise RpcResponseError(method, response.status_code, response.reason_phrase or "HTTP error")

        try:
            body = response.json()
        except ValueError as exc:
            raise MalformedRpcResponseError(method, f"body is not JSON ({exc})") from exc
        if not isinstance(body, dict):
            raise MalformedRpcResponseError(method, f"expected a JSON object, got {type(body).__name__}")

        error = body.get("error")
        if error is not None:
            if isinstance(error, Mapping):
                code = error.get("code")
                raise RpcResponseError(
                    method, code if isinstance(code, int) else 0, str(error.get("message", ""))
                )
            raise RpcResponseError(method, 0, str(error))
        if "result" not in body:
            raise MalformedRpcResponseError(method, "missing 'result'")
        return body["result"]

    async def get_account_info(self, address: Address) -> AccountInfo | None:
        result = await self.call(
            "getAccountInfo",
            [str(address), {"encoding": "base64", "commitment": self.settings.rpc_commitment}],
        )
        if not isinstance(result, Mapping) or "value" not in result:
            raise MalformedRpcResponseError("getAccountInfo", "missing 'value'")
        value = result["value"]
        if value is None:
            return None
        try:
            return AccountInfo.model_validate(value)
        except ValidationError as exc:
            raise MalformedRpcResponseError("getAccountInfo", str(exc)) from exc

    async def get_account_data(self, address: Address) -> bytes:
        """Return the raw bytes stored at ``address``."""

        info = await self.get_account_info(address)
        if info is None:
            self._logger.info("account_not_found", address=str(address))
            raise AccountNotFoundError(address)

        payload, encoding = info.data
        if encoding != "base64":
            raise MalformedRpcResponseError("getAccountInfo", f"unexpected data encoding {encoding!r}")
        try:
            data = base64.b64decode(payload, validate=True)
        except binascii.Error as exc:
            raise MalformedRpcResponseError("getAccountInfo", f"invalid base64 data ({exc})") from exc

        self._logger.debug("account_fetched", address=str(address), size=len(data))
        return data

    async def get_signatures_for_address(
        self,
        address: Address,
        *,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        config: dict[str, Any] = {"commitment": "confirmed"}
        if limit is not None:
            config["limit"] = limit
        result = await self.call("getSignaturesForAddress", [str(address), config])
        if not isinstance(result, list):
            raise MalformedRpcResponseError("getSignaturesForAddress", "expected a list")
        for index, entry in enumerate(result):
            if not isinstance(entry, dict):
                raise MalformedRpcResponseError(
                    "getSignaturesForAddress", f"entry {index} is not an object"
                )
            if not isinstance(entry.get("signature"), str):
                raise MalformedRpcResponseError(
                    "getSignaturesForAddress", f"entry {index} has no signature"
                )
            slot = entry.get("slot")
            if isinstance(slot, bool) or not isinstance(slot, int):
                raise MalformedRpcResponseError(
                    "getSignaturesForAddress", f"entry {index} has no integer slot"
                )
        return result

    async def get_transaction(self, signature: str) -> dict[str, Any] | None:
        result = await self.call(
            "getTransaction",
            [
                signature,
                {
                    "encoding": "jsonParsed",
                    "maxSupportedTransactionVersion": 0,
                    "commitment": "confirmed",
                },
            ],
        )
        if result is not None and not isinstance(result, dict):
            raise MalformedRpcResponseError("getTransaction", "expected an object")
        return result


__all__ = ["AccountInfo", "SolanaRpcClient"]
