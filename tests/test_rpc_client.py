from __future__ import annotations

from typing import Any

import httpx
import pytest

from conftest import AUCTION_STATE_ADDR, RPC_URL, account_info_result, rpc_handler, rpc_result
from mayan_cli.api.rpc import SolanaRpcClient
from mayan_cli.config import Settings
from mayan_cli.errors import (
    AccountNotFoundError,
    FetchError,
    FetchTransportError,
    MalformedRpcResponseError,
    RpcResponseError,
)
from mayan_cli.solana.address import Address

ADDRESS = Address.from_base58(AUCTION_STATE_ADDR)


async def _fetch(settings: Settings, handler, *, endpoint: str | None = None) -> bytes:
    transport = httpx.MockTransport(handler)
    async with httpx.AsyncClient(transport=transport) as client:
        rpc = SolanaRpcClient(endpoint=endpoint, settings=settings, client=client)
        async with rpc.lifecycle():
            return await rpc.get_account_data(ADDRESS)


@pytest.mark.asyncio
async def test_get_account_data_unwraps_base64(settings: Settings, auction_state_bytes: bytes) -> None:
    calls: list[dict[str, Any]] = []
    urls: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        urls.append(str(request.url))
        return rpc_handler(
            {"getAccountInfo": lambda payload: rpc_result(account_info_result(auction_state_bytes))},
            calls,
        )(request)

    data = await _fetch(settings, handler)

    assert data == auction_state_bytes
    assert urls == [RPC_URL]
    assert calls[0]["jsonrpc"] == "2.0"
    assert calls[0]["method"] == "getAccountInfo"
    assert calls[0]["params"] == [
        AUCTION_STATE_ADDR,
        {"encoding": "base64", "commitment": settings.rpc_commitment},
    ]


@pytest.mark.asyncio
async def test_endpoint_override_beats_settings(settings: Settings, auction_state_bytes: bytes) -> None:
    urls: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        urls.append(str(request.url))
        return rpc_result(account_info_result(auction_state_bytes))

    await _fetch(settings, handler, endpoint="https://devnet.rpc.test")

    assert urls == ["https://devnet.rpc.test"]


@pytest.mark.asyncio
async def test_missing_account_is_distinct_from_network_failure(settings: Settings) -> None:
    def not_found(request: httpx.Request) -> httpx.Response:
        return rpc_result({"context": {"slot": 1}, "value": None})

    def unreachable(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("name resolution failed", request=request)

    with pytest.raises(AccountNotFoundError) as missing:
        await _fetch(settings, not_found)
    with pytest.raises(FetchTransportError) as network:
        await _fetch(settings, unreachable)

    assert missing.value.address == ADDRESS
    assert isinstance(missing.value, FetchError)
    assert isinstance(network.value, FetchError)
    assert not isinstance(network.value, AccountNotFoundError)


@pytest.mark.asyncio
async def test_timeout_is_a_transport_failure(settings: Settings) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timed out", request=request)

    with pytest.raises(FetchTransportError):
        await _fetch(settings, handler)


@pytest.mark.asyncio
async def test_json_rpc_error_object(settings: Settings) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={"jsonrpc": "2.0", "id": 1, "error": {"code": -32602, "message": "Invalid param"}},
        )

    with pytest.raises(RpcResponseError) as excinfo:
        await _fetch(settings, handler)

    assert excinfo.value.code == -32602
    assert excinfo.value.method == "getAccountInfo"


@pytest.mark.asyncio
async def test_http_error_status(settings: Settings) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(429, text="Too Many Requests")

    with pytest.raises(RpcResponseError) as excinfo:
        await _fetch(settings, handler)

    assert excinfo.value.code == 429


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        {"jsonrpc": "2.0", "id": 1},
        {"jsonrpc": "2.0", "id": 1, "result": {"context": {"slot": 1}}},
        {"jsonrpc": "2.0", "id": 1, "result": {"value": {"data": "not-a-pair"}}},
        {"jsonrpc": "2.0", "id": 1, "result": {"value": {"data": ["@@@", "base64"]}}},
        {"jsonrpc": "2.0", "id": 1, "result": {"value": {"data": ["AAAA", "base58"]}}},
    ],
)
async def test_malformed_envelopes(settings: Settings, body: dict[str, Any]) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=body)

    with pytest.raises(MalformedRpcResponseError):
        await _fetch(settings, handler)


@pytest.mark.asyncio
async def test_history_calls_use_confirmed_commitment(settings: Settings) -> None:
    calls: list[dict[str, Any]] = []
    handler = rpc_handler(
        {
            "getSignaturesForAddress": lambda payload: rpc_result([{"signature": "sig1", "slot": 10}]),
            "getTransaction": lambda payload: rpc_result(None),
        },
        calls,
    )

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        rpc = SolanaRpcClient(settings=settings, client=client)
        async with rpc.lifecycle():
            signatures = await rpc.get_signatures_for_address(ADDRESS, limit=5)
            transaction = await rpc.get_transaction("sig1")

    assert signatures == [{"signature": "sig1", "slot": 10}]
    assert transaction is None
    assert calls[0]["params"] == [AUCTION_STATE_ADDR, {"commitment": "confirmed", "limit": 5}]
    assert calls[1]["params"][1]["encoding"] == "jsonParsed"
    assert calls[1]["params"][1]["maxSupportedTransactionVersion"] == 0
    assert calls[0]["id"] != calls[1]["id"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "entries",
    [
        ["sig1"],
        [{"signature": "sig1", "slot": None}],
        [{"signature": "sig1", "slot": "10"}],
        [{"signature": "sig1", "slot": True}],
        [{"slot": 10}],
        [{"signature": "sig1", "slot": 10}, None],
    ],
)
async def test_signature_entries_must_carry_signature_and_slot(settings: Settings, entries: list[Any]) -> None:
    handler = rpc_handler({"getSignaturesForAddress": lambda payload: rpc_result(entries)})

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        rpc = SolanaRpcClient(settings=settings, client=client)
        async with rpc.lifecycle():
            with pytest.raises(MalformedRpcResponseError) as excinfo:
                await rpc.get_signatures_for_address(ADDRESS)

    assert excinfo.value.method == "getSignaturesForAddress"
