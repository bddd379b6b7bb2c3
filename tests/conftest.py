from __future__ import annotations

import base64
import json
import struct
from typing import Any, Callable

import base58
import httpx
import pytest
import structlog

from mayan_cli.auction.bids import BID_LOG_MARKER
from mayan_cli.config import Settings

ORDER_ID = "SWIFT_0xcd96bb4c31aa86d29a39117206055d2b17b65156c66886050c10abd48ee6691a"
AUCTION_STATE_ADDR = "6p7fUeppNLatf5TkmMA4ybpSJBejMnGSRknhPfEBNSF3"
INITIALIZER = "B88xH3Jmhq4WEaiRno2mYmsxV35MmgSY45ZmQnbL8yft"
WINNER = "FzZ77TM8Ekcb6gyWPmcT9upWkAZKZc5xrYfuFu7pifPn"
AUCTION_HASH = "cd96bb4c31aa86d29a39117206055d2b17b65156c66886050c10abd48ee6691a"

EXPLORER_BASE = "https://explorer.test/v3/swap/order-id"
RPC_URL = "https://rpc.test"


def build_auction_state_bytes(
    *,
    bump: int = 255,
    hash_hex: str = AUCTION_HASH,
    initializer: str = INITIALIZER,
    close_epoch: int = 797,
    amount_out_min: int = 641865924,
    winner: str = WINNER,
    amount_promised: int = 644921303,
    valid_from: int = 1748670506,
    seq_msg: int = 0,
) -> bytes:
    """Lay out an auction-state account field by field."""

    return b"".join(
        [
            struct.pack("<B", bump),
            bytes.fromhex(hash_hex),
            base58.b58decode(initializer),
            struct.pack("<Q", close_epoch),
            struct.pack("<Q", amount_out_min),
            base58.b58decode(winner),
            struct.pack("<Q", amount_promised),
            struct.pack("<Q", valid_from),
            struct.pack("<Q", seq_msg),
        ]
    )


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        explorer_base_url=EXPLORER_BASE,
        rpc_url=RPC_URL,
        request_timeout_seconds=5.0,
        bid_history_limit=100,
    )


@pytest.fixture()
def auction_state_bytes() -> bytes:
    return build_auction_state_bytes()


def rpc_result(result: Any, request_id: int = 1) -> httpx.Response:
    return httpx.Response(200, json={"jsonrpc": "2.0", "id": request_id, "result": result})


def account_info_result(data: bytes) -> dict[str, Any]:
    return {
        "context": {"slot": 341234567},
        "value": {
            "data": [base64.b64encode(data).decode("ascii"), "base64"],
            "executable": False,
            "lamports": 2018400,
            "owner": "BLZRi6frs4X4DNLw56V4EXai1b6QVESN1BhHBTYM9VcY",
            "rentEpoch": 18446744073709551615,
            "space": len(data),
        },
    }


def rpc_handler(
    responses: dict[str, Callable[[dict[str, Any]], httpx.Response]],
    calls: list[dict[str, Any]] | None = None,
) -> Callable[[httpx.Request], httpx.Response]:
    """Dispatch JSON-RPC requests to per-method fake handlers."""

    def handler(request: httpx.Request) -> httpx.Response:
        payload = json.loads(request.content.decode())
        if calls is not None:
            calls.append(payload)
        return responses[payload["method"]](payload)

    return handler


BIDDER = WINNER
AUCTION_PROGRAM = "BLZRi6frs4X4DNLw56V4EXai1b6QVESN1BhHBTYM9VcY"


def make_bid_transaction(
    amount: int,
    *,
    failed: bool = False,
    logs: list[str] | None = None,
    third_instruction: dict[str, Any] | None = None,
) -> dict[str, Any]:
    data = base58.b58encode(b"\xc7\x38\x55\x26\x92\x0a\x6d\x4f" + amount.to_bytes(8, "little")).decode()
    compute_budget = {
        "parsed": {"info": {"units": 200000}, "type": "setComputeUnitLimit"},
        "program": "compute-budget",
        "programId": "ComputeBudget111111111111111111111111111111",
    }
    return {
        "slot": 0,
        "meta": {
            "err": {"InstructionError": [2, {"Custom": 6003}]} if failed else None,
            "logMessages": logs
            if logs is not None
            else [
                f"Program {AUCTION_PROGRAM} invoke [1]",
                BID_LOG_MARKER,
                f"Program {AUCTION_PROGRAM} success",
            ],
        },
        "transaction": {
            "message": {
                "accountKeys": [{"pubkey": BIDDER, "signer": True, "writable": True}],
                "instructions": [
                    compute_budget,
                    compute_budget,
                    third_instruction
                    if third_instruction is not None
                    else {"programId": AUCTION_PROGRAM, "accounts": [BIDDER], "data": data},
                ],
            },
            "signatures": ["sig"],
        },
    }


@pytest.fixture(autouse=True)
def reset_structlog():
    """Give every test a fresh logging configuration."""

    yield
    structlog.reset_defaults()
