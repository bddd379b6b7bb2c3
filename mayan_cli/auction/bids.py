"""Bid extraction from auction-state transaction history."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

import base58

BID_LOG_MARKER = "Program log: Instruction: Bid"
# Position of the auction program's bid instruction inside a bid transaction
# (after the two compute-budget instructions).
BID_INSTRUCTION_INDEX = 2
BID_AMOUNT_WIDTH = 8


@dataclass(slots=True)
class BidEntry:
    """A single bid observed on the auction-state account."""

    signature: str
    bidder: str
    bid_amount: int
    slot: int
    timestamp: int | None
    failed: bool


def is_bid_transaction(transaction: Mapping[str, Any]) -> bool:
    meta = transaction.get("meta") or {}
    logs = meta.get("logMessages") or []
    return any(BID_LOG_MARKER in log for log in logs)


def _bid_amount(instruction: Mapping[str, Any]) -> int | None:
    data = instruction.get("data")
    if not isinstance(data, str):
        return None
    try:
        raw = base58.b58decode(data)
    except ValueError:
        return None
    if len(raw) < BID_AMOUNT_WIDTH:
        return None
    return int.from_bytes(raw[-BID_AMOUNT_WIDTH:], "little")


def _account_key(entry: Any) -> str | None:
    if isinstance(entry, Mapping):
        return entry.get("pubkey")
    if isinstance(entry, str):
        return entry
    return None


def parse_bid_transaction(
    signature_info: Mapping[str, Any],
    transaction: Mapping[str, Any] | None,
) -> BidEntry | None:
    """Build a ``BidEntry`` from a ``jsonParsed`` transaction, or ``None``.

    Returns ``None`` for transactions that are not bids or whose shape does not
    match a bid (missing instruction, fully parsed instruction, short data).
    """

    if not transaction or not is_bid_transaction(transaction):
        return None

    meta = transaction.get("meta") or {}
    message = (transaction.get("transaction") or {}).get("message")
    if not isinstance(message, Mapping):
        return None

    instructions = message.get("instructions") or []
    account_keys = message.get("accountKeys") or []
    if len(instructions) <= BID_INSTRUCTION_INDEX or not account_keys:
        return None

    instruction = instructions[BID_INSTRUCTION_INDEX]
    # Instructions of programs the RPC node understands come back as "parsed";
    # the auction program's are only partially decoded (programId/accounts/data).
    if not isinstance(instruction, Mapping) or "parsed" in instruction:
        return None

    bid_amount = _bid_amount(instruction)
    bidder = _account_key(account_keys[0])
    if bid_amount is None or bidder is None:
        return None

    return BidEntry(
        signature=signature_info["signature"],
        bidder=bidder,
        bid_amount=bid_amount,
        slot=int(signature_info.get("slot", transaction.get("slot", 0))),
        timestamp=signature_info.get("blockTime"),
        failed=meta.get("err") is not None,
    )


def sort_bids(bids: list[BidEntry]) -> list[BidEntry]:
    """Return bids in chronological (slot) order."""

    return sorted(bids, key=lambda bid: bid.slot)


__all__ = [
    "BID_LOG_MARKER",
    "BidEntry",
    "is_bid_transaction",
    "parse_bid_transaction",
    "sort_bids",
]
