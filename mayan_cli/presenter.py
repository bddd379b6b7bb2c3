"""Plain-text rendering of command results."""

from __future__ import annotations

from typing import Sequence

from mayan_cli.auction.bids import BidEntry
from mayan_cli.auction.state import AuctionState
from mayan_cli.solana.address import Address


def format_field(label: str, value: object) -> str:
    return f"{label}: {value}"


def format_address(address: Address) -> str:
    return format_field("Auction State Address", address)


def format_auction_state(state: AuctionState) -> str:
    fields = [
        ("Bump", state.bump),
        ("Hash", state.hash_hex),
        ("Initializer", state.initializer),
        ("Close Epoch", state.close_epoch),
        ("Amount Out Min", state.amount_out_min),
        ("Winner", state.winner),
        ("Amount Promised", state.amount_promised),
        ("Valid From", state.valid_from),
        ("Sequence Message", state.seq_msg),
    ]
    lines = ["Auction State Details:"]
    lines.extend(f"  {format_field(label, value)}" for label, value in fields)
    return "\n".join(lines)


def _bid_diff(bids: Sequence[BidEntry], index: int) -> str:
    current = bids[index]
    if index == 0 or current.bid_amount == 0 or bids[index - 1].bid_amount == 0:
        return "-"
    diff = current.bid_amount - bids[index - 1].bid_amount
    return f"+{diff}" if diff >= 0 else str(diff)


def format_bid_history(bids: Sequence[BidEntry]) -> str:
    if not bids:
        return "Bid History: No bids found"

    lines = [f"Bid History: {len(bids)} bids found"]
    for index, bid in enumerate(bids):
        amount = str(bid.bid_amount) if bid.bid_amount > 0 else "Unknown"
        lines.append("")
        lines.append(f"Bid {index + 1}:")
        lines.append(f"  Signature: {bid.signature}")
        lines.append(f"  Bidder: {bid.bidder}")
        lines.append(f"  Amount: {amount}")
        lines.append(f"  Diff: {_bid_diff(bids, index)}")
        lines.append(f"  Slot: {bid.slot}")
        lines.append(f"  Timestamp: {bid.timestamp or 0}")
        lines.append(f"  Status: {'Failed' if bid.failed else 'Success'}")
    return "\n".join(lines)


__all__ = ["format_address", "format_auction_state", "format_bid_history", "format_field"]
