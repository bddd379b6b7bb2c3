"""Auction account decoding and bid history."""

from .bids import BidEntry, parse_bid_transaction, sort_bids
from .state import AUCTION_STATE_SIZE, AuctionState, decode_auction_state, encode_auction_state

__all__ = [
    "AUCTION_STATE_SIZE",
    "AuctionState",
    "BidEntry",
    "decode_auction_state",
    "encode_auction_state",
    "parse_bid_transaction",
    "sort_bids",
]
