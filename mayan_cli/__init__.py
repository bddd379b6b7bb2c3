"""Mayan CLI: inspect Mayan Swift auction state on Solana."""

from __future__ import annotations

__version__ = "0.1.0"

from .api import MayanExplorerClient, SolanaRpcClient
from .auction import AuctionState, BidEntry, decode_auction_state, encode_auction_state
from .config import Settings, get_settings
from .pipeline import AuctionInspector
from .solana import Address, OrderId, classify

__all__ = [
    "Address",
    "AuctionInspector",
    "AuctionState",
    "BidEntry",
    "MayanExplorerClient",
    "OrderId",
    "Settings",
    "SolanaRpcClient",
    "classify",
    "decode_auction_state",
    "encode_auction_state",
    "get_settings",
]
