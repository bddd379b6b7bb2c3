"""Resolve -> fetch -> decode orchestration."""

from __future__ import annotations

from contextlib import AsyncExitStack, asynccontextmanager
from typing import AsyncIterator

from mayan_cli.api.explorer import MayanExplorerClient
from mayan_cli.api.rpc import SolanaRpcClient
from mayan_cli.auction.bids import BidEntry, parse_bid_transaction, sort_bids
from mayan_cli.auction.state import AUCTION_STATE_SIZE, AuctionState, decode_auction_state
from mayan_cli.config import Settings, get_settings
from mayan_cli.logging import get_logger
from mayan_cli.solana.address import Address, classify

# Anchor accounts start with an 8-byte type discriminator.
ACCOUNT_DISCRIMINATOR_SIZE = 8


def strip_account_discriminator(data: bytes) -> bytes:
    """Drop the account discriminator when the payload carries one.

    Only a payload of exactly discriminator + record size is unwrapped; every
    other length reaches the decoder untouched.
    """

    if len(data) == ACCOUNT_DISCRIMINATOR_SIZE + AUCTION_STATE_SIZE:
        return data[ACCOUNT_DISCRIMINATOR_SIZE:]
    return data


class AuctionInspector:
    """Glue the explorer lookup, the RPC fetch and the decoder together.

    Stages run strictly in order and the first failure propagates unchanged.
    """

    def __init__(
        self,
        *,
        settings: Settings | None = None,
        explorer: MayanExplorerClient | None = None,
        rpc: SolanaRpcClient | None = None,
        rpc_url: str | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.explorer = explorer or MayanExplorerClient(settings=self.settings)
        self.rpc = rpc or SolanaRpcClient(endpoint=rpc_url, settings=self.settings)
        self._logger = get_logger(__name__).bind(component="auction_inspector")

    @asynccontextmanager
    async def lifecycle(self) -> AsyncIterator["AuctionInspector"]:
        async with AsyncExitStack() as stack:
            await stack.enter_async_context(self.explorer.lifecycle())
            await stack.enter_async_context(self.rpc.lifecycle())
            yield self

    async def resolve_address(self, identifier: str) -> Address:
        """Return ``identifier`` as an address, resolving order ids remotely."""

        target = classify(identifier)
        if isinstance(target, Address):
            self._logger.debug("identifier_is_address", address=str(target))
            return target
        return await self.explorer.resolve(target)

    async def get_auction_state(self, identifier: str) -> AuctionState:
        address = await self.resolve_address(identifier)
        data = await self.rpc.get_account_data(address)
        state = decode_auction_state(strip_account_discriminator(data))
        self._logger.info("auction_state_decoded", address=str(address))
        return state

    async def get_bids(self, identifier: str) -> list[BidEntry]:
        """Collect bids from the most recent transactions on the auction account."""

        address = await self.resolve_address(identifier)
        signatures = await self.rpc.get_signatures_for_address(
            address, limit=self.settings.bid_history_limit
        )

        bids: list[BidEntry] = []
        for signature_info in signatures[: self.settings.bid_history_limit]:
            signature = signature_info.get("signature")
            if not signature:
                continue
            transaction = await self.rpc.get_transaction(signature)
            if transaction is None:
                self._logger.warning("transaction_missing", signature=signature)
                continue
            bid = parse_bid_transaction(signature_info, transaction)
            if bid is not None:
                bids.append(bid)

        self._logger.info("bids_collected", address=str(address), count=len(bids))
        return sort_bids(bids)


__all__ = ["ACCOUNT_DISCRIMINATOR_SIZE", "AuctionInspector", "strip_account_discriminator"]
