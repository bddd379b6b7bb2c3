"""Fixed-layout decoding of the Mayan Swift ``AuctionState`` account."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Final

from mayan_cli.errors import AuctionStateSizeError, InvalidAddressError, InvalidFieldAddressError
from mayan_cli.solana.address import Address

# bump, hash, initializer, close_epoch, amount_out_min, winner,
# amount_promised, valid_from, seq_msg
_LAYOUT: Final[struct.Struct] = struct.Struct("<B32s32sQQ32sQQQ")

AUCTION_STATE_SIZE: Final[int] = _LAYOUT.size  # 137


@dataclass(frozen=True, slots=True)
class AuctionState:
    """Decoded auction-state account."""

    bump: int
    hash: bytes
    initializer: Address
    close_epoch: int
    amount_out_min: int
    winner: Address
    amount_promised: int
    valid_from: int
    seq_msg: int

    @property
    def hash_hex(self) -> str:
        return self.hash.hex()


def _field_address(field: str, raw: bytes) -> Address:
    try:
        return Address(raw)
    except InvalidAddressError as exc:
        raise InvalidFieldAddressError(field, exc.reason) from exc


def decode_auction_state(data: bytes) -> AuctionState:
    """Decode exactly ``AUCTION_STATE_SIZE`` bytes into an ``AuctionState``.

    Any other length is rejected; there is no partial decode and no
    discriminator skipping.
    """

    if len(data) != AUCTION_STATE_SIZE:
        raise AuctionStateSizeError(expected=AUCTION_STATE_SIZE, actual=len(data))

    (
        bump,
        hash_,
        initializer,
        close_epoch,
        amount_out_min,
        winner,
        amount_promised,
        valid_from,
        seq_msg,
    ) = _LAYOUT.unpack(data)

    return AuctionState(
        bump=bump,
        hash=hash_,
        initializer=_field_address("initializer", initializer),
        close_epoch=close_epoch,
        amount_out_min=amount_out_min,
        winner=_field_address("winner", winner),
        amount_promised=amount_promised,
        valid_from=valid_from,
        seq_msg=seq_msg,
    )


def encode_auction_state(state: AuctionState) -> bytes:
    """Serialize ``state`` back into the on-chain layout."""

    if len(state.hash) != 32:
        raise ValueError(f"hash must be 32 bytes, got {len(state.hash)}")
    try:
        return _LAYOUT.pack(
            state.bump,
            state.hash,
            bytes(state.initializer),
            state.close_epoch,
            state.amount_out_min,
            bytes(state.winner),
            state.amount_promised,
            state.valid_from,
            state.seq_msg,
        )
    except struct.error as exc:
        raise ValueError(f"AuctionState field out of range: {exc}") from exc


__all__ = ["AUCTION_STATE_SIZE", "AuctionState", "decode_auction_state", "encode_auction_state"]
