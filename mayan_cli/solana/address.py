"""Solana address values and the order-id / address classifier."""

from __future__ import annotations

from dataclasses import dataclass
from typing import NewType

import base58

from mayan_cli.errors import InvalidAddressError

ADDRESS_LENGTH = 32
# Longest base58 rendering of 32 bytes; anything longer can never be an address.
MAX_ADDRESS_TEXT_LENGTH = 44

OrderId = NewType("OrderId", str)


@dataclass(frozen=True, slots=True)
class Address:
    """A 32-byte Solana public key."""

    raw: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.raw, (bytes, bytearray)):
            raise InvalidAddressError(self.raw, "expected bytes")
        if len(self.raw) != ADDRESS_LENGTH:
            raise InvalidAddressError(
                self.raw, f"expected {ADDRESS_LENGTH} bytes, got {len(self.raw)}"
            )
        object.__setattr__(self, "raw", bytes(self.raw))

    @classmethod
    def from_base58(cls, text: str) -> "Address":
        if len(text) > MAX_ADDRESS_TEXT_LENGTH:
            raise InvalidAddressError(text, "string too long")
        try:
            decoded = base58.b58decode(text)
        except ValueError as exc:
            raise InvalidAddressError(text, f"not base58 ({exc})") from exc
        if len(decoded) != ADDRESS_LENGTH:
            raise InvalidAddressError(
                text, f"decodes to {len(decoded)} bytes, expected {ADDRESS_LENGTH}"
            )
        return cls(decoded)

    def to_base58(self) -> str:
        return base58.b58encode(self.raw).decode("ascii")

    def __bytes__(self) -> bytes:
        return self.raw

    def __str__(self) -> str:
        return self.to_base58()

    def __repr__(self) -> str:
        return f"Address('{self.to_base58()}')"


def is_address(text: str) -> bool:
    try:
        Address.from_base58(text)
    except InvalidAddressError:
        return False
    return True


def classify(text: str) -> Address | OrderId:
    """Return an ``Address`` when ``text`` is one, otherwise an ``OrderId``.

    Never raises: anything that does not decode to exactly 32 bytes is handed
    to the resolver, which decides whether the order id is real.
    """

    try:
        return Address.from_base58(text)
    except InvalidAddressError:
        return OrderId(text)


__all__ = ["ADDRESS_LENGTH", "Address", "OrderId", "classify", "is_address"]
