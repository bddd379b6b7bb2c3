"""Solana primitives used by the CLI."""

from .address import ADDRESS_LENGTH, Address, OrderId, classify, is_address

__all__ = ["ADDRESS_LENGTH", "Address", "OrderId", "classify", "is_address"]
