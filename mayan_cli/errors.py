"""Exception taxonomy for the resolve / fetch / decode pipeline.

Every stage raises its own family so callers can tell which stage failed
and why without parsing messages::

    MayanCliError
    ├── InputError
    │   └── InvalidAddressError
    ├── ResolutionError
    │   ├── ResolutionTransportError
    │   ├── ResolutionStatusError
    │   ├── MalformedResolutionResponseError
    │   ├── MissingAuctionStateAddressError
    │   └── InvalidAuctionStateAddressError
    ├── FetchError
    │   ├── FetchTransportError
    │   ├── AccountNotFoundError
    │   ├── RpcResponseError
    │   └── MalformedRpcResponseError
    └── DecodeError
        ├── AuctionStateSizeError
        └── InvalidFieldAddressError
"""

from __future__ import annotations


class MayanCliError(Exception):
    """Base class for every failure surfaced by the CLI."""


# Input


class InputError(MayanCliError):
    """User-supplied value could not be interpreted."""


class ConfigurationError(InputError):
    """Environment or `.env` settings failed validation."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Invalid configuration: {detail}")


class InvalidAddressError(InputError, ValueError):
    """Text or bytes that do not encode a 32-byte Solana address."""

    def __init__(self, value: object, reason: str) -> None:
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid address {value!r}: {reason}")


# Resolution


class ResolutionError(MayanCliError):
    """Order id could not be mapped to an auction-state address."""

    def __init__(self, order_id: str, message: str) -> None:
        self.order_id = order_id
        super().__init__(message)


class ResolutionTransportError(ResolutionError):
    def __init__(self, order_id: str, detail: str) -> None:
        self.detail = detail
        super().__init__(order_id, f"Failed to send request to Mayan API: {detail}")


class ResolutionStatusError(ResolutionError):
    def __init__(self, order_id: str, status_code: int) -> None:
        self.status_code = status_code
        super().__init__(order_id, f"API request failed with status: {status_code}")


class MalformedResolutionResponseError(ResolutionError):
    def __init__(self, order_id: str, detail: str) -> None:
        self.detail = detail
        super().__init__(order_id, f"Failed to parse JSON response: {detail}")


class MissingAuctionStateAddressError(ResolutionError):
    def __init__(self, order_id: str) -> None:
        super().__init__(order_id, f"Response for order {order_id} has no auctionStateAddr")


class InvalidAuctionStateAddressError(ResolutionError):
    def __init__(self, order_id: str, value: str) -> None:
        self.value = value
        super().__init__(
            order_id,
            f"Response for order {order_id} has an invalid auctionStateAddr: {value!r}",
        )


# Fetch


class FetchError(MayanCliError):
    """Raw account data could not be retrieved from the ledger."""


class FetchTransportError(FetchError):
    def __init__(self, endpoint: str, detail: str) -> None:
        self.endpoint = endpoint
        self.detail = detail
        super().__init__(f"Failed to reach Solana RPC at {endpoint}: {detail}")


class AccountNotFoundError(FetchError):
    def __init__(self, address: object) -> None:
        self.address = address
        super().__init__(f"Account {address} not found")


class RpcResponseError(FetchError):
    """Endpoint answered with a non-success HTTP status or a JSON-RPC error."""

    def __init__(self, method: str, code: int, message: str) -> None:
        self.method = method
        self.code = code
        super().__init__(f"RPC {method} failed ({code}): {message}")


class MalformedRpcResponseError(FetchError):
    def __init__(self, method: str, detail: str) -> None:
        self.method = method
        self.detail = detail
        super().__init__(f"Unexpected RPC {method} response: {detail}")


# Decode


class DecodeError(MayanCliError):
    """Raw payload does not match the auction-state layout."""


class AuctionStateSizeError(DecodeError):
    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Failed to deserialize auction state data: expected {expected} bytes, got {actual}"
        )


class InvalidFieldAddressError(DecodeError):
    def __init__(self, field: str, reason: str) -> None:
        self.field = field
        self.reason = reason
        super().__init__(f"Field {field!r} is not a valid address: {reason}")


__all__ = [
    "AccountNotFoundError",
    "AuctionStateSizeError",
    "ConfigurationError",
    "DecodeError",
    "FetchError",
    "FetchTransportError",
    "InputError",
    "InvalidAddressError",
    "InvalidAuctionStateAddressError",
    "InvalidFieldAddressError",
    "MalformedResolutionResponseError",
    "MalformedRpcResponseError",
    "MayanCliError",
    "MissingAuctionStateAddressError",
    "ResolutionError",
    "ResolutionStatusError",
    "ResolutionTransportError",
    "RpcResponseError",
]
