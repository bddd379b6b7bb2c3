"""Base58 and 32-byte conversion helpers behind the encoding sub-commands."""

from __future__ import annotations

import base58

from mayan_cli.errors import InputError

BYTES32_LENGTH = 32

HEX = "hex"
BYTES = "bytes"
UTF8 = "utf8"


def _normalise_format(fmt: str, allowed: tuple[str, ...], label: str = "format") -> str:
    normalised = fmt.strip().lower()
    if normalised not in allowed:
        raise InputError(
            f"Invalid {label} '{fmt}'. Valid formats are: {', '.join(allowed)}"
        )
    return normalised


def parse_hex(text: str) -> bytes:
    """Decode hex with or without a ``0x`` prefix."""

    stripped = text.strip()
    if stripped[:2].lower() == "0x":
        stripped = stripped[2:]
    try:
        return bytes.fromhex(stripped)
    except ValueError as exc:
        raise InputError(f"Failed to decode hex string: {exc}") from exc


def parse_byte_list(text: str) -> bytes:
    """Decode comma-separated decimal bytes such as ``"1, 2, 255"``."""

    values: list[int] = []
    for part in text.split(","):
        try:
            value = int(part.strip())
        except ValueError as exc:
            raise InputError(f"Failed to parse byte value {part.strip()!r}") from exc
        if not 0 <= value <= 255:
            raise InputError(f"Failed to parse byte value {part.strip()!r}: out of range")
        values.append(value)
    return bytes(values)


def format_byte_list(data: bytes) -> str:
    return "[" + ", ".join(str(b) for b in data) + "]"


def read_input(text: str, fmt: str, allowed: tuple[str, ...] = (HEX, BYTES, UTF8), label: str = "format") -> bytes:
    fmt = _normalise_format(fmt, allowed, label)
    if fmt == HEX:
        return parse_hex(text)
    if fmt == BYTES:
        return parse_byte_list(text)
    return text.encode("utf-8")


def base58_decode(text: str) -> bytes:
    try:
        return base58.b58decode(text)
    except ValueError as exc:
        raise InputError(f"Failed to decode base58 string: {exc}") from exc


def base58_encode(data: bytes) -> str:
    return base58.b58encode(data).decode("ascii")


def render_base58_decoded(text: str, fmt: str = HEX) -> list[tuple[str, str]]:
    """Decode ``text`` and render it as labelled output lines.

    Undecodable UTF-8 falls back to a hex dump rather than failing.
    """

    fmt = _normalise_format(fmt, (HEX, BYTES, UTF8))
    decoded = base58_decode(text)
    if fmt == HEX:
        return [("Hex", decoded.hex())]
    if fmt == BYTES:
        return [("Bytes", format_byte_list(decoded))]
    try:
        return [("UTF-8", decoded.decode("utf-8"))]
    except UnicodeDecodeError:
        return [("Error", "Invalid UTF-8 sequence"), ("Raw bytes", decoded.hex())]


def to_bytes32(text: str, fmt: str = HEX) -> bytes:
    """Parse ``text`` and require exactly 32 bytes."""

    data = read_input(text, fmt, (HEX, BYTES))
    if len(data) != BYTES32_LENGTH:
        raise InputError(
            f"Input must be exactly {BYTES32_LENGTH} bytes, got {len(data)} bytes. Input: {text}"
        )
    return data


def from_bytes32(text: str, input_format: str = HEX) -> bytes:
    """Left-pad ``text`` with zeros to 32 bytes, as Solidity does for addresses."""

    data = read_input(text, input_format, (HEX, BYTES), "input format")
    if len(data) > BYTES32_LENGTH:
        raise InputError(
            f"Input is too long: {len(data)} bytes. Maximum is {BYTES32_LENGTH} bytes. Input: {text}"
        )
    return data.rjust(BYTES32_LENGTH, b"\x00")


def render_bytes32(data: bytes, output_format: str = HEX) -> tuple[str, str]:
    output_format = _normalise_format(output_format, (HEX, BYTES), "output format")
    if output_format == HEX:
        return ("Hex", "0x" + data.hex())
    return ("Bytes", format_byte_list(data))


__all__ = [
    "base58_decode",
    "base58_encode",
    "from_bytes32",
    "parse_byte_list",
    "parse_hex",
    "read_input",
    "render_base58_decoded",
    "render_bytes32",
    "to_bytes32",
]
