"""Command-line entry point for ``mayan-cli``."""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import Awaitable, Callable, Sequence

from pydantic import ValidationError

from mayan_cli import __version__
from mayan_cli.config import Settings, get_settings
from mayan_cli.encoding import (
    base58_encode,
    format_byte_list,
    from_bytes32,
    read_input,
    render_base58_decoded,
    render_bytes32,
    to_bytes32,
)
from mayan_cli.errors import ConfigurationError, MayanCliError
from mayan_cli.logging import configure_logging, get_logger
from mayan_cli.pipeline import AuctionInspector
from mayan_cli.presenter import (
    format_address,
    format_auction_state,
    format_bid_history,
    format_field,
)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130


def build_inspector(settings: Settings, rpc_url: str | None = None) -> AuctionInspector:
    return AuctionInspector(settings=settings, rpc_url=rpc_url)


def _emit(lines: Sequence[tuple[str, str]]) -> None:
    for label, value in lines:
        print(format_field(label, value))


async def _get_auction_state_address(args: argparse.Namespace, settings: Settings) -> None:
    inspector = build_inspector(settings)
    async with inspector.lifecycle():
        address = await inspector.resolve_address(args.order_id)
    print(format_address(address))


async def _get_auction_state(args: argparse.Namespace, settings: Settings) -> None:
    inspector = build_inspector(settings, args.rpc_url)
    async with inspector.lifecycle():
        state = await inspector.get_auction_state(args.input)
    print(format_auction_state(state))


async def _get_bids(args: argparse.Namespace, settings: Settings) -> None:
    inspector = build_inspector(settings, args.rpc_url)
    async with inspector.lifecycle():
        bids = await inspector.get_bids(args.input)
    print(format_bid_history(bids))


async def _base58_decode(args: argparse.Namespace, settings: Settings) -> None:
    _emit(render_base58_decoded(args.input, args.format))


async def _base58_encode(args: argparse.Namespace, settings: Settings) -> None:
    _emit([("Base58", base58_encode(read_input(args.input, args.format)))])


async def _to_bytes32(args: argparse.Namespace, settings: Settings) -> None:
    data = to_bytes32(args.input, args.format)
    _emit([("Bytes32 Array", format_byte_list(data)), ("Hex", data.hex())])


async def _from_bytes32(args: argparse.Namespace, settings: Settings) -> None:
    data = from_bytes32(args.input, args.input_format)
    _emit([render_bytes32(data, args.output_format)])


Handler = Callable[[argparse.Namespace, Settings], Awaitable[None]]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mayan-cli",
        description="A CLI utility for Mayan Finance operations",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--timeout", type=float, default=None, help="Per-request timeout in seconds")
    parser.add_argument("--log-level", default=None, help="Log level for stderr diagnostics (default: WARNING)")

    commands = parser.add_subparsers(dest="command", required=True, metavar="COMMAND")

    gasa = commands.add_parser(
        "get-auction-state-address",
        aliases=["gasa"],
        help="Get auction state address from order ID",
    )
    gasa.add_argument("order_id", help="The order ID to query")
    gasa.set_defaults(handler=_get_auction_state_address)

    rpc_help = "Solana RPC endpoint (defaults to mainnet, or MAYAN_RPC_URL / SOLANA_RPC_URL)"

    gas = commands.add_parser(
        "get-auction-state",
        aliases=["gas"],
        help="Get and parse auction state data from order ID or auction state address",
    )
    gas.add_argument("input", help="The order ID or auction state address to query")
    gas.add_argument("--rpc-url", default=None, help=rpc_help)
    gas.set_defaults(handler=_get_auction_state)

    gb = commands.add_parser(
        "get-bids",
        aliases=["gb"],
        help="Get bid information from auction state address or order ID",
    )
    gb.add_argument("input", help="The order ID or auction state address to query")
    gb.add_argument("--rpc-url", default=None, help=rpc_help)
    gb.set_defaults(handler=_get_bids)

    b58d = commands.add_parser("base58-decode", aliases=["b58d"], help="Decode a base58 encoded string")
    b58d.add_argument("input", help="The base58 encoded string to decode")
    b58d.add_argument("--format", default="hex", help="Output format: hex, bytes, or utf8")
    b58d.set_defaults(handler=_base58_decode)

    b58e = commands.add_parser("base58-encode", aliases=["b58e"], help="Encode data to base58")
    b58e.add_argument("input", help="The input data to encode")
    b58e.add_argument("--format", default="hex", help="Input format: hex, bytes, or utf8")
    b58e.set_defaults(handler=_base58_encode)

    b32d = commands.add_parser(
        "to-bytes32",
        aliases=["b32d"],
        help="Convert hex string or bytes array to exactly 32 bytes",
    )
    b32d.add_argument("input", help="Hex string (with or without 0x prefix) or comma-separated bytes")
    b32d.add_argument("--format", default="hex", help="Input format: hex or bytes")
    b32d.set_defaults(handler=_to_bytes32)

    b32e = commands.add_parser(
        "from-bytes32",
        aliases=["b32e"],
        help="Left-pad data to a 32-byte array (fails if longer than 32 bytes)",
    )
    b32e.add_argument("input", help="Hex string (with or without 0x prefix) or comma-separated bytes")
    b32e.add_argument("--input-format", default="hex", help="Input format: hex or bytes")
    b32e.add_argument("--output-format", default="hex", help="Output format: hex or bytes")
    b32e.set_defaults(handler=_from_bytes32)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = get_settings()
    except ValidationError as exc:
        print(f"Error: {ConfigurationError(str(exc))}", file=sys.stderr)
        return EXIT_FAILURE

    overrides: dict[str, object] = {}
    if args.timeout is not None:
        overrides["request_timeout_seconds"] = args.timeout
    if args.log_level is not None:
        overrides["log_level"] = args.log_level
    if overrides:
        settings = settings.model_copy(update=overrides)

    configure_logging(settings.log_level)
    logger = get_logger(__name__)

    handler: Handler = args.handler
    try:
        asyncio.run(handler(args, settings))
    except MayanCliError as exc:
        logger.debug("command_failed", command=args.command, error_type=type(exc).__name__)
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_FAILURE
    except KeyboardInterrupt:
        print("Interrupted", file=sys.stderr)
        return EXIT_INTERRUPTED
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
