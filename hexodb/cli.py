#!/usr/bin/env python3
"""
HexoDB Command-Line Client

Usage:
    hexodb --url https://shard.example set foo bar
    hexodb --url https://shard.example get foo
    hexodb math items + 200
    hexodb starts-with money --sort .data --order desc
    hexodb ping

Environment Variables:
    HEXODB_URL        - Default shard URL
    HEXODB_TIMEOUT    - Request timeout in seconds
    HEXODB_DEBUG      - Enable debug logging (true/false)
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import Any, List, Optional

from .client.database import Database
from .config.settings import settings
from .errors import HexoError


def parse_value(text: str) -> Any:
    """Interpret a command-line value as JSON when possible, else as a string."""
    try:
        return json.loads(text)
    except ValueError:
        return text


def parse_number(text: str) -> Any:
    value = parse_value(text)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise argparse.ArgumentTypeError(f"not a number: {text!r}")
    return value


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        prog="hexodb",
        description="HexoDB: command-line client for a HexoDB shard",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        "--url",
        type=str,
        default=settings.URL,
        help="Shard base URL",
    )

    parser.add_argument(
        "--timeout",
        type=float,
        default=settings.TIMEOUT,
        help="Request timeout in seconds",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        default=settings.DEBUG,
        help="Enable debug logging",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    cmd = commands.add_parser("set", help="Store a value (JSON or plain text)")
    cmd.add_argument("key")
    cmd.add_argument("value", type=parse_value)

    for name, help_text in (
            ("get", "Fetch a value"),
            ("delete", "Delete a key"),
            ("exists", "Check if a key has a value"),
    ):
        cmd = commands.add_parser(name, help=help_text)
        cmd.add_argument("key")

    commands.add_parser("all", help="List every entry")

    cmd = commands.add_parser("math", help="Apply + - * / to a stored number")
    cmd.add_argument("key")
    cmd.add_argument("operator")
    cmd.add_argument("value", type=parse_number)

    cmd = commands.add_parser("starts-with", help="List entries whose key starts with a prefix")
    cmd.add_argument("prefix")
    cmd.add_argument("--sort", default=None, help="Dotted sort path, e.g. .data.score")
    cmd.add_argument("--order", choices=("asc", "desc"), default="asc")
    cmd.add_argument("--limit", type=int, default=None)

    commands.add_parser("ping", help="Measure shard latency in milliseconds")

    return parser


def setup_logging(debug: bool = False) -> None:
    """Configure logging based on debug flag."""
    level = logging.DEBUG if debug else getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stderr),
        ]
    )


async def run_command(db: Database, args: argparse.Namespace) -> Any:
    """Execute one parsed command and return a JSON-serializable result."""
    if args.command == "set":
        return await db.set(args.key, args.value)
    if args.command == "get":
        return await db.get(args.key)
    if args.command == "delete":
        return await db.delete(args.key)
    if args.command == "exists":
        return await db.exists(args.key)
    if args.command == "all":
        return [entry.as_dict() for entry in await db.all()]
    if args.command == "math":
        return await db.math(args.key, args.operator, args.value)
    if args.command == "starts-with":
        entries = await db.starts_with(
            args.prefix, sort=args.sort, order=args.order, limit=args.limit
        )
        return [entry.as_dict() for entry in entries]
    if args.command == "ping":
        return await db.ping()
    raise ValueError(f"unknown command {args.command!r}")


async def _run(args: argparse.Namespace) -> Any:
    async with Database(args.url, timeout=args.timeout) as db:
        return await run_command(db, args)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the command-line client."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(debug=args.debug)
    logger = logging.getLogger(__name__)

    if not args.url:
        parser.error("no shard URL given (use --url or set HEXODB_URL)")

    logger.debug(f"Running {args.command} against {args.url}")

    try:
        result = asyncio.run(_run(args))
    except (HexoError, ZeroDivisionError) as e:
        print(f"ERROR {e}", file=sys.stderr)
        return 1

    print(json.dumps(result))
    return 0


if __name__ == "__main__":
    sys.exit(main())
