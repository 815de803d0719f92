"""ScreenHound command line entry point."""

import argparse
import asyncio
import sys
from collections.abc import Awaitable, Callable
from typing import Any

from loguru import logger

from screenhound.api.cli.parsers.collect_parser import add_collect_subparser
from screenhound.api.cli.parsers.mcp_parser import add_mcp_subparser
from screenhound.api.cli.parsers.search_parser import add_search_subparser
from screenhound.api.cli.parsers.stats_parser import add_stats_subparser
from screenhound.api.cli.utils.config_factory import create_validated_config
from screenhound.api.cli.utils.log_setup import setup_cli_logging
from screenhound.core.config.config import Config
from screenhound.core.exceptions import ScreenHoundError
from screenhound.version import __version__

CommandFn = Callable[[argparse.Namespace, Config], Awaitable[int]]


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="screenhound",
        description="Find screen specs in Figma design files",
    )
    parser.add_argument("--version", action="version", version=f"screenhound {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")

    subparsers = parser.add_subparsers(dest="command", required=True)
    add_collect_subparser(subparsers)
    add_search_subparser(subparsers)
    add_stats_subparser(subparsers)
    add_mcp_subparser(subparsers)
    return parser


def _resolve_command(name: str) -> CommandFn:
    # Lazy imports keep startup light and keep MCP logging setup isolated
    if name == "collect":
        from screenhound.api.cli.commands.collect import collect_command

        return collect_command
    if name == "search":
        from screenhound.api.cli.commands.search import search_command

        return search_command
    if name == "stats":
        from screenhound.api.cli.commands.stats import stats_command

        return stats_command
    if name == "mcp":
        from screenhound.api.cli.commands.mcp import mcp_command

        return mcp_command
    raise ValueError(f"Unknown command: {name}")


async def async_main(argv: list[str] | None = None) -> int:
    parser = create_parser()
    args: Any = parser.parse_args(argv)

    if args.command != "mcp":
        setup_cli_logging(args.verbose)

    config, errors = create_validated_config(args, args.command)
    if errors and args.command != "mcp":
        for error in errors:
            logger.error(error)
        return 2

    command = _resolve_command(args.command)
    try:
        return await command(args, config)
    except (FileNotFoundError, ScreenHoundError) as e:
        logger.error(str(e))
        return 1


def main() -> None:
    """Synchronous CLI entry point."""
    try:
        sys.exit(asyncio.run(async_main()))
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    main()
