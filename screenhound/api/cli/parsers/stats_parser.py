"""Stats command argument parser for ScreenHound CLI."""

import argparse
from typing import Any, cast

from screenhound.core.config.index_config import IndexConfig


def add_stats_subparser(subparsers: Any) -> argparse.ArgumentParser:
    parser = subparsers.add_parser(
        "stats",
        help="Show screen index statistics",
    )

    IndexConfig.add_cli_arguments(parser)

    parser.add_argument(
        "--json",
        action="store_true",
        help="Output JSON report",
    )

    return cast(argparse.ArgumentParser, parser)


__all__: list[str] = ["add_stats_subparser"]
