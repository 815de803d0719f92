"""Collect command argument parser for ScreenHound CLI."""

import argparse
from typing import Any, cast

from screenhound.core.config.figma_config import FigmaConfig
from screenhound.core.config.index_config import IndexConfig
from screenhound.core.config.search_config import SearchConfig


def add_collect_subparser(subparsers: Any) -> argparse.ArgumentParser:
    parser = subparsers.add_parser(
        "collect",
        help="Collect screen metadata from Figma into the index",
        description=(
            "Fetch every versioned file of the configured projects, scan them for "
            "screens and merge the result into the screen index."
        ),
    )

    SearchConfig.add_cli_arguments(parser)
    FigmaConfig.add_cli_arguments(parser)
    IndexConfig.add_cli_arguments(parser)

    parser.add_argument(
        "--depth",
        type=int,
        help="Tree depth per file (default: FIGMA_COLLECTION_DEPTH or 8)",
    )

    parser.add_argument(
        "--allow-empty-overwrite",
        action="store_true",
        help="Let an empty collection result replace a stored non-empty version",
    )

    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Disable the progress bar",
    )

    return cast(argparse.ArgumentParser, parser)


__all__: list[str] = ["add_collect_subparser"]
