"""Search command argument parser for ScreenHound CLI."""

import argparse
from typing import Any, cast

from screenhound.core.config.figma_config import FigmaConfig
from screenhound.core.config.index_config import IndexConfig


def add_search_subparser(subparsers: Any) -> argparse.ArgumentParser:
    parser = subparsers.add_parser(
        "search",
        help="Resolve a screen query against the index",
        description=(
            "Search the screen index by screen id or natural language. "
            "Selections by number refer to the last list shown in the same session, "
            "so they only make sense through the MCP server."
        ),
    )

    parser.add_argument("query", help="Screen id or natural language query")
    parser.add_argument("--project", help="Explicit project name")
    parser.add_argument("--version", dest="spec_version", help="Explicit version X.Y.Z")
    parser.add_argument(
        "--no-auto-confirm",
        action="store_true",
        help="Always list candidates, even for a single match",
    )
    parser.add_argument(
        "--session",
        help="Session id owning the candidate list",
    )

    IndexConfig.add_cli_arguments(parser)
    FigmaConfig.add_cli_arguments(parser)

    return cast(argparse.ArgumentParser, parser)


__all__: list[str] = ["add_search_subparser"]
