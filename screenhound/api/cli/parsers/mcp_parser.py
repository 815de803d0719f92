"""MCP command argument parser for ScreenHound CLI."""

import argparse
from typing import Any, cast

from screenhound.mcp_server.common import add_common_mcp_arguments


def add_mcp_subparser(subparsers: Any) -> argparse.ArgumentParser:
    parser = subparsers.add_parser(
        "mcp",
        help="Run the MCP stdio server",
        description="Serve search_figma_spec and get_index_stats over MCP stdio.",
    )

    add_common_mcp_arguments(parser)

    return cast(argparse.ArgumentParser, parser)


__all__: list[str] = ["add_mcp_subparser"]
