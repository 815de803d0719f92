"""Protocol-level helpers shared by MCP server wrappers."""

import argparse
from typing import Any

import mcp.types as types

from screenhound.core.exceptions import ScreenHoundError
from screenhound.services.screen_search_service import ScreenSearchService

from .tools import execute_tool


class ToolExecutionError(Exception):
    """Raised to let the MCP SDK return the message with isError set."""


async def handle_tool_call(
    tool_name: str,
    arguments: dict[str, Any],
    service: ScreenSearchService | None,
) -> list[types.TextContent]:
    """Run a registry tool and wrap its result as MCP text content.

    Raises:
        ToolExecutionError: If the tool fails or reports an error outcome
    """
    if service is None:
        raise ToolExecutionError("Server not initialized")

    try:
        result = await execute_tool(tool_name, service, arguments or {})
    except (ValueError, ScreenHoundError) as e:
        raise ToolExecutionError(str(e)) from e

    if isinstance(result, str):
        return [types.TextContent(type="text", text=result)]

    if result.get("is_error"):
        raise ToolExecutionError(result["text"])
    return [types.TextContent(type="text", text=result["text"])]


def add_common_mcp_arguments(parser: argparse.ArgumentParser) -> None:
    """Arguments shared by every MCP entry point."""
    from screenhound.core.config.figma_config import FigmaConfig
    from screenhound.core.config.index_config import IndexConfig

    IndexConfig.add_cli_arguments(parser)
    FigmaConfig.add_cli_arguments(parser)
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Write MCP debug logs to SCREENHOUND_DEBUG_FILE",
    )
