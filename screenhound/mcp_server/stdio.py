"""ScreenHound MCP server over stdin/stdout.

Service wiring and lifecycle live in MCPServerBase; this module only binds
the tool registry to the SDK's low-level server and runs the stdio loop.

stdout carries JSON-RPC frames. Nothing else may ever be written to it.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import mcp.server.stdio
import mcp.types as types
from loguru import logger
from mcp.server import Server
from mcp.server.lowlevel import NotificationOptions
from mcp.server.models import InitializationOptions

from screenhound.core.config.config import Config
from screenhound.version import __version__

from .base import MCPServerBase
from .common import handle_tool_call
from .tools import TOOL_REGISTRY

# Third-party libraries log through stdlib logging; silence it before the SDK starts
logging.disable(logging.CRITICAL)
for _name in ("", "mcp", "httpx", "httpcore"):
    logging.getLogger(_name).setLevel(logging.CRITICAL + 1)

# No loguru sink until the server decides whether debug logging goes to a file
logger.remove()


class StdioMCPServer(MCPServerBase):
    """Serves search_figma_spec and get_index_stats to one stdio client."""

    def __init__(self, config: Config, args: Any = None):
        super().__init__(config, args=args, debug_mode=bool(getattr(args, "debug", False)))
        self.server: Server = Server("ScreenHound")
        self._register_tools()

    def _register_tools(self) -> None:
        # The low-level SDK takes exactly one call_tool handler, so every
        # registry tool is dispatched through it by name
        @self.server.call_tool()  # type: ignore[misc]
        async def dispatch_tool(
            tool_name: str, arguments: dict[str, Any]
        ) -> list[types.TextContent]:
            await self._initialization_complete.wait()
            self.debug_log(f"call {tool_name} {arguments}")
            return await handle_tool_call(
                tool_name=tool_name,
                arguments=arguments,
                service=self.service,
            )

        @self.server.list_tools()  # type: ignore[misc]
        async def list_registry_tools() -> list[types.Tool]:
            return [
                types.Tool(
                    name=name,
                    description=tool.description,
                    inputSchema=tool.parameters,
                )
                for name, tool in TOOL_REGISTRY.items()
            ]

    @asynccontextmanager
    async def server_lifespan(self) -> AsyncIterator[None]:
        """Initialize services before serving and release the HTTP client after."""
        try:
            await self.initialize()
            self._initialization_complete.set()
            self.debug_log("services ready")
            yield
        finally:
            await self.cleanup()

    async def run(self) -> None:
        options = InitializationOptions(
            server_name="ScreenHound Figma Spec Search",
            server_version=__version__,
            capabilities=self.server.get_capabilities(
                notification_options=NotificationOptions(),
                experimental_capabilities={},
            ),
        )

        async with self.server_lifespan():
            async with mcp.server.stdio.stdio_server() as (read_stream, write_stream):
                self.debug_log("stdio transport open")
                await self.server.run(read_stream, write_stream, options)


async def main(args: Any = None) -> None:
    """Run the stdio server.

    Args:
        args: Namespace from the `screenhound mcp` subcommand; parsed from
            sys.argv when the server is started through `screenhound-mcp`.
    """
    import argparse

    from screenhound.api.cli.utils.config_factory import create_validated_config
    from screenhound.mcp_server.common import add_common_mcp_arguments

    if args is None:
        parser = argparse.ArgumentParser(
            prog="screenhound-mcp",
            description="ScreenHound MCP server (stdio)",
        )
        add_common_mcp_arguments(parser)
        args = parser.parse_args()

    # Config problems (missing token, missing index) are reported per tool call
    config, _errors = create_validated_config(args, "mcp")

    server = StdioMCPServer(config, args=args)
    try:
        await server.run()
    except Exception:
        # stderr is off limits too; the debug file is the only place to look
        logger.exception("ScreenHound MCP server stopped unexpectedly")
        sys.exit(1)


def main_sync() -> None:
    """Console script entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    main_sync()
