"""MCP command: run the stdio server."""

from __future__ import annotations

import argparse

from screenhound.core.config.config import Config


async def mcp_command(args: argparse.Namespace, config: Config) -> int:
    # Imported lazily so other commands never disable logging
    from screenhound.mcp_server.stdio import main as stdio_main

    await stdio_main(args)
    return 0
