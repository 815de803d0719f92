"""Transport-independent part of the ScreenHound MCP server.

Owns the index store, the Figma client and the search service, plus the
file-only debug logging every transport needs. A transport subclass adds
tool registration and its serve loop.
"""

import asyncio
import os
from abc import ABC, abstractmethod
from typing import Any

from loguru import logger

from screenhound.core.config.config import Config
from screenhound.core.exceptions import IndexCorruptError, IndexMissingError
from screenhound.providers.figma.figma_client import FigmaClient
from screenhound.providers.index.index_store import IndexStore
from screenhound.services.screen_search_service import ScreenSearchService

DEFAULT_DEBUG_FILE = "/tmp/screenhound_mcp_debug.log"


def _env_true(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in ("1", "true", "yes", "on")


class MCPServerBase(ABC):
    """Shared service state for MCP transports.

    Subclasses bind tools in _register_tools() and serve in run().
    """

    def __init__(self, config: Config, debug_mode: bool = False, args: Any = None):
        """Prepare state; services are created later by initialize().

        Args:
            config: Loaded configuration
            debug_mode: Enable debug logging to SCREENHOUND_DEBUG_FILE
            args: Original CLI arguments
        """
        self.config = config
        self.args = args
        self.debug_mode = debug_mode or config.debug or _env_true("SCREENHOUND_DEBUG")

        # Service components, created in initialize()
        self.store: IndexStore | None = None
        self.provider: FigmaClient | None = None
        self.service: ScreenSearchService | None = None

        # Initialization state
        self._initialized = False
        self._init_lock = asyncio.Lock()
        self._initialization_complete = asyncio.Event()
        self._configure_logging()

    def _configure_logging(self) -> None:
        """Route loguru to a debug file only; stdio belongs to JSON-RPC."""
        logger.remove()
        if self.debug_mode:
            debug_file = os.getenv("SCREENHOUND_DEBUG_FILE", DEFAULT_DEBUG_FILE)
            logger.add(debug_file, level="DEBUG", enqueue=False, backtrace=False)

    def debug_log(self, message: str) -> None:
        """Write to the debug file; a no-op unless debug mode is on."""
        if self.debug_mode:
            logger.debug(f"[MCP] {message}")

    async def initialize(self) -> None:
        """Initialize the index store, Figma client and search service.

        Repeated calls return immediately once services exist.
        A missing or unreadable index is not fatal: tools report it when invoked.
        """
        async with self._init_lock:
            if self._initialized:
                return

            self.debug_log("initializing services")
            self.store = IndexStore(self.config.index.get_index_path())
            try:
                self.store.load()
            except (IndexMissingError, IndexCorruptError) as e:
                self.debug_log(str(e))

            self.provider = FigmaClient(self.config.figma)
            self.service = ScreenSearchService(self.config, self.provider, self.store)
            self._initialized = True
            self.debug_log(f"Services initialized (index: {self.store.path})")

    async def cleanup(self) -> None:
        """Release the HTTP client."""
        if self.provider is not None:
            await self.provider.close()
        self.debug_log("Server cleanup complete")

    def ensure_service(self) -> ScreenSearchService:
        if self.service is None:
            raise RuntimeError("Server not initialized")
        return self.service

    @abstractmethod
    def _register_tools(self) -> None:
        """Register tool handlers with the protocol server."""

    @abstractmethod
    async def run(self) -> None:
        """Run the server until the transport closes."""
