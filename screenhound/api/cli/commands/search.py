"""Search command: resolve one query from the command line."""

from __future__ import annotations

import argparse

from screenhound.core.config.config import Config
from screenhound.providers.figma.figma_client import FigmaClient
from screenhound.providers.index.index_store import IndexStore
from screenhound.services.screen_search_service import ScreenSearchService


async def search_command(args: argparse.Namespace, config: Config) -> int:
    store = IndexStore(config.index.get_index_path())
    async with FigmaClient(config.figma) as client:
        service = ScreenSearchService(config, client, store)
        outcome = await service.search(
            args.query,
            project=args.project,
            version=args.spec_version,
            auto_confirm=not args.no_auto_confirm,
            session_id=args.session,
        )
    print(outcome.text)
    return 1 if outcome.is_error else 0
