"""Stats command: summarize the screen index."""

from __future__ import annotations

import argparse
import json

from screenhound.api.cli.utils.index import verify_index_exists
from screenhound.core.config.config import Config
from screenhound.providers.index.index_store import IndexStore


async def stats_command(args: argparse.Namespace, config: Config) -> int:
    store = IndexStore(verify_index_exists(config))
    store.load()
    stats = store.stats()

    if getattr(args, "json", False):
        print(json.dumps(stats, ensure_ascii=False, indent=2))
        return 0

    print(f"Index: {stats['indexPath']}")
    print(f"Last updated: {stats['lastUpdated']}")
    print(f"Total screens: {stats['totalScreens']}")
    for name, project in stats["projects"].items():
        print(f"{name}: {project['screens']} screens")
        for version, count in project["versions"].items():
            print(f"  {version}: {count}")
    return 0
