"""Collect command: gather screen metadata from Figma into the index."""

from __future__ import annotations

import argparse

from loguru import logger
from rich.console import Console
from rich.progress import BarColumn, Progress, TextColumn, TimeElapsedColumn

from screenhound.core.config.config import Config
from screenhound.providers.figma.figma_client import FigmaClient
from screenhound.providers.index.index_store import IndexStore
from screenhound.services.metadata_collector import CollectionReport, MetadataCollector


def _print_report(console: Console, report: CollectionReport) -> None:
    console.print(f"Index: {report.index_path}")
    if report.backup_path:
        console.print(f"Backup: {report.backup_path}")
    console.print(f"Projects collected: {', '.join(report.updated_projects) or '-'}")
    if report.failed_projects:
        console.print(f"[red]Projects failed: {', '.join(report.failed_projects)}[/red]")
    console.print(
        f"Versions updated: {report.updated_versions}, "
        f"preserved: {report.preserved_versions}"
    )
    if report.failed_files:
        console.print(f"[yellow]Files failed: {len(report.failed_files)}[/yellow]")
    console.print(f"Total screens: {report.total_screens}")


async def collect_command(args: argparse.Namespace, config: Config) -> int:
    console = Console(stderr=True)
    projects = config.search.supported_projects
    logger.info(
        f"Collecting {', '.join(projects)} at depth {config.figma.collection_depth} "
        f"(empty overwrite {'allowed' if config.index.allow_empty_version_overwrite else 'blocked'})"
    )

    store = IndexStore(config.index.get_index_path())
    async with FigmaClient(config.figma) as client:
        if getattr(args, "no_progress", False):
            collector = MetadataCollector(
                client,
                store,
                depth=config.figma.collection_depth,
                delay=config.figma.collection_delay,
            )
            report = await collector.collect_all(
                projects, config.index.allow_empty_version_overwrite
            )
        else:
            with Progress(
                TextColumn("{task.description}"),
                BarColumn(),
                TextColumn("{task.completed}/{task.total} files"),
                TimeElapsedColumn(),
                console=console,
            ) as progress:
                collector = MetadataCollector(
                    client,
                    store,
                    depth=config.figma.collection_depth,
                    delay=config.figma.collection_delay,
                    progress=progress,
                )
                report = await collector.collect_all(
                    projects, config.index.allow_empty_version_overwrite
                )

    _print_report(console, report)
    return 1 if report.failed_projects and not report.updated_projects else 0
