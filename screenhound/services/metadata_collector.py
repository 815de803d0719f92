"""Bulk collection of project screens into the index.

Every versioned file of a project is fetched once at a moderate depth and
scanned for screen containers. Descriptions are left empty; they are filled
lazily on confirmation. A failed file or project never wipes what the index
already holds for it.
"""

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from loguru import logger
from rich.progress import Progress, TaskID

from screenhound.core.exceptions import NotFoundError, RemoteFetchFailedError
from screenhound.core.models import INDEX_FORMAT_VERSION, ProjectBundle, VersionBundle
from screenhound.interfaces.document_provider import DocumentProvider
from screenhound.providers.index.index_store import IndexStore
from screenhound.services.screen_scanner import scan_file


@dataclass
class CollectionReport:
    """Summary of one bulk collection run."""

    projects: list[str] = field(default_factory=list)
    updated_projects: list[str] = field(default_factory=list)
    failed_projects: list[str] = field(default_factory=list)
    updated_versions: int = 0
    preserved_versions: int = 0
    skipped_files: list[str] = field(default_factory=list)
    failed_files: list[str] = field(default_factory=list)
    total_screens: int = 0
    index_path: Path | None = None
    backup_path: Path | None = None


class MetadataCollector:
    """Collects screens of configured projects and merges them into the index."""

    def __init__(
        self,
        provider: DocumentProvider,
        store: IndexStore,
        depth: int = 8,
        delay: float = 2.0,
        progress: Progress | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """Initialize the collector.

        Args:
            provider: Remote document source
            store: Index to merge into
            depth: Tree depth requested per file
            delay: Seconds to wait after each file fetch
            progress: Optional Rich Progress instance for per-file progress
            sleep: Awaitable sleep, replaceable in tests
        """
        self._provider = provider
        self._store = store
        self._depth = depth
        self._delay = delay
        self.progress = progress
        self._sleep = sleep

    async def collect_project(
        self, project_name: str, report: CollectionReport | None = None
    ) -> ProjectBundle:
        """Collect every versioned file of one project.

        Raises:
            NotFoundError: If no remote project matches the name
            RemoteFetchFailedError: If the project or file listing fails
        """
        remote_project = await self._provider.find_project_by_name(project_name)
        if remote_project is None:
            raise NotFoundError(f"Project not found: {project_name}")

        files = await self._provider.get_project_files(remote_project.id)
        logger.info(f"{project_name}: {len(files)} files in project '{remote_project.name}'")

        bundle = ProjectBundle()
        task_id: TaskID | None = None
        if self.progress is not None:
            task_id = self.progress.add_task(f"Collecting {project_name}", total=len(files))

        for remote_file in files:
            version = remote_file.version
            if version is None:
                logger.debug(f"Skipping {remote_file.name}: no version in name")
                if report is not None:
                    report.skipped_files.append(remote_file.name)
                self._advance(task_id)
                continue

            try:
                root = await self._provider.fetch(remote_file.key, depth=self._depth)
                screens = scan_file(root, project_name, remote_file)
                bundle.versions[version] = VersionBundle(
                    file_id=remote_file.key,
                    file_name=remote_file.name,
                    screens=screens,
                )
                logger.info(f"{project_name} {version}: {len(screens)} screens")
            except RemoteFetchFailedError as e:
                # Omitted versions keep their stored data on merge
                logger.error(f"{project_name}: failed to collect {remote_file.name}: {e}")
                if report is not None:
                    report.failed_files.append(remote_file.name)

            self._advance(task_id)
            await self._sleep(self._delay)

        return bundle

    def _advance(self, task_id: TaskID | None) -> None:
        if self.progress is not None and task_id is not None:
            self.progress.advance(task_id, 1)

    async def collect_all(
        self, projects: Sequence[str], allow_empty_overwrite: bool = False
    ) -> CollectionReport:
        """Collect, merge and atomically persist all given projects."""
        report = CollectionReport(projects=list(projects), index_path=self._store.path)
        index = self._store.load_or_empty()
        index.format_version = INDEX_FORMAT_VERSION

        for project_name in projects:
            try:
                collected = await self.collect_project(project_name, report)
            except (NotFoundError, RemoteFetchFailedError) as e:
                logger.error(f"Project {project_name} failed, keeping existing data: {e}")
                report.failed_projects.append(project_name)
                continue

            merge = self._store.merge_project(
                project_name, collected, allow_empty_overwrite=allow_empty_overwrite
            )
            report.updated_projects.append(project_name)
            report.updated_versions += len(merge.updated_versions)
            report.preserved_versions += len(merge.preserved_versions)
            logger.info(
                f"{project_name} merged: {len(merge.updated_versions)} updated, "
                f"{len(merge.preserved_versions)} preserved"
            )

        report.total_screens = self._store.recalculate_total()
        report.backup_path = self._store.backup()
        self._store.save()
        logger.info(f"Index saved to {self._store.path}: {report.total_screens} screens")
        return report
