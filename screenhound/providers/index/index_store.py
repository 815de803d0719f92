"""JSON-backed screen index.

The index is a single JSON document mapping project -> version -> screens.
Writes go to a temporary sibling file that is then renamed over the target,
so a crash mid-write never leaves a truncated index behind. Screens are only
ever created or overwritten, never deleted.
"""

import json
import os
import shutil
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from loguru import logger

from screenhound.core.exceptions import IndexCorruptError, IndexMissingError
from screenhound.core.models import (
    UNKNOWN_AUTHOR,
    UNKNOWN_TITLE,
    MetadataIndex,
    ProjectBundle,
    Screen,
    VersionBundle,
    utc_now_iso,
)


class UpsertOutcome(Enum):
    CREATED = "created"
    UPDATED = "updated"


@dataclass
class MergeReport:
    """Per-project result of merging freshly collected versions."""

    project: str
    updated_versions: list[str] = field(default_factory=list)
    preserved_versions: list[str] = field(default_factory=list)


class IndexStore:
    """Load, query, mutate and persist the screen index."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self._index: MetadataIndex | None = None

    @property
    def is_loaded(self) -> bool:
        return self._index is not None

    @property
    def index(self) -> MetadataIndex:
        if self._index is None:
            raise IndexMissingError(str(self.path))
        return self._index

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> MetadataIndex:
        """Read the index from disk.

        Raises:
            IndexMissingError: If no index file exists yet
            IndexCorruptError: If the file is not a valid index document
        """
        if not self.path.exists():
            raise IndexMissingError(str(self.path))
        with open(self.path, encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise IndexCorruptError(str(self.path), f"invalid JSON: {e}") from e
        if not isinstance(data, dict):
            raise IndexCorruptError(str(self.path), "top level is not an object")
        self._index = MetadataIndex.from_dict(data)
        logger.debug(
            f"Loaded screen index from {self.path}: "
            f"{self._index.total_screens} screens in {len(self._index.projects)} projects"
        )
        return self._index

    def load_or_empty(self) -> MetadataIndex:
        """Load the index, starting a fresh one if the file is missing or unreadable."""
        try:
            return self.load()
        except IndexMissingError:
            logger.info(f"No existing index at {self.path}, starting empty")
        except IndexCorruptError as e:
            logger.warning(f"{e} Starting empty")
        self._index = MetadataIndex(last_updated=utc_now_iso())
        return self._index

    def ensure_loaded(self) -> MetadataIndex:
        if self._index is None:
            return self.load()
        return self._index

    def _touch(self) -> None:
        """Advance lastUpdated; never moves it backwards."""
        now = utc_now_iso()
        if now > self.index.last_updated:
            self.index.last_updated = now

    def recalculate_total(self) -> int:
        self.index.total_screens = self.index.count_screens()
        return self.index.total_screens

    def _version_bundle(
        self, project: str, version: str, create: bool = False
    ) -> VersionBundle | None:
        projects = self.index.projects
        if project not in projects:
            if not create:
                return None
            projects[project] = ProjectBundle()
        versions = projects[project].versions
        if version not in versions:
            if not create:
                return None
            versions[version] = VersionBundle()
        return versions[version]

    def find_screen(self, project: str, version: str, screen_id: str) -> Screen | None:
        bundle = self._version_bundle(project, version)
        return bundle.find(screen_id) if bundle else None

    def iter_screens(
        self, project: str | None = None, version: str | None = None
    ) -> Iterator[Screen]:
        """Yield screens in index order, optionally scoped."""
        for project_name, bundle in self.index.projects.items():
            if project is not None and project_name != project:
                continue
            for version_name, version_bundle in bundle.versions.items():
                if version is not None and version_name != version:
                    continue
                yield from version_bundle.screens

    def add_screen(self, screen: Screen, save: bool = True) -> bool:
        """Insert a screen unless its id already exists in that version.

        Returns:
            True if the screen was new
        """
        bundle = self._version_bundle(screen.project, screen.version, create=True)
        assert bundle is not None
        if bundle.find(screen.screen_id) is not None:
            return False

        if not bundle.file_id:
            bundle.file_id = screen.file_id
        if not bundle.file_name:
            bundle.file_name = screen.file_name
        if not screen.keywords:
            screen.refresh_keywords()
        bundle.screens.append(screen)
        self.index.total_screens += 1
        self._touch()
        logger.info(f"Added screen {screen.screen_id} to {screen.project} {screen.version}")
        if save:
            self.save()
        return True

    def update_screen_detail(
        self,
        screen_id: str,
        project: str,
        version: str,
        title: str | None = None,
        author: str | None = None,
        description: str | None = None,
        save: bool = True,
    ) -> bool:
        """Apply non-default detail fields to an existing screen.

        Sentinel values ("Unknown" title, "N/A" author) and an empty
        description never overwrite stored data.

        Returns:
            False if the screen does not exist
        """
        screen = self.find_screen(project, version, screen_id)
        if screen is None:
            return False

        if title and title != UNKNOWN_TITLE:
            screen.page_title = title
        if author and author != UNKNOWN_AUTHOR:
            screen.author = author
        if description:
            screen.description = description
        screen.refresh_keywords()
        screen.last_modified = utc_now_iso()
        self._touch()
        logger.debug(f"Updated detail of {screen_id} in {project} {version}")
        if save:
            self.save()
        return True

    def upsert_screen(self, screen: Screen, save: bool = True) -> UpsertOutcome:
        """Idempotently learn a screen: update it if present, else create it."""
        if self.update_screen_detail(
            screen.screen_id,
            screen.project,
            screen.version,
            title=screen.page_title,
            author=screen.author,
            description=screen.description,
            save=save,
        ):
            return UpsertOutcome.UPDATED

        screen.refresh_keywords()
        self.add_screen(screen, save=save)
        return UpsertOutcome.CREATED

    def merge_project(
        self,
        project: str,
        collected: ProjectBundle,
        allow_empty_overwrite: bool = False,
    ) -> MergeReport:
        """Merge freshly collected versions into a project.

        An empty collected version does not replace a non-empty stored one
        unless allow_empty_overwrite is set. Stored versions missing from the
        collection are kept.
        """
        report = MergeReport(project=project)
        existing = self.index.projects.get(project)
        if existing is None:
            existing = self.index.projects[project] = ProjectBundle()

        for version, bundle in collected.versions.items():
            previous = existing.versions.get(version)
            if (
                not allow_empty_overwrite
                and not bundle.screens
                and previous is not None
                and previous.screens
            ):
                logger.warning(
                    f"{project} {version}: collection returned no screens, "
                    f"keeping {len(previous.screens)} existing"
                )
                report.preserved_versions.append(version)
                continue
            existing.versions[version] = bundle
            report.updated_versions.append(version)

        self.recalculate_total()
        self._touch()
        return report

    def backup(self) -> Path | None:
        """Copy the current index file to <path>.bak."""
        if not self.path.exists():
            return None
        backup_path = self.path.with_name(self.path.name + ".bak")
        shutil.copy2(self.path, backup_path)
        logger.info(f"Backed up index to {backup_path}")
        return backup_path

    def save(self) -> None:
        """Write the index atomically (temp file, then rename)."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        payload = json.dumps(self.index.to_dict(), ensure_ascii=False, indent=2)
        with open(tmp_path, "w", encoding="utf-8") as f:
            f.write(payload)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, self.path)
        logger.debug(f"Saved screen index to {self.path}")

    def stats(self) -> dict[str, Any]:
        """Summary counts for the stats tool and CLI."""
        index = self.index
        return {
            "formatVersion": index.format_version,
            "lastUpdated": index.last_updated,
            "totalScreens": index.total_screens,
            "projects": {
                name: {
                    "versions": {
                        version: len(bundle.screens)
                        for version, bundle in project.versions.items()
                    },
                    "screens": project.screen_count(),
                }
                for name, project in index.projects.items()
            },
            "indexPath": str(self.path),
        }
