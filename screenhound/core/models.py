"""Data models for the screen catalog.

The persisted index uses camelCase JSON keys. ``from_dict`` helpers also
accept the legacy keys written by earlier collectors (``version`` for the
format version, ``fileKey`` for the file id).
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from screenhound.core.text import build_keywords

UNKNOWN_TITLE = "Unknown"
UNKNOWN_AUTHOR = "N/A"

INDEX_FORMAT_VERSION = "1.0.0"


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


@dataclass
class Screen:
    """One screen spec inside a project version."""

    screen_id: str
    page_title: str = UNKNOWN_TITLE
    author: str = UNKNOWN_AUTHOR
    description: str = ""
    keywords: list[str] = field(default_factory=list)
    project: str = ""
    version: str = ""
    file_id: str = ""
    file_name: str = ""
    node_id: str = ""
    last_modified: str = ""

    def refresh_keywords(self) -> None:
        """Recompute keywords from id, title and description."""
        self.keywords = build_keywords(self.screen_id, self.page_title, self.description)

    @property
    def has_description(self) -> bool:
        return bool(self.description and self.description.strip())

    def to_dict(self) -> dict[str, Any]:
        return {
            "screenId": self.screen_id,
            "pageTitle": self.page_title,
            "author": self.author,
            "description": self.description,
            "keywords": list(self.keywords),
            "project": self.project,
            "version": self.version,
            "fileId": self.file_id,
            "fileName": self.file_name,
            "nodeId": self.node_id,
            "lastModified": self.last_modified,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Screen":
        return cls(
            screen_id=str(data.get("screenId", "")),
            page_title=data.get("pageTitle") or UNKNOWN_TITLE,
            author=data.get("author") or UNKNOWN_AUTHOR,
            description=data.get("description") or "",
            keywords=list(data.get("keywords") or []),
            project=data.get("project") or "",
            version=data.get("version") or "",
            file_id=data.get("fileId") or data.get("fileKey") or "",
            file_name=data.get("fileName") or "",
            node_id=data.get("nodeId") or "",
            last_modified=data.get("lastModified") or "",
        )


@dataclass
class VersionBundle:
    file_id: str = ""
    file_name: str = ""
    screens: list[Screen] = field(default_factory=list)

    def find(self, screen_id: str) -> Screen | None:
        wanted = screen_id.upper()
        for screen in self.screens:
            if screen.screen_id.upper() == wanted:
                return screen
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "fileId": self.file_id,
            "fileName": self.file_name,
            "screens": [s.to_dict() for s in self.screens],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "VersionBundle":
        return cls(
            file_id=data.get("fileId") or data.get("fileKey") or "",
            file_name=data.get("fileName") or "",
            screens=[Screen.from_dict(s) for s in data.get("screens") or []],
        )


@dataclass
class ProjectBundle:
    versions: dict[str, VersionBundle] = field(default_factory=dict)

    def screen_count(self) -> int:
        return sum(len(v.screens) for v in self.versions.values())

    def to_dict(self) -> dict[str, Any]:
        return {"versions": {k: v.to_dict() for k, v in self.versions.items()}}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ProjectBundle":
        versions = data.get("versions") or {}
        return cls(versions={k: VersionBundle.from_dict(v) for k, v in versions.items()})


@dataclass
class MetadataIndex:
    """Root of the persisted catalog: project -> version -> screens."""

    format_version: str = INDEX_FORMAT_VERSION
    last_updated: str = ""
    total_screens: int = 0
    projects: dict[str, ProjectBundle] = field(default_factory=dict)

    def count_screens(self) -> int:
        return sum(p.screen_count() for p in self.projects.values())

    def to_dict(self) -> dict[str, Any]:
        return {
            "formatVersion": self.format_version,
            "lastUpdated": self.last_updated,
            "totalScreens": self.total_screens,
            "projects": {k: v.to_dict() for k, v in self.projects.items()},
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MetadataIndex":
        projects = data.get("projects") or {}
        index = cls(
            format_version=str(
                data.get("formatVersion") or data.get("version") or INDEX_FORMAT_VERSION
            ),
            last_updated=data.get("lastUpdated") or "",
            total_screens=int(data.get("totalScreens") or 0),
            projects={k: ProjectBundle.from_dict(v) for k, v in projects.items()},
        )
        return index


@dataclass
class ScreenDetail:
    """Title, author and description pulled from a screen's node tree."""

    page_title: str = UNKNOWN_TITLE
    author: str = UNKNOWN_AUTHOR
    description: str = ""


@dataclass
class SearchResult:
    screen: Screen
    score: int
    matched_keywords: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class CandidateScreen:
    """The fields needed to redisplay and resolve a pending choice."""

    screen_id: str
    page_title: str
    project: str
    version: str
    file_id: str = ""
    node_id: str = ""
    file_name: str = ""
    author: str = UNKNOWN_AUTHOR

    @classmethod
    def from_screen(cls, screen: Screen) -> "CandidateScreen":
        return cls(
            screen_id=screen.screen_id,
            page_title=screen.page_title,
            project=screen.project,
            version=screen.version,
            file_id=screen.file_id,
            node_id=screen.node_id,
            file_name=screen.file_name,
            author=screen.author,
        )

    def to_screen(self) -> Screen:
        screen = Screen(
            screen_id=self.screen_id,
            page_title=self.page_title,
            author=self.author,
            project=self.project,
            version=self.version,
            file_id=self.file_id,
            file_name=self.file_name,
            node_id=self.node_id,
        )
        screen.refresh_keywords()
        return screen
