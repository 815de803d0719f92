"""Classify incoming queries into a search strategy.

Detection order: numeric selection, explicit screen id, project alias,
semantic version. Explicit arguments always win over detection.
"""

import re
from dataclasses import dataclass, field
from enum import Enum

from screenhound.core.config.search_config import SearchConfig
from screenhound.core.text import extract_version, find_screen_id, tokenize

# "2", " 3 ", "2번", "3번째"
_SELECTION_PATTERN = re.compile(r"^\s*(\d{1,3})\s*(?:번째|번)?\s*$")
_HANGUL = re.compile(r"[가-힣]")


class QueryKind(Enum):
    SELECTION = "selection"
    SCREEN_ID = "screen_id"
    SEARCH = "search"


class SearchScope(Enum):
    SCOPED = "scoped"  # project + version
    PROJECT = "project"  # all versions of one project
    GLOBAL = "global"  # everything, grouped


@dataclass
class QueryInterpretation:
    kind: QueryKind
    query: str
    selection_index: int | None = None
    screen_id: str | None = None
    project: str | None = None
    version: str | None = None
    # True only when the version came from the query or an argument
    version_explicit: bool = False
    keywords: list[str] = field(default_factory=list)

    @property
    def scope(self) -> SearchScope:
        if self.project and self.version:
            return SearchScope.SCOPED
        if self.project:
            return SearchScope.PROJECT
        return SearchScope.GLOBAL


def parse_selection(query: str) -> int | None:
    match = _SELECTION_PATTERN.match(query or "")
    return int(match.group(1)) if match else None


class QueryInterpreter:
    """Turns a raw query plus optional arguments into an interpretation."""

    def __init__(self, config: SearchConfig):
        self._config = config

    def detect_project(self, query: str) -> str | None:
        """Map the first alias token of a query to its canonical project.

        Latin aliases must match a whole token ("cont" does not match
        "content"); Hangul aliases may carry a particle ("비올라의").
        """
        for token in tokenize(query):
            project = self._config.resolve_alias(token)
            if project:
                return project
            for alias, canonical in self._config.project_aliases.items():
                if _HANGUL.search(alias) and token.startswith(alias):
                    return canonical
        return None

    def _is_alias_token(self, token: str) -> bool:
        if self._config.resolve_alias(token):
            return True
        return any(
            _HANGUL.search(alias) and token.startswith(alias)
            for alias in self._config.project_aliases
        )

    def extract_keywords(self, query: str, version: str | None = None) -> list[str]:
        """Query tokens used for scoring: no project aliases, no version digits."""
        version_parts = set(version.split(".")) if version else set()
        keywords = []
        for token in tokenize(query):
            if self._is_alias_token(token):
                continue
            if token in version_parts:
                continue
            keywords.append(token)
        return keywords

    def interpret(
        self,
        query: str,
        project: str | None = None,
        version: str | None = None,
    ) -> QueryInterpretation:
        query = (query or "").strip()

        selection = parse_selection(query)
        if selection is not None:
            return QueryInterpretation(
                kind=QueryKind.SELECTION, query=query, selection_index=selection
            )

        detected_project = project or self.detect_project(query)
        detected_version = version or extract_version(query)

        screen_id = find_screen_id(query)
        if screen_id:
            return QueryInterpretation(
                kind=QueryKind.SCREEN_ID,
                query=query,
                screen_id=screen_id,
                project=detected_project or self._config.default_project,
                version=detected_version or self._config.default_version,
                version_explicit=detected_version is not None,
            )

        return QueryInterpretation(
            kind=QueryKind.SEARCH,
            query=query,
            project=detected_project,
            version=detected_version,
            version_explicit=detected_version is not None,
            keywords=self.extract_keywords(query, detected_version),
        )
