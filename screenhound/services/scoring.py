"""Keyword scoring, grouping and result refinement.

Scoring is a fixed, explainable rule set rather than a relevance model:
every query keyword adds weight for each place it appears on a screen.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from screenhound.core.models import CandidateScreen, Screen, SearchResult
from screenhound.core.text import normalize_text
from screenhound.providers.index.index_store import IndexStore

# Rule weights, per query keyword
ID_MATCH_WEIGHT = 10
TITLE_MATCH_WEIGHT = 8
DESCRIPTION_MATCH_WEIGHT = 5
EXACT_KEYWORD_WEIGHT = 3
PARTIAL_KEYWORD_WEIGHT = 1

# Words that carry no intent for phrase matching
STOPWORDS = frozenset(
    {
        "screen",
        "screens",
        "page",
        "pages",
        "spec",
        "show",
        "find",
        "open",
        "search",
        "get",
        "view",
        "화면",
        "페이지",
        "기획서",
        "보여줘",
        "보여주세요",
        "찾아줘",
        "찾아주세요",
        "검색",
        "검색해줘",
        "조회",
        "열어줘",
    }
)


def score_screen(screen: Screen, keywords: Sequence[str]) -> tuple[int, list[str]]:
    """Score one screen against query keywords.

    Returns:
        (score, matched keywords without duplicates)
    """
    score = 0
    matched: dict[str, None] = {}
    screen_id = screen.screen_id.lower()
    title = screen.page_title.lower()
    description = (screen.description or "").lower()

    for keyword in keywords:
        if keyword in screen_id:
            score += ID_MATCH_WEIGHT
            matched[keyword] = None
        if keyword in title:
            score += TITLE_MATCH_WEIGHT
            matched[keyword] = None
        if description and keyword in description:
            score += DESCRIPTION_MATCH_WEIGHT
            matched[keyword] = None
        for screen_keyword in screen.keywords:
            if screen_keyword == keyword:
                score += EXACT_KEYWORD_WEIGHT
                matched[keyword] = None
            elif screen_keyword in keyword or keyword in screen_keyword:
                score += PARTIAL_KEYWORD_WEIGHT
                matched[keyword] = None

    return score, list(matched)


def rank(screens: Iterable[Screen], keywords: Sequence[str]) -> list[SearchResult]:
    """Score, drop zero scores and sort descending; ties keep encounter order."""
    results = []
    for screen in screens:
        score, matched = score_screen(screen, keywords)
        if score > 0:
            results.append(SearchResult(screen=screen, score=score, matched_keywords=matched))
    results.sort(key=lambda r: r.score, reverse=True)
    return results


@dataclass
class VersionGroup:
    version: str
    results: list[SearchResult] = field(default_factory=list)


@dataclass
class ProjectGroup:
    project: str
    versions: list[VersionGroup] = field(default_factory=list)


def group_results(results: Sequence[SearchResult]) -> list[ProjectGroup]:
    """Group by project then version, preserving first-seen order."""
    groups: dict[str, dict[str, VersionGroup]] = {}
    for result in results:
        versions = groups.setdefault(result.screen.project, {})
        group = versions.get(result.screen.version)
        if group is None:
            group = versions[result.screen.version] = VersionGroup(result.screen.version)
        group.results.append(result)
    return [
        ProjectGroup(project=project, versions=list(versions.values()))
        for project, versions in groups.items()
    ]


def flatten_groups(groups: Sequence[ProjectGroup]) -> list[SearchResult]:
    """Results in grouped display order."""
    return [r for g in groups for v in g.versions for r in v.results]


def significant_tokens(keywords: Sequence[str]) -> list[str]:
    return [k for k in keywords if k not in STOPWORDS]


def apply_phrase_priority(
    results: Sequence[SearchResult], keywords: Sequence[str]
) -> list[SearchResult]:
    """Prefer candidates whose title contains the query's leading phrase.

    With fewer than two significant tokens, or when no title contains the
    phrase, the results come back unchanged.
    """
    tokens = significant_tokens(keywords)
    if len(tokens) < 2:
        return list(results)

    phrase = f"{tokens[0]} {tokens[1]}"
    with_phrase = [r for r in results if phrase in normalize_text(r.screen.page_title)]
    if not with_phrase:
        return list(results)
    # All retained candidates carry the phrase, so score decides the order
    return sorted(with_phrase, key=lambda r: r.score, reverse=True)


def collapse_versions(results: Sequence[SearchResult]) -> list[CandidateScreen] | None:
    """One candidate per release when the top screen recurs across versions.

    Returns None when the top (screenId, title) pair occurs in fewer than two
    distinct (project, version) pairs.
    """
    if not results:
        return None
    top = results[0].screen
    key = (top.screen_id.upper(), normalize_text(top.page_title))

    seen: set[tuple[str, str]] = set()
    collapsed: list[CandidateScreen] = []
    for result in results:
        screen = result.screen
        if (screen.screen_id.upper(), normalize_text(screen.page_title)) != key:
            continue
        location = (screen.project, screen.version)
        if location in seen:
            continue
        seen.add(location)
        collapsed.append(CandidateScreen.from_screen(screen))

    return collapsed if len(collapsed) >= 2 else None


class ScoringEngine:
    """Ranks indexed screens for the three search scopes."""

    def __init__(self, store: IndexStore):
        self._store = store

    def search(
        self,
        keywords: Sequence[str],
        project: str | None = None,
        version: str | None = None,
        max_results: int | None = None,
    ) -> list[SearchResult]:
        """Scored search restricted to a project and optionally one version."""
        results = rank(self._store.iter_screens(project, version), keywords)
        return results if max_results is None else results[:max_results]
