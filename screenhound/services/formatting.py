"""Plain-text rendering of search outcomes for agents and the CLI."""

from collections.abc import Sequence

from screenhound.core.models import CandidateScreen, Screen, SearchResult
from screenhound.services.scoring import ProjectGroup

RULE = "-" * 60


def code_search_hint(screen: Screen) -> str:
    """Query string for the external code-bundle search tool."""
    return f"{screen.project} {screen.version} {screen.page_title}".strip()


def format_screen(screen: Screen, header: str | None = None) -> str:
    lines: list[str] = []
    if header:
        lines += [header, ""]
    lines += [
        RULE,
        f"{screen.screen_id} - {screen.page_title}",
        RULE,
        "",
        f"Project:   {screen.project}",
        f"Version:   {screen.version}",
        f"Author:    {screen.author}",
        f"File:      {screen.file_name}",
        f"Node ID:   {screen.node_id}",
        "",
        "Description:",
    ]
    description_lines = [
        line.strip() for line in (screen.description or "").splitlines() if line.strip()
    ]
    if description_lines:
        lines += [f"  - {line}" for line in description_lines]
    else:
        lines.append("  (no description)")
    lines += [
        "",
        f'Code search hint: "{code_search_hint(screen)}"',
        RULE,
    ]
    return "\n".join(lines)


def format_candidates(
    query: str, results: Sequence[SearchResult], scope_label: str | None = None
) -> str:
    """Numbered list, grouped by version in first-seen order."""
    scope = f" ({scope_label})" if scope_label else ""
    lines = [f'Found {len(results)} screens for "{query}"{scope}:', ""]

    number = 1
    current_version: tuple[str, str] | None = None
    for result in results:
        screen = result.screen
        location = (screen.project, screen.version)
        if location != current_version:
            if current_version is not None:
                lines.append("")
            lines.append(f"[{screen.project} {screen.version}]")
            current_version = location
        lines.append(f"  {number}. {screen.screen_id} - {screen.page_title}")
        lines.append(
            f"     author: {screen.author} | score: {result.score} | "
            f"matched: {', '.join(result.matched_keywords)}"
        )
        number += 1

    lines += ["", "Which screen do you want? Reply with its number or screen id."]
    return "\n".join(lines)


def format_grouped_candidates(query: str, groups: Sequence[ProjectGroup]) -> str:
    total = sum(len(v.results) for g in groups for v in g.versions)
    lines = [f'Found {total} screens for "{query}" across projects:', ""]

    number = 1
    for group in groups:
        lines.append(f"{group.project}")
        for version_group in group.versions:
            lines.append(f"  version {version_group.version}")
            for result in version_group.results:
                screen = result.screen
                lines.append(f"    {number}. {screen.screen_id} - {screen.page_title}")
                number += 1
        lines.append("")

    lines += [
        "Which screen do you want? Reply with its number or screen id.",
        f'Tip: add a project and version for sharper results, e.g. "CONTRABASS 3.0.6 {query}".',
    ]
    return "\n".join(lines)


def format_version_choices(query: str, candidates: Sequence[CandidateScreen]) -> str:
    top = candidates[0]
    lines = [
        f"{top.screen_id} - {top.page_title} exists in {len(candidates)} versions:",
        "",
    ]
    for number, candidate in enumerate(candidates, start=1):
        lines.append(f"  {number}. {candidate.project} {candidate.version}")
    lines += ["", "Which version do you want? Reply with its number."]
    return "\n".join(lines)


def format_learned(screens: Sequence[Screen]) -> str:
    lines = [
        f"Found {len(screens)} screens directly in Figma (added to the index):",
        "",
    ]
    for number, screen in enumerate(screens, start=1):
        lines.append(f"  {number}. {screen.screen_id} - {screen.page_title}")
        lines.append(f"     {screen.project} {screen.version}")
    lines += ["", "Which screen do you want? Reply with its number or screen id."]
    return "\n".join(lines)


def format_not_found(query: str, project: str | None = None, version: str | None = None) -> str:
    lines = [f'No screens found for "{query}".', ""]
    if project:
        lines.append(f"- project: {project}")
    if version:
        lines.append(f"- version: {version}")
    lines += [
        "- try different keywords",
        "- or search by screen id directly (e.g. CONT-05_04_54)",
        "- or refresh the index: screenhound collect",
    ]
    return "\n".join(lines)
