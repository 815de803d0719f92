"""Declarative tool registry for the MCP server.

All MCP tools are defined in one place so the server wrapper and the CLI
share the same implementations and argument handling.
"""

import json
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, NotRequired, TypedDict

from screenhound.services.screen_search_service import ScreenSearchService, SearchOutcome


class SearchToolResult(TypedDict):
    text: str
    is_error: bool
    kind: str
    screen_id: NotRequired[str]


async def search_figma_spec_impl(
    service: ScreenSearchService,
    query: str,
    project: str | None = None,
    version: str | None = None,
    auto_confirm: bool = True,
    session_id: str | None = None,
) -> SearchToolResult:
    """Resolve a screen spec query.

    Args:
        service: Search service bound to the index and provider
        query: Natural language query, screen id, or a bare number selecting
            from the previous candidate list
        project: Optional explicit project
        version: Optional explicit version
        auto_confirm: Confirm a single match when the version is explicit
        session_id: Caller/conversation id owning the candidate list
    """
    outcome: SearchOutcome = await service.search(
        query,
        project=project,
        version=version,
        auto_confirm=auto_confirm,
        session_id=session_id,
    )
    result: SearchToolResult = {
        "text": outcome.text,
        "is_error": outcome.is_error,
        "kind": outcome.kind.value,
    }
    if outcome.screen is not None:
        result["screen_id"] = outcome.screen.screen_id
    return result


async def get_index_stats_impl(service: ScreenSearchService) -> dict[str, Any]:
    """Index statistics: totals, projects and versions."""
    return service.stats()


@dataclass
class Tool:
    """Tool definition with metadata and implementation."""

    name: str
    description: str
    parameters: dict[str, Any]
    implementation: Callable


# Define all tools declaratively
TOOL_DEFINITIONS = [
    Tool(
        name="search_figma_spec",
        description=(
            "Find a screen spec in the Figma design catalog. Accepts a screen id "
            "(e.g. CONT-05_04_54), natural language in English or Korean "
            "(e.g. 'contrabass 3.0.6 user list'), or a bare number to pick from the "
            "previous candidate list. Returns the screen's project, version, author, "
            "description and a hint for searching its implementation code."
        ),
        parameters={
            "properties": {
                "query": {
                    "description": "Screen id, natural language query, or a selection number",
                    "type": "string",
                },
                "project": {
                    "description": "Project name (e.g. CONTRABASS); detected from the query if omitted",
                    "type": "string",
                },
                "version": {
                    "description": "Release version X.Y.Z; detected from the query if omitted",
                    "type": "string",
                },
                "autoConfirm": {
                    "default": True,
                    "description": "Confirm a single match automatically when a version is given",
                    "type": "boolean",
                },
                "sessionId": {
                    "description": "Conversation id that owns the pending candidate list",
                    "type": "string",
                },
            },
            "required": ["query"],
            "type": "object",
        },
        implementation=search_figma_spec_impl,
    ),
    Tool(
        name="get_index_stats",
        description="Get screen index statistics: total screens, projects, versions and last update",
        parameters={
            "properties": {},
            "type": "object",
        },
        implementation=get_index_stats_impl,
    ),
]

# Create registry as a dict for easy lookup
TOOL_REGISTRY: dict[str, Tool] = {tool.name: tool for tool in TOOL_DEFINITIONS}


async def execute_tool(
    tool_name: str,
    service: ScreenSearchService,
    arguments: dict[str, Any],
) -> dict[str, Any] | str:
    """Execute a tool from the registry with proper argument handling.

    Returns:
        Tool execution result

    Raises:
        ValueError: If tool not found in registry or arguments are invalid
    """
    if tool_name not in TOOL_REGISTRY:
        raise ValueError(f"Unknown tool: {tool_name}")

    tool = TOOL_REGISTRY[tool_name]

    if tool_name == "search_figma_spec":
        query = arguments.get("query")
        if not isinstance(query, str) or not query.strip():
            raise ValueError("'query' must be a non-empty string")
        auto_confirm = arguments.get("autoConfirm", True)
        if not isinstance(auto_confirm, bool):
            auto_confirm = True
        result = await tool.implementation(
            service=service,
            query=query,
            project=arguments.get("project") or None,
            version=arguments.get("version") or None,
            auto_confirm=auto_confirm,
            session_id=arguments.get("sessionId") or None,
        )
        return dict(result)

    elif tool_name == "get_index_stats":
        result = await tool.implementation(service)
        return json.dumps(result, ensure_ascii=False, indent=2)

    else:
        raise ValueError(f"Tool {tool_name} not implemented in execute_tool")
