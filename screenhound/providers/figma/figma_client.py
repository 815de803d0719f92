"""Figma REST API client.

Large design files regularly exceed what the API is willing to serialize in
one response. Fetches therefore walk a descending depth ladder: the request
is retried at the next smaller depth only when Figma answers 400 with
"request too large". Any other failure is surfaced immediately.
"""

import json
from typing import Any

import httpx
from loguru import logger

from screenhound.core.config.figma_config import FigmaConfig
from screenhound.core.exceptions import PayloadTooLargeError, RemoteFetchFailedError
from screenhound.core.nodes import Node, parse_node
from screenhound.interfaces.document_provider import (
    DocumentProvider,
    RemoteFile,
    RemoteProject,
)

# Depths tried after the requested one, largest first
DEPTH_LADDER = (10, 8, 6, 5, 4, 3, 2, 1)
FALLBACK_DEPTH = 5
TOO_LARGE_MARKER = "request too large"


def build_depth_candidates(requested: Any) -> list[int]:
    """Return the descending depths to try for a requested depth.

    A non-positive or non-numeric request is treated as FALLBACK_DEPTH.
    """
    try:
        safe = int(requested)
    except (TypeError, ValueError):
        safe = FALLBACK_DEPTH
    if safe <= 0:
        safe = FALLBACK_DEPTH

    candidates: list[int] = []
    for depth in (safe, *DEPTH_LADDER):
        if depth <= safe and depth not in candidates:
            candidates.append(depth)
    return candidates


class FigmaClient(DocumentProvider):
    """Async client for the subset of the Figma API ScreenHound needs."""

    def __init__(
        self,
        config: FigmaConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the Figma client.

        Args:
            config: Figma configuration with token and team id
            transport: Optional httpx transport, used by tests to mock the API
        """
        self.config = config
        self.base_url = config.base_url
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            if not self.config.is_configured():
                raise RemoteFetchFailedError(
                    "Figma token not configured. Set FIGMA_TOKEN or SCREENHOUND_FIGMA__TOKEN."
                )
            headers = {
                "X-Figma-Token": self.config.get_token(),
                "Accept": "application/json",
            }
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=headers,
                timeout=httpx.Timeout(self.config.timeout),
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "FigmaClient":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    async def _get(self, path: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        try:
            response = await self.client.get(path, params=params)
        except httpx.HTTPError as e:
            raise RemoteFetchFailedError(f"Figma request {path} failed: {e}") from e
        return self._handle_response(response)

    def _handle_response(self, response: httpx.Response) -> dict[str, Any]:
        """Map Figma responses onto ScreenHound errors."""
        if response.status_code >= 400:
            message = self._error_message(response)
            if response.status_code == 400 and TOO_LARGE_MARKER in message.lower():
                raise PayloadTooLargeError(message, status_code=400)
            if response.status_code in (401, 403):
                message = f"Figma rejected the token ({response.status_code}): {message}"
            raise RemoteFetchFailedError(message, status_code=response.status_code)

        try:
            data = response.json()
        except json.JSONDecodeError as err:
            raise RemoteFetchFailedError("Invalid response format from Figma") from err
        if not isinstance(data, dict):
            raise RemoteFetchFailedError("Unexpected response shape from Figma")
        return data

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            payload = response.json()
        except json.JSONDecodeError:
            return response.text or f"Figma API error: {response.status_code}"
        if isinstance(payload, dict):
            for key in ("err", "message", "error"):
                value = payload.get(key)
                if isinstance(value, str) and value:
                    return value
        return f"Figma API error: {response.status_code}"

    async def fetch(
        self, file_id: str, node_id: str | None = None, depth: int = 10
    ) -> Node:
        """Fetch a file tree, or one node's subtree, walking the depth ladder."""
        candidates = build_depth_candidates(depth)
        last_error: RemoteFetchFailedError | None = None

        for attempt in candidates:
            try:
                return await self._fetch_at_depth(file_id, node_id, attempt)
            except PayloadTooLargeError as e:
                last_error = e
                logger.warning(
                    f"Figma payload too large for {file_id} "
                    f"(node={node_id or '-'}, depth={attempt}); retrying smaller"
                )

        raise RemoteFetchFailedError(
            f"Figma file {file_id} is too large at every depth down to "
            f"{candidates[-1]}: {last_error}",
            status_code=last_error.status_code if last_error else None,
        )

    async def _fetch_at_depth(
        self, file_id: str, node_id: str | None, depth: int
    ) -> Node:
        logger.debug(f"Fetching Figma file {file_id} node={node_id or '-'} depth={depth}")
        if node_id is None:
            data = await self._get(f"/files/{file_id}", params={"depth": depth})
            document = data.get("document")
            if not isinstance(document, dict):
                raise RemoteFetchFailedError(f"Figma file {file_id} has no document")
            return parse_node(document)

        data = await self._get(
            f"/files/{file_id}/nodes", params={"ids": node_id, "depth": depth}
        )
        entry = (data.get("nodes") or {}).get(node_id)
        document = entry.get("document") if isinstance(entry, dict) else None
        if not isinstance(document, dict):
            raise RemoteFetchFailedError(f"Node {node_id} not found in Figma file {file_id}")
        return parse_node(document)

    async def get_projects(self) -> list[RemoteProject]:
        team_id = self.config.team_id
        if not team_id:
            raise RemoteFetchFailedError("Figma team id not configured")
        data = await self._get(f"/teams/{team_id}/projects")
        return [
            RemoteProject(id=str(p.get("id")), name=str(p.get("name") or ""))
            for p in data.get("projects") or []
        ]

    async def get_project_files(self, project_id: str) -> list[RemoteFile]:
        data = await self._get(f"/projects/{project_id}/files")
        return [
            RemoteFile(
                key=str(f.get("key")),
                name=str(f.get("name") or ""),
                last_modified=str(f.get("last_modified") or f.get("lastModified") or ""),
            )
            for f in data.get("files") or []
        ]
