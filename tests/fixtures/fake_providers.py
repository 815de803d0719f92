"""In-memory document provider for service tests."""

from typing import Any

from screenhound.core.exceptions import RemoteFetchFailedError
from screenhound.core.nodes import Node, parse_node
from screenhound.interfaces.document_provider import (
    DocumentProvider,
    RemoteFile,
    RemoteProject,
)


def _find_raw(raw: dict[str, Any], node_id: str) -> dict[str, Any] | None:
    stack = [raw]
    while stack:
        node = stack.pop()
        if node.get("id") == node_id:
            return node
        stack.extend(node.get("children") or [])
    return None


class FakeDocumentProvider(DocumentProvider):
    """Serves canned documents and records every call.

    Args:
        projects: project name -> list of (file key, file name)
        documents: file key -> raw document tree
        failing: file keys whose fetch raises RemoteFetchFailedError
    """

    def __init__(
        self,
        projects: dict[str, list[tuple[str, str]]] | None = None,
        documents: dict[str, dict[str, Any]] | None = None,
        failing: set[str] | None = None,
    ):
        self._projects = projects or {}
        self._documents = documents or {}
        self._failing = failing or set()
        self.fetch_calls: list[tuple[str, str | None, int]] = []
        self.get_projects_calls = 0
        self.closed = False

    async def fetch(self, file_id: str, node_id: str | None = None, depth: int = 10) -> Node:
        self.fetch_calls.append((file_id, node_id, depth))
        if file_id in self._failing or file_id not in self._documents:
            raise RemoteFetchFailedError(f"cannot fetch {file_id}", status_code=500)
        raw = self._documents[file_id]
        if node_id is not None:
            raw = _find_raw(raw, node_id)
            if raw is None:
                raise RemoteFetchFailedError(f"node {node_id} not in {file_id}", status_code=404)
        return parse_node(raw)

    async def get_projects(self) -> list[RemoteProject]:
        self.get_projects_calls += 1
        return [RemoteProject(id=f"p-{name}", name=name) for name in self._projects]

    async def get_project_files(self, project_id: str) -> list[RemoteFile]:
        name = project_id.removeprefix("p-")
        return [
            RemoteFile(key=key, name=file_name, last_modified="2024-01-01T00:00:00Z")
            for key, file_name in self._projects.get(name, [])
        ]

    async def close(self) -> None:
        self.closed = True


async def no_sleep(_seconds: float) -> None:
    return None


class RecordingSleep:
    """Awaitable sleep stub that remembers requested delays."""

    def __init__(self) -> None:
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)
