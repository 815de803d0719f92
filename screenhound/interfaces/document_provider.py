"""DocumentProvider interface for remote design document sources."""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from screenhound.core.nodes import Node
from screenhound.core.text import extract_version


@dataclass(frozen=True)
class RemoteProject:
    id: str
    name: str


@dataclass(frozen=True)
class RemoteFile:
    key: str
    name: str
    last_modified: str = ""

    @property
    def version(self) -> str | None:
        """First X.Y.Z found in the file name."""
        return extract_version(self.name)


class DocumentProvider(ABC):
    """Abstract source of projects, files and node trees."""

    @abstractmethod
    async def fetch(
        self, file_id: str, node_id: str | None = None, depth: int = 10
    ) -> Node:
        """Fetch a document tree, or a single node subtree when node_id is given.

        Raises:
            RemoteFetchFailedError: If no depth on the ladder yields a response
        """
        ...

    @abstractmethod
    async def get_projects(self) -> list[RemoteProject]:
        ...

    @abstractmethod
    async def get_project_files(self, project_id: str) -> list[RemoteFile]:
        ...

    async def find_project_by_name(self, name: str) -> RemoteProject | None:
        """Case-insensitive substring match on the project name."""
        wanted = name.lower()
        for project in await self.get_projects():
            if wanted in project.name.lower():
                return project
        return None

    async def find_file_by_version(
        self, project_id: str, version: str
    ) -> RemoteFile | None:
        for remote_file in await self.get_project_files(project_id):
            if version in remote_file.name:
                return remote_file
        return None

    async def close(self) -> None:
        """Release transport resources. Default is a no-op."""
