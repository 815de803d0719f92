"""Remote keyword scan used when the index has nothing for a query."""

import asyncio
from collections.abc import Awaitable, Callable, Sequence

from loguru import logger

from screenhound.core.exceptions import RemoteFetchFailedError
from screenhound.core.models import Screen
from screenhound.interfaces.document_provider import DocumentProvider
from screenhound.services.screen_scanner import build_screen, iter_screen_containers


def _matches_any(screen: Screen, keywords: Sequence[str]) -> bool:
    haystack = f"{screen.screen_id}\n{screen.page_title}\n{screen.description}".lower()
    return any(k.lower() in haystack for k in keywords if k)


class RealtimeSearch:
    """Walk team projects and files directly on the provider.

    Slow by nature: every file is fetched whole. Files are paced by a fixed
    delay and a failing file is skipped, not fatal. Screens are filed under
    the known project name the remote project name contains, so they land
    where bulk collection would have put them.
    """

    def __init__(
        self,
        provider: DocumentProvider,
        depth: int = 10,
        delay: float = 0.5,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        known_projects: Sequence[str] = (),
    ):
        self._provider = provider
        self._known_projects = list(known_projects)
        self._depth = depth
        self._delay = delay
        self._sleep = sleep

    def project_name(self, remote_name: str) -> str:
        """Known project whose name appears in remote_name, else remote_name."""
        lowered = remote_name.lower()
        for known in self._known_projects:
            if known.lower() in lowered:
                return known
        return remote_name

    async def search(
        self,
        keywords: Sequence[str],
        project: str | None = None,
        version: str | None = None,
        max_results: int = 5,
    ) -> list[Screen]:
        """Return up to max_results screens whose text mentions any keyword.

        Raises:
            RemoteFetchFailedError: If projects or file listings cannot be read
        """
        results: list[Screen] = []
        if not keywords:
            return results

        projects = await self._provider.get_projects()
        if project:
            projects = [p for p in projects if self.project_name(p.name) == project]

        for remote_project in projects:
            files = await self._provider.get_project_files(remote_project.id)
            if version:
                files = [f for f in files if version in f.name]

            for remote_file in files:
                try:
                    root = await self._provider.fetch(remote_file.key, depth=self._depth)
                except RemoteFetchFailedError as e:
                    logger.warning(f"Realtime scan skipped {remote_file.name}: {e}")
                    await self._sleep(self._delay)
                    continue

                project_name = self.project_name(remote_project.name)
                for screen_id, container in iter_screen_containers(root):
                    screen = build_screen(
                        screen_id,
                        container,
                        project_name,
                        remote_file,
                        with_description=True,
                    )
                    if not _matches_any(screen, keywords):
                        continue
                    results.append(screen)
                    if len(results) >= max_results:
                        logger.info(
                            f"Realtime scan reached {max_results} results in {remote_file.name}"
                        )
                        return results

                await self._sleep(self._delay)

        logger.info(f"Realtime scan found {len(results)} screens for {list(keywords)}")
        return results
