"""Lazy completion of confirmed screens.

Bulk collection stores screens without descriptions to keep file fetches
shallow. When a screen is confirmed, its node is fetched on its own and the
extracted detail is written back, so the next lookup is served locally.
Failures here never fail the query: the best known values are returned.
"""

import dataclasses
from dataclasses import dataclass
from enum import Enum

from loguru import logger

from screenhound.core.exceptions import ScreenHoundError
from screenhound.core.models import UNKNOWN_AUTHOR, UNKNOWN_TITLE, Screen, utc_now_iso
from screenhound.interfaces.document_provider import DocumentProvider
from screenhound.providers.index.index_store import IndexStore, UpsertOutcome
from screenhound.services.label_extractor import extract_details


class EnrichmentStatus(Enum):
    COMPLETE = "complete"  # already had a description
    UPDATED = "updated"  # existing index entry filled in
    LEARNED = "learned"  # new index entry synthesized
    NO_DETAIL = "no_detail"  # fetched, but nothing usable found
    UNSAVED = "unsaved"  # detail found, no index to store it in
    DEGRADED = "degraded"  # remote or persistence failure


@dataclass
class EnrichmentOutcome:
    screen: Screen
    status: EnrichmentStatus
    error: str | None = None


class EnrichmentPipeline:
    def __init__(self, provider: DocumentProvider, store: IndexStore, detail_depth: int = 10):
        self._provider = provider
        self._store = store
        self._detail_depth = detail_depth

    async def ensure_complete(self, screen: Screen) -> EnrichmentOutcome:
        """Fill in a screen's missing description, learning it if unindexed."""
        if screen.has_description:
            return EnrichmentOutcome(screen=screen, status=EnrichmentStatus.COMPLETE)
        if not screen.file_id or not screen.node_id:
            logger.debug(f"{screen.screen_id}: no file/node id, cannot enrich")
            return EnrichmentOutcome(screen=screen, status=EnrichmentStatus.NO_DETAIL)

        try:
            node = await self._provider.fetch(
                screen.file_id, node_id=screen.node_id, depth=self._detail_depth
            )
        except ScreenHoundError as e:
            logger.warning(f"Enrichment fetch failed for {screen.screen_id}: {e}")
            return EnrichmentOutcome(
                screen=screen, status=EnrichmentStatus.DEGRADED, error=str(e)
            )

        detail = extract_details(node)
        enriched = dataclasses.replace(
            screen,
            page_title=(
                detail.page_title
                if detail.page_title and detail.page_title != UNKNOWN_TITLE
                else screen.page_title
            ),
            author=(
                detail.author
                if detail.author and detail.author != UNKNOWN_AUTHOR
                else screen.author
            ),
            description=detail.description or screen.description,
            keywords=list(screen.keywords),
        )
        enriched.refresh_keywords()

        if not detail.description:
            logger.info(f"{screen.screen_id}: no description found in node {screen.node_id}")
            return EnrichmentOutcome(screen=enriched, status=EnrichmentStatus.NO_DETAIL)

        return self._persist(enriched)

    def _persist(self, screen: Screen) -> EnrichmentOutcome:
        if not self._store.is_loaded and not self._store.exists():
            logger.info(f"No index yet, not persisting {screen.screen_id}")
            return EnrichmentOutcome(screen=screen, status=EnrichmentStatus.UNSAVED)

        try:
            self._store.ensure_loaded()
            updated = self._store.update_screen_detail(
                screen.screen_id,
                screen.project,
                screen.version,
                title=screen.page_title,
                author=screen.author,
                description=screen.description,
            )
            if updated:
                stored = self._store.find_screen(
                    screen.project, screen.version, screen.screen_id
                )
                return EnrichmentOutcome(
                    screen=stored or screen, status=EnrichmentStatus.UPDATED
                )

            learned = dataclasses.replace(screen, last_modified=utc_now_iso())
            learned.refresh_keywords()
            self._store.add_screen(learned)
            logger.info(
                f"Learned {learned.screen_id} into {learned.project} {learned.version}"
            )
            return EnrichmentOutcome(screen=learned, status=EnrichmentStatus.LEARNED)
        except (ScreenHoundError, OSError) as e:
            logger.warning(f"Could not persist detail of {screen.screen_id}: {e}")
            return EnrichmentOutcome(
                screen=screen, status=EnrichmentStatus.DEGRADED, error=str(e)
            )

    def learn(self, screen: Screen) -> UpsertOutcome | None:
        """Upsert a remotely discovered screen; None when it cannot be stored."""
        if not self._store.is_loaded and not self._store.exists():
            logger.info(f"No index yet, not learning {screen.screen_id}")
            return None
        try:
            self._store.ensure_loaded()
            return self._store.upsert_screen(screen)
        except (ScreenHoundError, OSError) as e:
            logger.warning(f"Could not learn {screen.screen_id}: {e}")
            return None
