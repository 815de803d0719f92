"""Query orchestration: interpret, rank, disambiguate, confirm.

A query ends in exactly one of: a confirmed screen, a numbered candidate
list published to the caller's session, a version choice list, or a
not-found/error message. Auto-confirmation of a single match only happens
when the caller actually pinned a version (in the query or as an argument);
a defaulted version never auto-confirms.
"""

from dataclasses import dataclass, field
from enum import Enum

from loguru import logger

from screenhound.core.config.config import Config
from screenhound.core.exceptions import (
    IndexMissingError,
    NotFoundError,
    RemoteFetchFailedError,
    ScreenHoundError,
    SelectionOutOfRangeError,
)
from screenhound.core.models import CandidateScreen, Screen, SearchResult
from screenhound.interfaces.document_provider import DocumentProvider
from screenhound.providers.index.index_store import IndexStore
from screenhound.services.disambiguation import DisambiguationSession, SessionRegistry
from screenhound.services.enrichment import EnrichmentPipeline
from screenhound.services.formatting import (
    format_candidates,
    format_grouped_candidates,
    format_learned,
    format_not_found,
    format_screen,
    format_version_choices,
)
from screenhound.services.query_interpreter import (
    QueryInterpretation,
    QueryInterpreter,
    QueryKind,
    SearchScope,
)
from screenhound.services.realtime_search import RealtimeSearch
from screenhound.services.scoring import (
    ScoringEngine,
    apply_phrase_priority,
    collapse_versions,
    flatten_groups,
    group_results,
)
from screenhound.services.screen_scanner import build_screen, find_screen_by_id


class OutcomeKind(Enum):
    CONFIRMED = "confirmed"
    CANDIDATES = "candidates"
    VERSION_CHOICES = "version_choices"
    NOT_FOUND = "not_found"
    ERROR = "error"


@dataclass
class SearchOutcome:
    kind: OutcomeKind
    text: str
    is_error: bool = False
    screen: Screen | None = None
    candidates: list[CandidateScreen] = field(default_factory=list)


class ScreenSearchService:
    """Resolves queries against the index, falling back to Figma."""

    def __init__(
        self,
        config: Config,
        provider: DocumentProvider,
        store: IndexStore,
        sessions: SessionRegistry | None = None,
        realtime: RealtimeSearch | None = None,
        enrichment: EnrichmentPipeline | None = None,
    ):
        self._config = config
        self._provider = provider
        self._store = store
        self._sessions = sessions or SessionRegistry()
        self._interpreter = QueryInterpreter(config.search)
        self._engine = ScoringEngine(store)
        self._realtime = realtime or RealtimeSearch(
            provider,
            depth=config.figma.realtime_depth,
            delay=config.figma.realtime_delay,
            known_projects=config.search.known_projects(),
        )
        self._enrichment = enrichment or EnrichmentPipeline(
            provider, store, detail_depth=config.figma.detail_depth
        )

    @property
    def sessions(self) -> SessionRegistry:
        return self._sessions

    async def search(
        self,
        query: str,
        project: str | None = None,
        version: str | None = None,
        auto_confirm: bool = True,
        session_id: str | None = None,
    ) -> SearchOutcome:
        """Resolve one query; never raises for domain failures."""
        interpretation = self._interpreter.interpret(query, project, version)
        session = self._sessions.get(session_id)
        logger.debug(
            f"Query {query!r} -> {interpretation.kind.value} "
            f"project={interpretation.project} version={interpretation.version} "
            f"explicit_version={interpretation.version_explicit}"
        )

        try:
            if interpretation.kind is QueryKind.SELECTION:
                return await self._resolve_selection(interpretation, session)
            if interpretation.kind is QueryKind.SCREEN_ID:
                return await self._search_by_screen_id(interpretation)
            return await self._search_scored(interpretation, auto_confirm, session)
        except NotFoundError as e:
            return SearchOutcome(kind=OutcomeKind.NOT_FOUND, text=str(e), is_error=True)
        except SelectionOutOfRangeError as e:
            return SearchOutcome(kind=OutcomeKind.ERROR, text=str(e), is_error=True)
        except RemoteFetchFailedError as e:
            logger.error(f"Figma request failed for {query!r}: {e}")
            return SearchOutcome(
                kind=OutcomeKind.ERROR, text=f"Figma request failed: {e}", is_error=True
            )
        except ScreenHoundError as e:
            return SearchOutcome(
                kind=OutcomeKind.ERROR, text=f"Search failed: {e}", is_error=True
            )

    async def _confirm(self, screen: Screen, header: str | None = None) -> SearchOutcome:
        outcome = await self._enrichment.ensure_complete(screen)
        logger.info(f"Confirmed {screen.screen_id} ({outcome.status.value})")
        return SearchOutcome(
            kind=OutcomeKind.CONFIRMED,
            text=format_screen(outcome.screen, header=header),
            screen=outcome.screen,
        )

    def _lookup(self, project: str, version: str, screen_id: str) -> Screen | None:
        try:
            self._store.ensure_loaded()
        except IndexMissingError:
            return None
        return self._store.find_screen(project, version, screen_id)

    async def _resolve_selection(
        self, interpretation: QueryInterpretation, session: DisambiguationSession
    ) -> SearchOutcome:
        assert interpretation.selection_index is not None
        candidate = session.select(interpretation.selection_index)
        screen = self._lookup(candidate.project, candidate.version, candidate.screen_id)
        return await self._confirm(
            screen or candidate.to_screen(),
            header=f"Selected #{interpretation.selection_index}",
        )

    async def _search_by_screen_id(
        self, interpretation: QueryInterpretation
    ) -> SearchOutcome:
        screen_id = interpretation.screen_id
        project = interpretation.project
        version = interpretation.version
        assert screen_id and project and version

        screen = self._lookup(project, version, screen_id)
        if screen is not None:
            return await self._confirm(screen)

        logger.info(f"{screen_id} not indexed for {project} {version}, asking Figma")
        remote_project = await self._provider.find_project_by_name(project)
        if remote_project is None:
            raise NotFoundError(f"Project not found: {project}")
        remote_file = await self._provider.find_file_by_version(remote_project.id, version)
        if remote_file is None:
            raise NotFoundError(f"No file for version {version} in project {project}")

        root = await self._provider.fetch(
            remote_file.key, depth=self._config.figma.identify_depth
        )
        container = find_screen_by_id(root, screen_id)
        if container is None:
            raise NotFoundError(
                f"Screen {screen_id} not found in {project} {version} "
                f"(file: {remote_file.name})"
            )

        screen = build_screen(screen_id, container, project, remote_file)
        screen.version = version
        self._enrichment.learn(screen)
        return await self._confirm(screen)

    async def _search_scored(
        self,
        interpretation: QueryInterpretation,
        auto_confirm: bool,
        session: DisambiguationSession,
    ) -> SearchOutcome:
        keywords = interpretation.keywords
        confirm_allowed = auto_confirm and interpretation.version_explicit
        scope = interpretation.scope
        search_config = self._config.search

        self._store.ensure_loaded()
        ranked = self._engine.search(
            keywords, project=interpretation.project, version=interpretation.version
        )

        if not ranked:
            if scope is SearchScope.GLOBAL:
                return await self._search_realtime(interpretation, confirm_allowed, session)
            raise NotFoundError(
                format_not_found(
                    interpretation.query, interpretation.project, interpretation.version
                )
            )

        results = apply_phrase_priority(ranked, keywords)

        if len(results) == 1 and confirm_allowed:
            return await self._confirm(
                results[0].screen, header="Found 1 screen (auto-confirmed)"
            )

        collapsed = collapse_versions(results)
        if collapsed is not None:
            session.publish(collapsed)
            return SearchOutcome(
                kind=OutcomeKind.VERSION_CHOICES,
                text=format_version_choices(interpretation.query, collapsed),
                candidates=collapsed,
            )

        if scope is SearchScope.GLOBAL:
            groups = group_results(results[: search_config.grouped_max_results])
            shown: list[SearchResult] = flatten_groups(groups)
            text = format_grouped_candidates(interpretation.query, groups)
        else:
            shown = results[: search_config.max_results]
            label = interpretation.project or ""
            if scope is SearchScope.SCOPED:
                label = f"{interpretation.project} {interpretation.version}"
            text = format_candidates(interpretation.query, shown, label)

        candidates = [CandidateScreen.from_screen(r.screen) for r in shown]
        session.publish(candidates)
        return SearchOutcome(kind=OutcomeKind.CANDIDATES, text=text, candidates=candidates)

    async def _search_realtime(
        self,
        interpretation: QueryInterpretation,
        confirm_allowed: bool,
        session: DisambiguationSession,
    ) -> SearchOutcome:
        logger.info(f"Index has no match for {interpretation.query!r}, scanning Figma")
        found = await self._realtime.search(
            interpretation.keywords,
            project=interpretation.project,
            version=interpretation.version,
            max_results=self._config.search.realtime_max_results,
        )
        if not found:
            raise NotFoundError(format_not_found(interpretation.query))

        for screen in found:
            self._enrichment.learn(screen)

        if len(found) == 1 and confirm_allowed:
            return await self._confirm(
                found[0], header="Found 1 screen in Figma (added to the index)"
            )

        candidates = [CandidateScreen.from_screen(s) for s in found]
        session.publish(candidates)
        return SearchOutcome(
            kind=OutcomeKind.CANDIDATES,
            text=format_learned(found),
            candidates=candidates,
        )

    def stats(self) -> dict:
        self._store.ensure_loaded()
        return self._store.stats()
