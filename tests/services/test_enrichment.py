"""Tests for lazy screen enrichment and learn-on-miss."""

import dataclasses

import pytest

from screenhound.core.models import Screen
from screenhound.providers.index.index_store import IndexStore, UpsertOutcome
from screenhound.services.enrichment import EnrichmentPipeline, EnrichmentStatus
from tests.fixtures.catalog import BILLING_306, USER_LIST_306, catalog_provider


def _unindexed_billing() -> Screen:
    screen = Screen(
        screen_id="CONT-07_01_01",
        page_title="Billing Overview",
        project="CONTRABASS",
        version="3.0.6",
        file_id="file-306",
        file_name="CONTRABASS 3.0.6",
        node_id="1:4",
    )
    screen.refresh_keywords()
    return screen


class TestEnsureComplete:
    @pytest.mark.asyncio
    async def test_complete_screen_is_not_fetched(self, seeded_store, provider):
        screen = seeded_store.find_screen("CONTRABASS", "3.0.6", "CONT-05_04_54")
        screen = dataclasses.replace(screen, description="Already known")

        outcome = await EnrichmentPipeline(provider, seeded_store).ensure_complete(screen)

        assert outcome.status is EnrichmentStatus.COMPLETE
        assert provider.fetch_calls == []

    @pytest.mark.asyncio
    async def test_indexed_screen_is_filled_in_and_saved(self, seeded_store, provider):
        screen = seeded_store.find_screen("CONTRABASS", "3.0.6", "CONT-05_04_54")

        outcome = await EnrichmentPipeline(provider, seeded_store).ensure_complete(screen)

        assert outcome.status is EnrichmentStatus.UPDATED
        assert outcome.screen.description == USER_LIST_306
        assert provider.fetch_calls == [("file-306", "1:2", 10)]

        reloaded = IndexStore(seeded_store.path)
        reloaded.load()
        stored = reloaded.find_screen("CONTRABASS", "3.0.6", "CONT-05_04_54")
        assert stored.description == USER_LIST_306
        assert "paging" in stored.keywords

    @pytest.mark.asyncio
    async def test_unindexed_screen_is_learned(self, seeded_store, provider):
        outcome = await EnrichmentPipeline(provider, seeded_store).ensure_complete(_unindexed_billing())

        assert outcome.status is EnrichmentStatus.LEARNED
        assert outcome.screen.author == "Park"
        stored = seeded_store.find_screen("CONTRABASS", "3.0.6", "CONT-07_01_01")
        assert stored is not None
        assert stored.description == BILLING_306
        assert seeded_store.index.total_screens == 4

    @pytest.mark.asyncio
    async def test_fetch_failure_degrades(self, seeded_store):
        provider = catalog_provider(failing={"file-306"})
        screen = seeded_store.find_screen("CONTRABASS", "3.0.6", "CONT-05_04_54")

        outcome = await EnrichmentPipeline(provider, seeded_store).ensure_complete(screen)

        assert outcome.status is EnrichmentStatus.DEGRADED
        assert outcome.screen is screen
        assert outcome.error

    @pytest.mark.asyncio
    async def test_no_index_file_is_not_created(self, tmp_path, provider):
        store = IndexStore(tmp_path / "absent.json")

        outcome = await EnrichmentPipeline(provider, store).ensure_complete(_unindexed_billing())

        assert outcome.status is EnrichmentStatus.UNSAVED
        assert outcome.screen.description == BILLING_306
        assert not store.exists()

    @pytest.mark.asyncio
    async def test_missing_ids_cannot_be_enriched(self, seeded_store, provider):
        screen = Screen(screen_id="CONT-09_09_09", project="CONTRABASS", version="3.0.6")

        outcome = await EnrichmentPipeline(provider, seeded_store).ensure_complete(screen)

        assert outcome.status is EnrichmentStatus.NO_DETAIL
        assert provider.fetch_calls == []


class TestLearn:
    def test_learn_is_idempotent(self, seeded_store, provider):
        pipeline = EnrichmentPipeline(provider, seeded_store)
        assert pipeline.learn(_unindexed_billing()) is UpsertOutcome.CREATED
        assert pipeline.learn(_unindexed_billing()) is UpsertOutcome.UPDATED
        assert seeded_store.index.total_screens == 4

    def test_learn_without_index(self, tmp_path, provider):
        store = IndexStore(tmp_path / "absent.json")
        assert EnrichmentPipeline(provider, store).learn(_unindexed_billing()) is None
        assert not store.exists()
