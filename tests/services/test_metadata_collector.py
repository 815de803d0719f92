"""Tests for bulk collection and its preservation rules."""

import pytest

from screenhound.providers.index.index_store import IndexStore
from screenhound.services.metadata_collector import MetadataCollector
from tests.fixtures.catalog import catalog_provider
from tests.fixtures.fake_providers import FakeDocumentProvider, RecordingSleep, no_sleep
from tests.fixtures.figma_trees import document


class TestCollectAll:
    @pytest.mark.asyncio
    async def test_fresh_collection(self, index_path, provider):
        sleep = RecordingSleep()
        store = IndexStore(index_path)
        collector = MetadataCollector(provider, store, depth=8, delay=2.0, sleep=sleep)

        report = await collector.collect_all(["CONTRABASS"])

        assert report.updated_projects == ["CONTRABASS"]
        assert report.skipped_files == ["Archive"]
        assert report.failed_files == []
        assert report.total_screens == 4
        assert report.backup_path is None
        assert report.index_path == index_path

        # The unversioned file is never fetched; fetched files are paced
        assert provider.fetch_calls == [("file-306", None, 8), ("file-307", None, 8)]
        assert sleep.calls == [2.0, 2.0]

        reloaded = IndexStore(index_path)
        reloaded.load()
        assert set(reloaded.index.projects["CONTRABASS"].versions) == {"3.0.6", "3.0.7"}
        screen = reloaded.find_screen("CONTRABASS", "3.0.6", "CONT-07_01_01")
        assert screen.page_title == "Billing Overview"
        assert screen.author == "Park"
        assert screen.description == ""
        assert reloaded.index.projects["CONTRABASS"].versions["3.0.6"].file_id == "file-306"

    @pytest.mark.asyncio
    async def test_failed_file_keeps_stored_version(self, seeded_store):
        provider = catalog_provider(failing={"file-307"})
        collector = MetadataCollector(provider, IndexStore(seeded_store.path), sleep=no_sleep)

        report = await collector.collect_all(["CONTRABASS"])

        assert report.failed_files == ["CONTRABASS 3.0.7"]
        assert report.backup_path is not None
        reloaded = IndexStore(seeded_store.path)
        reloaded.load()
        assert reloaded.find_screen("CONTRABASS", "3.0.7", "CONT-05_04_54") is not None
        assert reloaded.find_screen("CONTRABASS", "3.0.6", "CONT-07_01_01") is not None

    @pytest.mark.asyncio
    async def test_empty_result_does_not_wipe_version(self, seeded_store):
        provider = FakeDocumentProvider(
            projects={"CONTRABASS": [("file-307", "CONTRABASS 3.0.7")]},
            documents={"file-307": document()},
        )
        store = IndexStore(seeded_store.path)

        report = await MetadataCollector(provider, store, sleep=no_sleep).collect_all(["CONTRABASS"])

        assert report.preserved_versions == 1
        assert store.find_screen("CONTRABASS", "3.0.7", "CONT-05_04_54") is not None

    @pytest.mark.asyncio
    async def test_empty_result_overwrites_when_allowed(self, seeded_store):
        provider = FakeDocumentProvider(
            projects={"CONTRABASS": [("file-307", "CONTRABASS 3.0.7")]},
            documents={"file-307": document()},
        )
        store = IndexStore(seeded_store.path)

        report = await MetadataCollector(provider, store, sleep=no_sleep).collect_all(
            ["CONTRABASS"], allow_empty_overwrite=True
        )

        assert report.updated_versions == 1
        assert store.index.projects["CONTRABASS"].versions["3.0.7"].screens == []
        assert report.total_screens == 2

    @pytest.mark.asyncio
    async def test_unknown_project_keeps_index(self, seeded_store, provider):
        store = IndexStore(seeded_store.path)

        report = await MetadataCollector(provider, store, sleep=no_sleep).collect_all(["NOPE"])

        assert report.failed_projects == ["NOPE"]
        assert report.updated_projects == []
        assert report.total_screens == 3
