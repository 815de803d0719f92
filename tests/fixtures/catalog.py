"""A small CONTRABASS catalog shared by service tests.

Figma side: two versioned files plus an unversioned archive file.
Index side: the screens bulk collection would have stored, without
descriptions, and without CONT-07_01_01 so remote paths can be exercised.
"""

from pathlib import Path

from screenhound.core.models import Screen
from screenhound.providers.index.index_store import IndexStore
from tests.fixtures.fake_providers import FakeDocumentProvider
from tests.fixtures.figma_trees import canvas, document, screen_frame

USER_LIST_306 = "Lists every user account with paging"
USER_DETAIL_306 = "Shows the profile of one user account"
BILLING_306 = "Monthly billing summary per tenant"
USER_LIST_307 = "Lists every user account, now with filters"


def catalog_documents() -> dict:
    return {
        "file-306": document(
            canvas(
                "1:0",
                "Users",
                screen_frame("1:2", "CONT-05_04_54", "User List", author="Kim", description=USER_LIST_306),
                screen_frame("1:3", "CONT-05_04_55", "User Detail", author="Lee", description=USER_DETAIL_306),
                screen_frame("1:4", "CONT-07_01_01", "Billing Overview", author="Park", description=BILLING_306),
            )
        ),
        "file-307": document(
            canvas(
                "2:0",
                "Users",
                screen_frame("2:2", "CONT-05_04_54", "User List", author="Kim", description=USER_LIST_307),
            )
        ),
    }


def catalog_provider(failing: set[str] | None = None) -> FakeDocumentProvider:
    return FakeDocumentProvider(
        projects={
            "CONTRABASS": [
                ("file-306", "CONTRABASS 3.0.6"),
                ("file-307", "CONTRABASS 3.0.7"),
                ("file-archive", "Archive"),
            ]
        },
        documents=catalog_documents(),
        failing=failing,
    )


def _indexed(screen_id: str, title: str, author: str, version: str, node_id: str) -> Screen:
    screen = Screen(
        screen_id=screen_id,
        page_title=title,
        author=author,
        project="CONTRABASS",
        version=version,
        file_id=f"file-{version.replace('.', '')}",
        file_name=f"CONTRABASS {version}",
        node_id=node_id,
        last_modified="2024-05-01T00:00:00Z",
    )
    screen.refresh_keywords()
    return screen


def seed_index(path: Path) -> IndexStore:
    """Write the lightweight index and return a loaded store for it."""
    store = IndexStore(path)
    store.load_or_empty()
    store.add_screen(_indexed("CONT-05_04_54", "User List", "Kim", "3.0.6", "1:2"), save=False)
    store.add_screen(_indexed("CONT-05_04_55", "User Detail", "Lee", "3.0.6", "1:3"), save=False)
    store.add_screen(_indexed("CONT-05_04_54", "User List", "Kim", "3.0.7", "2:2"), save=False)
    store.save()
    return store
