"""Tests for screen container recognition."""

from screenhound.core.nodes import parse_node
from screenhound.interfaces.document_provider import RemoteFile
from screenhound.services.screen_scanner import find_screen_by_id, scan_file
from tests.fixtures.figma_trees import canvas, document, frame, screen_frame, section, text

REMOTE_FILE = RemoteFile(key="file-306", name="CONTRABASS 3.0.6", last_modified="2024-05-01T00:00:00Z")


class TestScanFile:
    def test_finds_frames_and_sections(self):
        root = parse_node(
            document(
                canvas(
                    "1:0",
                    "Users",
                    screen_frame("1:1", "CONT-05_04_54", title="User List", description="Lists all users with paging"),
                    section("1:2", "CONT-05_04_55 User Detail", text("1:3", "Page Title"), text("1:4", "User Detail")),
                    frame("1:5", "Cover"),
                )
            )
        )
        screens = scan_file(root, "CONTRABASS", REMOTE_FILE)

        assert [s.screen_id for s in screens] == ["CONT-05_04_54", "CONT-05_04_55"]
        first = screens[0]
        assert first.page_title == "User List"
        assert first.author == "Kim"
        assert first.project == "CONTRABASS"
        assert first.version == "3.0.6"
        assert first.file_id == "file-306"
        assert first.file_name == "CONTRABASS 3.0.6"
        assert first.node_id == "1:1"
        assert first.last_modified == "2024-05-01T00:00:00Z"
        # Bulk collection keeps descriptions empty
        assert first.description == ""
        assert "user" in first.keywords

    def test_first_container_per_id_wins(self):
        root = parse_node(
            document(
                screen_frame("1:1", "CONT-05_04_54", title="User List"),
                screen_frame("2:1", "CONT-05_04_54", title="User List copy"),
            )
        )
        screens = scan_file(root, "CONTRABASS", REMOTE_FILE)
        assert len(screens) == 1
        assert screens[0].node_id == "1:1"

    def test_text_nodes_named_like_ids_are_not_screens(self):
        root = parse_node(document(text("1:1", "CONT-05_04_54")))
        assert scan_file(root, "CONTRABASS", REMOTE_FILE) == []


class TestFindScreenById:
    def test_named_container_wins(self):
        root = parse_node(
            document(
                frame("1:1", "Board", frame("1:2", "Inner", text("1:3", "CONT-05_04_54"))),
                screen_frame("2:1", "CONT-05_04_54"),
            )
        )
        assert find_screen_by_id(root, "cont-05_04_54").id == "2:1"

    def test_deepest_container_holding_id_text(self):
        root = parse_node(
            document(
                frame("1:1", "Board", frame("1:2", "Inner", frame("1:4", "Group", text("1:3", "CONT-05_04_54"), type="GROUP"))),
                frame("2:1", "Other", text("2:2", "CONT-05_04_54")),
            )
        )
        assert find_screen_by_id(root, "CONT-05_04_54").id == "1:2"

    def test_missing(self):
        root = parse_node(document(screen_frame("1:1", "CONT-05_04_54")))
        assert find_screen_by_id(root, "CONT-09_09_09") is None
