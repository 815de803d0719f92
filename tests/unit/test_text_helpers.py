"""Tests for tokenization and screen id helpers."""

from screenhound.core.text import (
    build_keywords,
    extract_version,
    find_screen_id,
    is_screen_id,
    normalize_text,
    screen_id_prefix,
    strip_screen_id,
    tokenize,
)


class TestTokenize:
    def test_punctuation_becomes_separator(self):
        assert tokenize("User-List, 사용자 목록!") == ["user", "list", "사용자", "목록"]

    def test_single_characters_dropped(self):
        assert tokenize("a user b") == ["user"]

    def test_duplicates_removed_keeping_first(self):
        assert tokenize("User list USER") == ["user", "list"]

    def test_empty(self):
        assert tokenize("") == []

    def test_version_digits_are_single_characters(self):
        assert tokenize("3.0.6") == []


class TestScreenIds:
    def test_exact_match_is_case_insensitive(self):
        assert is_screen_id("CONT-05_04_54")
        assert is_screen_id(" cont-05_04_54 ")
        assert not is_screen_id("CONT-05_04_5")
        assert not is_screen_id("CONT-05_04_54 User List")
        assert not is_screen_id(None)

    def test_find_in_query(self):
        assert find_screen_id("show me CONT-05_04_54 please") == "CONT-05_04_54"
        assert find_screen_id("user list") is None

    def test_prefix_of_frame_name(self):
        assert screen_id_prefix("CONT-05_04_54 User List") == "CONT-05_04_54"
        assert screen_id_prefix("Cover") is None
        assert screen_id_prefix(None) is None

    def test_strip_screen_id(self):
        assert strip_screen_id("CONT-05_04_54 - User List") == "User List"
        assert strip_screen_id("CONT-05_04_54: User List") == "User List"
        assert strip_screen_id("CONT-05_04_54") == ""
        assert strip_screen_id("Cover page") == "Cover page"


def test_extract_version():
    assert extract_version("CONTRABASS v3.0.6 spec") == "3.0.6"
    assert extract_version("[CONTRABASS] 2.10.1 / 2.10.2") == "2.10.1"
    assert extract_version("Archive") is None
    assert extract_version(None) is None


def test_normalize_text():
    assert normalize_text("  Page   Title\n") == "page title"
    assert normalize_text(None) == ""


def test_build_keywords_includes_id_parts_and_title():
    keywords = build_keywords("CONT-05_04_54", "User List")
    assert keywords == ["cont", "05_04_54", "user", "list"]


def test_build_keywords_with_description():
    keywords = build_keywords("CONT-05_04_54", "User List", "Shows every user account")
    assert "account" in keywords
    assert keywords.count("user") == 1
