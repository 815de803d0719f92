"""Text normalization, tokenization and screen id helpers."""

import re

# PREFIX-NN_NN_NN, e.g. CONT-05_04_54
SCREEN_ID_PATTERN = re.compile(r"[A-Z]+-\d{2}_\d{2}_\d{2}")
_SCREEN_ID_EXACT = re.compile(r"^[A-Z]+-\d{2}_\d{2}_\d{2}$", re.IGNORECASE)
_SCREEN_ID_PREFIX = re.compile(r"^([A-Z]+-\d{2}_\d{2}_\d{2})")
_TITLE_SEPARATORS = re.compile(r"^[-:\s_]+")

VERSION_PATTERN = re.compile(r"(\d+\.\d+\.\d+)")

# ASCII word characters, Hangul syllables and whitespace survive tokenization
_NON_TOKEN_CHARS = re.compile(r"[^\w가-힣\s]", re.ASCII)
_WHITESPACE = re.compile(r"\s+")


def tokenize(text: str) -> list[str]:
    """Split text into lowercase keyword tokens.

    Punctuation becomes whitespace, tokens of a single character are dropped
    and duplicates are removed keeping the first occurrence.
    """
    if not text:
        return []
    cleaned = _NON_TOKEN_CHARS.sub(" ", text).lower()
    seen: dict[str, None] = {}
    for token in cleaned.split():
        if len(token) > 1 and token not in seen:
            seen[token] = None
    return list(seen)


def normalize_text(text: str | None) -> str:
    """Collapse whitespace and lowercase for label comparisons."""
    if not text:
        return ""
    return _WHITESPACE.sub(" ", text).strip().lower()


def build_keywords(screen_id: str, title: str, description: str = "") -> list[str]:
    parts = [screen_id, title]
    if description:
        parts.append(description)
    return tokenize(" ".join(p for p in parts if p))


def is_screen_id(text: str | None) -> bool:
    return bool(text) and bool(_SCREEN_ID_EXACT.match(text.strip()))


def screen_id_prefix(name: str | None) -> str | None:
    """Return the screen id a node name starts with, if any."""
    if not name:
        return None
    match = _SCREEN_ID_PREFIX.match(name.strip())
    return match.group(1) if match else None


def find_screen_id(text: str) -> str | None:
    match = SCREEN_ID_PATTERN.search(text or "")
    return match.group(0) if match else None


def strip_screen_id(name: str) -> str:
    """Remove a leading screen id and its separator from a frame name."""
    stripped = _SCREEN_ID_PREFIX.sub("", (name or "").strip(), count=1)
    return _TITLE_SEPARATORS.sub("", stripped).strip()


def extract_version(text: str | None) -> str | None:
    """Return the first X.Y.Z version found in text."""
    match = VERSION_PATTERN.search(text or "")
    return match.group(1) if match else None
