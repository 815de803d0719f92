"""Heuristic extraction of title, author and description from screen trees.

Screen specs are free-form design frames, not structured data. A value is
recovered by finding a label text node ("Page Title", "작성자", ...) and
taking the first plausible text leaf that follows it in depth-first order.
"""

from collections.abc import Iterable, Sequence

from screenhound.core.models import UNKNOWN_AUTHOR, UNKNOWN_TITLE, ScreenDetail
from screenhound.core.nodes import (
    Node,
    TextNode,
    collect_text_leaves,
    iter_nodes,
)
from screenhound.core.text import is_screen_id, normalize_text, strip_screen_id

TITLE_LABELS = ("Page Title", "page title", "Title", "title", "페이지 타이틀")
AUTHOR_LABELS = ("Author", "author", "작성자")

# Leaves scanned per label occurrence, the label itself included
LOOKAHEAD_WINDOW = 8

# Section texts this short are labels or stray glyphs, not prose
MIN_DESCRIPTION_LENGTH = 20

DESCRIPTION_LABEL = "Description"
CHANGELOG_LABEL = "Changelog"
DESCRIPTION_FRAME = "Description Frame"
DESCRIPTION_FRAME_PARENT = "Main & Descriprion Frame"  # sic, as named in the design files
PAPER_FRAME = "Paper"

RESERVED_LABELS = frozenset(
    {
        "screen id",
        "description",
        "changelog",
        "page title",
        "author",
        "화면 id",
        "설명",
        "변경 이력",
        "페이지 타이틀",
        "작성자",
    }
)

DESCRIPTION_FRAME_EXCLUDES = frozenset(
    {"Screen ID", "Page Title", "Author", "Description", "Changelog", "CONTRABASS"}
)


def find_value_after_label(
    leaves: Sequence[TextNode], labels: Iterable[str]
) -> str | None:
    """Return the first value text following any of the given labels.

    Each label occurrence is scanned forward within LOOKAHEAD_WINDOW leaves;
    reserved labels and bare screen ids are skipped as candidates.
    """
    label_set = {normalize_text(label) for label in labels}
    non_values = RESERVED_LABELS | label_set

    for i, leaf in enumerate(leaves):
        if (
            normalize_text(leaf.name) not in label_set
            and normalize_text(leaf.characters) not in label_set
        ):
            continue

        for j in range(i + 1, min(i + LOOKAHEAD_WINDOW, len(leaves))):
            raw = leaves[j].characters.strip()
            candidate = normalize_text(raw)
            if not candidate or candidate in non_values:
                continue
            if is_screen_id(raw):
                continue
            return raw

    return None


def find_description_frame(root: Node) -> Node | None:
    """Locate the dedicated description frame of a screen, if it has one."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.name == DESCRIPTION_FRAME:
            return node
        if node.name == PAPER_FRAME:
            main = next(
                (c for c in node.children if c.name == DESCRIPTION_FRAME_PARENT), None
            )
            if main is not None:
                return next(
                    (c for c in main.children if c.name == DESCRIPTION_FRAME), None
                )
        stack.extend(reversed(node.children))
    return None


def collect_description_frame_texts(frame: Node) -> list[str]:
    texts: list[str] = []
    for node in iter_nodes(frame):
        if not isinstance(node, TextNode):
            continue
        text = node.characters
        if len(text.strip()) <= 1 or text in DESCRIPTION_FRAME_EXCLUDES:
            continue
        texts.append(text)
    return texts


def collect_section_description(root: Node) -> list[str]:
    """Collect prose between a "Description" label and the next "Changelog"."""
    collected: list[str] = []
    in_section = False
    for node in iter_nodes(root):
        if not isinstance(node, TextNode) or not node.characters:
            continue
        text = node.characters
        if node.name == DESCRIPTION_LABEL or text == DESCRIPTION_LABEL:
            in_section = True
            continue
        if in_section and len(text) > MIN_DESCRIPTION_LENGTH:
            collected.append(text)
        if in_section and (node.name == CHANGELOG_LABEL or text == CHANGELOG_LABEL):
            in_section = False
    return collected


def collect_description(root: Node, prefer_frame: bool = True) -> str:
    """Description text of a screen subtree, empty when none is found."""
    if prefer_frame:
        frame = find_description_frame(root)
        if frame is not None:
            texts = collect_description_frame_texts(frame)
            if texts:
                return "\n".join(texts).strip()
    return "\n".join(collect_section_description(root)).strip()


def extract_title(root: Node, leaves: Sequence[TextNode] | None = None) -> str:
    if leaves is None:
        leaves = collect_text_leaves(root)
    value = find_value_after_label(leaves, TITLE_LABELS)
    if value:
        return value.strip()
    from_name = strip_screen_id(root.name)
    return from_name or UNKNOWN_TITLE


def extract_author(leaves: Sequence[TextNode]) -> str:
    value = find_value_after_label(leaves, AUTHOR_LABELS)
    return value.strip() if value else UNKNOWN_AUTHOR


def extract_details(
    container: Node, with_description: bool = True, prefer_frame: bool = True
) -> ScreenDetail:
    """Extract title, author and (optionally) description from a screen node."""
    leaves = collect_text_leaves(container)
    return ScreenDetail(
        page_title=extract_title(container, leaves),
        author=extract_author(leaves),
        description=(
            collect_description(container, prefer_frame=prefer_frame)
            if with_description
            else ""
        ),
    )


__all__ = [
    "AUTHOR_LABELS",
    "LOOKAHEAD_WINDOW",
    "MIN_DESCRIPTION_LENGTH",
    "TITLE_LABELS",
    "collect_description",
    "extract_details",
    "find_description_frame",
    "find_value_after_label",
]
