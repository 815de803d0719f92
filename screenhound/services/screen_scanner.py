"""Recognize screen containers in a design file tree."""

from collections.abc import Iterator

from screenhound.core.models import Screen
from screenhound.core.nodes import (
    Node,
    TextNode,
    is_container,
    iter_nodes,
    iter_nodes_with_ancestors,
)
from screenhound.core.text import screen_id_prefix
from screenhound.interfaces.document_provider import RemoteFile
from screenhound.services.label_extractor import extract_details


def iter_screen_containers(root: Node) -> Iterator[tuple[str, Node]]:
    """Yield (screen_id, node) for every frame/section named after a screen."""
    for node in iter_nodes(root):
        if not is_container(node):
            continue
        screen_id = screen_id_prefix(node.name)
        if screen_id:
            yield screen_id, node


def build_screen(
    screen_id: str,
    container: Node,
    project: str,
    remote_file: RemoteFile,
    with_description: bool = False,
) -> Screen:
    """Create a Screen record from its container node."""
    detail = extract_details(
        container, with_description=with_description, prefer_frame=False
    )
    screen = Screen(
        screen_id=screen_id,
        page_title=detail.page_title,
        author=detail.author,
        description=detail.description,
        project=project,
        version=remote_file.version or "unknown",
        file_id=remote_file.key,
        file_name=remote_file.name,
        node_id=container.id,
        last_modified=remote_file.last_modified,
    )
    screen.refresh_keywords()
    return screen


def scan_file(
    root: Node,
    project: str,
    remote_file: RemoteFile,
    with_description: bool = False,
) -> list[Screen]:
    """Lightweight screens of one file; the first container per id wins."""
    screens: list[Screen] = []
    seen: set[str] = set()
    for screen_id, container in iter_screen_containers(root):
        if screen_id in seen:
            continue
        seen.add(screen_id)
        screens.append(
            build_screen(
                screen_id, container, project, remote_file, with_description
            )
        )
    return screens


def find_screen_by_id(root: Node, screen_id: str) -> Node | None:
    """Locate the container of a screen in a file tree.

    A frame or section named after the id wins. Otherwise the deepest frame
    or section enclosing a text leaf that reads exactly the id is used.
    """
    wanted = screen_id.upper()
    best: Node | None = None
    best_depth = -1
    for node, ancestors in iter_nodes_with_ancestors(root):
        if is_container(node) and (screen_id_prefix(node.name) or "").upper() == wanted:
            return node
        if isinstance(node, TextNode) and node.characters.strip().upper() == wanted:
            for depth in range(len(ancestors) - 1, -1, -1):
                if is_container(ancestors[depth]):
                    if depth > best_depth:
                        best, best_depth = ancestors[depth], depth
                    break
    return best
