"""Document node model for provider trees.

Provider payloads are arbitrary-depth JSON trees. They are converted once
into a small tagged variant (frame, section, text, other) so the extractor
and scanner never touch raw dictionaries. Both conversion and traversal use
an explicit stack; deep documents must not hit the interpreter recursion
limit.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class NodeKind(Enum):
    FRAME = "FRAME"
    SECTION = "SECTION"
    TEXT = "TEXT"
    OTHER = "OTHER"


@dataclass
class Node:
    id: str
    name: str

    kind = NodeKind.OTHER

    @property
    def children(self) -> list["Node"]:
        return []


@dataclass
class ContainerNode(Node):
    child_nodes: list[Node] = field(default_factory=list)

    @property
    def children(self) -> list[Node]:
        return self.child_nodes


@dataclass
class FrameNode(ContainerNode):
    kind = NodeKind.FRAME


@dataclass
class SectionNode(ContainerNode):
    kind = NodeKind.SECTION


@dataclass
class TextNode(Node):
    characters: str = ""

    kind = NodeKind.TEXT


@dataclass
class OtherNode(ContainerNode):
    """Any other provider node type (CANVAS, GROUP, INSTANCE, DOCUMENT...)."""

    node_type: str = "OTHER"


def is_container(node: Node) -> bool:
    """Frames and sections are the only nodes that can hold a screen."""
    return isinstance(node, (FrameNode, SectionNode))


def _make_node(raw: dict[str, Any]) -> Node:
    node_id = str(raw.get("id", ""))
    name = str(raw.get("name") or "")
    node_type = str(raw.get("type") or "OTHER").upper()
    if node_type == "FRAME":
        return FrameNode(id=node_id, name=name)
    if node_type == "SECTION":
        return SectionNode(id=node_id, name=name)
    if node_type == "TEXT":
        return TextNode(id=node_id, name=name, characters=str(raw.get("characters") or ""))
    return OtherNode(id=node_id, name=name, node_type=node_type)


def parse_node(raw: dict[str, Any]) -> Node:
    """Convert a provider JSON node (and its subtree) into typed nodes."""
    root = _make_node(raw)
    stack: list[tuple[dict[str, Any], Node]] = [(raw, root)]
    while stack:
        raw_node, node = stack.pop()
        raw_children = raw_node.get("children") or []
        if not isinstance(node, ContainerNode) or not raw_children:
            continue
        for raw_child in raw_children:
            if not isinstance(raw_child, dict):
                continue
            child = _make_node(raw_child)
            node.child_nodes.append(child)
            stack.append((raw_child, child))
    return root


def iter_nodes(root: Node, max_depth: int | None = None) -> Iterator[Node]:
    """Yield nodes depth-first in pre-order.

    Args:
        root: Node to start from (depth 0)
        max_depth: Deepest level below root to visit; None means unbounded
    """
    stack: list[tuple[Node, int]] = [(root, 0)]
    while stack:
        node, depth = stack.pop()
        yield node
        if max_depth is not None and depth >= max_depth:
            continue
        # Reversed so the first child is popped first
        for child in reversed(node.children):
            stack.append((child, depth + 1))


def iter_nodes_with_ancestors(root: Node) -> Iterator[tuple[Node, tuple[Node, ...]]]:
    """Pre-order traversal that also yields each node's ancestor chain."""
    stack: list[tuple[Node, tuple[Node, ...]]] = [(root, ())]
    while stack:
        node, ancestors = stack.pop()
        yield node, ancestors
        lineage = ancestors + (node,)
        for child in reversed(node.children):
            stack.append((child, lineage))


def collect_text_leaves(root: Node, max_depth: int | None = None) -> list[TextNode]:
    """Return text nodes with non-empty content in depth-first order."""
    return [
        node
        for node in iter_nodes(root, max_depth=max_depth)
        if isinstance(node, TextNode) and node.characters.strip()
    ]
