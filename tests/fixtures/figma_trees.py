"""Builders for raw Figma-shaped node trees used across tests."""

from typing import Any


def text(node_id: str, characters: str, name: str | None = None) -> dict[str, Any]:
    return {
        "id": node_id,
        "name": characters if name is None else name,
        "type": "TEXT",
        "characters": characters,
    }


def frame(node_id: str, name: str, *children: dict[str, Any], type: str = "FRAME") -> dict[str, Any]:
    return {"id": node_id, "name": name, "type": type, "children": list(children)}


def section(node_id: str, name: str, *children: dict[str, Any]) -> dict[str, Any]:
    return frame(node_id, name, *children, type="SECTION")


def document(*pages: dict[str, Any]) -> dict[str, Any]:
    return frame("0:0", "Document", *pages, type="DOCUMENT")


def canvas(node_id: str, name: str, *children: dict[str, Any]) -> dict[str, Any]:
    return frame(node_id, name, *children, type="CANVAS")


def screen_frame(
    node_id: str,
    screen_id: str,
    title: str = "User List",
    author: str = "Kim",
    description: str | None = None,
) -> dict[str, Any]:
    """A screen spec frame laid out the way the design team draws them.

    Labels are followed by their values; an optional Description section is
    closed by a Changelog label.
    """
    children = [
        text(f"{node_id}-1", "Screen ID"),
        text(f"{node_id}-2", screen_id),
        text(f"{node_id}-3", "Page Title"),
        text(f"{node_id}-4", title),
        text(f"{node_id}-5", "Author"),
        text(f"{node_id}-6", author),
    ]
    if description is not None:
        children += [
            text(f"{node_id}-7", "Description"),
            text(f"{node_id}-8", description),
            text(f"{node_id}-9", "Changelog"),
        ]
    return frame(node_id, f"{screen_id} {title}", *children)


def deep_chain(levels: int) -> dict[str, Any]:
    """A single frame chain `levels` deep, ending in one text leaf."""
    raw = text("leaf", "bottom")
    for i in range(levels):
        raw = frame(f"n{i}", f"level {i}", raw)
    return raw
