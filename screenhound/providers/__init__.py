"""Providers package for ScreenHound - concrete implementations of abstract interfaces.

Use lazy import to avoid importing the HTTP stack during package import.
"""

__all__ = [
    "FigmaClient",
    "IndexStore",
]


def __getattr__(name: str):
    if name == "FigmaClient":
        from .figma import FigmaClient  # lazy

        return FigmaClient
    if name == "IndexStore":
        from .index import IndexStore  # lazy

        return IndexStore
    raise AttributeError(name)
