"""ScreenHound: resolve screen specs from Figma design files."""

from .version import __version__

__all__ = ["__version__"]
