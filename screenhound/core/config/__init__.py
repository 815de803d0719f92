"""Configuration models for ScreenHound."""

from .config import Config
from .figma_config import FigmaConfig
from .index_config import IndexConfig
from .search_config import DEFAULT_PROJECT_ALIASES, SearchConfig

__all__ = [
    "Config",
    "DEFAULT_PROJECT_ALIASES",
    "FigmaConfig",
    "IndexConfig",
    "SearchConfig",
]
