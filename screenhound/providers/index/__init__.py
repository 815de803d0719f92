"""JSON-backed screen index provider."""

from .index_store import IndexStore, MergeReport, UpsertOutcome

__all__ = ["IndexStore", "MergeReport", "UpsertOutcome"]
