"""Figma REST API provider."""

from .figma_client import FigmaClient, build_depth_candidates

__all__ = ["FigmaClient", "build_depth_candidates"]
