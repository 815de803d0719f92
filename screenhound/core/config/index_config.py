"""Screen index storage configuration."""

import argparse
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

DEFAULT_INDEX_RELATIVE_PATH = Path("data") / "screen-index.json"


def _env_true(value: str | None) -> bool:
    return str(value or "").strip().lower() in ("1", "true", "yes", "on")


class IndexConfig(BaseModel):
    """Location and merge policy of the persisted screen index."""

    path: Path | None = Field(default=None, description="Path to the screen index JSON file")
    allow_empty_version_overwrite: bool = Field(
        default=False,
        description="Let an empty collection result replace a non-empty stored version",
    )

    @field_validator("path")
    def validate_path(cls, v: Path | None) -> Path | None:
        """Convert string paths to Path objects."""
        if v is not None and not isinstance(v, Path):
            return Path(v)
        return v

    def get_index_path(self) -> Path:
        """Resolve the index file, defaulting to ./data/screen-index.json."""
        if self.path is not None:
            return self.path
        return Path.cwd() / DEFAULT_INDEX_RELATIVE_PATH

    @classmethod
    def add_cli_arguments(cls, parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "--index",
            type=Path,
            help="Screen index file (default: SCREEN_INDEX_PATH or ./data/screen-index.json)",
        )

    @classmethod
    def load_from_env(cls) -> dict[str, Any]:
        """Load index config from environment variables."""
        config: dict[str, Any] = {}
        if index_path := (
            os.getenv("SCREENHOUND_INDEX__PATH") or os.getenv("SCREEN_INDEX_PATH")
        ):
            config["path"] = Path(index_path)
        overwrite = os.getenv("SCREENHOUND_INDEX__ALLOW_EMPTY_VERSION_OVERWRITE")
        if overwrite is None:
            overwrite = os.getenv("FIGMA_ALLOW_EMPTY_VERSION_OVERWRITE")
        if overwrite is not None:
            config["allow_empty_version_overwrite"] = _env_true(overwrite)
        return config

    @classmethod
    def extract_cli_overrides(cls, args: Any) -> dict[str, Any]:
        overrides: dict[str, Any] = {}
        if getattr(args, "index", None):
            overrides["path"] = args.index
        if getattr(args, "allow_empty_overwrite", False):
            overrides["allow_empty_version_overwrite"] = True
        return overrides

    def __repr__(self) -> str:
        return (
            f"IndexConfig(path={self.get_index_path()}, "
            f"allow_empty_version_overwrite={self.allow_empty_version_overwrite})"
        )
