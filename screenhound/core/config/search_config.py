"""Search defaults, project aliases and result limits."""

import argparse
import os
from typing import Any

from pydantic import BaseModel, Field, field_validator

DEFAULT_PROJECT_ALIASES: dict[str, str] = {
    "콘트라베이스": "CONTRABASS",
    "contrabass": "CONTRABASS",
    "cont": "CONTRABASS",
    "sds": "SDS+",
    "sds플러스": "SDS+",
    "viola": "VIOLA",
    "비올라": "VIOLA",
    "boot": "Boot Factory",
    "부트": "Boot Factory",
    "bootfactory": "Boot Factory",
}


def _split_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class SearchConfig(BaseModel):
    """Query resolution defaults."""

    default_project: str = Field(default="CONTRABASS")
    default_version: str = Field(default="3.0.6")
    supported_projects: list[str] = Field(
        default_factory=lambda: ["CONTRABASS"],
        description="Projects gathered by bulk collection",
    )
    project_aliases: dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_PROJECT_ALIASES),
        description="Query keyword -> canonical project name",
    )

    max_results: int = Field(default=5, ge=1, description="Scoped and per-project result limit")
    grouped_max_results: int = Field(default=20, ge=1, description="Unscoped result limit")
    realtime_max_results: int = Field(default=5, ge=1)

    @field_validator("project_aliases")
    def lowercase_aliases(cls, v: dict[str, str]) -> dict[str, str]:
        """Alias keys are matched against lowercase tokens."""
        return {key.lower(): value for key, value in v.items()}

    @classmethod
    def add_cli_arguments(cls, parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "--projects",
            help="Comma-separated projects to collect (default: SUPPORTED_PROJECTS)",
        )

    @classmethod
    def load_from_env(cls) -> dict[str, Any]:
        """Load search config from environment variables."""
        config: dict[str, Any] = {}
        if project := (
            os.getenv("SCREENHOUND_SEARCH__DEFAULT_PROJECT") or os.getenv("DEFAULT_PROJECT")
        ):
            config["default_project"] = project
        if version := (
            os.getenv("SCREENHOUND_SEARCH__DEFAULT_VERSION") or os.getenv("DEFAULT_VERSION")
        ):
            config["default_version"] = version
        if projects := (
            os.getenv("SCREENHOUND_SEARCH__SUPPORTED_PROJECTS")
            or os.getenv("SUPPORTED_PROJECTS")
        ):
            config["supported_projects"] = _split_csv(projects)
        if limit := os.getenv("SCREENHOUND_SEARCH__MAX_RESULTS"):
            config["max_results"] = int(limit)
        return config

    @classmethod
    def extract_cli_overrides(cls, args: Any) -> dict[str, Any]:
        overrides: dict[str, Any] = {}
        if getattr(args, "projects", None):
            overrides["supported_projects"] = _split_csv(args.projects)
        return overrides

    def resolve_alias(self, token: str) -> str | None:
        return self.project_aliases.get(token.lower())

    def known_projects(self) -> list[str]:
        """Canonical project names, in first-seen order."""
        names = [self.default_project, *self.supported_projects, *self.project_aliases.values()]
        return list(dict.fromkeys(name for name in names if name))

    def __repr__(self) -> str:
        return (
            f"SearchConfig(default_project={self.default_project}, "
            f"default_version={self.default_version}, "
            f"supported_projects={self.supported_projects})"
        )
