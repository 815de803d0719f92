"""Top-level configuration for ScreenHound.

Precedence, lowest to highest: model defaults, environment variables, CLI
arguments. Each section owns its env names and CLI flags.
"""

from typing import Any

from pydantic import BaseModel, Field

from .figma_config import FigmaConfig
from .index_config import IndexConfig
from .search_config import SearchConfig


class Config(BaseModel):
    """Aggregated configuration for all ScreenHound components."""

    figma: FigmaConfig = Field(default_factory=FigmaConfig)
    index: IndexConfig = Field(default_factory=IndexConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    debug: bool = False

    @classmethod
    def load(cls, args: Any = None) -> "Config":
        """Build configuration from environment and optional CLI arguments."""
        sections: dict[str, dict[str, Any]] = {
            "figma": FigmaConfig.load_from_env(),
            "index": IndexConfig.load_from_env(),
            "search": SearchConfig.load_from_env(),
        }
        if args is not None:
            sections["figma"].update(FigmaConfig.extract_cli_overrides(args))
            sections["index"].update(IndexConfig.extract_cli_overrides(args))
            sections["search"].update(SearchConfig.extract_cli_overrides(args))

        return cls(
            figma=FigmaConfig(**sections["figma"]),
            index=IndexConfig(**sections["index"]),
            search=SearchConfig(**sections["search"]),
            debug=bool(getattr(args, "verbose", False)),
        )

    def validate_for_command(self, command: str) -> list[str]:
        """Return human-readable problems that block the given command."""
        errors: list[str] = []
        needs_remote = command in ("collect",)
        if needs_remote and not self.figma.is_configured():
            errors.append(
                "Figma token not configured. Set FIGMA_TOKEN or pass --figma-token."
            )
        if needs_remote and not self.figma.team_id:
            errors.append("Figma team id not configured. Set FIGMA_TEAM_ID or pass --team-id.")
        if command == "collect" and not self.search.supported_projects:
            errors.append("No projects to collect. Set SUPPORTED_PROJECTS or pass --projects.")
        return errors
