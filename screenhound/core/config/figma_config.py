"""Figma provider configuration for ScreenHound."""

import argparse
import os
from typing import Any

from pydantic import BaseModel, Field, SecretStr, field_validator

DEFAULT_BASE_URL = "https://api.figma.com/v1"


class FigmaConfig(BaseModel):
    """Figma API access and fetch tuning.

    Configuration can be provided via:
    - Environment variables (SCREENHOUND_FIGMA__* or legacy FIGMA_*)
    - CLI arguments
    - Default values
    """

    token: SecretStr | None = Field(default=None, description="Figma personal access token")
    team_id: str | None = Field(default=None, description="Figma team id owning the projects")
    base_url: str = Field(default=DEFAULT_BASE_URL, description="Figma REST API base URL")
    timeout: float = Field(default=60.0, gt=0, description="HTTP request timeout in seconds")

    # Tree depths
    collection_depth: int = Field(
        default=8, ge=1, description="Tree depth requested during bulk collection"
    )
    detail_depth: int = Field(
        default=10, ge=1, description="Tree depth requested when enriching one screen"
    )
    realtime_depth: int = Field(
        default=10, ge=1, description="Tree depth requested by the realtime fallback scan"
    )
    identify_depth: int = Field(
        default=5, ge=1, description="Tree depth requested when locating a screen by id"
    )

    # Pacing between sequential file fetches (seconds)
    collection_delay: float = Field(default=2.0, ge=0)
    realtime_delay: float = Field(default=0.5, ge=0)

    @field_validator("base_url")
    def validate_base_url(cls, v: str) -> str:
        """Drop trailing slashes so paths can be joined verbatim."""
        return v.rstrip("/")

    def is_configured(self) -> bool:
        """Check that a token is available for API calls."""
        return self.token is not None and bool(self.token.get_secret_value())

    def get_token(self) -> str:
        if not self.is_configured():
            raise ValueError(
                "Figma token not configured. Set FIGMA_TOKEN or SCREENHOUND_FIGMA__TOKEN."
            )
        assert self.token is not None
        return self.token.get_secret_value()

    @classmethod
    def add_cli_arguments(cls, parser: argparse.ArgumentParser) -> None:
        """Add Figma-related CLI arguments."""
        parser.add_argument(
            "--figma-token",
            help="Figma personal access token (default: FIGMA_TOKEN)",
        )
        parser.add_argument(
            "--team-id",
            help="Figma team id (default: FIGMA_TEAM_ID)",
        )

    @classmethod
    def load_from_env(cls) -> dict[str, Any]:
        """Load Figma config from environment variables."""
        config: dict[str, Any] = {}
        # Support both new and legacy env var names
        if token := (os.getenv("SCREENHOUND_FIGMA__TOKEN") or os.getenv("FIGMA_TOKEN")):
            config["token"] = SecretStr(token)
        if team_id := (
            os.getenv("SCREENHOUND_FIGMA__TEAM_ID") or os.getenv("FIGMA_TEAM_ID")
        ):
            config["team_id"] = team_id
        if base_url := os.getenv("SCREENHOUND_FIGMA__BASE_URL"):
            config["base_url"] = base_url
        if timeout := os.getenv("SCREENHOUND_FIGMA__TIMEOUT"):
            config["timeout"] = float(timeout)
        if depth := (
            os.getenv("SCREENHOUND_FIGMA__COLLECTION_DEPTH")
            or os.getenv("FIGMA_COLLECTION_DEPTH")
        ):
            config["collection_depth"] = int(depth)
        if depth := os.getenv("SCREENHOUND_FIGMA__DETAIL_DEPTH"):
            config["detail_depth"] = int(depth)
        if delay := os.getenv("SCREENHOUND_FIGMA__COLLECTION_DELAY"):
            config["collection_delay"] = float(delay)
        if delay := os.getenv("SCREENHOUND_FIGMA__REALTIME_DELAY"):
            config["realtime_delay"] = float(delay)
        return config

    @classmethod
    def extract_cli_overrides(cls, args: Any) -> dict[str, Any]:
        """Extract Figma config from CLI arguments."""
        overrides: dict[str, Any] = {}
        if getattr(args, "figma_token", None):
            overrides["token"] = SecretStr(args.figma_token)
        if getattr(args, "team_id", None):
            overrides["team_id"] = args.team_id
        if getattr(args, "depth", None):
            overrides["collection_depth"] = args.depth
        return overrides

    def __repr__(self) -> str:
        """String representation hiding the token."""
        token_state = "set" if self.is_configured() else "unset"
        return (
            f"FigmaConfig(team_id={self.team_id}, token={token_state}, "
            f"collection_depth={self.collection_depth})"
        )
