"""Configuration creation for CLI commands and the MCP server."""

from typing import Any

from pydantic import ValidationError

from screenhound.core.config.config import Config


def create_validated_config(args: Any, command: str) -> tuple[Config, list[str]]:
    """Build configuration from env and CLI arguments, then validate it.

    Returns:
        (config, validation errors). On a pydantic validation failure the
        defaults are returned together with the error text.
    """
    try:
        config = Config.load(args)
    except (ValidationError, ValueError) as e:
        return Config(), [f"Invalid configuration: {e}"]
    return config, config.validate_for_command(command)
