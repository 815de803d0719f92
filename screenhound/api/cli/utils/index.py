"""Index utility functions for CLI commands."""

from pathlib import Path

from screenhound.core.config.config import Config


def verify_index_exists(config: Config) -> Path:
    """Verify the screen index exists, raising if not found.

    Raises:
        FileNotFoundError: If the index file doesn't exist
    """
    index_path = config.index.get_index_path()
    if not index_path.exists():
        raise FileNotFoundError(
            f"Screen index not found at {index_path}. "
            f"Run 'screenhound collect' to create the index first."
        )
    return index_path
