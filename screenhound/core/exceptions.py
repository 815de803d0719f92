"""Exception hierarchy for ScreenHound.

All domain errors derive from ScreenHoundError so callers at the tool and CLI
boundary can convert them into user-facing messages in one place.
"""


class ScreenHoundError(Exception):
    """Base class for all ScreenHound errors."""


class IndexMissingError(ScreenHoundError):
    """Raised when no persisted screen index exists yet."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(
            f"Screen index not found at {path}. "
            f"Run 'screenhound collect' to build the index first."
        )


class IndexCorruptError(ScreenHoundError):
    """Raised when the persisted screen index cannot be parsed."""

    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(
            f"Screen index at {path} is unreadable ({reason}). "
            f"Run 'screenhound collect' to rebuild it."
        )


class NotFoundError(ScreenHoundError):
    """Raised when a project, version or screen cannot be resolved."""


class RemoteFetchFailedError(ScreenHoundError):
    """Raised when the document provider cannot return a usable response."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class PayloadTooLargeError(RemoteFetchFailedError):
    """Provider rejected the request because the requested tree is too large.

    This is the only failure the depth ladder retries on.
    """


class SelectionOutOfRangeError(ScreenHoundError):
    """Raised when a numeric selection falls outside the candidate pool."""

    def __init__(self, index: int, pool_size: int):
        self.index = index
        self.pool_size = pool_size
        if pool_size == 0:
            message = (
                f"No pending choices to select #{index} from. "
                f"Run a search first."
            )
        else:
            message = (
                f"Selection #{index} is out of range. "
                f"Choose a number between 1 and {pool_size}."
            )
        super().__init__(message)
