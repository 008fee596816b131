"""Exception types for dusty."""

from pathlib import Path


class DustyError(Exception):
    """Base class for all dusty errors."""


class PathUnavailable(DustyError):
    """A catalog path is missing or cannot be read. Callers skip it."""

    def __init__(self, path: Path, cause: OSError | None = None):
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"{self.path} is unavailable: {cause}" if cause else f"{self.path} is unavailable")


class ConfigurationError(DustyError):
    """The context needed to build the catalog (the home directory) is missing."""


class DestructiveActionError(DustyError):
    """A path could not be removed or moved to the trash."""

    def __init__(self, path: Path, cause: Exception):
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"failed to clean {self.path}: {cause}")
