"""Package-specific exception types."""

from __future__ import annotations


class DeckError(Exception):
    """Base class for deck loading and build errors.

    The markdown converter itself never raises; these cover the files around it.
    """


class ManifestError(DeckError, ValueError):
    """Raised when a deck manifest or embedded data object is malformed."""


class SlideTooLargeError(DeckError, OSError):
    """Raised when a file exceeds the configured maximum size.

    Args:
        path: File that was rejected.
        max_size: Maximum allowed size in bytes.
    """

    def __init__(self, path: object, max_size: int):
        self.path = path
        self.max_size = max_size
        super().__init__(f"{path} exceeds the maximum allowed size of {max_size} bytes.")


class BuildError(DeckError):
    """Raised when the offline bundle cannot be produced."""
