"""Custom exceptions for infinicanvas."""

from __future__ import annotations


class InfinicanvasError(Exception):
    """Base exception class for all infinicanvas errors."""


class ExportUnavailableError(InfinicanvasError):
    """Raised when an image export is requested but no drawing surface is attached."""

    def __init__(self, message: str = "No drawing surface is attached") -> None:
        """Initialize the exception.

        Args:
            message: Description of why the export could not run.
        """
        super().__init__(message)


class PageNotFoundError(InfinicanvasError):
    """Raised when a page index does not exist.

    Attributes:
        index: The page index that was requested.
    """

    def __init__(self, index: int) -> None:
        """Initialize the exception with the page index.

        Args:
            index: The page index that was not found.
        """
        self.index = index
        super().__init__(f"Page with index {index} not found")


class InvalidSnapshotError(InfinicanvasError):
    """Raised when a board snapshot is malformed or breaks the history invariants."""

    def __init__(self, message: str) -> None:
        """Initialize the exception with a custom message.

        Args:
            message: Description of why the snapshot is invalid.
        """
        super().__init__(message)


class InvalidColorError(InfinicanvasError):
    """Raised when a color string cannot be parsed.

    Attributes:
        color: The rejected color value.
    """

    def __init__(self, color: object) -> None:
        """Initialize the exception with the rejected color.

        Args:
            color: The value that is not a color.
        """
        self.color = color
        super().__init__(f"Invalid color: {color!r}")
