"""Base exception for the toolkit."""

from __future__ import annotations


class ToolkitError(Exception):
    """Base exception for everything the toolkit raises."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause
