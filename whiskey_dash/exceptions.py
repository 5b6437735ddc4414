"""Exceptions raised by the whiskey_dash data-loading layer.

The grouping and statistics functions never raise on well-typed input.  Only
the collaborators that reach outside the process (spreadsheet downloads,
database reads, dataset files) signal failures, and they do so with the
types below so the API can turn them into an explicit error payload.
"""
from __future__ import annotations


class WhiskeyDashError(Exception):
    """Base class for all whiskey_dash errors."""

    def __init__(self, message: str = "An error occurred") -> None:
        self.message = message
        super().__init__(message)


class DataSourceError(WhiskeyDashError):
    """A bottle source could not be read from or written to."""

    def __init__(self, source: str, message: str) -> None:
        self.source = source
        super().__init__(f"{source}: {message}")


class UnknownSourceError(WhiskeyDashError):
    """The requested data source name is not supported."""

    def __init__(self, source: str) -> None:
        self.source = source
        super().__init__(f"Unknown data source '{source}'")
