from __future__ import annotations

from typing import Any


class SearchError(Exception):
    """Base class for errors surfaced by the search engine."""


class InvalidQueryError(SearchError):
    """Request parameters are malformed or out of range; raised before any store call."""

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.errors = errors or []


class StoreUnavailableError(SearchError):
    """The business store could not answer; never retried inside the engine."""
