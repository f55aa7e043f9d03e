"""Exceptions raised by the search pipeline.

Each error carries the HTTP status the web layer answers with, and a
message that is returned to the client verbatim as ``{"error": message}``.
"""

from __future__ import annotations


class SearchError(Exception):
    """Base class for every failure the search endpoint can report."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ValidationError(SearchError):
    """The caller's input was missing or empty."""

    status_code = 400


class ConfigurationError(SearchError):
    """A required secret is not configured. Not fixable by the user."""


class UpstreamError(SearchError):
    """The completion or catalog service failed or returned nothing usable."""


class ParseError(SearchError):
    """The model reply was not valid JSON."""


class NotFoundError(SearchError):
    """The pipeline ran but produced no usable books."""

    status_code = 404
