"""Exceptions raised by the site architecture engine."""

from __future__ import annotations


class SiteArchError(ValueError):
    """Base class for every error the engine raises."""


class ParseEmptyError(SiteArchError):
    """Non-blank import text produced zero valid page rows."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(
            message
            or "No valid page rows found. Check that your CSV has at least 6 columns."
        )


class MalformedPathError(SiteArchError):
    """A ``full_url_path`` that has no path segments at all."""

    def __init__(self, path: str) -> None:
        super().__init__(f"URL path has no segments: {path!r}")
        self.path = path
