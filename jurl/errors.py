"""Exception types raised while fetching a page."""

from __future__ import annotations


class FetchError(RuntimeError):
    """A step of the fetch failed; the run stops with a non-zero exit."""


class UnsupportedMethodError(FetchError):
    """The request method is neither GET nor POST."""

    def __init__(self, method: str) -> None:
        super().__init__(f"Unsupported method: {method}")
        self.method = method
