"""sigstamp error types."""

from __future__ import annotations

from typing import Any

__all__ = [
    "ConfigError",
    "InvalidArgumentError",
    "InvalidImageDataError",
    "MalformedDocumentError",
    "PageOutOfRangeError",
    "SigstampError",
]


class SigstampError(Exception):
    """Base error for sigstamp operations."""


class InvalidArgumentError(SigstampError):
    """Malformed or out-of-domain input (non-positive scale, bad page, etc.)."""


class MalformedDocumentError(SigstampError):
    """PDF bytes could not be parsed as a PDF document."""


class InvalidImageDataError(SigstampError):
    """Signature image is not a valid base64-encoded PNG data URL."""


class PageOutOfRangeError(SigstampError):
    """Requested page does not exist in the document.

    Args:
        message: Human-readable error description.
        page: The 1-based page number that was requested.
        page_count: Number of pages the document actually has.
    """

    def __init__(self, message: str, *, page: int = 0, page_count: int = 0) -> None:
        super().__init__(message)
        self.page = page
        self.page_count = page_count

    def __reduce__(self) -> tuple[type[PageOutOfRangeError], tuple[str], dict[str, int]]:
        """Preserve page details across pickle/unpickle."""
        return (type(self), (str(self),), {"page": self.page, "page_count": self.page_count})

    def __setstate__(self, state: dict[str, Any] | None) -> None:
        if state is None:
            return
        self.page = state.get("page", 0)
        self.page_count = state.get("page_count", 0)


class ConfigError(SigstampError):
    """Configuration validation error."""
