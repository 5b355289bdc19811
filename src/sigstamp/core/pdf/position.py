"""
Page resolution and page geometry helpers.

Positions carry 1-based page numbers; pikepdf and pdfium index pages
from 0. Everything that crosses that boundary goes through
:func:`resolve_page_index`.
"""

from __future__ import annotations

__all__ = [
    "get_page_dimensions",
    "get_page_origin",
    "get_page_rotation",
    "resolve_page_index",
]

import logging
from typing import TYPE_CHECKING

from ...constants import DEFAULT_PAGE
from ...errors import InvalidArgumentError, PageOutOfRangeError

if TYPE_CHECKING:
    import pikepdf

_logger = logging.getLogger(__name__)


def resolve_page_index(page: int | None, page_count: int, *, strict: bool = False) -> int:
    """Convert a 1-based page number to a validated 0-based index.

    A page past the end of the document falls back to the first page
    unless ``strict`` is set.

    Args:
        page: 1-based page number, or None for the first page.
        page_count: Number of pages in the document.
        strict: Raise instead of falling back on an out-of-range page.

    Returns:
        int -- 0-based page index.

    Raises:
        InvalidArgumentError: If ``page`` is zero, negative, or not an int.
        PageOutOfRangeError: If ``strict`` and the page does not exist,
            or the document has no pages at all.

    >>> resolve_page_index(None, 3)
    0
    >>> resolve_page_index(3, 3)
    2
    >>> resolve_page_index(7, 3)
    0
    """
    if page is None:
        page = DEFAULT_PAGE
    if isinstance(page, bool) or not isinstance(page, int):
        raise InvalidArgumentError(f"Page number must be an integer, got {page!r}")
    if page < 1:
        raise InvalidArgumentError(f"Page number must be 1 or greater, got {page}")
    if page_count < 1:
        raise PageOutOfRangeError("Document has no pages", page=page, page_count=page_count)

    if page > page_count:
        if strict:
            raise PageOutOfRangeError(
                f"Page {page} out of range (document has {page_count} page(s)).",
                page=page,
                page_count=page_count,
            )
        _logger.warning(
            "Page %d out of range (document has %d page(s)), using page 1", page, page_count
        )
        return 0

    return page - 1


def get_page_dimensions(pdf: pikepdf.Pdf, page_index: int) -> tuple[float, float]:
    """Size of a page as a viewer displays it, in PDF points.

    This is the page size a preview is rendered at (times the render
    scale), so it uses the visible CropBox and swaps the axes for pages
    turned a quarter turn by /Rotate.
    """
    page = pdf.pages[page_index]
    left, bottom, right, top = (float(v) for v in page.cropbox)
    width, height = abs(right - left), abs(top - bottom)

    if get_page_rotation(pdf, page_index) % 180 == 90:
        return height, width
    return width, height


def get_page_origin(pdf: pikepdf.Pdf, page_index: int) -> tuple[float, float]:
    """Lower-left corner of the visible CropBox in page user space.

    A preview shows the CropBox only, so a point measured on it must be
    shifted by this origin before it is drawn on the page.
    """
    left, bottom, right, top = (float(v) for v in pdf.pages[page_index].cropbox)
    return min(left, right), min(bottom, top)


def get_page_rotation(pdf: pikepdf.Pdf, page_index: int) -> int:
    """Clockwise /Rotate of a page, normalized to 0, 90, 180 or 270."""
    return int(pdf.pages[page_index].obj.get("/Rotate", 0)) % 360
