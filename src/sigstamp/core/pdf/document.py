"""Opening PDF byte buffers with pikepdf."""

from __future__ import annotations

__all__ = ["check_pdf_header", "open_pdf", "page_count"]

import io
from typing import TYPE_CHECKING

from ...constants import PDF_HEADER_SEARCH_LIMIT, PDF_MAGIC
from ...errors import MalformedDocumentError
from .. import require_pikepdf as _require_pikepdf

if TYPE_CHECKING:
    import pikepdf


def check_pdf_header(pdf_bytes: bytes) -> None:
    """Raise MalformedDocumentError unless the buffer starts like a PDF."""
    if not pdf_bytes:
        raise MalformedDocumentError("PDF data is empty")
    if PDF_MAGIC not in pdf_bytes[:PDF_HEADER_SEARCH_LIMIT]:
        raise MalformedDocumentError("Not a PDF document: missing %PDF- header")


def open_pdf(pdf_bytes: bytes) -> pikepdf.Pdf:
    """Parse PDF bytes into a pikepdf document.

    The caller owns the returned object and must close it (it supports
    the context manager protocol).

    Raises:
        MalformedDocumentError: If the bytes do not parse as a PDF.
    """
    check_pdf_header(pdf_bytes)
    pikepdf = _require_pikepdf()
    try:
        return pikepdf.open(io.BytesIO(pdf_bytes))
    except pikepdf.PasswordError as exc:
        raise MalformedDocumentError(f"PDF is encrypted and cannot be opened: {exc}") from exc
    except pikepdf.PdfError as exc:
        raise MalformedDocumentError(f"Cannot parse PDF: {exc}") from exc


def page_count(pdf_bytes: bytes) -> int:
    """Return the number of pages in a PDF buffer."""
    with open_pdf(pdf_bytes) as pdf:
        return len(pdf.pages)
