# pyright: reportUnknownMemberType=false
"""Page rasterization for the interactive placement preview.

Renders one page with pdfium at a known scale. The returned pixel size
and scale are exactly what :func:`~sigstamp.core.coords.canvas_to_pdf`
needs to map a position on the preview back into PDF points.
"""

from __future__ import annotations

__all__ = ["RenderedPage", "render_page"]

import logging
import math
import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ...constants import DEFAULT_PAGE, DEFAULT_RENDER_SCALE, MAX_RENDER_SCALE
from ...errors import InvalidArgumentError, MalformedDocumentError, PageOutOfRangeError, SigstampError
from .document import check_pdf_header

if TYPE_CHECKING:
    import types

    from PIL import Image

_logger = logging.getLogger(__name__)

_pdfium_lock = threading.Lock()
_pdfium_mod: types.ModuleType | None = None


def _get_pdfium() -> types.ModuleType:
    """Import and initialize pypdfium2 once per process.

    Concurrent first use from several threads is serialized by the lock;
    later calls return the cached module without locking.
    """
    global _pdfium_mod
    mod = _pdfium_mod
    if mod is not None:
        return mod
    with _pdfium_lock:
        if _pdfium_mod is None:
            try:
                import pypdfium2
            except ImportError as exc:
                raise SigstampError(
                    "pypdfium2 is required for page rendering.\n"
                    "Install with: pip install pypdfium2"
                ) from exc
            _logger.debug("pdfium initialized")
            _pdfium_mod = pypdfium2
        return _pdfium_mod


@dataclass(frozen=True)
class RenderedPage:
    """A rasterized page and the geometry needed to map positions on it.

    Attributes:
        image: RGB Pillow image of the page.
        scale: Render scale (canvas pixels per PDF point).
        width: Backing-store pixel width.
        height: Backing-store pixel height.
        page: 1-based page number that was rendered.
    """

    image: Image.Image
    scale: float
    width: int
    height: int
    page: int


def render_page(
    pdf_bytes: bytes,
    page: int = DEFAULT_PAGE,
    scale: float = DEFAULT_RENDER_SCALE,
) -> RenderedPage:
    """Rasterize one page of a PDF.

    Args:
        pdf_bytes: PDF content.
        page: 1-based page number.
        scale: Pixels per PDF point.

    Raises:
        InvalidArgumentError: If ``scale`` or ``page`` is out of domain.
        MalformedDocumentError: If pdfium cannot open the document.
        PageOutOfRangeError: If the page does not exist.
    """
    if not math.isfinite(scale) or scale <= 0 or scale > MAX_RENDER_SCALE:
        raise InvalidArgumentError(
            f"Render scale must be in (0, {MAX_RENDER_SCALE:g}], got {scale!r}"
        )
    if isinstance(page, bool) or not isinstance(page, int) or page < 1:
        raise InvalidArgumentError(f"Page number must be 1 or greater, got {page!r}")

    data = bytes(pdf_bytes)
    check_pdf_header(data)
    pdfium = _get_pdfium()

    try:
        doc = pdfium.PdfDocument(data)
    except pdfium.PdfiumError as exc:
        raise MalformedDocumentError(f"Cannot parse PDF: {exc}") from exc

    try:
        total = len(doc)
        if page > total:
            raise PageOutOfRangeError(
                f"Page {page} out of range (document has {total} page(s)).",
                page=page,
                page_count=total,
            )
        pdf_page = doc[page - 1]
        try:
            bitmap = pdf_page.render(scale=scale)
            image = bitmap.to_pil().convert("RGB")
        finally:
            pdf_page.close()
    finally:
        doc.close()

    _logger.debug("Rendered page %d at scale %.2f: %dx%d px", page, scale, *image.size)
    return RenderedPage(
        image=image,
        scale=scale,
        width=image.width,
        height=image.height,
        page=page,
    )
