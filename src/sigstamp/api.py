"""High-level convenience API for signature placement.

Provides :func:`place` and :func:`sign`, which fill in the render scale,
signature size, and page strictness from configuration when the caller
does not pass them.

For lower-level control, use :mod:`sigstamp.core.coords` and
:func:`~sigstamp.core.pdf.embed.embed_signature` directly.
"""

from __future__ import annotations

__all__ = ["place", "sign"]

import logging
from dataclasses import replace

from .config import get_render_scale, get_signature_size, get_strict_pages
from .core.coords import CanvasPosition, PdfPosition, SignatureSize, canvas_to_pdf, clamp_position
from .core.pdf import embed_signature

_logger = logging.getLogger(__name__)


def place(
    canvas_position: CanvasPosition,
    canvas_pixel_width: float,
    canvas_pixel_height: float,
    *,
    scale: float | None = None,
    signature_size: SignatureSize | None = None,
    page: int | None = None,
    clamp: bool = True,
) -> PdfPosition:
    """Convert a drop position on a rendered page into a stored PdfPosition.

    Args:
        canvas_position: Top-left corner of the signature on the canvas.
        canvas_pixel_width: Backing-store width of the rendered page.
        canvas_pixel_height: Backing-store height of the rendered page.
        scale: Render scale (default: configured scale).
        signature_size: On-screen signature size (default: configured size).
        page: 1-based page the canvas shows.
        clamp: Keep the signature inside the canvas before converting.

    Raises:
        InvalidArgumentError: If the scale or canvas size is invalid.
    """
    if scale is None:
        scale = get_render_scale()
    if signature_size is None:
        signature_size = get_signature_size()

    if clamp:
        clamped = clamp_position(
            canvas_position,
            canvas_pixel_width,
            canvas_pixel_height,
            signature_size.width,
            signature_size.height,
        )
        if clamped != canvas_position:
            _logger.debug(
                "Clamped (%.1f, %.1f) to (%.1f, %.1f)",
                canvas_position.x,
                canvas_position.y,
                clamped.x,
                clamped.y,
            )
        canvas_position = clamped

    position = canvas_to_pdf(
        canvas_position, canvas_pixel_width, canvas_pixel_height, scale, signature_size
    )
    return replace(position, page=page)


def sign(
    pdf_bytes: bytes,
    signature_image_data_url: str,
    position: PdfPosition,
    *,
    strict_page: bool | None = None,
) -> bytes:
    """Embed a signature image, taking page strictness from config by default.

    See :func:`~sigstamp.core.pdf.embed.embed_signature` for errors.
    """
    if strict_page is None:
        strict_page = get_strict_pages()
    return embed_signature(pdf_bytes, signature_image_data_url, position, strict_page=strict_page)
