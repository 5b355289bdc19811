"""
Signature image embedding.

Draws a PNG signature onto one page of a PDF and returns new PDF bytes.
The image becomes an image XObject (plus a soft mask when it has an
alpha channel) referenced from the page's resources and painted by a
content stream appended after the page's own content.
"""

from __future__ import annotations

__all__ = ["embed_signature"]

import io
import logging
import math
from typing import TYPE_CHECKING

from ...errors import InvalidArgumentError, MalformedDocumentError
from .. import require_pikepdf as _require_pikepdf
from ..appearance import SignatureImageData, decode_data_url, load_signature_png
from .document import open_pdf
from .position import resolve_page_index

if TYPE_CHECKING:
    import pikepdf

    from ..coords import PdfPosition

_logger = logging.getLogger(__name__)

# Resource name prefix for embedded signature images (/Sig0, /Sig1, ...)
_XOBJECT_PREFIX = "Sig"


def _check_rect(position: PdfPosition) -> None:
    for name in ("x", "y", "width", "height"):
        value = getattr(position, name)
        if not math.isfinite(value):
            raise InvalidArgumentError(f"Signature {name} must be finite, got {value!r}")
    if position.width <= 0 or position.height <= 0:
        raise InvalidArgumentError(
            f"Invalid signature dimensions: {position.width:.2f} x {position.height:.2f} pt"
        )


def _build_image_xobject(pdf: pikepdf.Pdf, img_data: SignatureImageData) -> pikepdf.Stream:
    """Create the image XObject (and its /SMask) inside ``pdf``."""
    pikepdf = _require_pikepdf()
    Name = pikepdf.Name

    image = pikepdf.Stream(pdf, b"")
    image.write(img_data["samples"], filter=Name.FlateDecode)
    image.Type = Name.XObject
    image.Subtype = Name.Image
    image.Width = img_data["width"]
    image.Height = img_data["height"]
    image.ColorSpace = Name.DeviceRGB
    image.BitsPerComponent = img_data["bpc"]

    smask_bytes = img_data["smask"]
    if smask_bytes is not None:
        smask = pikepdf.Stream(pdf, b"")
        smask.write(smask_bytes, filter=Name.FlateDecode)
        smask.Type = Name.XObject
        smask.Subtype = Name.Image
        smask.Width = img_data["width"]
        smask.Height = img_data["height"]
        smask.ColorSpace = Name.DeviceGray
        smask.BitsPerComponent = img_data["bpc"]
        image.SMask = smask

    return image


def _draw_ops(resource_name: str, position: PdfPosition) -> bytes:
    """Content stream that paints the unit-square image into the rectangle.

    Starts with ``Q`` to close the ``q`` prepended to the page's
    original content, so leftover graphics state cannot shift the image.
    """
    return (
        f"Q\nq\n"
        f"{position.width:.4f} 0 0 {position.height:.4f} {position.x:.4f} {position.y:.4f} cm\n"
        f"{resource_name} Do\n"
        f"Q\n"
    ).encode("latin-1")


def embed_signature(
    pdf_bytes: bytes,
    signature_image_data_url: str,
    position: PdfPosition,
    *,
    strict_page: bool = False,
) -> bytes:
    """Draw a PNG signature onto a PDF page.

    Always start from the original, unsigned bytes: each call produces an
    independent single-signature document. To stack signatures, feed the
    previous output back in explicitly.

    Args:
        pdf_bytes: Original PDF content. Never modified.
        signature_image_data_url: ``data:image/png;base64,<payload>``.
        position: Target rectangle in PDF points (origin bottom-left).
            ``position.page`` is 1-based; None means page 1.
        strict_page: Raise PageOutOfRangeError for a page past the end
            instead of falling back to page 1.

    Returns:
        New PDF bytes containing the original content plus the image.

    Raises:
        MalformedDocumentError: If ``pdf_bytes`` is not a parseable PDF.
        InvalidImageDataError: If the data URL is not valid base64 PNG.
        InvalidArgumentError: If the page number or rectangle is invalid.
        PageOutOfRangeError: If ``strict_page`` and the page does not exist.
    """
    pikepdf = _require_pikepdf()

    # bytearray/memoryview input is snapshotted so the caller's buffer is never shared
    data = bytes(pdf_bytes)
    _check_rect(position)

    with open_pdf(data) as pdf:
        page_idx = resolve_page_index(position.page, len(pdf.pages), strict=strict_page)
        page = pdf.pages[page_idx]

        img_data = load_signature_png(decode_data_url(signature_image_data_url))

        image = _build_image_xobject(pdf, img_data)
        resource_name = page.add_resource(image, pikepdf.Name.XObject, prefix=_XOBJECT_PREFIX)

        page.contents_add(pikepdf.Stream(pdf, b"q\n"), prepend=True)
        page.contents_add(pikepdf.Stream(pdf, _draw_ops(str(resource_name), position)))

        _logger.debug(
            "Embedded %dx%d signature as %s on page %d at (%.2f, %.2f) size %.2fx%.2f",
            img_data["width"],
            img_data["height"],
            resource_name,
            page_idx + 1,
            position.x,
            position.y,
            position.width,
            position.height,
        )

        buf = io.BytesIO()
        try:
            pdf.save(buf)
        except pikepdf.PdfError as exc:
            raise MalformedDocumentError(f"Cannot write signed PDF: {exc}") from exc
        return buf.getvalue()
