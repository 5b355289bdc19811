"""
sigstamp — place raster signatures on PDF pages.

Converts positions on a rendered page preview into PDF coordinates and
embeds a PNG signature image at that rectangle.
"""

from __future__ import annotations

from .api import place, sign
from .constants import __version__
from .core.appearance import generate_signature_image
from .core.coords import (
    DEFAULT_SIGNATURE_SIZE,
    CanvasPosition,
    ContainerOrigin,
    GrabOffset,
    PdfPosition,
    SignatureSize,
    canvas_to_pdf,
    clamp_position,
    pdf_to_canvas,
    relative_position,
)
from .core.pdf import RenderedPage, embed_signature, render_page
from .errors import (
    ConfigError,
    InvalidArgumentError,
    InvalidImageDataError,
    MalformedDocumentError,
    PageOutOfRangeError,
    SigstampError,
)

__all__ = [
    "DEFAULT_SIGNATURE_SIZE",
    "CanvasPosition",
    "ConfigError",
    "ContainerOrigin",
    "GrabOffset",
    "InvalidArgumentError",
    "InvalidImageDataError",
    "MalformedDocumentError",
    "PageOutOfRangeError",
    "PdfPosition",
    "RenderedPage",
    "SignatureSize",
    "SigstampError",
    "__version__",
    "canvas_to_pdf",
    "clamp_position",
    "embed_signature",
    "generate_signature_image",
    "pdf_to_canvas",
    "place",
    "relative_position",
    "render_page",
    "sign",
]
