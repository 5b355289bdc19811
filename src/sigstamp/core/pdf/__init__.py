"""PDF parsing, page resolution, signature embedding, and page rendering."""

from .document import check_pdf_header, open_pdf, page_count
from .embed import embed_signature
from .position import (
    get_page_dimensions,
    get_page_origin,
    get_page_rotation,
    resolve_page_index,
)
from .render import RenderedPage, render_page

__all__ = [
    "RenderedPage",
    "check_pdf_header",
    "embed_signature",
    "get_page_dimensions",
    "get_page_origin",
    "get_page_rotation",
    "open_pdf",
    "page_count",
    "render_page",
    "resolve_page_index",
]
