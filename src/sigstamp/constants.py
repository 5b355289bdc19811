"""
Application-wide constants for sigstamp.

Render defaults, signature geometry, size limits, and environment
variable names are centralized here.
"""

from __future__ import annotations

import importlib.metadata

try:
    __version__ = importlib.metadata.version("sigstamp")
except importlib.metadata.PackageNotFoundError:
    __version__ = "0.1.0"

__all__ = [
    "BYTES_PER_MB",
    "DATA_URL_PREFIX",
    "DEFAULT_PAGE",
    "DEFAULT_RENDER_SCALE",
    "DEFAULT_SIGNATURE_HEIGHT",
    "DEFAULT_SIGNATURE_WIDTH",
    "ENV_SCALE",
    "ENV_STRICT_PAGES",
    "MAX_IMAGE_PIXELS",
    "MAX_IMAGE_SIZE",
    "MAX_RENDER_SCALE",
    "PDF_HEADER_SEARCH_LIMIT",
    "PDF_MAGIC",
    "PNG_DATA_URL_PREFIX",
    "__version__",
]

# ── Size units ────────────────────────────────────────────────────────

BYTES_PER_MB = 1024 * 1024


# ── Rendering ─────────────────────────────────────────────────────────

# Scale used when rasterizing a page for the interactive preview.
# Canvas pixels = PDF points * scale.
DEFAULT_RENDER_SCALE = 1.5

# Upper bound for render scale; a US Letter page at 10x is ~6000x8000 px.
MAX_RENDER_SCALE = 10.0


# ── Signature geometry ───────────────────────────────────────────────

# On-screen pixel footprint of the signature card
DEFAULT_SIGNATURE_WIDTH = 400
DEFAULT_SIGNATURE_HEIGHT = 150

# 1-based page used when a position carries no page number
DEFAULT_PAGE = 1


# ── Signature image limits ───────────────────────────────────────────

# Decoded PNG payload limit (5 MB)
MAX_IMAGE_SIZE = 5 * 1024 * 1024

# Decompression bomb guard (CWE-400)
MAX_IMAGE_PIXELS = 4000 * 4000

DATA_URL_PREFIX = "data:"
PNG_DATA_URL_PREFIX = "data:image/png;base64,"


# ── PDF ──────────────────────────────────────────────────────────────

# PDF file magic bytes
PDF_MAGIC = b"%PDF-"

# Readers tolerate junk before the header within the first 1 KB
PDF_HEADER_SEARCH_LIMIT = 1024


# ── Environment variable names ──────────────────────────────────────

ENV_SCALE = "SIGSTAMP_SCALE"
ENV_STRICT_PAGES = "SIGSTAMP_STRICT_PAGES"
