"""Coordinate conversion, signature images, and PDF page operations."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..errors import SigstampError

if TYPE_CHECKING:
    import types

__all__ = ["require_pikepdf"]


def require_pikepdf() -> types.ModuleType:
    """Import pikepdf on first use.

    The coordinate helpers and the CLI's ``place`` command never touch a
    PDF, so they should not pay for loading qpdf.
    """
    try:
        import pikepdf
    except ImportError as exc:
        raise SigstampError(
            "pikepdf is required to read or write PDFs.\nInstall with: pip install pikepdf"
        ) from exc
    return pikepdf
