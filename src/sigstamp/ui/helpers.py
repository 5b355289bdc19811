"""
File and formatting helpers shared by the sigstamp CLI commands.
"""

from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path

__all__ = [
    "atomic_write",
    "default_output_path",
    "default_render_path",
    "format_size_kb",
    "safe_read_file",
]

_BYTES_PER_KB = 1024


def format_size_kb(size_bytes: int) -> str:
    """Format a byte count as KB, e.g. '123.4 KB'."""
    return f"{size_bytes / _BYTES_PER_KB:.1f} KB"


def default_output_path(pdf_path: Path) -> Path:
    """Signed copy goes next to the source as '<stem>_signed.pdf'."""
    return pdf_path.with_name(f"{pdf_path.stem}_signed.pdf")


def default_render_path(pdf_path: Path, page: int) -> Path:
    """Page preview goes next to the source as '<stem>_p<page>.png'."""
    return pdf_path.with_name(f"{pdf_path.stem}_p{page}.png")


def safe_read_file(path: Path, kind: str = "file") -> bytes | None:
    """
    Read an input file, reporting problems on stderr.

    Args:
        path: File to read.
        kind: What the file is, for messages ("PDF", "signature image").

    Returns:
        The file contents, or None if it is missing, not a regular file,
        or unreadable.
    """
    if not path.exists():
        print(f"Error: {kind} not found: {path}", file=sys.stderr)
        return None
    if not path.is_file():
        print(f"Error: {kind} is not a file: {path}", file=sys.stderr)
        return None

    try:
        return path.read_bytes()
    except OSError as e:
        print(f"Error reading {kind}: {e}", file=sys.stderr)
        return None


def atomic_write(path: Path, data: bytes) -> None:
    """Replace ``path`` with ``data`` via a sibling temp file and rename.

    A failed write leaves any existing file untouched.
    """
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    tmp = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        tmp.replace(path)
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise
