"""Shared test fixtures for sigstamp test suite."""

from __future__ import annotations

import base64
import io
from unittest.mock import patch

import pytest

# US Letter in points
LETTER = (612, 792)


def make_pdf(*page_sizes: tuple[float, float]) -> bytes:
    """Create a PDF with one blank page per given (width, height)."""
    import pikepdf

    pdf = pikepdf.Pdf.new()
    for size in page_sizes:
        pdf.add_blank_page(page_size=size)
    buf = io.BytesIO()
    pdf.save(buf)
    return buf.getvalue()


def make_png(size=(400, 150), color=(255, 0, 0, 255), mode="RGBA") -> bytes:
    """Create a solid-color PNG."""
    from PIL import Image

    img = Image.new(mode, size, color)
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def png_data_url(png_bytes: bytes) -> str:
    return "data:image/png;base64," + base64.b64encode(png_bytes).decode("ascii")


@pytest.fixture
def valid_pdf_bytes():
    """Single blank US Letter page."""
    return make_pdf(LETTER)


@pytest.fixture
def multipage_pdf_bytes():
    """Three pages: Letter, A4, and a landscape Letter."""
    return make_pdf(LETTER, (595, 842), (792, 612))


@pytest.fixture
def signature_png():
    """Opaque red 400x150 PNG."""
    return make_png(color=(255, 0, 0, 255))


@pytest.fixture
def signature_data_url(signature_png):
    return png_data_url(signature_png)


@pytest.fixture
def config_dir(tmp_path):
    """Redirect config to a temp directory and clear env overrides."""
    config_file = tmp_path / "config.json"
    with (
        patch("sigstamp.config._storage.CONFIG_DIR", tmp_path),
        patch("sigstamp.config._storage.CONFIG_FILE", config_file),
        patch.dict("os.environ", {"SIGSTAMP_SCALE": "", "SIGSTAMP_STRICT_PAGES": ""}),
    ):
        yield tmp_path, config_file
