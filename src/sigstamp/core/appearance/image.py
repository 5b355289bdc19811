# pyright: reportUnknownMemberType=false
"""
Signature image decoding and preparation for PDF embedding.

Decodes ``data:image/png;base64,...`` URLs, validates the PNG, splits
the alpha channel, and returns deflate-compressed pixel data ready to
become an image XObject.
"""

from __future__ import annotations

__all__ = [
    "SignatureImageData",
    "decode_data_url",
    "load_signature_png",
    "to_data_url",
]

import base64
import binascii
import io
import zlib
from typing import TypedDict

from ...constants import DATA_URL_PREFIX, MAX_IMAGE_PIXELS, MAX_IMAGE_SIZE, PNG_DATA_URL_PREFIX
from ...errors import InvalidImageDataError

_PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


class SignatureImageData(TypedDict):
    """Data returned by load_signature_png."""

    samples: bytes  # Deflate-compressed RGB pixel data
    smask: bytes | None  # Deflate-compressed alpha channel, or None if opaque
    width: int  # Pixel width
    height: int  # Pixel height
    bpc: int  # Bits per component (always 8)


def decode_data_url(data_url: str) -> bytes:
    """Extract and base64-decode the payload of a data URL.

    The payload is everything after the first comma. Decoding is strict
    (RFC 4648 alphabet, padding required).

    Raises:
        InvalidImageDataError: If the string is not a data URL or the
            payload is not valid base64.
    """
    if not isinstance(data_url, str) or not data_url.startswith(DATA_URL_PREFIX):
        raise InvalidImageDataError("Signature image must be a data URL (data:image/png;base64,...)")

    header, sep, payload = data_url.partition(",")
    if not sep:
        raise InvalidImageDataError("Signature data URL has no payload")
    if ";base64" not in header:
        raise InvalidImageDataError(f"Signature data URL is not base64-encoded: {header!r}")

    try:
        raw = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InvalidImageDataError(f"Signature image payload is not valid base64: {exc}") from exc

    if not raw:
        raise InvalidImageDataError("Signature image payload is empty")
    if len(raw) > MAX_IMAGE_SIZE:
        raise InvalidImageDataError(
            f"Signature image too large: {len(raw) / 1024 / 1024:.1f} MB "
            f"(max {MAX_IMAGE_SIZE / 1024 / 1024:.0f} MB)"
        )
    return raw


def to_data_url(png_bytes: bytes) -> str:
    """Wrap raw PNG bytes as a ``data:image/png;base64`` URL."""
    return PNG_DATA_URL_PREFIX + base64.b64encode(png_bytes).decode("ascii")


def load_signature_png(png_bytes: bytes) -> SignatureImageData:
    """Decode PNG bytes and prepare them for embedding in a PDF.

    The image is kept at its native resolution; the PDF rectangle decides
    the printed size.

    Args:
        png_bytes: Raw PNG file contents.

    Returns:
        dict with keys:
            'samples': bytes -- raw RGB pixel data (deflate-compressed)
            'smask': bytes or None -- alpha channel (deflate-compressed), None if opaque
            'width': int -- pixel width
            'height': int -- pixel height
            'bpc': int -- bits per component (always 8)

    Raises:
        InvalidImageDataError: If the bytes are not a decodable PNG.
    """
    if not png_bytes.startswith(_PNG_SIGNATURE):
        raise InvalidImageDataError("Signature image is not a PNG")

    from PIL import Image

    try:
        img = Image.open(io.BytesIO(png_bytes))
    except OSError as exc:
        # UnidentifiedImageError is a subclass of OSError
        raise InvalidImageDataError(f"Cannot decode signature image: {exc}") from exc

    try:
        # Image.open() is lazy: dimensions are known before pixel data is
        # decompressed, so the bomb check must run before load().
        pixel_count = img.width * img.height
        if pixel_count > MAX_IMAGE_PIXELS:
            raise InvalidImageDataError(
                f"Signature image too large: {img.width}x{img.height} ({pixel_count:,} pixels). "
                f"Maximum: {MAX_IMAGE_PIXELS:,} pixels."
            )
        if img.format != "PNG":
            raise InvalidImageDataError(f"Unsupported image format: {img.format or 'unknown'}")

        try:
            img.load()
        except (OSError, SyntaxError, ValueError) as exc:
            raise InvalidImageDataError(f"Corrupt PNG data: {exc}") from exc

        # Palette images may carry transparency in a tRNS chunk
        if img.mode == "P" and "transparency" in img.info:
            img = img.convert("RGBA")

        smask_data = None
        if img.mode in ("RGBA", "LA", "PA"):
            alpha = img.split()[-1]
            smask_data = zlib.compress(alpha.tobytes())
            img = img.convert("RGB")
        elif img.mode != "RGB":
            img = img.convert("RGB")

        rgb_data = zlib.compress(img.tobytes())

        return {
            "samples": rgb_data,
            "smask": smask_data,
            "width": img.width,
            "height": img.height,
            "bpc": 8,
        }
    finally:
        img.close()
