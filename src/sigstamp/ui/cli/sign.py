"""Placement and signing command handlers for the sigstamp CLI."""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import replace
from pathlib import Path

from ...api import place, sign
from ...config import get_render_scale, get_signature_size
from ...constants import BYTES_PER_MB
from ...core.appearance import to_data_url
from ...core.coords import CanvasPosition, PdfPosition, SignatureSize
from ...core.pdf import (
    get_page_dimensions,
    get_page_origin,
    get_page_rotation,
    open_pdf,
    resolve_page_index,
)
from ...errors import InvalidArgumentError, SigstampError
from ..helpers import atomic_write, default_output_path, format_size_kb, safe_read_file

# Files above this size get a warning; embedding rewrites the whole document
_PDF_WARN_SIZE = 50 * BYTES_PER_MB


def signature_size_from_args(args: argparse.Namespace) -> SignatureSize:
    """Signature size from --sig-width/--sig-height, falling back to config."""
    configured = get_signature_size()
    return SignatureSize(
        width=args.sig_width if args.sig_width is not None else configured.width,
        height=args.sig_height if args.sig_height is not None else configured.height,
    )


def cmd_place(args: argparse.Namespace) -> None:
    """Convert a canvas position to a PDF signature record and print it as JSON."""
    try:
        position = place(
            CanvasPosition(args.x, args.y),
            args.canvas_width,
            args.canvas_height,
            scale=args.scale,
            signature_size=signature_size_from_args(args),
            page=args.page,
            clamp=args.clamp,
        )
    except SigstampError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(json.dumps(position.to_record(), indent=2))


def _position_from_canvas(
    pdf_bytes: bytes, args: argparse.Namespace, scale: float
) -> PdfPosition:
    """Map --canvas X Y onto the page as it would be rendered at ``scale``.

    The preview shows the CropBox, so the result is shifted by its origin.
    Rotated pages are rejected; their preview axes do not match user space.
    """
    with open_pdf(pdf_bytes) as pdf:
        page_idx = resolve_page_index(args.page, len(pdf.pages))
        rotation = get_page_rotation(pdf, page_idx)
        if rotation:
            raise InvalidArgumentError(
                f"Page {page_idx + 1} is rotated by {rotation} degrees; "
                "use --at with PDF coordinates instead of --canvas"
            )
        page_w, page_h = get_page_dimensions(pdf, page_idx)
        left, bottom = get_page_origin(pdf, page_idx)

    x, y = args.canvas
    position = place(
        CanvasPosition(x, y),
        page_w * scale,
        page_h * scale,
        scale=scale,
        signature_size=signature_size_from_args(args),
        page=args.page,
        clamp=True,
    )
    return replace(position, x=position.x + left, y=position.y + bottom)


def cmd_sign(args: argparse.Namespace) -> None:
    """Embed a signature image into a PDF and write the signed copy."""
    pdf_path = Path(args.pdf)
    pdf_bytes = safe_read_file(pdf_path, "PDF")
    if pdf_bytes is None:
        sys.exit(1)

    if len(pdf_bytes) > _PDF_WARN_SIZE:
        print(
            f"  Warning: {pdf_path.name} is {len(pdf_bytes) / BYTES_PER_MB:.0f} MB. "
            "Embedding may be slow.",
            file=sys.stderr,
        )

    image_bytes = safe_read_file(Path(args.image), "signature image")
    if image_bytes is None:
        sys.exit(1)

    output = Path(args.output) if args.output else default_output_path(pdf_path)
    strict = True if args.strict_pages else None

    try:
        if args.at is not None:
            x, y, w, h = args.at
            position = PdfPosition(x=x, y=y, width=w, height=h, page=args.page)
        else:
            scale = args.scale if args.scale is not None else get_render_scale()
            position = _position_from_canvas(pdf_bytes, args, scale)

        signed = sign(pdf_bytes, to_data_url(image_bytes), position, strict_page=strict)
    except SigstampError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        atomic_write(output, signed)
    except OSError as e:
        print(f"Error: cannot write {output}: {e}", file=sys.stderr)
        sys.exit(1)

    print(
        f"Signed {pdf_path.name}: page {position.page_number}, "
        f"({position.x:.2f}, {position.y:.2f}) {position.width:.2f}x{position.height:.2f} pt"
    )
    print(f"  -> {output} ({format_size_kb(len(signed))})")
