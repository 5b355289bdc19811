"""Preview rendering and signature image command handlers for the sigstamp CLI."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from ...config import get_render_scale
from ...core.appearance import decode_data_url, generate_signature_image
from ...core.pdf import render_page
from ...errors import SigstampError
from ..helpers import atomic_write, default_render_path, safe_read_file
from .sign import signature_size_from_args


def cmd_render(args: argparse.Namespace) -> None:
    """Rasterize one page to PNG and report the geometry needed for placement."""
    pdf_path = Path(args.pdf)
    pdf_bytes = safe_read_file(pdf_path, "PDF")
    if pdf_bytes is None:
        sys.exit(1)

    scale = args.scale if args.scale is not None else get_render_scale()
    output = Path(args.output) if args.output else default_render_path(pdf_path, args.page)

    try:
        rendered = render_page(pdf_bytes, page=args.page, scale=scale)
    except SigstampError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        rendered.image.save(output, format="PNG")
    except OSError as e:
        print(f"Error: cannot write {output}: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"Rendered page {rendered.page} of {pdf_path.name} at scale {rendered.scale:g}")
    print(f"  Canvas: {rendered.width} x {rendered.height} px")
    print(f"  -> {output}")


def cmd_image(args: argparse.Namespace) -> None:
    """Generate a signature card PNG from signer details."""
    size = signature_size_from_args(args)

    try:
        data_url = generate_signature_image(
            args.name, args.position, args.organization, size=size
        )
        png_bytes = decode_data_url(data_url)
    except SigstampError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    output = Path(args.output)
    try:
        atomic_write(output, png_bytes)
    except OSError as e:
        print(f"Error: cannot write {output}: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"Signature image ({int(size.width)} x {int(size.height)} px) -> {output}")
