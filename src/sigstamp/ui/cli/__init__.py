"""
Command-line interface for sigstamp.

Argument parsing, dispatch, and the config subcommand.
Placement and signing live in ``sign``; rendering in ``render``.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from ...config import CONFIG_FILE, SETTING_KEYS, get_settings, reset_settings, save_settings
from ...constants import DEFAULT_PAGE, ENV_SCALE, ENV_STRICT_PAGES, __version__
from ...errors import ConfigError
from .render import cmd_image, cmd_render
from .sign import cmd_place, cmd_sign


def _cmd_config(args: argparse.Namespace) -> None:
    """Show, update, or reset stored settings."""
    if args.reset:
        reset_settings()
        print("Settings reset to defaults.")
        return

    if args.set:
        values: dict[str, object] = {}
        for item in args.set:
            key, sep, value = item.partition("=")
            if not sep:
                print(f"Error: expected key=value, got {item!r}", file=sys.stderr)
                sys.exit(1)
            values[key.strip()] = value.strip()
        try:
            save_settings(**values)
        except ConfigError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        print(f"Saved to {CONFIG_FILE}")
        return

    print(json.dumps(get_settings(), indent=2))


def _add_size_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--sig-width", type=int, default=None, help="Signature width in screen pixels"
    )
    parser.add_argument(
        "--sig-height", type=int, default=None, help="Signature height in screen pixels"
    )


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="sigstamp",
        description="Place signature images on PDF pages.",
        epilog=(
            "Environment variables:\n"
            f"  {ENV_SCALE}          Render scale for previews (default: 1.5)\n"
            f"  {ENV_STRICT_PAGES}  Fail on out-of-range pages instead of using page 1\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-V", "--version", action="version", version=f"sigstamp {__version__}")
    parser.add_argument(
        "-v", "--verbose", action="store_true", default=False, help="Enable debug logging"
    )

    sub = parser.add_subparsers(dest="command", help="Available commands")

    # place
    p_place = sub.add_parser("place", help="Convert a canvas position to PDF coordinates")
    p_place.add_argument("x", type=float, help="Signature left edge on the canvas (px)")
    p_place.add_argument("y", type=float, help="Signature top edge on the canvas (px)")
    p_place.add_argument(
        "--canvas-width", type=float, required=True, help="Canvas backing-store width (px)"
    )
    p_place.add_argument(
        "--canvas-height", type=float, required=True, help="Canvas backing-store height (px)"
    )
    p_place.add_argument("--scale", type=float, default=None, help="Render scale (default: config)")
    p_place.add_argument("--page", type=int, default=None, help="1-based page number")
    p_place.add_argument(
        "--no-clamp",
        dest="clamp",
        action="store_false",
        default=True,
        help="Do not keep the signature inside the canvas",
    )
    _add_size_args(p_place)

    # sign
    p_sign = sub.add_parser("sign", help="Embed a signature image into a PDF")
    p_sign.add_argument("pdf", help="PDF file to sign")
    p_sign.add_argument("--image", required=True, help="Signature PNG file")
    where = p_sign.add_mutually_exclusive_group(required=True)
    where.add_argument(
        "--at",
        type=float,
        nargs=4,
        metavar=("X", "Y", "W", "H"),
        help="Rectangle in PDF points (origin bottom-left)",
    )
    where.add_argument(
        "--canvas",
        type=float,
        nargs=2,
        metavar=("X", "Y"),
        help="Top-left corner on the page preview rendered at --scale",
    )
    p_sign.add_argument("--page", type=int, default=DEFAULT_PAGE, help="1-based page number")
    p_sign.add_argument("--scale", type=float, default=None, help="Render scale for --canvas")
    p_sign.add_argument(
        "--strict-pages",
        action="store_true",
        default=False,
        help="Fail if the page does not exist instead of using page 1",
    )
    p_sign.add_argument("-o", "--output", help="Output file (default: <name>_signed.pdf)")
    _add_size_args(p_sign)

    # render
    p_render = sub.add_parser("render", help="Render a page preview to PNG")
    p_render.add_argument("pdf", help="PDF file")
    p_render.add_argument("--page", type=int, default=DEFAULT_PAGE, help="1-based page number")
    p_render.add_argument("--scale", type=float, default=None, help="Render scale (default: config)")
    p_render.add_argument("-o", "--output", help="Output PNG (default: <name>_p<page>.png)")

    # image
    p_image = sub.add_parser("image", help="Generate a signature card PNG")
    p_image.add_argument("--name", required=True, help="Signer name")
    p_image.add_argument("--position", default="", help="Signer position/role")
    p_image.add_argument("--organization", default="", help="Organization")
    p_image.add_argument("-o", "--output", required=True, help="Output PNG file")
    _add_size_args(p_image)

    # config
    p_config = sub.add_parser("config", help="Show or change stored settings")
    p_config.add_argument(
        "--set",
        action="append",
        metavar="KEY=VALUE",
        help=f"Store a setting ({', '.join(SETTING_KEYS)})",
    )
    p_config.add_argument(
        "--reset", action="store_true", default=False, help="Remove all stored settings"
    )

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if args.command == "place":
        cmd_place(args)
    elif args.command == "sign":
        cmd_sign(args)
    elif args.command == "render":
        cmd_render(args)
    elif args.command == "image":
        cmd_image(args)
    elif args.command == "config":
        _cmd_config(args)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
