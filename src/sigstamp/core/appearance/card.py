# pyright: reportUnknownMemberType=false
"""
Signature card rendering.

Draws the raster signature shown on the page: a white card with a
black border and four text lines (signer, position, organization, date).
The result is a PNG data URL, the same form the embedder consumes.
"""

from __future__ import annotations

__all__ = [
    "generate_signature_image",
    "make_date_str",
]

import io
import logging
from datetime import date as _date
from typing import TYPE_CHECKING

from ...errors import InvalidArgumentError
from ..coords import DEFAULT_SIGNATURE_SIZE, SignatureSize
from .image import to_data_url

if TYPE_CHECKING:
    from PIL import ImageFont

_logger = logging.getLogger(__name__)

# Layout in card pixels, tuned for the default 400x150 card
_BORDER_WIDTH = 2
_TEXT_LEFT = 15
_NAME_FONT_SIZE = 18
_DETAIL_FONT_SIZE = 14
# Baselines of the four text lines
_LINE_BASELINES = (35, 65, 95, 125)

# Locale-independent English month abbreviations.
# strftime("%b") depends on LC_TIME.
_MONTH_ABBR = (
    "",
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)


def make_date_str(date: _date | None = None) -> str:
    """Format a date the way the card shows it.

    Example: 'Oct 19, 2026'
    """
    date = date or _date.today()
    return f"{_MONTH_ABBR[date.month]} {date.day}, {date.year}"


def _load_font(size: int, bold: bool = False) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    from PIL import ImageFont

    # DejaVu ships with most Linux distributions; Pillow's bundled
    # default font is used everywhere else.
    name = "DejaVuSans-Bold.ttf" if bold else "DejaVuSans.ttf"
    try:
        return ImageFont.truetype(name, size)
    except OSError:
        _logger.debug("Font %s not available, using Pillow default", name)
        return ImageFont.load_default(size=size)


def generate_signature_image(
    signer_name: str,
    position: str,
    organization: str,
    *,
    date: _date | None = None,
    size: SignatureSize = DEFAULT_SIGNATURE_SIZE,
) -> str:
    """Render the signature card and return it as a PNG data URL.

    Args:
        signer_name: Shown as "Signed by: <name>" in bold.
        position: Signer's role, shown as "Position: ...".
        organization: Shown as "Organization: ...".
        date: Date printed on the card (default: today).
        size: Card size in pixels.

    Raises:
        InvalidArgumentError: If the card size is not positive.
    """
    from PIL import Image, ImageDraw

    width, height = int(size.width), int(size.height)
    if width <= 0 or height <= 0:
        raise InvalidArgumentError(f"Invalid signature card size: {size.width} x {size.height}")

    img = Image.new("RGB", (width, height), "white")
    draw = ImageDraw.Draw(img)
    draw.rectangle((0, 0, width - 1, height - 1), outline="black", width=_BORDER_WIDTH)

    name_font = _load_font(_NAME_FONT_SIZE, bold=True)
    detail_font = _load_font(_DETAIL_FONT_SIZE)
    lines = (
        (f"Signed by: {signer_name}", name_font),
        (f"Position: {position}", detail_font),
        (f"Organization: {organization}", detail_font),
        (f"Date: {make_date_str(date)}", detail_font),
    )
    for (text, font), baseline in zip(lines, _LINE_BASELINES):
        # anchor "ls" = left/baseline, matching canvas fillText placement
        draw.text((_TEXT_LEFT, baseline), text, fill="black", font=font, anchor="ls")

    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return to_data_url(buf.getvalue())
