"""
Coordinate conversion between canvas pixel space and PDF point space.

Canvas space is the backing store of a rendered page preview: origin at
the top-left, y grows downward, units are pixels at the render scale.
PDF space is the page's user space: origin at the bottom-left, y grows
upward, units are points (1/72 inch).

The signature rectangle is addressed by its top-left corner on the canvas
and by its bottom-left corner in the PDF, so the forward transform
subtracts the signature height after flipping the y-axis.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_SIGNATURE_SIZE",
    "CanvasPosition",
    "ContainerOrigin",
    "GrabOffset",
    "PdfPosition",
    "SignatureSize",
    "canvas_to_pdf",
    "clamp_position",
    "pdf_to_canvas",
    "relative_position",
]

import math
from collections.abc import Mapping
from dataclasses import dataclass

from ..constants import DEFAULT_PAGE, DEFAULT_SIGNATURE_HEIGHT, DEFAULT_SIGNATURE_WIDTH
from ..errors import InvalidArgumentError

# Field names of the persisted signature record
_RECORD_FIELDS = ("posX", "posY", "width", "height")


@dataclass(frozen=True)
class CanvasPosition:
    """A point in canvas pixel space (origin top-left, y down)."""

    x: float
    y: float


@dataclass(frozen=True)
class PdfPosition:
    """A rectangle in PDF point space (origin bottom-left, y up).

    Attributes:
        x: Left edge in points.
        y: Bottom edge in points.
        width: Rectangle width in points.
        height: Rectangle height in points.
        page: 1-based page number, or None for the first page.
    """

    x: float
    y: float
    width: float
    height: float
    page: int | None = None

    @property
    def page_number(self) -> int:
        return self.page if self.page is not None else DEFAULT_PAGE

    def to_record(self) -> dict[str, float | int]:
        """Return the durable signature-record form of this position."""
        return {
            "posX": self.x,
            "posY": self.y,
            "width": self.width,
            "height": self.height,
            "pageNumber": self.page_number,
        }

    @classmethod
    def from_record(cls, record: Mapping[str, object]) -> PdfPosition:
        """Build a position from a stored signature record.

        Raises:
            InvalidArgumentError: If a field is missing or not a number.
        """
        values: list[float] = []
        for key in _RECORD_FIELDS:
            if key not in record:
                raise InvalidArgumentError(f"Signature record is missing {key!r}")
            values.append(_as_number(key, record[key]))

        page_val = record.get("pageNumber")
        page: int | None = None
        if page_val is not None:
            if isinstance(page_val, bool) or not isinstance(page_val, int):
                raise InvalidArgumentError(f"pageNumber must be an integer, got {page_val!r}")
            page = page_val

        x, y, width, height = values
        return cls(x=x, y=y, width=width, height=height, page=page)


@dataclass(frozen=True)
class SignatureSize:
    """On-screen pixel footprint of the signature image."""

    width: float
    height: float


@dataclass(frozen=True)
class ContainerOrigin:
    """Client-space origin of the preview container (bounding rect left/top)."""

    left: float
    top: float


@dataclass(frozen=True)
class GrabOffset:
    """Pointer offset from the signature's top-left corner when a drag starts."""

    x: float
    y: float


DEFAULT_SIGNATURE_SIZE = SignatureSize(DEFAULT_SIGNATURE_WIDTH, DEFAULT_SIGNATURE_HEIGHT)


def _as_number(name: str, value: object) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidArgumentError(f"{name} must be a number, got {value!r}")
    return float(value)


def _check_scale(scale: float) -> None:
    if not math.isfinite(scale) or scale <= 0:
        raise InvalidArgumentError(f"Render scale must be a positive number, got {scale!r}")


def canvas_to_pdf(
    canvas_position: CanvasPosition,
    canvas_pixel_width: float,
    canvas_pixel_height: float,
    scale: float,
    signature_size: SignatureSize = DEFAULT_SIGNATURE_SIZE,
) -> PdfPosition:
    """Convert a canvas top-left position into a PDF rectangle.

    Args:
        canvas_position: Top-left corner of the signature on the canvas.
        canvas_pixel_width: Backing-store width of the rendered canvas.
            Only validated; the x-axis needs no flip.
        canvas_pixel_height: Backing-store height of the rendered canvas
            (not its CSS/display height).
        scale: Render scale used when the page was rasterized.
        signature_size: On-screen pixel size of the signature.

    Returns:
        PdfPosition with no page set.

    Raises:
        InvalidArgumentError: If ``scale`` is not positive or the canvas
            dimensions are negative.

    >>> canvas_to_pdf(CanvasPosition(100, 100), 800, 600, 1.0)
    PdfPosition(x=100.0, y=350.0, width=400.0, height=150.0, page=None)
    """
    _check_scale(scale)
    if canvas_pixel_width < 0 or canvas_pixel_height < 0:
        raise InvalidArgumentError(
            f"Invalid canvas dimensions: {canvas_pixel_width} x {canvas_pixel_height} px"
        )

    return PdfPosition(
        x=canvas_position.x / scale,
        y=(
            canvas_pixel_height / scale
            - canvas_position.y / scale
            - signature_size.height / scale
        ),
        width=signature_size.width / scale,
        height=signature_size.height / scale,
    )


def pdf_to_canvas(
    pdf_position: PdfPosition,
    canvas_pixel_height: float,
    scale: float,
) -> CanvasPosition:
    """Convert a stored PDF rectangle back to its canvas top-left corner.

    Inverse of :func:`canvas_to_pdf` for the same ``scale`` and
    ``canvas_pixel_height``.

    Raises:
        InvalidArgumentError: If ``scale`` is not positive.
    """
    _check_scale(scale)
    return CanvasPosition(
        x=pdf_position.x * scale,
        y=canvas_pixel_height - pdf_position.y * scale - pdf_position.height * scale,
    )


def clamp_position(
    position: CanvasPosition,
    container_width: float,
    container_height: float,
    item_width: float,
    item_height: float,
) -> CanvasPosition:
    """Keep a dragged rectangle inside its container.

    When the item is larger than the container the bound collapses to 0,
    so the item sticks to the top-left and overflows right/bottom.
    """
    max_x = container_width - item_width
    max_y = container_height - item_height
    return CanvasPosition(
        x=max(0, min(position.x, max_x)),
        y=max(0, min(position.y, max_y)),
    )


def relative_position(
    client_x: float,
    client_y: float,
    container_origin: ContainerOrigin,
    grab_offset: GrabOffset,
) -> CanvasPosition:
    """Translate a pointer event into container-local top-left coordinates."""
    return CanvasPosition(
        x=client_x - container_origin.left - grab_offset.x,
        y=client_y - container_origin.top - grab_offset.y,
    )
