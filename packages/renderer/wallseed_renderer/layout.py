"""Text measurement: tight bounding box of a string under one font."""

from __future__ import annotations

import logging

from .errors import LayoutError
from .fonts import FontHandle
from .models import TextBoundingBox

logger = logging.getLogger("wallseed.layout")


def resolve_glyph(font: FontHandle, ch: str) -> int:
    """Map a character to its glyph id; shared by measurement and rasterization."""
    glyph_id = font.glyph_for_char(ch)
    if glyph_id is None:
        raise LayoutError.missing_glyph(ch)
    return glyph_id


def measure(text: str, font: FontHandle) -> TextBoundingBox:
    """
    Walk ``text`` left to right and union every glyph's ink box.

    Coordinates are font design units with y pointing up. The box starts as
    the zero rectangle at the pen origin, so it always contains the baseline
    origin; an empty string yields a zero-area box.
    """
    box = TextBoundingBox()
    for ch in text:
        glyph_id = resolve_glyph(font, ch)
        box.include(font.typographic_bounds(glyph_id, ch))

    logger.debug(
        f"measured {len(text)} chars: {box.width}x{box.height} units",
        extra={"event": "text_measured"},
    )
    return box
