"""Glyph rasterization into an alpha coverage canvas."""

from __future__ import annotations

import numpy as np

from .constants import DEFAULT_PIXEL_SIZE
from .fonts import FontHandle
from .layout import resolve_glyph
from .models import Canvas, RasterOptions, TextBoundingBox

DEFAULT_RASTER_OPTIONS = RasterOptions()


def rasterize(
    text: str,
    font: FontHandle,
    bounds: TextBoundingBox,
    pixel_size: int = DEFAULT_PIXEL_SIZE,
    options: RasterOptions = DEFAULT_RASTER_OPTIONS,
) -> Canvas:
    """
    Render ``text`` at ``pixel_size`` into a canvas holding every glyph bitmap.

    The pen walk repeats :func:`wallseed_renderer.layout.measure` exactly, so
    an unrenderable character fails here with the same ``MissingGlyph`` error.
    The canvas covers the pixel extent of ``bounds`` grown by any hinting
    overshoot; glyphs are rendered before it is allocated, so a failing glyph
    leaves no partial canvas behind.
    """
    if pixel_size < 1:
        raise ValueError(f"pixel_size must be positive, got {pixel_size}")
    scale = pixel_size / font.units_per_em

    # Glyph placements relative to the pen origin, y-down.
    placed: list[tuple[np.ndarray, int, int]] = []
    cursor = 0
    for ch in text:
        glyph_id = resolve_glyph(font, ch)
        advance = int(font.typographic_bounds(glyph_id, ch).advance)
        coverage, left, top = font.rasterize_glyph(glyph_id, pixel_size, options, ch)
        if coverage.size:
            placed.append((coverage, int(round(cursor * scale)) + left, -top))
        cursor += advance

    x0, y0, x1, y1 = bounds.pixel_extent(scale)
    left_edge = min([x0] + [x for _cov, x, _y in placed])
    top_edge = min([-y1] + [y for _cov, _x, y in placed])
    right_edge = max([x1] + [x + cov.shape[1] for cov, x, _y in placed])
    bottom_edge = max([-y0] + [y + cov.shape[0] for cov, _x, y in placed])

    canvas = Canvas(width=right_edge - left_edge, height=bottom_edge - top_edge)
    for coverage, x, y in placed:
        _blit_max(canvas.pixels, coverage, x - left_edge, y - top_edge)
    return canvas


def _blit_max(dest: np.ndarray, glyph: np.ndarray, x: int, y: int) -> None:
    if glyph.size == 0:
        return
    gh, gw = glyph.shape
    dh, dw = dest.shape

    x1 = max(0, x)
    y1 = max(0, y)
    x2 = min(dw, x + gw)
    y2 = min(dh, y + gh)
    if x2 <= x1 or y2 <= y1:
        return

    gx1 = x1 - x
    gy1 = y1 - y
    region = glyph[gy1 : gy1 + (y2 - y1), gx1 : gx1 + (x2 - x1)]
    np.maximum(dest[y1:y2, x1:x2], region, out=dest[y1:y2, x1:x2])
