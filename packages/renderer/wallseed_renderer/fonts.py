"""Font discovery, random selection and the loaded-font handle."""

from __future__ import annotations

import logging
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

import freetype
import numpy as np
from matplotlib import font_manager

from .errors import FontError, LayoutError, RasterError
from .models import GlyphBounds, RasterOptions

logger = logging.getLogger("wallseed.fonts")

COLLECTION_SUFFIXES = (".ttc", ".otc")


@dataclass(frozen=True)
class FontSource:
    """Enumerated font face: a file path plus the face index inside it."""

    path: str
    index: int = 0

    def __str__(self) -> str:
        return f"{self.path}#{self.index}" if self.index else self.path


class FontHandle:
    """A loaded freetype face used as a black box for metrics and bitmaps."""

    def __init__(self, source: FontSource, face: freetype.Face) -> None:
        self.source = source
        self._face = face

    @property
    def units_per_em(self) -> int:
        return int(self._face.units_per_EM)

    @property
    def family_name(self) -> str:
        name = self._face.family_name
        return name.decode("utf-8", "replace") if isinstance(name, bytes) else str(name or "")

    def glyph_for_char(self, ch: str) -> int | None:
        glyph_id = self._face.get_char_index(ord(ch))
        return glyph_id or None

    def typographic_bounds(self, glyph_id: int, ch: str = "") -> GlyphBounds:
        try:
            self._face.load_glyph(glyph_id, freetype.FT_LOAD_NO_SCALE)
        except freetype.FT_Exception as exc:
            raise LayoutError.metrics_unavailable(ch, exc) from exc

        metrics = self._face.glyph.metrics
        min_x = int(metrics.horiBearingX)
        max_y = int(metrics.horiBearingY)
        return GlyphBounds(
            min_x=min_x,
            min_y=max_y - int(metrics.height),
            max_x=min_x + int(metrics.width),
            max_y=max_y,
            advance=int(self._face.glyph.advance.x),
        )

    def rasterize_glyph(
        self,
        glyph_id: int,
        pixel_size: int,
        options: RasterOptions,
        ch: str = "",
    ) -> tuple[np.ndarray, int, int]:
        """Render one glyph, returning (coverage, bitmap_left, bitmap_top)."""
        flags = freetype.FT_LOAD_RENDER
        if not options.hinting:
            flags |= freetype.FT_LOAD_NO_HINTING
        if options.antialias:
            flags |= freetype.FT_LOAD_TARGET_NORMAL
        else:
            flags |= freetype.FT_LOAD_TARGET_MONO | freetype.FT_LOAD_MONOCHROME

        try:
            self._face.set_pixel_sizes(0, pixel_size)
            self._face.load_glyph(glyph_id, flags)
        except freetype.FT_Exception as exc:
            raise RasterError.glyph_rasterization_failed(ch, exc) from exc

        slot = self._face.glyph
        bitmap = slot.bitmap
        if not (bitmap.buffer and bitmap.width > 0 and bitmap.rows > 0):
            return np.zeros((0, 0), dtype=np.uint8), slot.bitmap_left, slot.bitmap_top

        rows = np.array(bitmap.buffer, dtype=np.uint8).reshape(bitmap.rows, bitmap.pitch)
        if bitmap.pixel_mode == freetype.FT_PIXEL_MODE_MONO:
            coverage = np.unpackbits(rows, axis=1)[:, : bitmap.width] * np.uint8(255)
        else:
            coverage = rows[:, : bitmap.width]
        return np.ascontiguousarray(coverage), slot.bitmap_left, slot.bitmap_top


def load_font(source: FontSource) -> FontHandle:
    try:
        face = freetype.Face(source.path, source.index)
    except (freetype.FT_Exception, OSError) as exc:
        raise FontError.load_failed(source, exc) from exc
    return FontHandle(source, face)


class FontProvider(ABC):
    """Capability that lists the fonts a render may choose from."""

    @abstractmethod
    def list_fonts(self) -> list[FontSource]:
        """Return every selectable font source."""

    def pick_random(self, rng: random.Random | None = None) -> FontHandle:
        sources = self.list_fonts()
        if not sources:
            raise FontError.no_fonts_available()

        rng = rng or random.Random()
        source = sources[rng.randrange(len(sources))]
        font = load_font(source)
        logger.info(
            f"font selected {source} ({font.family_name})",
            extra={"event": "font_selected", "font": str(source), "candidates": len(sources)},
        )
        return font


class SystemFontProvider(FontProvider):
    """Fonts installed on the host, as found by matplotlib's font manager."""

    def list_fonts(self) -> list[FontSource]:
        sources: list[FontSource] = []
        for path in sorted(set(font_manager.findSystemFonts(fontext="ttf"))):
            sources.extend(FontSource(path=path, index=i) for i in range(_face_count(path)))
        return sources


def _face_count(path: str) -> int:
    """Number of faces in a font file; collections (.ttc/.otc) hold several."""
    if Path(path).suffix.lower() not in COLLECTION_SUFFIXES:
        return 1
    try:
        return max(1, int(freetype.Face(path).num_faces))
    except (freetype.FT_Exception, OSError):
        # Loading the first face reports the error when it is picked.
        return 1


class StaticFontProvider(FontProvider):
    def __init__(self, sources: Iterable[FontSource]) -> None:
        self._sources = list(sources)

    @classmethod
    def from_paths(cls, paths: Iterable[str | Path]) -> "StaticFontProvider":
        return cls(FontSource(path=str(p)) for p in paths)

    def list_fonts(self) -> list[FontSource]:
        return list(self._sources)


def pick_random_font(provider: FontProvider | None = None, rng: random.Random | None = None) -> FontHandle:
    return (provider or SystemFontProvider()).pick_random(rng)
