"""Typed renderer models."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np
from PIL import Image

from .color import Color


@dataclass(frozen=True)
class RasterOptions:
    hinting: bool = True
    antialias: bool = True


@dataclass(frozen=True)
class GlyphBounds:
    """Ink box and advance width of one glyph, in font design units."""

    min_x: int
    min_y: int
    max_x: int
    max_y: int
    advance: int


@dataclass
class TextBoundingBox:
    """Union of glyph boxes along a left-to-right pen walk (y axis points up)."""

    min_x: int = 0
    min_y: int = 0
    max_x: int = 0
    max_y: int = 0
    cursor: int = 0
    advances: tuple[int, ...] = ()

    @property
    def width(self) -> int:
        return self.max_x - self.min_x

    @property
    def height(self) -> int:
        return self.max_y - self.min_y

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    def include(self, glyph: GlyphBounds) -> None:
        self.min_x = min(self.min_x, self.cursor + glyph.min_x)
        self.min_y = min(self.min_y, glyph.min_y)
        self.max_x = max(self.max_x, self.cursor + glyph.max_x)
        self.max_y = max(self.max_y, glyph.max_y)
        advance = int(glyph.advance)
        self.advances = self.advances + (advance,)
        self.cursor += advance

    def pixel_extent(self, scale: float) -> tuple[int, int, int, int]:
        """Integer pixel edges (x0, y0, x1, y1) covering the box at ``scale``."""
        return (
            math.floor(self.min_x * scale),
            math.floor(self.min_y * scale),
            math.ceil(self.max_x * scale),
            math.ceil(self.max_y * scale),
        )


@dataclass
class Canvas:
    width: int
    height: int
    pixel_format: str = "A8"
    pixels: np.ndarray = field(default=None)  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if self.pixels is None:
            self.pixels = np.zeros((self.height, self.width), dtype=np.uint8)

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    def to_image(self) -> Image.Image:
        return Image.fromarray(self.pixels)


@dataclass(frozen=True)
class RenderedImage:
    image: Image.Image
    width: int
    height: int
    background: Color
    text_color: Color | None = None
    font_path: str | None = None
    pixel_size: int | None = None

    @classmethod
    def from_image(cls, image: Image.Image) -> "RenderedImage":
        if image.mode != "RGB":
            image = image.convert("RGB")
        return cls(
            image=image,
            width=image.width,
            height=image.height,
            background=Color.from_pixel(image.getpixel((0, 0))),
        )
