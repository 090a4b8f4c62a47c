"""Renderer package for seeded background images: color, fonts, layout, rasterization."""

from .color import BLACK, WHITE, Color
from .composer import BackgroundComposer, choose_pixel_size, overlay, seed, update
from .constants import DEFAULT_PIXEL_SIZE, DEFAULT_TEXT
from .errors import (
    FontError,
    FontErrorKind,
    LayoutError,
    LayoutErrorKind,
    ParseError,
    ParseErrorKind,
    RasterError,
    RasterErrorKind,
    RenderError,
)
from .fonts import (
    FontHandle,
    FontProvider,
    FontSource,
    StaticFontProvider,
    SystemFontProvider,
    load_font,
    pick_random_font,
)
from .layout import measure
from .models import Canvas, GlyphBounds, RasterOptions, RenderedImage, TextBoundingBox
from .raster import rasterize

__all__ = [
    "BLACK",
    "BackgroundComposer",
    "Canvas",
    "Color",
    "DEFAULT_PIXEL_SIZE",
    "DEFAULT_TEXT",
    "FontError",
    "FontErrorKind",
    "FontHandle",
    "FontProvider",
    "FontSource",
    "GlyphBounds",
    "LayoutError",
    "LayoutErrorKind",
    "ParseError",
    "ParseErrorKind",
    "RasterError",
    "RasterErrorKind",
    "RasterOptions",
    "RenderError",
    "RenderedImage",
    "StaticFontProvider",
    "SystemFontProvider",
    "TextBoundingBox",
    "WHITE",
    "choose_pixel_size",
    "load_font",
    "measure",
    "overlay",
    "pick_random_font",
    "rasterize",
    "seed",
    "update",
]
