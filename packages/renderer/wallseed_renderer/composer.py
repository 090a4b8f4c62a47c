"""Background image composer: fill, pick a font, draw centered inverse-color text."""

from __future__ import annotations

import logging
import math
import random

from PIL import Image

from .color import WHITE, Color
from .constants import (
    DEFAULT_FILL_RATIO,
    DEFAULT_HEIGHT,
    DEFAULT_MIN_PIXEL_SIZE,
    DEFAULT_TEXT,
    DEFAULT_WIDTH,
)
from .fonts import FontProvider, SystemFontProvider
from .layout import measure
from .models import Canvas, RasterOptions, RenderedImage, TextBoundingBox
from .raster import DEFAULT_RASTER_OPTIONS, rasterize

logger = logging.getLogger("wallseed.composer")


def choose_pixel_size(
    bounds: TextBoundingBox,
    units_per_em: int,
    max_size: tuple[int, int],
    min_pixel_size: int,
    rng: random.Random,
) -> int:
    """Pick a random pixel size at which ``bounds`` still fits within ``max_size``."""
    if bounds.is_empty:
        return min_pixel_size
    max_w, max_h = max_size
    largest = math.floor(min(max_w * units_per_em / bounds.width, max_h * units_per_em / bounds.height))
    if largest <= min_pixel_size:
        return min_pixel_size
    return rng.randint(min_pixel_size, largest)


def overlay(image: Image.Image, canvas: Canvas, color: Color, center: tuple[int, int]) -> None:
    """Paint ``color`` through the canvas coverage with the canvas centered on ``center``."""
    if canvas.is_empty:
        return
    x = center[0] - canvas.width // 2
    y = center[1] - canvas.height // 2
    image.paste(color.rgb, (x, y, x + canvas.width, y + canvas.height), canvas.to_image())


class BackgroundComposer:
    """Seeds background images with a line of text in a random installed font."""

    def __init__(
        self,
        provider: FontProvider | None = None,
        rng: random.Random | None = None,
        options: RasterOptions = DEFAULT_RASTER_OPTIONS,
        pixel_size: int | None = None,
        min_pixel_size: int = DEFAULT_MIN_PIXEL_SIZE,
        fill_ratio: float = DEFAULT_FILL_RATIO,
    ) -> None:
        self.provider = provider or SystemFontProvider()
        self.rng = rng or random.Random()
        self.options = options
        self.pixel_size = pixel_size
        self.min_pixel_size = min_pixel_size
        self.fill_ratio = fill_ratio

    def seed(
        self,
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
        background: Color = WHITE,
        text: str = DEFAULT_TEXT,
    ) -> RenderedImage:
        if width < 1 or height < 1:
            raise ValueError(f"Image size must be positive, got {width}x{height}")

        image = Image.new("RGB", (width, height), background.rgb)
        text_color = background.inverse()

        font = self.provider.pick_random(self.rng)
        bounds = measure(text, font)
        pixel_size = self.pixel_size
        if pixel_size is None:
            pixel_size = choose_pixel_size(
                bounds,
                font.units_per_em,
                (int(width * self.fill_ratio), int(height * self.fill_ratio)),
                self.min_pixel_size,
                self.rng,
            )
        canvas = rasterize(text, font, bounds, pixel_size, self.options)
        overlay(image, canvas, text_color, (width // 2, height // 2))

        logger.info(
            f"seeded {width}x{height} background {background} with {font.source} at {pixel_size}px",
            extra={"event": "image_seeded", "font": str(font.source), "pixel_size": pixel_size},
        )
        return RenderedImage(
            image=image,
            width=width,
            height=height,
            background=background,
            text_color=text_color,
            font_path=str(font.source),
            pixel_size=pixel_size,
        )

    def update(self, existing: RenderedImage) -> RenderedImage:
        # TODO: re-render text once the update flow defines which text and region to replace.
        logger.info(
            f"updating image {existing.width}x{existing.height} background {existing.background}",
            extra={"event": "image_updated"},
        )
        return existing


def seed(
    width: int = DEFAULT_WIDTH,
    height: int = DEFAULT_HEIGHT,
    background: Color = WHITE,
    text: str = DEFAULT_TEXT,
    provider: FontProvider | None = None,
    rng: random.Random | None = None,
) -> RenderedImage:
    return BackgroundComposer(provider=provider, rng=rng).seed(width, height, background, text)


def update(existing: RenderedImage) -> RenderedImage:
    return BackgroundComposer().update(existing)
