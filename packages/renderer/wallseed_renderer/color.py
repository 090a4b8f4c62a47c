"""RGB color value with #RRGGBB text form and contrast inversion."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Sequence

from .errors import ParseError

_HEX_RE = re.compile(r"[0-9a-fA-F]{6}")


@dataclass(frozen=True)
class Color:
    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        for channel in (self.r, self.g, self.b):
            if not 0 <= channel <= 255:
                raise ValueError(f"Color channel out of range: {channel}")

    @classmethod
    def parse(cls, text: str) -> "Color":
        digits = text[1:] if text.startswith("#") else text
        if not _HEX_RE.fullmatch(digits):
            raise ParseError.invalid_format(text)
        return cls(*(int(digits[i : i + 2], 16) for i in (0, 2, 4)))

    @classmethod
    def from_pixel(cls, pixel: Sequence[int] | int) -> "Color":
        """Build from a sampled Pillow pixel; alpha is dropped, grey is widened."""
        if isinstance(pixel, int):
            return cls(pixel, pixel, pixel)
        r, g, b = pixel[:3]
        return cls(int(r), int(g), int(b))

    @property
    def rgb(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)

    def format(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    def inverse(self) -> "Color":
        # Mid-grey channels (127/128) map to their neighbour.
        return Color(255 - self.r, 255 - self.g, 255 - self.b)

    def __str__(self) -> str:
        return self.format()


WHITE = Color(255, 255, 255)
BLACK = Color(0, 0, 0)
