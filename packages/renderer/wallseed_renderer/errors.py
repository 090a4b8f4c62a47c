"""Tagged error taxonomy for each rendering stage."""

from __future__ import annotations

from enum import Enum


class ParseErrorKind(str, Enum):
    INVALID_FORMAT = "InvalidFormat"


class FontErrorKind(str, Enum):
    NO_FONTS_AVAILABLE = "NoFontsAvailable"
    LOAD_FAILED = "LoadFailed"


class LayoutErrorKind(str, Enum):
    MISSING_GLYPH = "MissingGlyph"
    METRICS_UNAVAILABLE = "MetricsUnavailable"


class RasterErrorKind(str, Enum):
    GLYPH_RASTERIZATION_FAILED = "GlyphRasterizationFailed"


class RenderError(RuntimeError):
    """Base for every failure the pipeline can surface to a caller."""

    def __init__(self, kind: Enum, message: str, *, char: str | None = None) -> None:
        super().__init__(message)
        self.kind = kind
        self.char = char


class ParseError(RenderError, ValueError):
    """Raised when color text is not six hexadecimal digits."""

    @classmethod
    def invalid_format(cls, text: str) -> "ParseError":
        return cls(ParseErrorKind.INVALID_FORMAT, f"Invalid color {text!r}, expected #RRGGBB")


class FontError(RenderError):
    @classmethod
    def no_fonts_available(cls) -> "FontError":
        return cls(FontErrorKind.NO_FONTS_AVAILABLE, "No fonts available on this host")

    @classmethod
    def load_failed(cls, source: object, cause: BaseException) -> "FontError":
        return cls(FontErrorKind.LOAD_FAILED, f"Failed to load font {source}: {cause}")


class LayoutError(RenderError):
    @classmethod
    def missing_glyph(cls, char: str) -> "LayoutError":
        return cls(LayoutErrorKind.MISSING_GLYPH, f"Did not find glyph for {char!r}", char=char)

    @classmethod
    def metrics_unavailable(cls, char: str, cause: BaseException) -> "LayoutError":
        return cls(
            LayoutErrorKind.METRICS_UNAVAILABLE,
            f"Metrics unavailable for glyph {char!r}: {cause}",
            char=char,
        )


class RasterError(RenderError):
    @classmethod
    def glyph_rasterization_failed(cls, char: str, cause: BaseException) -> "RasterError":
        return cls(
            RasterErrorKind.GLYPH_RASTERIZATION_FAILED,
            f"Failed to rasterize glyph {char!r}: {cause}",
            char=char,
        )
