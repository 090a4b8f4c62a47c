"""
Rendering defaults shared across the pipeline.
"""

# Output image dimensions (pixels)
DEFAULT_WIDTH = 1920
DEFAULT_HEIGHT = 1080

DEFAULT_BACKGROUND = "#FFFFFF"
DEFAULT_TEXT = "Hello, world!"

# Glyph size used when rasterizing without a composer (pixels per em)
DEFAULT_PIXEL_SIZE = 64

# Random size selection bounds for seeded images
DEFAULT_MIN_PIXEL_SIZE = 16
# Fraction of the image the text box may cover along either axis
DEFAULT_FILL_RATIO = 0.8

MAX_DIMENSION = 16384
