"""
Constants and configuration values for Pixel Edit.

This module centralizes all constant values, magic numbers, and
configuration settings used throughout the library.
"""

# Pixel layout (blue, green, red, alpha)
BYTES_PER_PIXEL = 4
BLUE_OFFSET = 0
GREEN_OFFSET = 1
RED_OFFSET = 2
ALPHA_OFFSET = 3
CHANNEL_MIN = 0
CHANNEL_MAX = 255
OPAQUE_ALPHA = 255

# History
MAX_HISTORY_SIZE = 20

# Filter parameter ranges and defaults
BRIGHTNESS_RANGE = (-100.0, 100.0)
CONTRAST_RANGE = (-100.0, 100.0)
BLUR_RADIUS_RANGE = (1, 10)
DEFAULT_BRIGHTNESS = 0.0
DEFAULT_CONTRAST = 0.0
DEFAULT_BLUR_RADIUS = 3

# Tone filters
BRIGHTNESS_SCALE = 2.55
CONTRAST_PIVOT = 128
# Any larger factor already saturates every channel that is not exactly the pivot
MAX_CONTRAST_FACTOR = 512.0

# Weighted sums are evaluated per mille so truncation is exact
WEIGHT_DENOMINATOR = 1000
LUMA_WEIGHTS = (299, 587, 114)  # (red, green, blue)
SEPIA_MATRIX = (
    (393, 769, 189),  # new red
    (349, 686, 168),  # new green
    (272, 534, 131),  # new blue
)

# Blur
BOX_BLUR_PASSES = 3

# Edge detection
SOBEL_X = ((-1, 0, 1), (-2, 0, 2), (-1, 0, 1))
SOBEL_Y = ((-1, -2, -1), (0, 0, 0), (1, 2, 1))

# Histogram
HISTOGRAM_BINS = 256
HISTOGRAM_CHANNELS = ("red", "green", "blue")

# Filter registry tags
TAG_LIVE_PREVIEW = "live-preview"
TAG_PARAMETRIC = "parametric"

# File I/O
SUPPORTED_STANDARD_IMAGES = {".png", ".jpg", ".jpeg", ".bmp", ".gif", ".tiff", ".webp"}
SAVE_FORMATS = {
    ".jpg": "JPEG",
    ".jpeg": "JPEG",
    ".bmp": "BMP",
}
DEFAULT_OUTPUT_FORMAT = "PNG"
OPAQUE_ONLY_FORMATS = {"JPEG", "BMP"}
DEFAULT_JPEG_QUALITY = 95

# File naming
EDITED_FILE_SUFFIX = "_edited"
DEFAULT_EDITED_NAME = "edited_image.png"
