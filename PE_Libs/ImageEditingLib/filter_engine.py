"""
Pixel Filter Operations.

Provides pure transforms over BGRA raster buffers:
- Grayscale: Luminosity-weighted gray
- Brightness / Contrast: Tone adjustments pivoting on mid-gray
- Gaussian blur: Three passes of a separable, border-clamped box blur
- Edge detection: Sobel gradient magnitude on the grayscale image
- Sepia: Warm color-matrix tone

Every filter returns a new RasterBuffer and never writes to its source.
Channel results are truncated toward zero and clamped to 0-255.

Example:
    >>> source = RasterBuffer(1, 1, bytes([100, 150, 200, 255]))
    >>> apply_grayscale(source).pixel(0, 0)
    (159, 159, 159, 255)
    >>> transform(source, FilterKind.BRIGHTNESS, FilterParameters(brightness=30)).pixel(0, 0)
    (176, 226, 255, 255)
"""

from typing import Optional
import logging

import numpy as np

from PE_Libs.constants import (
    ALPHA_OFFSET,
    BLUE_OFFSET,
    BOX_BLUR_PASSES,
    BRIGHTNESS_SCALE,
    CHANNEL_MAX,
    CHANNEL_MIN,
    CONTRAST_PIVOT,
    GREEN_OFFSET,
    LUMA_WEIGHTS,
    MAX_CONTRAST_FACTOR,
    OPAQUE_ALPHA,
    RED_OFFSET,
    SEPIA_MATRIX,
    SOBEL_X,
    SOBEL_Y,
    WEIGHT_DENOMINATOR,
)
from PE_Libs.ImageEditingLib.filter_registry import get_default_registry
from PE_Libs.ImageEditingLib.image_models import FilterKind, FilterParameters, RasterBuffer

logger = logging.getLogger(__name__)

COLOR_CHANNELS = slice(BLUE_OFFSET, RED_OFFSET + 1)


def _to_channel_bytes(values: np.ndarray) -> np.ndarray:
    return np.clip(values, CHANNEL_MIN, CHANNEL_MAX).astype(np.uint8)


def _wide(source: RasterBuffer) -> np.ndarray:
    """Writable int64 copy of the source pixels, shape (height, width, 4)."""
    return source.as_array().astype(np.int64)


def _check_source(source: RasterBuffer) -> None:
    if not isinstance(source, RasterBuffer):
        raise TypeError(f"Expected RasterBuffer, got {type(source)}")


def _brightness_adjustment(brightness: float) -> int:
    scaled = float(brightness) * BRIGHTNESS_SCALE
    # past +-255 every channel saturates; int() truncates toward zero
    return int(min(CHANNEL_MAX, max(-CHANNEL_MAX, scaled)))


def _contrast_factor(contrast: float) -> float:
    return min(MAX_CONTRAST_FACTOR, max(0.0, (100.0 + float(contrast)) / 100.0))


def _tone(color: np.ndarray, factor: float, adjustment: int = 0) -> np.ndarray:
    """trunc(factor * (v - 128) + 128 + adjustment), clamped to 0-255 in float64."""
    values = factor * (color.astype(np.float64) - CONTRAST_PIVOT) + CONTRAST_PIVOT + adjustment
    return np.clip(np.trunc(values), CHANNEL_MIN, CHANNEL_MAX)


def _weighted_sum(pixels: np.ndarray, weights) -> np.ndarray:
    red_w, green_w, blue_w = weights
    return (
        red_w * pixels[..., RED_OFFSET]
        + green_w * pixels[..., GREEN_OFFSET]
        + blue_w * pixels[..., BLUE_OFFSET]
    ) // WEIGHT_DENOMINATOR


# ============================================================================
# Per-pixel color filters
# ============================================================================

def apply_grayscale(source: RasterBuffer) -> RasterBuffer:
    """
    Convert to gray using the luminosity method.

    gray = 0.299*R + 0.587*G + 0.114*B, truncated. Alpha is unchanged.
    """
    _check_source(source)
    pixels = _wide(source)
    gray = _weighted_sum(pixels, LUMA_WEIGHTS)
    pixels[..., COLOR_CHANNELS] = gray[..., np.newaxis]
    return RasterBuffer.from_array(_to_channel_bytes(pixels))


def apply_brightness(source: RasterBuffer, brightness: float) -> RasterBuffer:
    """
    Add a constant to every color channel.

    Args:
        source: Raster to adjust
        brightness: Adjustment in -100..100, scaled by 2.55 to about -255..255
    """
    _check_source(source)
    pixels = _wide(source)
    pixels[..., COLOR_CHANNELS] += _brightness_adjustment(brightness)
    return RasterBuffer.from_array(_to_channel_bytes(pixels))


def apply_contrast(source: RasterBuffer, contrast: float) -> RasterBuffer:
    """
    Stretch or compress color channels around mid-gray (128).

    factor = max(0, (100 + contrast) / 100); value = factor * (value - 128) + 128
    """
    _check_source(source)
    factor = _contrast_factor(contrast)
    pixels = _wide(source)
    color = pixels[..., COLOR_CHANNELS]
    pixels[..., COLOR_CHANNELS] = _tone(color, factor)
    return RasterBuffer.from_array(_to_channel_bytes(pixels))


def apply_brightness_contrast(
    source: RasterBuffer,
    brightness: float,
    contrast: float,
) -> RasterBuffer:
    """
    Apply contrast then brightness in a single expression.

    Truncation happens once, after both terms, so the result can differ by one
    from apply_contrast followed by apply_brightness.
    """
    _check_source(source)
    adjustment = _brightness_adjustment(brightness)
    factor = _contrast_factor(contrast)
    pixels = _wide(source)
    color = pixels[..., COLOR_CHANNELS]
    pixels[..., COLOR_CHANNELS] = _tone(color, factor, adjustment)
    return RasterBuffer.from_array(_to_channel_bytes(pixels))


def apply_sepia(source: RasterBuffer) -> RasterBuffer:
    """Apply the standard sepia color matrix. Alpha is unchanged."""
    _check_source(source)
    pixels = _wide(source)
    red_weights, green_weights, blue_weights = SEPIA_MATRIX
    new_red = _weighted_sum(pixels, red_weights)
    new_green = _weighted_sum(pixels, green_weights)
    new_blue = _weighted_sum(pixels, blue_weights)
    pixels[..., RED_OFFSET] = new_red
    pixels[..., GREEN_OFFSET] = new_green
    pixels[..., BLUE_OFFSET] = new_blue
    return RasterBuffer.from_array(_to_channel_bytes(pixels))


# ============================================================================
# Gaussian Blur
# ============================================================================

def _box_average(values: np.ndarray, radius: int, axis: int) -> np.ndarray:
    """
    Mean over a 2*radius+1 window along one axis.

    Only in-bounds samples are summed and the divisor is the number of
    in-bounds samples, so border pixels average over a shorter window.
    """
    length = values.shape[axis]
    pad_shape = list(values.shape)
    pad_shape[axis] = 1
    prefix = np.concatenate(
        [np.zeros(pad_shape, dtype=np.int64), np.cumsum(values, axis=axis, dtype=np.int64)],
        axis=axis,
    )

    positions = np.arange(length)
    low = np.clip(positions - radius, 0, length)
    high = np.clip(positions + radius + 1, 0, length)

    sums = np.take(prefix, high, axis=axis) - np.take(prefix, low, axis=axis)
    count_shape = [1] * values.ndim
    count_shape[axis] = length
    counts = (high - low).reshape(count_shape)
    return sums // counts


def box_blur(source: RasterBuffer, radius: int) -> RasterBuffer:
    """
    One separable box blur: a horizontal pass then a vertical pass.

    Alpha is carried through from the source pixel.
    """
    _check_source(source)
    if radius <= 0 or source.pixel_count == 0:
        return source.clone()

    pixels = _wide(source)
    color = pixels[..., COLOR_CHANNELS]
    horizontal = _box_average(color, radius, axis=1)
    pixels[..., COLOR_CHANNELS] = _box_average(horizontal, radius, axis=0)
    return RasterBuffer.from_array(_to_channel_bytes(pixels))


def apply_gaussian_blur(
    source: RasterBuffer,
    radius: int,
    passes: int = BOX_BLUR_PASSES,
) -> RasterBuffer:
    """
    Approximate a Gaussian blur with repeated box blurs.

    Args:
        source: Raster to blur
        radius: Box window radius in pixels (1-10 typical); <= 0 returns a copy
        passes: Number of box blur passes (default 3)

    Returns:
        Blurred RasterBuffer
    """
    _check_source(source)
    radius = int(radius)
    if radius <= 0:
        return source.clone()

    result = source
    for _ in range(passes):
        result = box_blur(result, radius)
    if result is source:
        return source.clone()
    return result


# ============================================================================
# Edge Detection
# ============================================================================

def _correlate3x3(plane: np.ndarray, kernel) -> np.ndarray:
    """Apply a 3x3 kernel at every interior position of a 2D plane."""
    height, width = plane.shape
    result = np.zeros((height - 2, width - 2), dtype=np.int64)
    for ky in range(3):
        for kx in range(3):
            weight = kernel[ky][kx]
            if weight:
                result += weight * plane[ky:ky + height - 2, kx:kx + width - 2]
    return result


def apply_edge_detection(source: RasterBuffer) -> RasterBuffer:
    """
    Sobel edge detection.

    The source is converted to grayscale and the gradient magnitude
    sqrt(gx^2 + gy^2) is written as an opaque gray for every interior pixel.
    The outermost one-pixel ring is left transparent black.
    """
    _check_source(source)
    output = np.zeros((source.height, source.width, 4), dtype=np.uint8)
    if source.width < 3 or source.height < 3:
        return RasterBuffer.from_array(output)

    gray = apply_grayscale(source).as_array()[..., BLUE_OFFSET].astype(np.int64)
    gx = _correlate3x3(gray, SOBEL_X)
    gy = _correlate3x3(gray, SOBEL_Y)
    magnitude = _to_channel_bytes(np.trunc(np.sqrt(gx * gx + gy * gy)))

    output[1:-1, 1:-1, COLOR_CHANNELS] = magnitude[..., np.newaxis]
    output[1:-1, 1:-1, ALPHA_OFFSET] = OPAQUE_ALPHA
    return RasterBuffer.from_array(output)


# ============================================================================
# Dispatch
# ============================================================================

def transform(
    source: RasterBuffer,
    kind: FilterKind,
    params: Optional[FilterParameters] = None,
) -> RasterBuffer:
    """
    Apply one filter to a raster.

    The filter is looked up in the default filter registry; FilterKind.NONE
    and kinds with no registered filter return an identical copy.

    Args:
        source: Raster to transform (never modified)
        kind: Filter to apply (FilterKind or its name)
        params: Filter parameters (defaults to FilterParameters())

    Returns:
        A new RasterBuffer

    Raises:
        TypeError: If source is not a RasterBuffer
    """
    _check_source(source)
    if params is None:
        params = FilterParameters()

    try:
        kind = FilterKind.parse(kind)
    except ValueError:
        logger.debug(f"Unrecognized filter kind {kind!r}, returning copy")
        return source.clone()

    registry = get_default_registry()
    if not registry.has_filter(kind):
        return source.clone()

    logger.debug(f"Applying {kind.value} to {source.width}x{source.height} raster")
    return registry.execute(kind, source, params)
