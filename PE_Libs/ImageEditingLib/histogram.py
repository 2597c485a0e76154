"""
RGB histogram calculation.

Functions:
    compute_histogram: Count every intensity value for the red, green and blue channels
    try_compute_histogram: Same, but degrade to None on failure
"""

from typing import Optional
import logging

import numpy as np

from PE_Libs.constants import BLUE_OFFSET, BYTES_PER_PIXEL, GREEN_OFFSET, HISTOGRAM_BINS, RED_OFFSET
from PE_Libs.ImageEditingLib.image_models import ImageHistogram, RasterBuffer

logger = logging.getLogger(__name__)


def compute_histogram(buffer: RasterBuffer) -> ImageHistogram:
    """
    Calculate the RGB histogram of a raster. Alpha is ignored.

    Args:
        buffer: Raster to analyze

    Returns:
        ImageHistogram with 256 bins per channel; max_value is the largest
        count over all three channels

    Raises:
        TypeError: If buffer is not a RasterBuffer
    """
    if not isinstance(buffer, RasterBuffer):
        raise TypeError(f"Expected RasterBuffer, got {type(buffer)}")

    pixels = buffer.as_array().reshape(-1, BYTES_PER_PIXEL)

    def count(offset: int):
        bins = np.bincount(pixels[:, offset], minlength=HISTOGRAM_BINS)
        return tuple(int(value) for value in bins)

    red = count(RED_OFFSET)
    green = count(GREEN_OFFSET)
    blue = count(BLUE_OFFSET)
    return ImageHistogram(
        red=red,
        green=green,
        blue=blue,
        max_value=max(max(red), max(green), max(blue)),
    )


def try_compute_histogram(buffer: RasterBuffer) -> Optional[ImageHistogram]:
    """
    Calculate the histogram, returning None instead of raising.

    A missing histogram only affects display, so edits carry on without one.
    """
    if buffer is None:
        return None

    try:
        return compute_histogram(buffer)
    except Exception as exc:
        logger.warning(f"Histogram unavailable: {exc}")
        return None
