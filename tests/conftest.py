"""
Pytest configuration and shared fixtures for Pixel Edit tests.

This module provides shared test fixtures and configuration
used across multiple test modules.
"""

import numpy as np
import pytest

from PE_Libs.ImageEditingLib.image_models import RasterBuffer


def _make_raster(width, height, pixels):
    data = bytearray()
    for pixel in pixels:
        data.extend(pixel)
    return RasterBuffer(width, height, data)


def _random_raster(width, height, seed=0):
    rng = np.random.default_rng(seed)
    values = rng.integers(0, 256, size=(height, width, 4), dtype=np.uint8)
    return RasterBuffer.from_array(values)


@pytest.fixture
def make_raster():
    """
    Provide a factory building a RasterBuffer from a row-major list of
    (B, G, R, A) tuples: make_raster(width, height, pixels).
    """
    return _make_raster


@pytest.fixture
def random_raster():
    """
    Provide a factory building a raster of reproducible random pixels:
    random_raster(width, height, seed=0).
    """
    return _random_raster


@pytest.fixture
def sample_pixel_raster():
    """
    Provide a 1x1 raster holding (B, G, R, A) = (100, 150, 200, 255).
    """
    return _make_raster(1, 1, [(100, 150, 200, 255)])


@pytest.fixture
def noisy_raster():
    """
    Provide an 8x6 raster of random pixels.
    """
    return _random_raster(8, 6, seed=42)


@pytest.fixture
def sample_bgra_colors():
    """
    Provide a list of sample BGRA color tuples for testing.

    Returns:
        List of (B, G, R, A) tuples with common test colors
    """
    return [
        (0, 0, 255, 255),      # Red
        (0, 255, 0, 255),      # Green
        (255, 0, 0, 255),      # Blue
        (255, 255, 255, 255),  # White
        (0, 0, 0, 255),        # Black
        (128, 128, 128, 255),  # Gray
    ]
