"""
Unit tests for image_models module.

Tests the raster buffer invariants, filter kind parsing, filter
parameters and histogram value objects.
"""

import numpy as np
import pytest

from PE_Libs.errors import InvalidDimensionsError, PixelEditError
from PE_Libs.ImageEditingLib.image_models import (
    AVAILABLE_FILTERS,
    FilterKind,
    FilterParameters,
    ImageHistogram,
    RasterBuffer,
)


class TestRasterBufferConstruction:
    """Tests for RasterBuffer validation."""

    def test_accepts_matching_length(self):
        """Should accept width * height * 4 bytes."""
        buffer = RasterBuffer(2, 3, bytes(24))

        assert buffer.width == 2
        assert buffer.height == 3
        assert buffer.stride == 8
        assert buffer.pixel_count == 6

    @pytest.mark.parametrize("length", [0, 23, 25, 48])
    def test_rejects_wrong_length(self, length):
        """Should raise InvalidDimensionsError when the byte count is off."""
        with pytest.raises(InvalidDimensionsError):
            RasterBuffer(2, 3, bytes(length))

    def test_rejects_negative_dimensions(self):
        with pytest.raises(InvalidDimensionsError):
            RasterBuffer(-1, 1, bytes(0))

    def test_invalid_dimensions_is_value_error(self):
        """Callers can catch the built-in exception or the library base."""
        with pytest.raises(ValueError):
            RasterBuffer(1, 1, bytes(3))
        with pytest.raises(PixelEditError):
            RasterBuffer(1, 1, bytes(3))

    def test_empty_raster_is_valid(self):
        buffer = RasterBuffer(0, 0, b"")

        assert buffer.pixel_count == 0
        assert buffer.as_array().shape == (0, 0, 4)

    def test_copies_input_bytes(self):
        """Mutating the caller's bytearray should not affect the buffer."""
        data = bytearray([1, 2, 3, 4])
        buffer = RasterBuffer(1, 1, data)

        data[0] = 99

        assert buffer.pixel(0, 0) == (1, 2, 3, 4)


class TestRasterBufferAccess:
    """Tests for pixel access, cloning and numpy conversion."""

    def test_pixel_order_is_bgra(self, make_raster):
        buffer = make_raster(2, 1, [(1, 2, 3, 4), (5, 6, 7, 8)])

        assert buffer.pixel(0, 0) == (1, 2, 3, 4)
        assert buffer.pixel(1, 0) == (5, 6, 7, 8)

    def test_pixel_out_of_bounds(self, sample_pixel_raster):
        with pytest.raises(IndexError):
            sample_pixel_raster.pixel(1, 0)

    def test_clone_is_equal(self, noisy_raster):
        clone = noisy_raster.clone()

        assert clone == noisy_raster
        assert clone.to_bytes() == noisy_raster.to_bytes()

    def test_clone_never_aliases(self, noisy_raster):
        clone = noisy_raster.clone()

        assert clone is not noisy_raster
        assert clone.data is not noisy_raster.data

    def test_storage_is_immutable(self, noisy_raster):
        """Pixels cannot be edited in place through the data attribute."""
        before = noisy_raster.to_bytes()

        with pytest.raises(TypeError):
            noisy_raster.data[0] = 1

        assert isinstance(noisy_raster.data, bytes)
        assert noisy_raster.to_bytes() == before

    def test_as_array_is_read_only(self, noisy_raster):
        view = noisy_raster.as_array()

        assert view.shape == (6, 8, 4)
        with pytest.raises(ValueError):
            view[0, 0, 0] = 1

    def test_from_array_round_trip(self, noisy_raster):
        rebuilt = RasterBuffer.from_array(np.array(noisy_raster.as_array()))

        assert rebuilt == noisy_raster

    def test_from_array_rejects_wrong_shape(self):
        with pytest.raises(InvalidDimensionsError):
            RasterBuffer.from_array(np.zeros((2, 2, 3), dtype=np.uint8))

    def test_blank(self):
        buffer = RasterBuffer.blank(3, 2, (10, 20, 30, 40))

        assert buffer.pixel_count == 6
        assert all(buffer.pixel(x, y) == (10, 20, 30, 40) for x in range(3) for y in range(2))


class TestFilterKind:
    """Tests for FilterKind parsing."""

    @pytest.mark.parametrize("text", ["GaussianBlur", "gaussian_blur", "Gaussian Blur", "GAUSSIAN-BLUR"])
    def test_parse_variants(self, text):
        assert FilterKind.parse(text) is FilterKind.GAUSSIAN_BLUR

    def test_parse_passes_through_kind(self):
        assert FilterKind.parse(FilterKind.SEPIA) is FilterKind.SEPIA

    def test_parse_unknown(self):
        with pytest.raises(ValueError):
            FilterKind.parse("posterize")

    def test_available_filters_menu_order(self):
        assert AVAILABLE_FILTERS[0] is FilterKind.NONE
        assert FilterKind.BRIGHTNESS not in AVAILABLE_FILTERS
        assert AVAILABLE_FILTERS[-1] is FilterKind.EDGE_DETECTION


class TestFilterParameters:
    """Tests for FilterParameters value behavior."""

    def test_defaults(self):
        params = FilterParameters()

        assert params.brightness == 0
        assert params.contrast == 0
        assert params.blur_radius == 3

    def test_copy_with_changes(self):
        params = FilterParameters(brightness=10)
        changed = params.copy(contrast=-20)

        assert changed == FilterParameters(brightness=10, contrast=-20)
        assert params.contrast == 0

    def test_dict_round_trip_ignores_unknown_keys(self):
        data = FilterParameters(brightness=5, blur_radius=7).to_dict()
        data["sharpness"] = 3

        assert FilterParameters.from_dict(data) == FilterParameters(brightness=5, blur_radius=7)


class TestImageHistogram:
    """Tests for ImageHistogram helpers."""

    def test_channel_lookup(self):
        histogram = ImageHistogram(red=(1, 2), green=(3, 4), blue=(5, 6), max_value=6)

        assert histogram.channel("Green") == (3, 4)
        with pytest.raises(KeyError):
            histogram.channel("alpha")

    def test_normalized(self):
        histogram = ImageHistogram(red=(2, 4), green=(0, 0), blue=(1, 0), max_value=4)

        assert histogram.normalized("red") == (0.5, 1.0)

    def test_normalized_with_zero_max(self):
        histogram = ImageHistogram(red=(0, 0), green=(0, 0), blue=(0, 0), max_value=0)

        assert histogram.normalized("blue") == (0.0, 0.0)
