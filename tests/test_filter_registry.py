"""
Tests for the filter registry.

Tests cover:
- Registration, lookup and removal
- Metadata and tag filtering
- The default registry contents
"""

import unittest

from PE_Libs.constants import TAG_LIVE_PREVIEW
from PE_Libs.ImageEditingLib.filter_registry import (
    FilterRegistry,
    get_default_registry,
    register_default_filters,
)
from PE_Libs.ImageEditingLib.image_models import FilterKind, FilterParameters, RasterBuffer


def _invert(source, params):
    inverted = bytearray(source.data)
    for i in range(0, len(inverted), 4):
        for c in range(3):
            inverted[i + c] = 255 - inverted[i + c]
    return RasterBuffer(source.width, source.height, inverted)


class TestFilterRegistry(unittest.TestCase):
    """Test FilterRegistry behavior."""

    def setUp(self):
        self.registry = FilterRegistry()
        self.buffer = RasterBuffer(1, 1, bytes([10, 20, 30, 255]))

    def test_register_and_execute(self):
        self.registry.register(FilterKind.SEPIA, _invert, description="invert", tags=["Color"])

        result = self.registry.execute(FilterKind.SEPIA, self.buffer, FilterParameters())

        self.assertEqual(result.pixel(0, 0), (245, 235, 225, 255))
        self.assertTrue(self.registry.has_filter(FilterKind.SEPIA))

    def test_register_duplicate(self):
        self.registry.register(FilterKind.SEPIA, _invert)

        with self.assertRaises(RuntimeError):
            self.registry.register(FilterKind.SEPIA, _invert)

    def test_register_rejects_non_kind(self):
        with self.assertRaises(ValueError):
            self.registry.register("Sepia", _invert)

    def test_register_rejects_non_callable(self):
        with self.assertRaises(ValueError):
            self.registry.register(FilterKind.SEPIA, "not callable")

    def test_unregister(self):
        self.registry.register(FilterKind.SEPIA, _invert)

        self.assertTrue(self.registry.unregister(FilterKind.SEPIA))
        self.assertFalse(self.registry.unregister(FilterKind.SEPIA))
        self.assertFalse(self.registry.has_filter(FilterKind.SEPIA))

    def test_get_filter_missing(self):
        with self.assertRaises(KeyError):
            self.registry.get_filter(FilterKind.GRAYSCALE)

    def test_metadata_is_a_copy(self):
        self.registry.register(FilterKind.SEPIA, _invert, tags=["color"])

        meta = self.registry.get_metadata(FilterKind.SEPIA)
        meta["tags"].append("mutated")

        self.assertEqual(self.registry.get_metadata(FilterKind.SEPIA)["tags"], ["color"])

    def test_filter_by_tag_is_case_insensitive(self):
        self.registry.register(FilterKind.SEPIA, _invert, tags=["Color"])
        self.registry.register(FilterKind.GRAYSCALE, _invert, tags=["color"])
        self.registry.register(FilterKind.EDGE_DETECTION, _invert, tags=["edge"])

        self.assertEqual(
            self.registry.filter_by_tag("COLOR"),
            [FilterKind.GRAYSCALE, FilterKind.SEPIA],
        )

    def test_clear(self):
        register_default_filters(self.registry)

        self.registry.clear()

        self.assertEqual(self.registry.list_kinds(), [])


class TestDefaultRegistry(unittest.TestCase):
    """Test the built-in filter set."""

    def test_singleton(self):
        self.assertIs(get_default_registry(), get_default_registry())

    def test_registers_every_filter_but_none(self):
        kinds = set(get_default_registry().list_kinds())

        self.assertEqual(kinds, set(FilterKind) - {FilterKind.NONE})

    def test_live_preview_filters(self):
        self.assertEqual(
            get_default_registry().filter_by_tag(TAG_LIVE_PREVIEW),
            [FilterKind.BRIGHTNESS_CONTRAST, FilterKind.GAUSSIAN_BLUR],
        )

    def test_parameter_metadata(self):
        meta = get_default_registry().get_all_metadata()

        self.assertEqual(meta[FilterKind.GAUSSIAN_BLUR]["uses_parameters"], ["blur_radius"])
        self.assertEqual(meta[FilterKind.GRAYSCALE]["uses_parameters"], [])
