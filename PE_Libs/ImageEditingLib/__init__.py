"""
ImageEditingLib - Core image editing functionality

This module provides raster buffers, pixel filters, histograms and
image file conversion for the Pixel Edit project.
"""

from PE_Libs.ImageEditingLib.image_models import (
    AVAILABLE_FILTERS,
    FilterKind,
    FilterParameters,
    ImageHistogram,
    RasterBuffer,
    RasterSnapshot,
)
from PE_Libs.ImageEditingLib.filter_engine import transform
from PE_Libs.ImageEditingLib.filter_registry import FilterRegistry, get_default_registry
from PE_Libs.ImageEditingLib.histogram import compute_histogram, try_compute_histogram
from PE_Libs.ImageEditingLib.image_io import (
    default_edited_name,
    load_raster_file,
    raster_from_image,
    raster_to_image,
    save_raster_file,
)

__all__ = [
    "AVAILABLE_FILTERS",
    "FilterKind",
    "FilterParameters",
    "ImageHistogram",
    "RasterBuffer",
    "RasterSnapshot",
    "transform",
    "FilterRegistry",
    "get_default_registry",
    "compute_histogram",
    "try_compute_histogram",
    "default_edited_name",
    "load_raster_file",
    "raster_from_image",
    "raster_to_image",
    "save_raster_file",
]
