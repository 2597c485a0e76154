"""
Image file I/O for Pixel Edit.

This module converts between Pillow images and BGRA raster buffers and
reads/writes them on disk. The encoder is chosen from the file extension.

Functions:
    raster_from_image: Convert any Pillow image to a RasterBuffer
    raster_to_image: Convert a RasterBuffer to an RGBA Pillow image
    load_raster_file: Load an image file into a RasterBuffer
    save_raster_file: Save a RasterBuffer as PNG, JPEG or BMP
    default_edited_name: Suggested filename for an edited copy
    is_supported_format: Check whether a path has a readable image extension
"""

from pathlib import Path
from typing import Any, List, Optional, Union
import logging

import numpy as np
from PIL import Image

from PE_Libs.constants import (
    DEFAULT_EDITED_NAME,
    DEFAULT_JPEG_QUALITY,
    DEFAULT_OUTPUT_FORMAT,
    EDITED_FILE_SUFFIX,
    OPAQUE_ONLY_FORMATS,
    SAVE_FORMATS,
    SUPPORTED_STANDARD_IMAGES,
)
from PE_Libs.ImageEditingLib.image_models import RasterBuffer

logger = logging.getLogger(__name__)

# Pillow RGBA <-> raster BGRA; the permutation is its own inverse
_CHANNEL_SWAP = [2, 1, 0, 3]

PathLike = Union[str, Path]


def get_supported_image_formats() -> List[str]:
    return sorted(SUPPORTED_STANDARD_IMAGES)


def is_supported_format(file_path: PathLike) -> bool:
    return Path(file_path).suffix.lower() in SUPPORTED_STANDARD_IMAGES


def raster_from_image(image: Any) -> RasterBuffer:
    """
    Convert a Pillow image of any mode to a BGRA RasterBuffer.

    Raises:
        TypeError: If image is not a Pillow image
    """
    if not hasattr(image, "convert"):
        raise TypeError(f"Expected PIL Image, got {type(image)}")

    rgba = np.asarray(image.convert("RGBA"), dtype=np.uint8)
    return RasterBuffer.from_array(rgba[..., _CHANNEL_SWAP])


def raster_to_image(buffer: RasterBuffer) -> Any:
    """Convert a RasterBuffer to an RGBA Pillow image."""
    if not isinstance(buffer, RasterBuffer):
        raise TypeError(f"Expected RasterBuffer, got {type(buffer)}")

    rgba = np.ascontiguousarray(buffer.as_array()[..., _CHANNEL_SWAP])
    return Image.frombytes("RGBA", (buffer.width, buffer.height), rgba.tobytes())


def load_raster_file(file_path: PathLike) -> RasterBuffer:
    """
    Load an image file into a RasterBuffer.

    Args:
        file_path: Path to a PNG, JPG, BMP, GIF, TIFF or WEBP file

    Returns:
        The decoded image in BGRA layout (first frame for animated formats)

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the path is not a file or the extension is unsupported
    """
    path = Path(file_path)

    if not path.exists():
        raise FileNotFoundError(f"Image file not found: {path}")

    if not path.is_file():
        raise ValueError(f"Path is not a file: {path}")

    if not is_supported_format(path):
        raise ValueError(
            f"Unsupported image format: {path.suffix}. "
            f"Supported: {', '.join(get_supported_image_formats())}"
        )

    with Image.open(path) as img:
        img.load()
        buffer = raster_from_image(img)

    logger.info(f"Loaded {path.name} ({buffer.width}x{buffer.height})")
    return buffer


def save_raster_file(
    buffer: RasterBuffer,
    file_path: PathLike,
    quality: int = DEFAULT_JPEG_QUALITY,
) -> Path:
    """
    Save a RasterBuffer to disk.

    The format follows the extension: .jpg/.jpeg -> JPEG (using quality),
    .bmp -> BMP, anything else -> PNG. JPEG and BMP are written without alpha.

    Raises:
        OSError: If the parent directory does not exist or the file cannot be written
        ValueError: If quality is outside 1-100
    """
    path = Path(file_path)

    if not path.parent.exists():
        raise OSError(f"Output directory does not exist: {path.parent}")

    if not 1 <= int(quality) <= 100:
        raise ValueError(f"quality must be 1-100, got {quality}")

    save_format = SAVE_FORMATS.get(path.suffix.lower(), DEFAULT_OUTPUT_FORMAT)
    image = raster_to_image(buffer)
    if save_format in OPAQUE_ONLY_FORMATS:
        image = image.convert("RGB")

    if save_format == "JPEG":
        image.save(path, format=save_format, quality=int(quality))
    else:
        image.save(path, format=save_format)

    logger.info(f"Saved {path.name} as {save_format}")
    return path


def default_edited_name(file_path: Optional[PathLike]) -> str:
    """
    Suggest a filename for the edited copy of an image.

    "photo.jpg" -> "photo_edited.jpg"; no path -> "edited_image.png"
    """
    if not file_path:
        return DEFAULT_EDITED_NAME

    path = Path(file_path)
    return f"{path.stem}{EDITED_FILE_SUFFIX}{path.suffix}"
