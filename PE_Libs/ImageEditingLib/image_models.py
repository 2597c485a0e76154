"""
Image editing data models for Pixel Edit.

This module defines core data structures used throughout the image editing system.

Classes:
    RasterBuffer: Fixed-format BGRA pixel storage with a validated byte length
    FilterKind: Closed set of filters the engine can apply
    FilterParameters: Slider values consumed by the parametric filters
    ImageHistogram: Per-channel intensity counts derived from a buffer
    RasterSnapshot: A buffer bundled with its histogram

Type Aliases:
    BgraPixel: A tuple of 4 integers in (blue, green, red, alpha) order (0-255)
"""

from dataclasses import asdict, dataclass, fields, replace
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union

import numpy as np

from PE_Libs.constants import (
    BYTES_PER_PIXEL,
    DEFAULT_BLUR_RADIUS,
    DEFAULT_BRIGHTNESS,
    DEFAULT_CONTRAST,
    HISTOGRAM_CHANNELS,
)
from PE_Libs.errors import InvalidDimensionsError

BgraPixel = Tuple[int, int, int, int]


@dataclass(eq=True)
class RasterBuffer:
    """Rectangular grid of pixels stored as a flat BGRA byte sequence.

    The byte length is validated on construction. Pixels are held as
    immutable bytes, so a buffer handed out by a session or kept in history
    can never be edited in place.

    Attributes:
        width: Width in pixels
        height: Height in pixels
        data: width * height * 4 bytes, row-major, (blue, green, red, alpha)
    """
    width: int
    height: int
    data: bytes

    def __post_init__(self) -> None:
        for name in ("width", "height"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise InvalidDimensionsError(
                    f"{name} must be a non-negative integer, got {value!r}"
                )

        self.data = bytes(self.data)
        expected = self.width * self.height * BYTES_PER_PIXEL
        if len(self.data) != expected:
            raise InvalidDimensionsError(
                f"Expected {expected} bytes for a {self.width}x{self.height} raster, "
                f"got {len(self.data)}"
            )

    @property
    def stride(self) -> int:
        return self.width * BYTES_PER_PIXEL

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    def clone(self) -> "RasterBuffer":
        """Return a byte-for-byte copy with its own storage."""
        return RasterBuffer(self.width, self.height, bytearray(self.data))

    def to_bytes(self) -> bytes:
        return bytes(self.data)

    def pixel(self, x: int, y: int) -> BgraPixel:
        """Return the (blue, green, red, alpha) tuple at column x, row y."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(
                f"Pixel ({x}, {y}) is outside a {self.width}x{self.height} raster"
            )
        offset = y * self.stride + x * BYTES_PER_PIXEL
        b, g, r, a = self.data[offset:offset + BYTES_PER_PIXEL]
        return b, g, r, a

    def as_array(self) -> np.ndarray:
        """
        Read-only numpy view of the pixels.

        Returns:
            uint8 array of shape (height, width, 4) sharing this buffer's bytes
        """
        if not self.data:
            return np.zeros((self.height, self.width, BYTES_PER_PIXEL), dtype=np.uint8)
        view = np.frombuffer(self.data, dtype=np.uint8).reshape(
            self.height, self.width, BYTES_PER_PIXEL
        )
        view.setflags(write=False)
        return view

    @classmethod
    def from_array(cls, array: np.ndarray) -> "RasterBuffer":
        """
        Build a buffer from a (height, width, 4) array.

        Raises:
            InvalidDimensionsError: If the array is not height x width x 4
        """
        if array.ndim != 3 or array.shape[2] != BYTES_PER_PIXEL:
            raise InvalidDimensionsError(
                f"Expected an array of shape (height, width, {BYTES_PER_PIXEL}), "
                f"got {array.shape}"
            )
        height, width = array.shape[:2]
        data = np.ascontiguousarray(array, dtype=np.uint8).tobytes()
        return cls(int(width), int(height), data)

    @classmethod
    def blank(cls, width: int, height: int, bgra: BgraPixel = (0, 0, 0, 0)) -> "RasterBuffer":
        """Create a buffer where every pixel holds the same BGRA value."""
        return cls(width, height, bytes(bgra) * (width * height))


class FilterKind(Enum):
    NONE = "None"
    GRAYSCALE = "Grayscale"
    BRIGHTNESS = "Brightness"
    CONTRAST = "Contrast"
    BRIGHTNESS_CONTRAST = "BrightnessContrast"
    GAUSSIAN_BLUR = "GaussianBlur"
    EDGE_DETECTION = "EdgeDetection"
    SEPIA = "Sepia"

    @classmethod
    def parse(cls, value: Union["FilterKind", str]) -> "FilterKind":
        """
        Resolve a FilterKind from itself, its name or its value.

        Matching ignores case, spaces, hyphens and underscores, so
        "gaussian_blur", "GaussianBlur" and "Gaussian Blur" all resolve.

        Raises:
            ValueError: If no filter kind matches
        """
        if isinstance(value, cls):
            return value

        key = "".join(ch for ch in str(value).lower() if ch not in " -_")
        for kind in cls:
            if key in (kind.value.lower(), kind.name.lower().replace("_", "")):
                return kind

        valid = ", ".join(kind.value for kind in cls)
        raise ValueError(f"Unknown filter kind: {value!r}. Valid kinds: {valid}")


# Kinds offered to a user, in menu order
AVAILABLE_FILTERS: Tuple[FilterKind, ...] = (
    FilterKind.NONE,
    FilterKind.GRAYSCALE,
    FilterKind.SEPIA,
    FilterKind.BRIGHTNESS_CONTRAST,
    FilterKind.GAUSSIAN_BLUR,
    FilterKind.EDGE_DETECTION,
)


@dataclass(frozen=True)
class FilterParameters:
    """Parameters for the parametric filters.

    Attributes:
        brightness: Brightness adjustment (-100 to +100)
        contrast: Contrast adjustment (-100 to +100)
        blur_radius: Box window radius for Gaussian blur (1-10)
    """
    brightness: float = DEFAULT_BRIGHTNESS
    contrast: float = DEFAULT_CONTRAST
    blur_radius: int = DEFAULT_BLUR_RADIUS

    def copy(self, **changes: Any) -> "FilterParameters":
        """Return a copy, optionally with some fields replaced."""
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FilterParameters":
        """Create from dictionary."""
        known = {field.name for field in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


@dataclass(frozen=True)
class ImageHistogram:
    """RGB intensity histogram of a raster.

    Attributes:
        red: 256 counts of red channel values
        green: 256 counts of green channel values
        blue: 256 counts of blue channel values
        max_value: Largest count over all 768 bins (for display normalization)
    """
    red: Tuple[int, ...]
    green: Tuple[int, ...]
    blue: Tuple[int, ...]
    max_value: int

    def channel(self, name: str) -> Tuple[int, ...]:
        name = str(name).strip().lower()
        if name not in HISTOGRAM_CHANNELS:
            raise KeyError(
                f"Unknown histogram channel '{name}'. "
                f"Available channels: {', '.join(HISTOGRAM_CHANNELS)}"
            )
        return getattr(self, name)

    def normalized(self, name: str) -> Tuple[float, ...]:
        """Channel counts scaled to 0.0-1.0 by max_value."""
        counts = self.channel(name)
        if self.max_value == 0:
            return tuple(0.0 for _ in counts)
        return tuple(count / self.max_value for count in counts)


@dataclass(frozen=True)
class RasterSnapshot:
    """The buffer produced by an edit together with its histogram.

    histogram is None when it could not be computed.
    """
    buffer: RasterBuffer
    histogram: Optional[ImageHistogram]
