"""
Exception types raised by Pixel Edit.

Every error derives from PixelEditError and from the closest built-in
exception, so callers may catch either.
"""


class PixelEditError(Exception):
    """Base class for all Pixel Edit errors."""


class InvalidDimensionsError(PixelEditError, ValueError):
    """Raised when a byte sequence does not hold width * height * 4 bytes."""


class HistoryEmptyError(PixelEditError, IndexError):
    """Raised when undo or redo is requested with an empty stack."""


class NoCurrentImageError(PixelEditError, RuntimeError):
    """Raised when an edit is attempted before any image was loaded."""


class NoOriginalImageError(PixelEditError, RuntimeError):
    """Raised when a reset is attempted before any image was loaded."""


class SessionBusyError(PixelEditError, RuntimeError):
    """Raised when a mutating operation is requested while another is in flight."""
