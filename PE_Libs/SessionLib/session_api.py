"""
Function-style entry points for presentation layers.

A GUI, CLI or test harness drives editing through these functions and owns
everything else (dialogs, key bindings, rendering). The EditSession returned
by load_raster or open_image is the handle passed to every other call.

Functions:
    load_raster: Start a session from raw BGRA bytes
    apply_filter: Apply a filter to the session's current image
    undo / redo / reset: History navigation
    current_buffer: Read the session's current image
    open_image: Start a session from an image file
    save_image: Write the current image to disk and mark the session saved
"""

from pathlib import Path
from typing import Optional, Union

from PE_Libs.constants import DEFAULT_JPEG_QUALITY
from PE_Libs.errors import NoCurrentImageError
from PE_Libs.ImageEditingLib.image_io import load_raster_file, save_raster_file
from PE_Libs.ImageEditingLib.image_models import (
    FilterKind,
    FilterParameters,
    RasterBuffer,
    RasterSnapshot,
)
from PE_Libs.SessionLib.edit_session import EditSession


def load_raster(data: bytes, width: int, height: int) -> EditSession:
    """
    Create a session holding the given BGRA pixels.

    Raises:
        InvalidDimensionsError: If len(data) != width * height * 4
    """
    session = EditSession()
    session.load(RasterBuffer(width, height, data))
    return session


def apply_filter(
    session: EditSession,
    kind: Union[FilterKind, str],
    params: Optional[FilterParameters] = None,
) -> RasterSnapshot:
    return session.apply(kind, params)


def undo(session: EditSession) -> RasterSnapshot:
    return session.undo()


def redo(session: EditSession) -> RasterSnapshot:
    return session.redo()


def reset(session: EditSession) -> RasterSnapshot:
    return session.reset()


def current_buffer(session: EditSession) -> RasterBuffer:
    """
    Raises:
        NoCurrentImageError: If nothing has been loaded
    """
    if session.current is None:
        raise NoCurrentImageError("No image loaded")
    return session.current


def open_image(file_path: Union[str, Path]) -> EditSession:
    """Load an image file into a new session."""
    session = EditSession()
    session.load(load_raster_file(file_path))
    return session


def save_image(
    session: EditSession,
    file_path: Union[str, Path],
    quality: int = DEFAULT_JPEG_QUALITY,
) -> Path:
    """
    Save the session's current image and clear its dirty flag.

    Raises:
        NoCurrentImageError: If nothing has been loaded
    """
    path = save_raster_file(current_buffer(session), file_path, quality=quality)
    session.mark_saved()
    return path
