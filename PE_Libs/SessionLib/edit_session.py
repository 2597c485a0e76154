"""
Edit session: the owner of all mutable editing state.

An EditSession holds the original and current rasters, the undo/redo history
and the dirty flag, and moves between the states

    Empty -> Loaded -> Edited <-> {Undone, Redone} -> Saved

Only one mutating operation (load, apply, undo, redo, reset) may run at a
time. A request that arrives while another is running is rejected with
SessionBusyError rather than queued. Reads are always allowed because
buffers are never modified after they are produced.

Classes:
    SessionState: The session lifecycle states
    EditSession: Orchestrates filters, history and histograms
"""

from enum import Enum
from functools import wraps
from typing import Callable, Optional, TypeVar, Union
import logging
import threading

from PE_Libs.errors import (
    HistoryEmptyError,
    NoCurrentImageError,
    NoOriginalImageError,
    SessionBusyError,
)
from PE_Libs.ImageEditingLib.filter_engine import transform
from PE_Libs.ImageEditingLib.histogram import try_compute_histogram
from PE_Libs.ImageEditingLib.image_models import (
    FilterKind,
    FilterParameters,
    ImageHistogram,
    RasterBuffer,
    RasterSnapshot,
)
from PE_Libs.SessionLib.history_manager import HistoryManager

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SessionState(Enum):
    EMPTY = "Empty"
    LOADED = "Loaded"
    EDITED = "Edited"
    UNDONE = "Undone"
    REDONE = "Redone"
    SAVED = "Saved"


def _single_flight(method: Callable[..., T]) -> Callable[..., T]:
    """Reject the call with SessionBusyError if another mutation is running."""

    @wraps(method)
    def wrapper(self: "EditSession", *args, **kwargs) -> T:
        if not self._processing.acquire(blocking=False):
            logger.warning(f"Rejected {method.__name__}: another operation is in progress")
            raise SessionBusyError(
                f"Cannot {method.__name__} while another operation is in progress"
            )
        try:
            return method(self, *args, **kwargs)
        finally:
            self._processing.release()

    return wrapper


class EditSession:
    """
    Load an image, apply filters and step through edit history.

    Every mutating method returns a RasterSnapshot of the new current buffer
    and its histogram (None if the histogram could not be computed).

    Example:
        >>> session = EditSession()
        >>> session.load(RasterBuffer(1, 1, bytes([100, 150, 200, 255])))
        >>> session.apply(FilterKind.GRAYSCALE)
        >>> session.undo().buffer.pixel(0, 0)
        (100, 150, 200, 255)
    """

    def __init__(self):
        self._history = HistoryManager()
        self._original: Optional[RasterBuffer] = None
        self._current: Optional[RasterBuffer] = None
        self._histogram: Optional[ImageHistogram] = None
        self._dirty = False
        self._state = SessionState.EMPTY
        self._processing = threading.Lock()

    # ------------------------------------------------------------------
    # Read-only queries
    # ------------------------------------------------------------------

    @property
    def current(self) -> Optional[RasterBuffer]:
        return self._current

    @property
    def original(self) -> Optional[RasterBuffer]:
        return self._original

    @property
    def histogram(self) -> Optional[ImageHistogram]:
        return self._histogram

    @property
    def is_dirty(self) -> bool:
        return self._dirty

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def can_undo(self) -> bool:
        return self._history.can_undo

    @property
    def can_redo(self) -> bool:
        return self._history.can_redo

    @property
    def undo_count(self) -> int:
        return self._history.undo_count

    @property
    def redo_count(self) -> int:
        return self._history.redo_count

    @property
    def is_processing(self) -> bool:
        return self._processing.locked()

    def snapshot(self) -> RasterSnapshot:
        """
        Current buffer and histogram.

        Raises:
            NoCurrentImageError: If nothing has been loaded
        """
        if self._current is None:
            raise NoCurrentImageError("No image loaded")
        return RasterSnapshot(self._current, self._histogram)

    # ------------------------------------------------------------------
    # Mutating operations
    # ------------------------------------------------------------------

    @_single_flight
    def load(self, buffer: RasterBuffer) -> RasterSnapshot:
        """
        Start editing a new image, discarding all history.

        Raises:
            TypeError: If buffer is not a RasterBuffer
        """
        if not isinstance(buffer, RasterBuffer):
            raise TypeError(f"Expected RasterBuffer, got {type(buffer)}")

        self._original = buffer.clone()
        self._current = self._original.clone()
        self._history.clear()
        self._dirty = False
        self._state = SessionState.LOADED
        logger.info(f"Loaded {buffer.width}x{buffer.height} raster")
        return self._commit()

    @_single_flight
    def apply(
        self,
        kind: Union[FilterKind, str],
        params: Optional[FilterParameters] = None,
    ) -> RasterSnapshot:
        """
        Apply a filter to the current image.

        The pre-edit image goes onto the undo stack and the redo stack is
        cleared. The filter runs before any state changes, so a failing filter
        leaves the session untouched.

        Raises:
            NoCurrentImageError: If nothing has been loaded
        """
        if self._current is None:
            raise NoCurrentImageError("Cannot apply a filter before an image is loaded")

        result = transform(self._current, kind, params)

        self._history.push_undo(self._current)
        self._history.clear_redo()
        self._current = result
        self._dirty = True
        self._state = SessionState.EDITED
        logger.debug(f"Applied {kind}, undo depth {self._history.undo_count}")
        return self._commit()

    @_single_flight
    def undo(self) -> RasterSnapshot:
        """
        Step back to the previous image.

        The session stays dirty only while older entries remain.

        Raises:
            HistoryEmptyError: If there is nothing to undo
        """
        if not self._history.can_undo or self._current is None:
            raise HistoryEmptyError("Nothing to undo")

        self._history.push_redo(self._current)
        self._current = self._history.pop_undo()
        self._dirty = self._history.can_undo
        self._state = SessionState.UNDONE
        return self._commit()

    @_single_flight
    def redo(self) -> RasterSnapshot:
        """
        Re-apply the most recently undone image.

        The redo stack is not cleared, so a chain of undos can be replayed.

        Raises:
            HistoryEmptyError: If there is nothing to redo
        """
        if not self._history.can_redo or self._current is None:
            raise HistoryEmptyError("Nothing to redo")

        self._history.push_undo(self._current)
        self._current = self._history.pop_redo()
        self._dirty = True
        self._state = SessionState.REDONE
        return self._commit()

    @_single_flight
    def reset(self) -> RasterSnapshot:
        """
        Restore the originally loaded image.

        The pre-reset image can be recovered with undo. Unlike apply, reset
        leaves the redo stack untouched, so edits undone before the reset can
        still be redone afterwards.

        Raises:
            NoOriginalImageError: If nothing has been loaded
        """
        if self._original is None:
            raise NoOriginalImageError("Cannot reset before an image is loaded")

        if self._current is not None:
            self._history.push_undo(self._current)
        self._current = self._original.clone()
        self._dirty = False
        self._state = SessionState.LOADED
        logger.info("Image reset to original")
        return self._commit()

    def mark_saved(self) -> None:
        """Record that the current image has been written out. History is kept."""
        self._dirty = False
        if self._current is not None:
            self._state = SessionState.SAVED

    def _commit(self) -> RasterSnapshot:
        self._histogram = try_compute_histogram(self._current)
        return RasterSnapshot(self._current, self._histogram)
