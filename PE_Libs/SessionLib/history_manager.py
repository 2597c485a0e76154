"""
Bounded undo/redo history of raster snapshots.

Every pushed buffer is cloned, so the history never aliases a buffer the
caller still holds. The undo stack keeps at most MAX_HISTORY_SIZE entries and
evicts the oldest when it overflows; the redo stack is unbounded.
"""

from collections import deque
from typing import Deque, List
import logging

from PE_Libs.constants import MAX_HISTORY_SIZE
from PE_Libs.errors import HistoryEmptyError
from PE_Libs.ImageEditingLib.image_models import RasterBuffer

logger = logging.getLogger(__name__)


class HistoryManager:
    """
    Undo and redo stacks of RasterBuffer snapshots.

    Example:
        >>> history = HistoryManager()
        >>> history.push_undo(before_edit)
        >>> history.can_undo
        True
        >>> restored = history.pop_undo()
    """

    def __init__(self):
        self._undo: Deque[RasterBuffer] = deque(maxlen=MAX_HISTORY_SIZE)
        self._redo: List[RasterBuffer] = []

    @property
    def capacity(self) -> int:
        return MAX_HISTORY_SIZE

    @property
    def can_undo(self) -> bool:
        return len(self._undo) > 0

    @property
    def can_redo(self) -> bool:
        return len(self._redo) > 0

    @property
    def undo_count(self) -> int:
        return len(self._undo)

    @property
    def redo_count(self) -> int:
        return len(self._redo)

    def push_undo(self, buffer: RasterBuffer) -> None:
        """
        Push a copy of buffer onto the undo stack.

        When the stack is full the oldest entry is dropped.
        """
        if len(self._undo) == self._undo.maxlen:
            logger.debug("Undo history full, evicting oldest entry")
        self._undo.append(buffer.clone())

    def push_redo(self, buffer: RasterBuffer) -> None:
        """Push a copy of buffer onto the redo stack."""
        self._redo.append(buffer.clone())

    def pop_undo(self) -> RasterBuffer:
        """
        Remove and return the most recent undo entry.

        Raises:
            HistoryEmptyError: If the undo stack is empty
        """
        if not self._undo:
            raise HistoryEmptyError("Nothing to undo")
        return self._undo.pop()

    def pop_redo(self) -> RasterBuffer:
        """
        Remove and return the most recent redo entry.

        Raises:
            HistoryEmptyError: If the redo stack is empty
        """
        if not self._redo:
            raise HistoryEmptyError("Nothing to redo")
        return self._redo.pop()

    def clear_redo(self) -> None:
        self._redo.clear()

    def clear(self) -> None:
        self._undo.clear()
        self._redo.clear()

    def undo_entries(self) -> List[RasterBuffer]:
        """Undo entries from oldest to newest (copies)."""
        return [entry.clone() for entry in self._undo]
