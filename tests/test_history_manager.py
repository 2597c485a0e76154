"""
Unit tests for history_manager module.
"""

import pytest

from PE_Libs.constants import MAX_HISTORY_SIZE
from PE_Libs.errors import HistoryEmptyError
from PE_Libs.ImageEditingLib.image_models import RasterBuffer
from PE_Libs.SessionLib.history_manager import HistoryManager


def _numbered(n):
    """A 1x1 raster whose blue channel records n."""
    return RasterBuffer(1, 1, bytes([n, 0, 0, 255]))


class TestHistoryManager:
    """Tests for HistoryManager stacks."""

    def test_starts_empty(self):
        history = HistoryManager()

        assert not history.can_undo
        assert not history.can_redo
        assert history.capacity == 20

    def test_undo_is_lifo(self):
        history = HistoryManager()
        for n in range(3):
            history.push_undo(_numbered(n))

        assert [history.pop_undo().pixel(0, 0)[0] for _ in range(3)] == [2, 1, 0]
        assert not history.can_undo

    def test_redo_is_lifo(self):
        history = HistoryManager()
        history.push_redo(_numbered(1))
        history.push_redo(_numbered(2))

        assert history.pop_redo().pixel(0, 0)[0] == 2
        assert history.pop_redo().pixel(0, 0)[0] == 1

    def test_pushes_clones(self):
        """History holds copies, never the pushed buffer itself."""
        history = HistoryManager()
        buffer = _numbered(5)

        history.push_undo(buffer)

        restored = history.pop_undo()
        assert restored == buffer
        assert restored is not buffer
        assert restored.data is not buffer.data

    def test_pop_empty_undo(self):
        with pytest.raises(HistoryEmptyError):
            HistoryManager().pop_undo()

    def test_pop_empty_redo(self):
        with pytest.raises(HistoryEmptyError):
            HistoryManager().pop_redo()

    def test_history_empty_is_index_error(self):
        with pytest.raises(IndexError):
            HistoryManager().pop_undo()

    def test_bounded_undo_keeps_most_recent(self):
        """Pushing 25 entries keeps the last 20; the first five are evicted."""
        history = HistoryManager()
        for n in range(25):
            history.push_undo(_numbered(n))

        assert history.undo_count == MAX_HISTORY_SIZE
        assert [entry.pixel(0, 0)[0] for entry in history.undo_entries()] == list(range(5, 25))

        popped = [history.pop_undo().pixel(0, 0)[0] for _ in range(MAX_HISTORY_SIZE)]
        assert popped == list(range(24, 4, -1))

    def test_redo_is_unbounded(self):
        history = HistoryManager()
        for n in range(30):
            history.push_redo(_numbered(n))

        assert history.redo_count == 30

    def test_clear_redo_keeps_undo(self):
        history = HistoryManager()
        history.push_undo(_numbered(1))
        history.push_redo(_numbered(2))

        history.clear_redo()

        assert history.can_undo
        assert not history.can_redo

    def test_clear(self):
        history = HistoryManager()
        history.push_undo(_numbered(1))
        history.push_redo(_numbered(2))

        history.clear()

        assert history.undo_count == 0
        assert history.redo_count == 0
