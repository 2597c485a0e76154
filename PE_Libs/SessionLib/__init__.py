"""
SessionLib - Edit sessions and history

This module owns the mutable editing state: the bounded undo/redo
history, the edit session state machine and background execution.
"""

from PE_Libs.SessionLib.history_manager import HistoryManager
from PE_Libs.SessionLib.edit_session import EditSession, SessionState
from PE_Libs.SessionLib.edit_worker import EditWorker
from PE_Libs.SessionLib.session_api import (
    load_raster,
    apply_filter,
    undo,
    redo,
    reset,
    current_buffer,
    open_image,
    save_image,
)

__all__ = [
    "HistoryManager",
    "EditSession",
    "SessionState",
    "EditWorker",
    "load_raster",
    "apply_filter",
    "undo",
    "redo",
    "reset",
    "current_buffer",
    "open_image",
    "save_image",
]
