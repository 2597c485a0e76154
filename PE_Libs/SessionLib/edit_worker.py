"""
Background execution of edit session operations.

EditWorker runs session operations on a single worker thread so that filter
and histogram computation never block an interactive caller. A request made
while another is still running is rejected immediately with SessionBusyError;
nothing is queued, so rapid slider changes cannot build up a backlog.
Accepted operations complete in the order they were accepted.
"""

from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Optional, Union
import logging
import threading

from PE_Libs.errors import SessionBusyError
from PE_Libs.ImageEditingLib.image_models import (
    FilterKind,
    FilterParameters,
    RasterBuffer,
    RasterSnapshot,
)
from PE_Libs.SessionLib.edit_session import EditSession

logger = logging.getLogger(__name__)


class EditWorker:
    """
    Single-flight background runner for one EditSession.

    Example:
        >>> with EditWorker(session) as worker:
        ...     future = worker.submit_apply(FilterKind.GAUSSIAN_BLUR, FilterParameters(blur_radius=4))
        ...     snapshot = future.result()
    """

    def __init__(self, session: Optional[EditSession] = None):
        self.session = session if session is not None else EditSession()
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="pixel-edit")
        self._lock = threading.Lock()
        self._in_flight: Optional[Future] = None

    @property
    def is_busy(self) -> bool:
        with self._lock:
            return self._in_flight is not None and not self._in_flight.done()

    def _submit(self, name: str, operation: Callable[..., RasterSnapshot], *args: Any) -> "Future[RasterSnapshot]":
        with self._lock:
            if self._in_flight is not None and not self._in_flight.done():
                logger.warning(f"Rejected {name}: another operation is in progress")
                raise SessionBusyError(
                    f"Cannot {name} while another operation is in progress"
                )
            future = self._executor.submit(operation, *args)
            self._in_flight = future

        logger.debug(f"Accepted {name}")
        return future

    def submit_load(self, buffer: RasterBuffer) -> "Future[RasterSnapshot]":
        return self._submit("load", self.session.load, buffer)

    def submit_apply(
        self,
        kind: Union[FilterKind, str],
        params: Optional[FilterParameters] = None,
    ) -> "Future[RasterSnapshot]":
        return self._submit("apply", self.session.apply, kind, params)

    def submit_undo(self) -> "Future[RasterSnapshot]":
        return self._submit("undo", self.session.undo)

    def submit_redo(self) -> "Future[RasterSnapshot]":
        return self._submit("redo", self.session.redo)

    def submit_reset(self) -> "Future[RasterSnapshot]":
        return self._submit("reset", self.session.reset)

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> "EditWorker":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown(wait=True)
