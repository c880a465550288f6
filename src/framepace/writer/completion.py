"""Write status tracking and the one-shot completion future."""

import logging
import threading
from concurrent.futures import Future
from typing import Callable, List

from framepace.core import SinkOutcome, WriteStatus


logger = logging.getLogger(__name__)

# Failure text ffmpeg prints when its stdin pipe closes before any data.
BENIGN_EARLY_CLOSE = "pipe:0: End of file"

_ORDER = {
    WriteStatus.NOT_STARTED: 0,
    WriteStatus.IN_PROGRESS: 1,
    WriteStatus.COMPLETED: 2,
}

DiagnosticHandler = Callable[[str], None]
OutcomeHandler = Callable[[SinkOutcome], None]


class CompletionLifecycle:
    """NOT_STARTED -> IN_PROGRESS -> COMPLETED, plus the completion future.

    The future is created once and resolved exactly once from the sink's
    terminal outcome, which may arrive on any thread.
    """

    def __init__(self):
        self._status = WriteStatus.NOT_STARTED
        self._ever_written = False
        self._future: "Future[bool]" = Future()
        self._resolved = False
        self._diagnostic_handlers: List[DiagnosticHandler] = []
        self._outcome_handlers: List[OutcomeHandler] = []
        self._lock = threading.Lock()

    @property
    def status(self) -> WriteStatus:
        return self._status

    @property
    def future(self) -> "Future[bool]":
        return self._future

    @property
    def ever_written(self) -> bool:
        return self._ever_written

    def advance(self, status: WriteStatus) -> None:
        """Move to ``status`` unless that would go backwards."""
        if status is WriteStatus.IN_PROGRESS:
            self._ever_written = True
        if _ORDER[status] > _ORDER[self._status]:
            logger.debug("Write status %s -> %s", self._status.name, status.name)
            self._status = status

    def subscribe_diagnostic(self, handler: DiagnosticHandler) -> None:
        self._diagnostic_handlers.append(handler)

    def subscribe_outcome(self, handler: OutcomeHandler) -> None:
        self._outcome_handlers.append(handler)

    def resolve(self, outcome: SinkOutcome) -> None:
        """Resolve the future from a sink's terminal outcome."""
        with self._lock:
            if self._resolved:
                logger.warning("Ignoring extra sink outcome: %s", outcome)
                return
            self._resolved = True
            benign = not outcome.success and self.is_benign(outcome.message or "")

        # Handlers and future callbacks run unlocked; they may call back in.
        if not outcome.success:
            self._report_failure(outcome.message or "unknown sink error", benign)
        self._future.set_result(outcome.success)

        for handler in list(self._outcome_handlers):
            try:
                handler(outcome)
            except Exception as e:
                logger.error(f"Outcome handler error: {e}", exc_info=True)

    def is_benign(self, message: str) -> bool:
        """True for the pipe-closed-before-any-frame failure."""
        return not self._ever_written and BENIGN_EARLY_CLOSE in message

    def _report_failure(self, message: str, benign: bool) -> None:
        if benign:
            logger.debug("Sink closed before any frame was written: %s", message)
            return

        logger.error("Error unable to capture video stream: %s", message)
        for handler in list(self._diagnostic_handlers):
            try:
                handler(message)
            except Exception as e:
                logger.error(f"Diagnostic handler error: {e}", exc_info=True)
