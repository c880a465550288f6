"""Abstract base class for byte sinks fed by a stream writer."""

import logging
import threading
from abc import ABC, abstractmethod
from typing import Callable, List, Optional

from framepace.core import SinkOutcome, SinkProgress


logger = logging.getLogger(__name__)

OutcomeCallback = Callable[[SinkOutcome], None]
ProgressCallback = Callable[[SinkProgress], None]


class Sink(ABC):
    """Destination for the writer's constant-rate byte stream.

    A sink accepts blobs through :meth:`push`, an end-of-stream signal
    through :meth:`end`, and later reports exactly one
    :class:`SinkOutcome` to its outcome subscribers.  The outcome may be
    delivered from any thread.

    Subclasses call :meth:`_emit_outcome` once they know how the stream
    ended; repeated emissions are dropped.
    """

    def __init__(self):
        self._outcome_callbacks: List[OutcomeCallback] = []
        self._progress_callbacks: List[ProgressCallback] = []
        self._outcome: Optional[SinkOutcome] = None
        self._outcome_lock = threading.Lock()

    # ------------------------------------------------------------------
    # Data path
    # ------------------------------------------------------------------

    @abstractmethod
    def push(self, blob: bytes) -> None:
        """Hand one encoded frame to the sink."""

    @abstractmethod
    def end(self) -> None:
        """Signal that no more blobs will be pushed."""

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    def subscribe_outcome(self, callback: OutcomeCallback) -> None:
        """Register a callback for the terminal outcome.

        If the outcome is already known the callback fires immediately.
        """
        with self._outcome_lock:
            outcome = self._outcome
            if outcome is None:
                self._outcome_callbacks.append(callback)
                return
        callback(outcome)

    def subscribe_progress(self, callback: ProgressCallback) -> None:
        self._progress_callbacks.append(callback)

    @property
    def outcome(self) -> Optional[SinkOutcome]:
        return self._outcome

    def _emit_outcome(self, outcome: SinkOutcome) -> None:
        with self._outcome_lock:
            if self._outcome is not None:
                logger.warning(
                    "%s already reported %s, dropping %s",
                    type(self).__name__, self._outcome, outcome,
                )
                return
            self._outcome = outcome
            callbacks = list(self._outcome_callbacks)

        for callback in callbacks:
            try:
                callback(outcome)
            except Exception as e:
                logger.error(f"Sink outcome callback error: {e}", exc_info=True)

    def _emit_progress(self, progress: SinkProgress) -> None:
        for callback in list(self._progress_callbacks):
            try:
                callback(progress)
            except Exception as e:
                logger.error(f"Sink progress callback error: {e}", exc_info=True)
