"""In-memory sink that keeps every pushed blob."""

import logging
from typing import List, Optional

from framepace.core import SinkOutcome, SinkProgress, format_timemark
from framepace.sinks.base import Sink

logger = logging.getLogger(__name__)


class MemorySink(Sink):
    """Collects pushed blobs in a list and resolves on :meth:`end`.

    Args:
        fps: Frame rate used to compute progress timemarks.
        fail_with: If set, :meth:`end` reports a failure with this message
            instead of success.
        auto_complete: When ``False``, :meth:`end` does not report an
            outcome; call :meth:`complete` or :meth:`fail` later to model an
            encoder that finishes asynchronously.
    """

    def __init__(
        self,
        fps: float = 25.0,
        fail_with: Optional[str] = None,
        auto_complete: bool = True,
    ):
        super().__init__()
        self._fps = fps
        self._fail_with = fail_with
        self._auto_complete = auto_complete
        self.blobs: List[bytes] = []
        self.ended = False
        self.end_calls = 0

    def push(self, blob: bytes) -> None:
        if self.ended:
            logger.warning("MemorySink: push after end ignored")
            return
        self.blobs.append(blob)
        count = len(self.blobs)
        self._emit_progress(
            SinkProgress(frames=count, timemark=format_timemark(count / self._fps))
        )

    def end(self) -> None:
        self.end_calls += 1
        if self.ended:
            return
        self.ended = True
        if not self._auto_complete:
            return
        if self._fail_with is not None:
            self.fail(self._fail_with)
        else:
            self.complete()

    def complete(self) -> None:
        self._emit_outcome(SinkOutcome.ok())

    def fail(self, message: str) -> None:
        self._emit_outcome(SinkOutcome.failed(message))

    @property
    def push_count(self) -> int:
        return len(self.blobs)
