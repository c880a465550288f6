"""Sink that writes blobs to a binary stream on a background thread."""

import logging
import queue
import threading
from typing import BinaryIO, Optional

from framepace.core import SinkOutcome, SinkProgress, format_timemark
from framepace.sinks.base import Sink

logger = logging.getLogger(__name__)

_END = object()


class StreamSink(Sink):
    """Forwards pushed blobs to a writable binary stream.

    Writes happen on a worker thread so :meth:`push` never blocks on I/O.
    The outcome is reported from that thread once the queue has drained
    after :meth:`end`, or as soon as a write fails.

    Args:
        stream: Any object with ``write(bytes)`` and ``flush()``, such as
            an encoder's stdin pipe or an open file.
        fps: Frame rate used to compute progress timemarks.
        close_stream: Close ``stream`` after the last write.
        progress_every: Emit a :class:`SinkProgress` every N frames
            (``0`` disables progress).
        max_queue: Bound on pending blobs; ``0`` means unbounded.
    """

    def __init__(
        self,
        stream: BinaryIO,
        fps: float = 25.0,
        close_stream: bool = False,
        progress_every: int = 25,
        max_queue: int = 0,
    ):
        super().__init__()
        self._stream = stream
        self._fps = fps
        self._close_stream = close_stream
        self._progress_every = progress_every
        self._queue: "queue.Queue" = queue.Queue(maxsize=max_queue)
        self._frames_written = 0
        self._ended = False
        self._failed = threading.Event()
        self._worker = threading.Thread(
            target=self._run, name="StreamSinkWriter", daemon=True
        )
        self._worker.start()

    # ------------------------------------------------------------------
    # Sink API
    # ------------------------------------------------------------------

    def push(self, blob: bytes) -> None:
        if self._ended:
            logger.warning("StreamSink: push after end ignored")
            return
        if self._failed.is_set():
            return
        self._queue.put(blob)

    def end(self) -> None:
        if self._ended:
            return
        self._ended = True
        self._queue.put(_END)

    def join(self, timeout: Optional[float] = None) -> None:
        """Wait for the worker thread to exit."""
        self._worker.join(timeout)

    @property
    def frames_written(self) -> int:
        return self._frames_written

    # ------------------------------------------------------------------
    # Worker
    # ------------------------------------------------------------------

    def _run(self) -> None:
        while True:
            item = self._queue.get()
            if item is _END:
                break
            if self._failed.is_set():
                continue
            try:
                self._stream.write(item)
            except (OSError, ValueError) as e:
                logger.error("StreamSink write failed: %s", e)
                self._failed.set()
                self._emit_outcome(SinkOutcome.failed(str(e)))
                continue
            self._frames_written += 1
            if self._progress_every and self._frames_written % self._progress_every == 0:
                self._emit_progress(SinkProgress(
                    frames=self._frames_written,
                    timemark=format_timemark(self._frames_written / self._fps),
                ))

        if self._failed.is_set():
            return
        self._finish()

    def _finish(self) -> None:
        try:
            self._stream.flush()
            if self._close_stream:
                self._stream.close()
        except (OSError, ValueError) as e:
            logger.error("StreamSink flush failed: %s", e)
            self._emit_outcome(SinkOutcome.failed(str(e)))
            return

        logger.info(
            "StreamSink finished: %d frames (%s)",
            self._frames_written,
            format_timemark(self._frames_written / self._fps),
        )
        self._emit_outcome(SinkOutcome.ok())
