"""Constant-frame-rate stream writer for out-of-order screen frames."""

import asyncio
import logging
import math
import time
from concurrent.futures import Future
from typing import TYPE_CHECKING, List, Optional

from framepace.core import (
    ScreenFrame,
    SinkProgress,
    WriteStatus,
)
from framepace.sinks.base import Sink
from framepace.writer.buffer import DEFAULT_CAPACITY, OrderedFrameBuffer
from framepace.writer.completion import (
    CompletionLifecycle,
    DiagnosticHandler,
    OutcomeHandler,
)
from framepace.writer.durations import DurationAssigner

if TYPE_CHECKING:
    from framepace.utils.config import WriterConfig


logger = logging.getLogger(__name__)


def repeat_count(duration_seconds: float, fps: float) -> int:
    """Number of output frames covering ``duration_seconds`` at ``fps``.

    Always at least one, so zero or negative durations still emit a frame.
    """
    return max(math.floor(duration_seconds * fps), 1)


class VideoStreamWriter:
    """Orders captured frames and feeds them to a sink at a fixed rate.

    Frames go into an :class:`OrderedFrameBuffer`.  When the buffer fills,
    its oldest half gets durations from a :class:`DurationAssigner`, and each
    frame is pushed to the sink as many times as its duration spans at
    ``fps``.  :meth:`stop` drains everything, pads the last frame up to the
    stop time, ends the sink and returns a future that the sink's terminal
    outcome resolves.

    The writer expects a single producer calling :meth:`insert` and a
    single controller calling :meth:`stop`; it does no locking of its own.

    Args:
        sink: Destination for the output stream.
        fps: Output frame rate.
        capacity: Maximum number of frames held back for reordering.

    Example::

        writer = VideoStreamWriter(MemorySink(), fps=10)
        writer.insert(ScreenFrame(blob=jpeg, timestamp=time.time()))
        ok = writer.stop().result()
    """

    def __init__(
        self,
        sink: Sink,
        fps: float,
        capacity: int = DEFAULT_CAPACITY,
    ):
        if fps <= 0:
            raise ValueError(f"fps must be positive, got {fps}")
        self._sink = sink
        self._fps = fps
        self._buffer = OrderedFrameBuffer(capacity, on_overflow=self._process_frames)
        self._durations = DurationAssigner()
        self._lifecycle = CompletionLifecycle()
        self._frames_written = 0
        self._duration = "00:00:00.00"

        sink.subscribe_progress(self._on_sink_progress)
        sink.subscribe_outcome(self._lifecycle.resolve)

    @classmethod
    def from_config(cls, sink: Sink, config: "WriterConfig") -> "VideoStreamWriter":
        """Build a writer from a validated :class:`WriterConfig`."""
        return cls(sink, fps=config.fps, capacity=config.capacity)

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------

    def on_diagnostic(self, handler: DiagnosticHandler) -> None:
        """Call ``handler(message)`` when the sink fails unexpectedly."""
        self._lifecycle.subscribe_diagnostic(handler)

    def on_outcome(self, handler: OutcomeHandler) -> None:
        """Call ``handler(outcome)`` once the sink reports its outcome."""
        self._lifecycle.subscribe_outcome(handler)

    # ------------------------------------------------------------------
    # Frame path
    # ------------------------------------------------------------------

    def insert(self, frame: ScreenFrame) -> None:
        """Buffer a captured frame; may flush the oldest half to the sink."""
        self._buffer.insert(frame)

    def write(self, blob: bytes, duration_seconds: float = 1) -> int:
        """Push ``blob`` enough times to cover ``duration_seconds``.

        Returns:
            How many times the blob was pushed.
        """
        self._lifecycle.advance(WriteStatus.IN_PROGRESS)

        count = repeat_count(duration_seconds, self._fps)
        for _ in range(count):
            self._sink.push(blob)
        self._frames_written += count
        return count

    def _process_frames(self, frames: List[ScreenFrame]) -> None:
        for processed in self._durations.assign(frames):
            self.write(processed.blob, processed.duration)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def stop(self, stopped_time: Optional[float] = None) -> "Future[bool]":
        """Flush all frames, end the sink and return the completion future.

        Args:
            stopped_time: Stream end time in seconds; the last frame is held
                until then.  Defaults to the current wall-clock time.

        Calling ``stop`` again returns the same future without writing.
        """
        if self._lifecycle.status is WriteStatus.COMPLETED:
            return self._lifecycle.future

        if stopped_time is None:
            stopped_time = time.time()

        self._drain_frames(stopped_time)

        self._sink.end()
        self._lifecycle.advance(WriteStatus.COMPLETED)
        logger.info(
            "Stream writer stopped at t=%.3f after %d output frames",
            stopped_time, self._frames_written,
        )
        return self._lifecycle.future

    async def stop_async(self, stopped_time: Optional[float] = None) -> bool:
        """:meth:`stop`, then wait for the sink's outcome without blocking."""
        return await asyncio.wrap_future(self.stop(stopped_time))

    def _drain_frames(self, stopped_time: float) -> None:
        self._process_frames(self._buffer.drain())

        last = self._durations.last_frame
        if last is None:
            return
        self.write(last.blob, stopped_time - last.timestamp)

    def _on_sink_progress(self, progress: SinkProgress) -> None:
        self._duration = progress.timemark

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def status(self) -> WriteStatus:
        return self._lifecycle.status

    @property
    def fps(self) -> float:
        return self._fps

    @property
    def duration(self) -> str:
        """Latest timemark reported by the sink."""
        return self._duration

    @property
    def frames_written(self) -> int:
        """Total pushes made to the sink so far."""
        return self._frames_written

    @property
    def buffered(self) -> int:
        return len(self._buffer)

    @property
    def buffer(self) -> OrderedFrameBuffer:
        return self._buffer

    @property
    def completion(self) -> "Future[bool]":
        return self._lifecycle.future
