"""Drive a frame source into a stream writer on an asyncio loop."""

import asyncio
import logging
from typing import Optional

from framepace.sources.base import FrameSource
from framepace.writer.stream_writer import VideoStreamWriter


logger = logging.getLogger(__name__)


class StreamRecorder:
    """Single producer and lifecycle controller for a :class:`VideoStreamWriter`.

    :meth:`run` pulls frames from ``source`` at its target rate and inserts
    them into ``writer`` until :meth:`stop` is called or the source runs
    dry.  Everything happens on one event loop, so the writer never sees
    concurrent calls.

    Args:
        source: Where frames come from. Opened by :meth:`run` if needed.
        writer: Where frames go.
        capture_fps: Capture rate; defaults to ``source.fps``.
    """

    def __init__(
        self,
        source: FrameSource,
        writer: VideoStreamWriter,
        capture_fps: Optional[float] = None,
    ):
        self.source = source
        self.writer = writer
        self._interval = 1.0 / (capture_fps or source.fps)
        self._is_running = False
        self._frames_captured = 0
        self._task: Optional[asyncio.Task] = None

    async def run(self) -> None:
        """Capture until stopped or the source is exhausted."""
        if not self.source.is_open:
            self.source.open()

        self._is_running = True
        logger.info("Recording started at %.1f fps capture", 1.0 / self._interval)

        while self._is_running:
            try:
                frame = self.source.read()
            except Exception as e:
                logger.error(f"Error capturing frame: {e}", exc_info=True)
                await asyncio.sleep(self._interval)
                continue

            if frame is None:
                logger.info("Frame source exhausted")
                break

            self.writer.insert(frame)
            self._frames_captured += 1
            await asyncio.sleep(self._interval)

        self._is_running = False

    def start(self) -> asyncio.Task:
        """Schedule :meth:`run` on the running loop."""
        self._task = asyncio.ensure_future(self.run())
        return self._task

    async def stop(self, stopped_time: Optional[float] = None) -> bool:
        """Stop capturing, drain the writer and wait for the sink's outcome.

        The source is closed and the writer stopped even when the capture
        task itself failed; that failure is logged, not re-raised.
        """
        self._is_running = False
        try:
            if self._task is not None:
                await self._task
        except Exception as e:
            logger.error(f"Capture task failed: {e}", exc_info=True)
        finally:
            self._task = None
            self.source.close()

        ok = await self.writer.stop_async(stopped_time)
        logger.info(
            "Recording finished: %d frames captured, %d written, success=%s",
            self._frames_captured, self.writer.frames_written, ok,
        )
        return ok

    @property
    def is_running(self) -> bool:
        return self._is_running

    @property
    def frames_captured(self) -> int:
        return self._frames_captured
