"""Turn sorted frame batches into (blob, duration) pairs."""

from typing import List, Optional, Sequence

from framepace.core import ProcessedFrame, ScreenFrame


class DurationAssigner:
    """Assigns each frame the time elapsed since the previously assigned one.

    The last assigned frame is carried across calls, so a stream split into
    several flush batches gets the same durations as one big batch.

    The very first frame ever assigned is compared against itself and
    therefore gets a duration of ``0``.
    """

    def __init__(self):
        self._last: Optional[ScreenFrame] = None

    @property
    def last_frame(self) -> Optional[ScreenFrame]:
        """Most recently assigned frame, or ``None`` before the first batch."""
        return self._last

    def assign(self, frames: Sequence[ScreenFrame]) -> List[ProcessedFrame]:
        if not frames:
            return []

        if self._last is None:
            self._last = frames[0]

        processed = []
        for frame in frames:
            duration = frame.timestamp - self._last.timestamp
            self._last = frame
            processed.append(ProcessedFrame.from_frame(frame, duration))
        return processed
