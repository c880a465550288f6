"""Bounded, timestamp-ordered holding area for frames awaiting the encoder."""

import bisect
import logging
from typing import Callable, Iterator, List, Optional

from framepace.core import ScreenFrame


logger = logging.getLogger(__name__)

# Callback receiving the oldest frames evicted on overflow, in order.
OverflowHandler = Callable[[List[ScreenFrame]], None]

DEFAULT_CAPACITY = 40


class OrderedFrameBuffer:
    """Keeps frames sorted by timestamp and spills the oldest half when full.

    Frames with equal timestamps keep their arrival order: a new frame is
    placed after every buffered frame whose timestamp is not greater than
    its own.

    Args:
        capacity: Maximum number of frames held at once.
        on_overflow: Receives the ``capacity // 2`` oldest frames whenever an
            insert would exceed ``capacity``.
    """

    def __init__(
        self,
        capacity: int = DEFAULT_CAPACITY,
        on_overflow: Optional[OverflowHandler] = None,
    ):
        if capacity < 2:
            raise ValueError(f"capacity must be at least 2, got {capacity}")
        self._capacity = capacity
        self._on_overflow = on_overflow
        self._frames: List[ScreenFrame] = []
        # Parallel list of timestamps for bisect.
        self._keys: List[float] = []

    @property
    def capacity(self) -> int:
        return self._capacity

    def insert(self, frame: ScreenFrame) -> None:
        """Insert ``frame`` in timestamp order, spilling first if full."""
        if len(self._frames) >= self._capacity:
            self._spill(self._capacity // 2)

        index = bisect.bisect_right(self._keys, frame.timestamp)
        self._frames.insert(index, frame)
        self._keys.insert(index, frame.timestamp)

    def drain(self) -> List[ScreenFrame]:
        """Remove and return every buffered frame, oldest first."""
        frames = self._frames
        self._frames = []
        self._keys = []
        return frames

    def timestamps(self) -> List[float]:
        return list(self._keys)

    def _spill(self, count: int) -> None:
        evicted = self._frames[:count]
        del self._frames[:count]
        del self._keys[:count]
        logger.debug(
            "Buffer full (%d), flushing %d oldest frames up to t=%.3f",
            self._capacity, len(evicted), evicted[-1].timestamp,
        )
        if self._on_overflow is not None:
            self._on_overflow(evicted)

    def __len__(self) -> int:
        return len(self._frames)

    def __iter__(self) -> Iterator[ScreenFrame]:
        return iter(list(self._frames))
