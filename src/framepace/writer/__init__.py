"""Frame ordering, duration expansion and completion for the output stream."""

from framepace.writer.buffer import DEFAULT_CAPACITY, OrderedFrameBuffer
from framepace.writer.durations import DurationAssigner
from framepace.writer.completion import BENIGN_EARLY_CLOSE, CompletionLifecycle
from framepace.writer.stream_writer import VideoStreamWriter, repeat_count

__all__ = [
    "DEFAULT_CAPACITY",
    "OrderedFrameBuffer",
    "DurationAssigner",
    "BENIGN_EARLY_CLOSE",
    "CompletionLifecycle",
    "VideoStreamWriter",
    "repeat_count",
]
