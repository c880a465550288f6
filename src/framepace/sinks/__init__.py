"""Byte sinks consumed by the stream writer.

A sink stands in for the video encoder: it accepts pushed blobs, an
end-of-stream signal, and reports one terminal outcome asynchronously.

Quick start::

    from framepace.sinks import StreamSink
    from framepace.writer import VideoStreamWriter

    with open("frames.mjpeg", "wb") as fh:
        writer = VideoStreamWriter(StreamSink(fh, fps=25), fps=25)
        ...
        ok = writer.stop().result()
"""

from framepace.sinks.base import Sink
from framepace.sinks.memory import MemorySink
from framepace.sinks.stream import StreamSink

__all__ = [
    "Sink",
    "MemorySink",
    "StreamSink",
]
