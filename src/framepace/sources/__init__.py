"""Frame sources feeding the stream writer.

Quick start::

    from framepace.sources import ScreenCaptureSource

    with ScreenCaptureSource(monitor=1, fps=10) as src:
        frame = src.read()
        writer.insert(frame)
"""

from framepace.sources.base import FrameSource
from framepace.sources.screen_capture import ScreenCaptureSource

__all__ = [
    "FrameSource",
    "ScreenCaptureSource",
]
