"""framepace - constant frame rate streams from out-of-order screen captures.

Captured frames are reordered by timestamp, expanded to a fixed output
frame rate and pushed to an encoder-backed sink.
"""

from framepace.core import ScreenFrame, SinkOutcome, WriteStatus
from framepace.writer import VideoStreamWriter

__version__ = "0.1.0"

__all__ = [
    "ScreenFrame",
    "SinkOutcome",
    "WriteStatus",
    "VideoStreamWriter",
    "__version__",
]
