"""Core data types for framepace."""

from dataclasses import dataclass
from typing import Optional


# ============================================================================
# Frame Types
# ============================================================================

@dataclass(frozen=True)
class ScreenFrame:
    """A captured image blob and the time it was captured.

    Attributes:
        blob: Encoded image bytes (JPEG/PNG), passed through to the sink as-is.
        timestamp: Capture time in seconds (float, wall clock).
    """
    blob: bytes
    timestamp: float


@dataclass(frozen=True)
class ProcessedFrame:
    """A frame with the time it should stay on screen."""
    blob: bytes
    timestamp: float
    duration: float

    @classmethod
    def from_frame(cls, frame: ScreenFrame, duration: float) -> "ProcessedFrame":
        return cls(blob=frame.blob, timestamp=frame.timestamp, duration=duration)


# ============================================================================
# Sink Notifications
# ============================================================================

@dataclass(frozen=True)
class SinkOutcome:
    """Terminal result reported once by a sink."""
    success: bool
    message: Optional[str] = None

    @classmethod
    def ok(cls) -> "SinkOutcome":
        return cls(success=True)

    @classmethod
    def failed(cls, message: str) -> "SinkOutcome":
        return cls(success=False, message=message)


@dataclass(frozen=True)
class SinkProgress:
    """Progress report from a sink (frames consumed so far)."""
    frames: int
    timemark: str


def format_timemark(seconds: float) -> str:
    """Format seconds as an ffmpeg-style ``HH:MM:SS.cc`` timemark."""
    centis = int(round(max(seconds, 0.0) * 100))
    hours, rem = divmod(centis, 360000)
    minutes, rem = divmod(rem, 6000)
    secs, cs = divmod(rem, 100)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}.{cs:02d}"
