"""Core types and enums for framepace."""

from .enums import WriteStatus

from .types import (
    # Frames
    ScreenFrame,
    ProcessedFrame,
    # Sink notifications
    SinkOutcome,
    SinkProgress,
    format_timemark,
)

__all__ = [
    # Enums
    "WriteStatus",
    # Types
    "ScreenFrame",
    "ProcessedFrame",
    "SinkOutcome",
    "SinkProgress",
    "format_timemark",
]
