"""Core enumerations for framepace."""

from enum import Enum, auto


class WriteStatus(Enum):
    """Lifecycle of a stream writer. Only ever moves forward."""
    NOT_STARTED = auto()
    IN_PROGRESS = auto()
    COMPLETED = auto()
