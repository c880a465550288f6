"""Pytest configuration for framepace tests."""

from typing import List, Sequence

import pytest

from framepace.core import ScreenFrame
from framepace.sinks import MemorySink
from framepace.writer import VideoStreamWriter


def _make_frames(timestamps: Sequence[float], prefix: str = "f") -> List[ScreenFrame]:
    """One frame per timestamp; the blob records its position."""
    return [
        ScreenFrame(blob=f"{prefix}{i}".encode(), timestamp=ts)
        for i, ts in enumerate(timestamps)
    ]


@pytest.fixture
def make_frames():
    return _make_frames


@pytest.fixture
def sink() -> MemorySink:
    return MemorySink(fps=10)


@pytest.fixture
def writer(sink: MemorySink) -> VideoStreamWriter:
    return VideoStreamWriter(sink, fps=10, capacity=40)
