"""Tests for core types."""

import dataclasses

import pytest

from framepace.core import (
    ScreenFrame, ProcessedFrame, SinkOutcome, SinkProgress,
    WriteStatus, format_timemark,
)


class TestScreenFrame:
    def test_immutable(self):
        frame = ScreenFrame(blob=b"jpeg", timestamp=1.5)
        with pytest.raises(dataclasses.FrozenInstanceError):
            frame.timestamp = 2.0

    def test_equal_timestamps_are_distinct_frames(self):
        a = ScreenFrame(blob=b"a", timestamp=1.0)
        b = ScreenFrame(blob=b"b", timestamp=1.0)
        assert a != b


class TestProcessedFrame:
    def test_from_frame(self):
        frame = ScreenFrame(blob=b"x", timestamp=3.0)
        processed = ProcessedFrame.from_frame(frame, 0.5)
        assert processed.blob == b"x"
        assert processed.timestamp == 3.0
        assert processed.duration == 0.5


class TestSinkOutcome:
    def test_ok(self):
        outcome = SinkOutcome.ok()
        assert outcome.success is True
        assert outcome.message is None

    def test_failed(self):
        outcome = SinkOutcome.failed("boom")
        assert outcome.success is False
        assert outcome.message == "boom"


class TestTimemark:
    def test_zero(self):
        assert format_timemark(0) == "00:00:00.00"

    def test_hours_minutes_seconds(self):
        assert format_timemark(3723.5) == "01:02:03.50"

    def test_negative_clamped(self):
        assert format_timemark(-4) == "00:00:00.00"

    def test_progress_carries_timemark(self):
        progress = SinkProgress(frames=25, timemark=format_timemark(2.5))
        assert progress.timemark == "00:00:02.50"


def test_write_status_members():
    assert [s.name for s in WriteStatus] == ["NOT_STARTED", "IN_PROGRESS", "COMPLETED"]
