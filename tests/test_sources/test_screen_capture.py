"""Tests for the mss-backed screen capture source."""

import numpy as np
import pytest

from framepace.sources import ScreenCaptureSource
from framepace.utils.config import CaptureConfig

mss = pytest.importorskip("mss")


class FakeScreenshotter:
    """Stands in for ``mss.mss()`` so tests do not need a display."""

    monitors = [
        {"left": 0, "top": 0, "width": 64, "height": 32},
        {"left": 0, "top": 0, "width": 32, "height": 16},
    ]

    def __init__(self):
        self.closed = False

    def grab(self, bbox):
        return np.full((bbox["height"], bbox["width"], 4), 128, dtype=np.uint8)

    def close(self):
        self.closed = True


@pytest.fixture
def fake_mss(monkeypatch):
    monkeypatch.setattr(mss, "mss", FakeScreenshotter)


class TestScreenCaptureSource:
    def test_jpeg_frames(self, fake_mss):
        with ScreenCaptureSource(monitor=1, fps=5) as src:
            assert src.is_open
            assert src.resolution == (32, 16)
            frame = src.read()

        assert frame.blob[:2] == b"\xff\xd8"
        assert frame.timestamp > 0
        assert not src.is_open

    def test_png_region(self, fake_mss):
        src = ScreenCaptureSource(region=(0, 0, 8, 8), image_format="png")
        src.open()
        frame = src.read()
        src.close()

        assert frame.blob[:4] == b"\x89PNG"
        assert src.resolution == (8, 8)
        assert src.frame_count == 1

    def test_from_config(self, fake_mss):
        config = CaptureConfig(region=(0, 0, 8, 8), fps=5, image_format="png")
        with ScreenCaptureSource.from_config(config) as src:
            assert src.fps == 5
            assert src.resolution == (8, 8)
            frame = src.read()

        assert frame.blob[:4] == b"\x89PNG"

    def test_timestamps_increase(self, fake_mss):
        with ScreenCaptureSource() as src:
            stamps = [src.read().timestamp for _ in range(3)]
        assert stamps == sorted(stamps)

    def test_read_when_closed(self):
        assert ScreenCaptureSource().read() is None

    def test_iteration_stops_after_close(self, fake_mss):
        src = ScreenCaptureSource()
        src.open()
        src.close()
        assert list(src) == []

    def test_unsupported_format(self):
        with pytest.raises(ValueError):
            ScreenCaptureSource(image_format="bmp")
