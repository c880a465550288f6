"""Live screen capture frame source using mss."""

import logging
import time
from typing import TYPE_CHECKING, Optional

import cv2
import numpy as np

from framepace.core import ScreenFrame
from framepace.sources.base import FrameSource

if TYPE_CHECKING:
    from framepace.utils.config import CaptureConfig

logger = logging.getLogger(__name__)

_EXTENSIONS = {"jpeg": ".jpg", "png": ".png"}


class ScreenCaptureSource(FrameSource):
    """Live frame source from screen / monitor capture.

    Each grab is encoded with OpenCV and stamped with ``time.time()`` at
    the moment of capture.  Requires the ``mss`` package.

    Args:
        monitor: Monitor index (``0`` = all monitors combined,
            ``1`` = primary, ``2`` = secondary, etc.).
        region: Optional ``(left, top, width, height)`` sub-region to
            capture.  When ``None`` the full monitor area is used.
        fps: Target capture rate.  The actual rate depends on system
            performance.
        image_format: ``"jpeg"`` or ``"png"``.
        jpeg_quality: 0-100, only used for JPEG.
    """

    def __init__(
        self,
        monitor: int = 1,
        region: Optional[tuple[int, int, int, int]] = None,
        fps: float = 25.0,
        image_format: str = "jpeg",
        jpeg_quality: int = 80,
    ):
        if image_format not in _EXTENSIONS:
            raise ValueError(
                f"Unsupported image format {image_format!r}, "
                f"expected one of {sorted(_EXTENSIONS)}"
            )
        self._monitor_idx = monitor
        self._region = region
        self._target_fps = fps
        self._ext = _EXTENSIONS[image_format]
        self._encode_params = (
            [cv2.IMWRITE_JPEG_QUALITY, int(jpeg_quality)]
            if image_format == "jpeg" else []
        )

        self._sct = None  # mss instance
        self._bbox: Optional[dict] = None
        self._width: int = 0
        self._height: int = 0
        self._frame_count: int = 0
        self._opened: bool = False

    @classmethod
    def from_config(cls, config: "CaptureConfig") -> "ScreenCaptureSource":
        """Build a source from a validated :class:`CaptureConfig`."""
        return cls(
            monitor=config.monitor,
            region=config.region,
            fps=config.fps,
            image_format=config.image_format,
            jpeg_quality=config.jpeg_quality,
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def open(self) -> None:
        if self._opened:
            return
        try:
            import mss
        except ImportError:
            raise ImportError(
                "ScreenCaptureSource requires the 'mss' package. "
                "Install it with: pip install mss"
            )

        self._sct = mss.mss()

        if self._region is not None:
            left, top, w, h = self._region
            self._bbox = {
                "left": left, "top": top, "width": w, "height": h,
            }
            self._width, self._height = w, h
        else:
            mon = self._sct.monitors[self._monitor_idx]
            self._bbox = mon
            self._width = mon["width"]
            self._height = mon["height"]

        self._frame_count = 0
        self._opened = True

        logger.info(
            "ScreenCaptureSource opened: monitor=%d  %dx%d @ %.1f fps target (%s)",
            self._monitor_idx, self._width, self._height, self._target_fps,
            self._ext,
        )

    def close(self) -> None:
        if self._sct is not None:
            self._sct.close()
            self._sct = None
        self._opened = False
        logger.info("ScreenCaptureSource closed after %d frames", self._frame_count)

    def read(self) -> Optional[ScreenFrame]:
        if not self._opened or self._sct is None:
            return None

        raw = self._sct.grab(self._bbox)
        ts = time.time()
        # mss returns BGRA; drop alpha for OpenCV
        image = np.ascontiguousarray(np.array(raw, dtype=np.uint8)[:, :, :3])

        ok, encoded = cv2.imencode(self._ext, image, self._encode_params)
        if not ok:
            raise RuntimeError(
                f"OpenCV failed to encode {self._width}x{self._height} grab as {self._ext}"
            )

        self._frame_count += 1
        return ScreenFrame(blob=encoded.tobytes(), timestamp=ts)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def fps(self) -> float:
        return self._target_fps

    @property
    def resolution(self) -> tuple[int, int]:
        return (self._width, self._height)

    @property
    def frame_count(self) -> int:
        return self._frame_count

    @property
    def is_open(self) -> bool:
        return self._opened
