"""Abstract base class for all framepace frame sources."""

from abc import ABC, abstractmethod
from typing import Iterator, Optional

from framepace.core import ScreenFrame


class FrameSource(ABC):
    """Uniform interface for producing timestamped, encoded frames.

    Sources hand out :class:`ScreenFrame` objects whose ``blob`` is an
    encoded image and whose ``timestamp`` is wall-clock seconds, ready to
    be passed to :meth:`VideoStreamWriter.insert`.

    Usage::

        with ScreenCaptureSource(fps=10) as src:
            for frame in src:
                writer.insert(frame)
    """

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @abstractmethod
    def open(self) -> None:
        """Acquire the underlying capture handle."""

    @abstractmethod
    def close(self) -> None:
        """Release the underlying capture handle."""

    @abstractmethod
    def read(self) -> Optional[ScreenFrame]:
        """Capture the next frame.

        Returns:
            A :class:`ScreenFrame`, or ``None`` when the source is closed
            or exhausted.
        """

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    @abstractmethod
    def fps(self) -> float:
        """Target capture rate."""

    @property
    @abstractmethod
    def is_open(self) -> bool:
        """``True`` when the source has been opened and not yet closed."""

    # ------------------------------------------------------------------
    # Context manager
    # ------------------------------------------------------------------

    def __enter__(self) -> "FrameSource":
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Iterator protocol
    # ------------------------------------------------------------------

    def __iter__(self) -> Iterator[ScreenFrame]:
        return self

    def __next__(self) -> ScreenFrame:
        frame = self.read()
        if frame is None:
            raise StopIteration
        return frame
