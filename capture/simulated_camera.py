"""Simulated camera backend for testing and camera-less demos."""

from __future__ import annotations

import time
from typing import Iterable, Optional

import numpy as np

from contracts import Resolution
from exceptions import DeviceUnavailableError

from .camera_device import CameraDevice


class SimulatedCamera(CameraDevice):
    """Synthetic device producing a moving BGR color pattern.

    Args:
        max_resolution: Largest frame size the "hardware" supports; larger
            requests are clamped to it
        fps: Frame rate reported by get_fps (not enforced unless throttle=True)
        unavailable_indices: Device indices that fail to open
        throttle: Sleep between reads to approximate the reported fps
    """

    def __init__(
        self,
        max_resolution: Optional[Resolution] = None,
        fps: float = 30.0,
        unavailable_indices: Iterable[int] = (),
        throttle: bool = False,
    ) -> None:
        self._max_resolution = max_resolution
        self._fps = fps
        self._unavailable = set(unavailable_indices)
        self._throttle = throttle
        self._index: Optional[int] = None
        self._opened = False
        self._width = 640
        self._height = 480
        self._frame_index = 0
        self._failing_reads = 0
        self._empty_reads = 0
        self._last_frame_time = time.monotonic()
        self.open_count = 0
        self.close_count = 0

    @property
    def is_open(self) -> bool:
        return self._opened

    @property
    def index(self) -> Optional[int]:
        return self._index

    def open(self, index: int) -> None:
        if index in self._unavailable:
            raise DeviceUnavailableError(f"Simulated camera {index} unavailable", camera_id=str(index))
        self._index = index
        self._opened = True
        self._frame_index = 0
        self.open_count += 1

    def set_resolution(self, width: int, height: int) -> None:
        if not self._opened:
            raise DeviceUnavailableError("Camera not opened.", camera_id=str(self._index))
        if self._max_resolution is not None:
            width = min(width, self._max_resolution.width)
            height = min(height, self._max_resolution.height)
        self._width = width
        self._height = height

    def get_resolution(self) -> Optional[Resolution]:
        if not self._opened:
            return None
        return Resolution(self._width, self._height)

    def get_fps(self) -> Optional[float]:
        if not self._opened:
            return None
        return self._fps

    def fail_next_reads(self, count: int = 1) -> None:
        """Make the next ``count`` reads report failure."""
        self._failing_reads += count

    def empty_next_reads(self, count: int = 1) -> None:
        """Make the next ``count`` reads return a zero-size frame."""
        self._empty_reads += count

    def read_frame(self) -> Optional[np.ndarray]:
        if not self._opened:
            return None
        if self._failing_reads > 0:
            self._failing_reads -= 1
            return None
        if self._empty_reads > 0:
            self._empty_reads -= 1
            return np.empty((0, 0, 3), dtype=np.uint8)

        if self._throttle and self._fps > 0:
            target_delay = 1.0 / self._fps
            elapsed = time.monotonic() - self._last_frame_time
            if elapsed < target_delay:
                time.sleep(target_delay - elapsed)
        self._last_frame_time = time.monotonic()
        self._frame_index += 1

        # Color bars shifted by frame index, BGR order
        image = np.zeros((self._height, self._width, 3), dtype=np.uint8)
        columns = (np.arange(self._width) + self._frame_index * 4) % 256
        image[:, :, 0] = columns.astype(np.uint8)
        image[:, :, 1] = 96
        image[:, :, 2] = (255 - columns).astype(np.uint8)
        return image

    def close(self) -> None:
        if self._opened:
            self.close_count += 1
        self._opened = False
