"""Camera abstraction for capture backends."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

import numpy as np

from contracts import Resolution


class CameraDevice(ABC):
    @abstractmethod
    def open(self, index: int) -> None:
        """Open a camera by device index.

        Raises:
            DeviceUnavailableError: If the device cannot be opened
        """

    @abstractmethod
    def set_resolution(self, width: int, height: int) -> None:
        """Request a frame size. Best effort: hardware may ignore it."""

    @abstractmethod
    def get_resolution(self) -> Optional[Resolution]:
        """Return the frame size the device actually applied, if known."""

    @abstractmethod
    def get_fps(self) -> Optional[float]:
        """Return the device frame rate, if the driver reports one."""

    @abstractmethod
    def read_frame(self) -> Optional[np.ndarray]:
        """Read one BGR frame. Returns None when the read fails."""

    @abstractmethod
    def close(self) -> None:
        """Close the camera. Safe to call more than once."""

    @property
    @abstractmethod
    def is_open(self) -> bool:
        """True while the device handle is held."""
