"""Core data contracts shared by capture, recording and UI."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class CaptureMode(str, Enum):
    PHOTO = "photo"
    VIDEO = "video"


class CameraPosition(str, Enum):
    REAR = "rear"
    FRONT = "front"


class TickResult(Enum):
    FRAME_RENDERED = "frame_rendered"
    NO_FRAME = "no_frame"


@dataclass(frozen=True)
class Resolution:
    width: int
    height: int

    def as_size(self) -> tuple[int, int]:
        """Return (width, height) in the order OpenCV expects."""
        return (self.width, self.height)


@dataclass(frozen=True)
class DisplayFrame:
    """RGB888 image ready to hand to the UI.

    ``pixels`` is a C-contiguous uint8 array of shape (height, width, 3).
    """

    width: int
    height: int
    pixels: Any
    frame_index: int = 0
