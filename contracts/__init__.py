"""Shared data contracts for camera capture."""

from .types import (
    CameraPosition,
    CaptureMode,
    DisplayFrame,
    Resolution,
    TickResult,
)

__all__ = [
    "CameraPosition",
    "CaptureMode",
    "DisplayFrame",
    "Resolution",
    "TickResult",
]
