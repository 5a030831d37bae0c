"""Conversion of raw camera frames into display frames."""

from __future__ import annotations

import logging
from typing import Optional

import cv2
import numpy as np

from contracts import DisplayFrame

logger = logging.getLogger(__name__)

_TO_RGB = {
    1: cv2.COLOR_GRAY2RGB,
    3: cv2.COLOR_BGR2RGB,
    4: cv2.COLOR_BGRA2RGB,
}


def is_empty_frame(frame: Optional[np.ndarray]) -> bool:
    return frame is None or frame.size == 0


def to_display_frame(frame: np.ndarray, frame_index: int = 0) -> Optional[DisplayFrame]:
    """Convert a BGR/BGRA/grayscale frame to a packed RGB888 DisplayFrame.

    Returns None when the frame cannot be converted: non-uint8 data,
    an unsupported channel count or a failed color conversion.
    """
    if is_empty_frame(frame):
        return None

    if frame.dtype != np.uint8:
        logger.debug(f"Unsupported frame dtype for display: {frame.dtype}")
        return None

    channels = 1 if frame.ndim == 2 else frame.shape[2]
    code = _TO_RGB.get(channels)
    if code is None:
        logger.debug(f"Unsupported channel count for display: {channels}")
        return None

    try:
        rgb = cv2.cvtColor(frame, code)
    except cv2.error as e:
        logger.debug(f"Color conversion failed: {e}")
        return None

    height, width = rgb.shape[:2]
    pixels = np.ascontiguousarray(rgb)

    return DisplayFrame(width=width, height=height, pixels=pixels, frame_index=frame_index)


__all__ = ["is_empty_frame", "to_display_frame"]
