"""Video writer creation with codec fallback."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Sequence

import cv2

from contracts import Resolution
from exceptions import EncodeFailureError

logger = logging.getLogger(__name__)

DEFAULT_CODECS = ("mp4v", "MJPG")
DEFAULT_FPS = 30.0
MAX_FPS = 120.0


def clamp_fps(fps: Optional[float], default: float = DEFAULT_FPS, maximum: float = MAX_FPS) -> float:
    """Return ``fps`` if it lies in (0, maximum], else ``default``.

    Drivers report 0, negative values or NaN when they do not know the rate.
    """
    if fps is None or not (0.0 < fps <= maximum):
        return float(default)
    return float(fps)


def _fourcc(codec_name: str) -> int:
    if len(codec_name) != 4:
        raise ValueError(f"Codec tag must be four characters: {codec_name!r}")
    return cv2.VideoWriter_fourcc(*codec_name)


def open_video_writer(
    path: Path,
    size: Resolution,
    fps: float,
    codecs: Sequence[str] = DEFAULT_CODECS,
) -> tuple[cv2.VideoWriter, str]:
    """Open video writer with codec fallback.

    Tries each codec in order, then a fourcc of 0 (let the backend choose).
    Writers that fail to open are released before the next attempt.

    Args:
        path: Output video file path
        size: Frame size the writer will accept
        fps: Frames per second
        codecs: Four-character codec tags in order of preference

    Returns:
        Tuple of (opened VideoWriter, codec name used)

    Raises:
        EncodeFailureError: If no codec works
    """
    attempts: list[tuple[str, int]] = []
    for codec_name in codecs:
        try:
            attempts.append((codec_name, _fourcc(codec_name)))
        except (ValueError, cv2.error) as e:
            logger.warning(f"Skipping codec {codec_name!r}: {e}")
    attempts.append(("0", 0))

    for codec_name, fourcc in attempts:
        writer = cv2.VideoWriter(
            str(path),
            fourcc,
            float(fps),
            size.as_size(),
            True
        )

        if writer.isOpened():
            logger.info(
                f"Video writer opened successfully: {path.name} with {codec_name} codec "
                f"({size.width}x{size.height} @ {fps:.1f}fps)"
            )
            return writer, codec_name

        # Clean up failed attempt
        writer.release()
        logger.debug(f"Codec {codec_name} failed for {path.name}, trying next...")

    tried = [name for name, _ in attempts]
    raise EncodeFailureError(
        f"Failed to open video writer for {path.name}. "
        f"Tried codecs: {tried}. Check that ffmpeg or system codecs are installed."
    )


__all__ = ["DEFAULT_CODECS", "DEFAULT_FPS", "MAX_FPS", "clamp_fps", "open_video_writer"]
