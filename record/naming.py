"""Timestamped output file naming."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Optional

TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"

PHOTO_PREFIX = "photo"
PHOTO_SUFFIX = ".jpg"
VIDEO_PREFIX = "video"
VIDEO_SUFFIX = ".mp4"


def timestamped_path(
    directory: Path,
    prefix: str,
    suffix: str,
    now: Optional[datetime] = None,
) -> Path:
    """Build ``<directory>/<prefix>_<YYYYMMDD_HHMMSS><suffix>`` from local time."""
    stamp = (now or datetime.now()).strftime(TIMESTAMP_FORMAT)
    return Path(directory) / f"{prefix}_{stamp}{suffix}"


def photo_path(directory: Path, now: Optional[datetime] = None) -> Path:
    return timestamped_path(directory, PHOTO_PREFIX, PHOTO_SUFFIX, now)


def video_path(directory: Path, now: Optional[datetime] = None) -> Path:
    return timestamped_path(directory, VIDEO_PREFIX, VIDEO_SUFFIX, now)


def ensure_output_dir(directory: Path) -> Path:
    """Create the output directory if missing. Idempotent."""
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    return directory
