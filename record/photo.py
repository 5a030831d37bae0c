"""Single-frame photo encoding."""

from __future__ import annotations

import logging
from pathlib import Path

import cv2
import numpy as np

from exceptions import EncodeFailureError

logger = logging.getLogger(__name__)


def save_photo(frame: np.ndarray, path: Path, jpeg_quality: int = 95) -> Path:
    """Encode a BGR frame to a JPEG file.

    Args:
        frame: BGR or grayscale image
        path: Destination file
        jpeg_quality: JPEG quality (0-100)

    Returns:
        The written path

    Raises:
        EncodeFailureError: If OpenCV cannot encode or write the file
    """
    params = [int(cv2.IMWRITE_JPEG_QUALITY), int(jpeg_quality)]
    try:
        ok = cv2.imwrite(str(path), frame, params)
    except cv2.error as e:
        logger.error(f"Photo encode failed for {path.name}: {e}")
        raise EncodeFailureError(f"Failed to encode photo {path}: {e}") from e

    if not ok:
        logger.error(f"Photo write failed for {path.name}")
        raise EncodeFailureError(f"Failed to write photo {path}")

    logger.info(f"Photo saved: {path}")
    return path
