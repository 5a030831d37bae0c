"""OpenCV-based camera backend."""

from __future__ import annotations

import logging
from typing import Optional

import cv2
import numpy as np

from contracts import Resolution
from exceptions import DeviceUnavailableError

from .camera_device import CameraDevice
from .timeout_utils import run_with_timeout

logger = logging.getLogger(__name__)


class OpenCVCamera(CameraDevice):
    def __init__(self, open_timeout_s: float = 5.0, api_preference: int = cv2.CAP_ANY) -> None:
        self._index: Optional[int] = None
        self._capture: Optional[cv2.VideoCapture] = None
        self._open_timeout_s = open_timeout_s
        self._api_preference = api_preference

    @property
    def is_open(self) -> bool:
        return self._capture is not None

    def open(self, index: int) -> None:
        """Open camera by index.

        Args:
            index: Device index (0, 1, ...)

        Raises:
            DeviceUnavailableError: If camera fails to open or open times out
        """
        self._index = index
        logger.info(f"Opening OpenCV camera index {index}")

        def _open_camera():
            capture = cv2.VideoCapture(index, self._api_preference)
            if not capture.isOpened():
                capture.release()
                raise DeviceUnavailableError(
                    f"Failed to open camera index {index} - camera may be in use or not found",
                    camera_id=str(index),
                )
            return capture

        def _release_late_capture(capture):
            # The caller already gave up on this open; free the device for retries
            logger.warning(f"Camera {index}: Opened after timeout, releasing")
            try:
                capture.release()
            except cv2.error as e:
                logger.error(f"Camera {index}: Error releasing late capture: {e}")

        try:
            self._capture = run_with_timeout(
                _open_camera,
                timeout_seconds=self._open_timeout_s,
                error_message=f"OpenCV camera {index} open timed out",
                camera_id=str(index),
                on_late_result=_release_late_capture,
            )
            logger.info(f"Successfully opened OpenCV camera index {index}")

        except DeviceUnavailableError:
            self._capture = None
            raise

        except cv2.error as e:
            self._capture = None
            logger.error(f"Failed to open OpenCV camera index {index}: {e}")
            raise DeviceUnavailableError(str(e), camera_id=str(index)) from e

    def set_resolution(self, width: int, height: int) -> None:
        if self._capture is None:
            raise DeviceUnavailableError("Camera not opened.", camera_id=str(self._index))

        logger.info(f"Camera {self._index}: Requesting {width}x{height}")
        self._capture.set(cv2.CAP_PROP_FRAME_WIDTH, float(width))
        self._capture.set(cv2.CAP_PROP_FRAME_HEIGHT, float(height))

    def get_resolution(self) -> Optional[Resolution]:
        if self._capture is None:
            return None
        width = int(self._capture.get(cv2.CAP_PROP_FRAME_WIDTH))
        height = int(self._capture.get(cv2.CAP_PROP_FRAME_HEIGHT))
        if width <= 0 or height <= 0:
            return None
        return Resolution(width, height)

    def get_fps(self) -> Optional[float]:
        if self._capture is None:
            return None
        return float(self._capture.get(cv2.CAP_PROP_FPS))

    def read_frame(self) -> Optional[np.ndarray]:
        if self._capture is None:
            return None
        try:
            ok, frame = self._capture.read()
        except cv2.error as e:
            logger.warning(f"Camera {self._index}: Read failed: {e}")
            return None
        if not ok:
            return None
        return frame

    def close(self) -> None:
        """Close camera and release resources.

        Note:
            - Idempotent - safe to call multiple times
            - Uses timeout to prevent hanging on release
        """
        if self._capture is None:
            logger.debug(f"Camera {self._index}: Already closed")
            return

        logger.info(f"Camera {self._index}: Closing")
        capture = self._capture

        try:
            run_with_timeout(
                capture.release,
                timeout_seconds=2.0,
                error_message=f"Camera {self._index} release timed out",
                camera_id=str(self._index),
            )
            logger.info(f"Camera {self._index}: Closed successfully")

        except (DeviceUnavailableError, cv2.error) as e:
            logger.error(f"Camera {self._index}: Error during close: {e}")

        finally:
            # Always clear capture reference
            self._capture = None
