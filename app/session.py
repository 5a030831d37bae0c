"""Capture session: camera ownership, preview frames, photos and recording."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Optional, Sequence

import cv2
import numpy as np

from app.frames import is_empty_frame, to_display_frame
from capture.camera_device import CameraDevice
from configs.settings import AppConfig
from contracts import CameraPosition, CaptureMode, DisplayFrame, Resolution, TickResult
from exceptions import (
    DeviceUnavailableError,
    EmptyFrameError,
    InvalidModeError,
)
from log_config.logger import get_logger
from record.naming import ensure_output_dir, photo_path, video_path
from record.photo import save_photo
from record.video_writer import DEFAULT_CODECS, DEFAULT_FPS, MAX_FPS, clamp_fps, open_video_writer

logger = get_logger(__name__)

CameraFactory = Callable[[], CameraDevice]

DEFAULT_DEVICE_INDICES = {CameraPosition.REAR: 0, CameraPosition.FRONT: 1}

# Seconds between repeated write-failure log lines
_WRITE_WARNING_INTERVAL_S = 5.0


@dataclass
class ActiveRecording:
    """An open video file. Exists exactly as long as recording is active."""

    writer: cv2.VideoWriter
    path: Path
    size: Resolution
    fps: float
    codec: str
    started_monotonic: float
    frames_written: int = 0
    write_failures: int = 0
    last_write_warning: float = 0.0

    @property
    def elapsed_s(self) -> float:
        return time.monotonic() - self.started_monotonic


class CaptureSession:
    """Owns one camera and an optional video writer.

    The host event loop calls :meth:`tick` once per redraw; UI actions call
    :meth:`switch_camera`, :meth:`set_mode`, :meth:`capture_photo`,
    :meth:`start_recording` and :meth:`stop_recording`.

    A failed camera open is not fatal: the session stays usable with no
    camera, ``camera_available`` is False and ``last_error`` holds the cause.
    """

    def __init__(
        self,
        camera_factory: CameraFactory,
        output_dir: Path,
        position: CameraPosition = CameraPosition.REAR,
        resolution: Resolution = Resolution(640, 480),
        mode: CaptureMode = CaptureMode.PHOTO,
        device_indices: Optional[Dict[CameraPosition, int]] = None,
        codecs: Sequence[str] = DEFAULT_CODECS,
        default_fps: float = DEFAULT_FPS,
        max_fps: float = MAX_FPS,
        jpeg_quality: int = 95,
    ) -> None:
        self._camera_factory = camera_factory
        self._output_dir = ensure_output_dir(Path(output_dir))
        self._position = position
        self._resolution = resolution
        self._mode = mode
        self._device_indices = dict(device_indices or DEFAULT_DEVICE_INDICES)
        self._codecs = tuple(codecs)
        self._default_fps = default_fps
        self._max_fps = max_fps
        self._jpeg_quality = jpeg_quality

        self._lock = threading.RLock()
        self._camera: Optional[CameraDevice] = None
        self._recording: Optional[ActiveRecording] = None
        self._current_frame: Optional[DisplayFrame] = None
        self._frame_index = 0
        self._last_error: Optional[Exception] = None
        self._closed = False

        self._open_camera()

    @classmethod
    def from_config(
        cls,
        config: AppConfig,
        camera_factory: CameraFactory,
        position: Optional[CameraPosition] = None,
        mode: CaptureMode = CaptureMode.PHOTO,
    ) -> "CaptureSession":
        return cls(
            camera_factory=camera_factory,
            output_dir=Path(config.recording.output_dir),
            position=position or config.camera.position,
            resolution=config.camera.resolution,
            mode=mode,
            device_indices=config.camera.device_indices,
            codecs=config.recording.codecs,
            default_fps=config.recording.default_fps,
            max_fps=config.recording.max_fps,
            jpeg_quality=config.recording.jpeg_quality,
        )

    # ------------------------------------------------------------------ state

    @property
    def mode(self) -> CaptureMode:
        return self._mode

    @property
    def position(self) -> CameraPosition:
        return self._position

    @property
    def device_index(self) -> int:
        return self._device_indices[self._position]

    @property
    def resolution(self) -> Resolution:
        """Effective resolution, as reported back by the device."""
        return self._resolution

    @property
    def output_dir(self) -> Path:
        return self._output_dir

    @property
    def camera_available(self) -> bool:
        return self._camera is not None

    @property
    def last_error(self) -> Optional[Exception]:
        return self._last_error

    @property
    def is_recording(self) -> bool:
        return self._recording is not None

    @property
    def recording(self) -> Optional[ActiveRecording]:
        return self._recording

    @property
    def current_frame(self) -> Optional[DisplayFrame]:
        with self._lock:
            return self._current_frame

    # ----------------------------------------------------------------- camera

    def _open_camera(self) -> bool:
        """Open the device for the current position and read back its size."""
        index = self.device_index
        requested = self._resolution
        camera = self._camera_factory()

        try:
            camera.open(index)
            camera.set_resolution(requested.width, requested.height)
        except DeviceUnavailableError as e:
            camera.close()
            self._last_error = e
            logger.error(f"Camera {self._position.value} (index {index}) unavailable: {e}")
            return False

        # Devices may silently clamp the requested size
        actual = camera.get_resolution()
        if actual is not None:
            if actual != requested:
                logger.warning(
                    f"Camera {index}: Requested {requested.width}x{requested.height} "
                    f"but got {actual.width}x{actual.height}"
                )
            self._resolution = actual

        self._camera = camera
        self._last_error = None
        logger.info(
            f"Camera initialized: {self._position.value} (index {index}) "
            f"{self._resolution.width}x{self._resolution.height}"
        )
        return True

    def _release_camera(self) -> None:
        camera, self._camera = self._camera, None
        self._current_frame = None
        if camera is not None:
            camera.close()

    def reopen(self) -> bool:
        """Close and reopen the camera at the current position.

        Returns:
            True if the camera is available afterwards
        """
        with self._lock:
            if self.is_recording:
                self.stop_recording()
            self._release_camera()
            return self._open_camera()

    def switch_camera(self, new_position: CameraPosition) -> bool:
        """Switch to the camera at ``new_position``.

        Recording cannot span a device switch, so an active recording is
        stopped first. The stored effective resolution is reused as the
        request for the new device.

        Returns:
            True if a camera is available after the call
        """
        with self._lock:
            if new_position == self._position:
                return self.camera_available

            if self.is_recording:
                self.stop_recording()

            self._release_camera()
            logger.info(f"Switching camera: {self._position.value} -> {new_position.value}")
            self._position = new_position
            return self._open_camera()

    def set_mode(self, mode: CaptureMode) -> None:
        """Change capture mode. Leaving video mode stops any recording."""
        with self._lock:
            if mode == self._mode:
                return
            if mode == CaptureMode.PHOTO and self.is_recording:
                self.stop_recording()
            self._mode = mode
            logger.info(f"Capture mode: {mode.value}")

    # ----------------------------------------------------------------- frames

    def tick(self) -> TickResult:
        """Read one frame, feed the active recording, update the preview.

        A failed or empty read leaves the previous preview frame in place.
        """
        with self._lock:
            if self._camera is None:
                return TickResult.NO_FRAME

            frame = self._camera.read_frame()
            if is_empty_frame(frame):
                return TickResult.NO_FRAME

            self._frame_index += 1
            if self._recording is not None:
                self._write_frame(self._recording, frame)

            display = to_display_frame(frame, self._frame_index)
            if display is None:
                return TickResult.NO_FRAME

            self._current_frame = display
            return TickResult.FRAME_RENDERED

    def _write_frame(self, recording: ActiveRecording, frame: np.ndarray) -> None:
        # A dropped frame never aborts the recording
        height, width = frame.shape[:2]
        error: Optional[str] = None
        if (width, height) != recording.size.as_size():
            error = f"frame size {width}x{height} does not match writer size"
        else:
            try:
                recording.writer.write(frame)
            except cv2.error as e:
                error = str(e)

        if error is None:
            recording.frames_written += 1
            return

        recording.write_failures += 1
        now = time.monotonic()
        if now - recording.last_write_warning > _WRITE_WARNING_INTERVAL_S:
            logger.error(
                f"Video write failed for {recording.path.name}: {error} "
                f"(total failures: {recording.write_failures})"
            )
            recording.last_write_warning = now

    # ----------------------------------------------------------------- photos

    def capture_photo(self) -> Path:
        """Read one frame and save it as ``photo_<timestamp>.jpg``.

        Raises:
            DeviceUnavailableError: No camera, or the read failed
            EmptyFrameError: The read returned no image data
            EncodeFailureError: The JPEG could not be written
        """
        with self._lock:
            if self._camera is None:
                raise DeviceUnavailableError("No camera is open", camera_id=str(self.device_index))

            frame = self._camera.read_frame()
            if frame is None:
                raise DeviceUnavailableError("Failed to read frame from camera", camera_id=str(self.device_index))
            if frame.size == 0:
                raise EmptyFrameError("Camera returned an empty frame", camera_id=str(self.device_index))

            return save_photo(frame, photo_path(self._output_dir), self._jpeg_quality)

    # -------------------------------------------------------------- recording

    def start_recording(self) -> Path:
        """Open ``video_<timestamp>.mp4`` and start feeding it from tick().

        Already recording is a no-op returning the current path.

        Raises:
            InvalidModeError: Not in video mode
            DeviceUnavailableError: No camera is open
            EncodeFailureError: No codec could open a writer
        """
        with self._lock:
            if self._mode != CaptureMode.VIDEO:
                raise InvalidModeError("Recording requires video mode")
            if self._recording is not None:
                return self._recording.path
            if self._camera is None:
                raise DeviceUnavailableError("No camera is open", camera_id=str(self.device_index))

            path = video_path(self._output_dir)
            fps = clamp_fps(self._camera.get_fps(), self._default_fps, self._max_fps)
            writer, codec = open_video_writer(path, self._resolution, fps, self._codecs)

            self._recording = ActiveRecording(
                writer=writer,
                path=path,
                size=self._resolution,
                fps=fps,
                codec=codec,
                started_monotonic=time.monotonic(),
            )
            logger.info(f"Recording started: {path} ({fps:.1f}fps, {codec})")
            return path

    def stop_recording(self) -> Optional[Path]:
        """Release the writer so the file is finalized.

        Returns:
            Path of the finished file, or None if nothing was recording
        """
        with self._lock:
            recording, self._recording = self._recording, None
            if recording is None:
                return None

            try:
                recording.writer.release()
            except cv2.error as e:
                logger.error(f"Error finalizing {recording.path.name}: {e}")

            logger.info(
                f"Recording stopped: {recording.path} "
                f"({recording.frames_written} frames, {recording.write_failures} dropped)"
            )
            return recording.path

    # --------------------------------------------------------------- teardown

    def close(self) -> None:
        """Stop any recording and release the camera. Idempotent."""
        with self._lock:
            if self._closed:
                return
            self.stop_recording()
            self._release_camera()
            self._closed = True
            logger.info("Capture session closed")

    def __enter__(self) -> "CaptureSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


__all__ = ["ActiveRecording", "CaptureSession", "CameraFactory"]
