"""Custom exception classes for SnapCam."""

from __future__ import annotations

from typing import Optional


class SnapCamError(Exception):
    """Base exception for all SnapCam errors."""

    pass


class CameraError(SnapCamError):
    """Base exception for camera-related errors."""

    def __init__(self, message: str, camera_id: Optional[str] = None):
        self.camera_id = camera_id
        super().__init__(message)


class DeviceUnavailableError(CameraError):
    """Raised when a camera cannot be opened or read."""

    pass


class EmptyFrameError(CameraError):
    """Raised when a read succeeds but returns no image data."""

    pass


class RecordingError(SnapCamError):
    """Base exception for photo and video output errors."""

    pass


class EncodeFailureError(RecordingError):
    """Raised when a photo or video file cannot be written."""

    pass


class InvalidModeError(RecordingError):
    """Raised when an operation is not allowed in the current capture mode."""

    pass


class ConfigError(SnapCamError):
    """Base exception for configuration errors."""

    pass


class InvalidConfigError(ConfigError):
    """Raised when configuration file is invalid or corrupted."""

    pass


class ConfigValidationError(ConfigError):
    """Raised when configuration fails schema validation."""

    def __init__(self, message: str, validation_errors: Optional[list] = None):
        self.validation_errors = validation_errors or []
        super().__init__(message)
