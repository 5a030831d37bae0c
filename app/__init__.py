"""Capture session and frame pipeline."""

from app.session import ActiveRecording, CaptureSession

__all__ = ["ActiveRecording", "CaptureSession"]
