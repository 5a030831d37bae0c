"""Capture module."""

from .camera_device import CameraDevice
from .opencv_backend import OpenCVCamera
from .simulated_camera import SimulatedCamera

__all__ = ["CameraDevice", "OpenCVCamera", "SimulatedCamera"]
