"""Shared fixtures for camera app tests."""

from __future__ import annotations

import os

# Qt widgets need a platform plugin; tests run without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from typing import Iterable, Optional  # noqa: E402
from unittest.mock import Mock  # noqa: E402

import pytest  # noqa: E402

from capture.simulated_camera import SimulatedCamera  # noqa: E402
from contracts import Resolution  # noqa: E402


class SimulatedCameraFactory:
    """Camera factory that remembers every device it created."""

    def __init__(
        self,
        max_resolution: Optional[Resolution] = None,
        fps: float = 30.0,
        unavailable_indices: Iterable[int] = (),
    ) -> None:
        self.max_resolution = max_resolution
        self.fps = fps
        self.unavailable_indices = set(unavailable_indices)
        self.created: list[SimulatedCamera] = []

    def __call__(self) -> SimulatedCamera:
        camera = SimulatedCamera(
            max_resolution=self.max_resolution,
            fps=self.fps,
            unavailable_indices=self.unavailable_indices,
        )
        self.created.append(camera)
        return camera

    @property
    def last(self) -> SimulatedCamera:
        return self.created[-1]


@pytest.fixture
def camera_factory() -> SimulatedCameraFactory:
    return SimulatedCameraFactory()


@pytest.fixture
def output_dir(tmp_path):
    return tmp_path / "camera_output"


@pytest.fixture
def mock_writer():
    """VideoWriter stand-in that reports opened and accepts frames."""
    writer = Mock()
    writer.isOpened.return_value = True
    return writer


@pytest.fixture
def make_camera_factory():
    """Build a SimulatedCameraFactory with custom device behavior."""
    return SimulatedCameraFactory
