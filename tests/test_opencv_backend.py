"""Tests for the OpenCV camera backend with a mocked VideoCapture."""

from __future__ import annotations

import threading
import time
from unittest.mock import Mock, patch

import cv2
import numpy as np
import pytest

from capture.opencv_backend import OpenCVCamera
from contracts import Resolution
from exceptions import DeviceUnavailableError


def _capture(opened=True, width=640, height=480, fps=30.0):
    capture = Mock()
    capture.isOpened.return_value = opened
    props = {
        cv2.CAP_PROP_FRAME_WIDTH: width,
        cv2.CAP_PROP_FRAME_HEIGHT: height,
        cv2.CAP_PROP_FPS: fps,
    }
    capture.get.side_effect = lambda prop: props.get(prop, 0.0)
    return capture


@pytest.fixture
def video_capture():
    with patch("cv2.VideoCapture") as mock_class:
        yield mock_class


def test_open_uses_index_and_any_backend(video_capture):
    video_capture.return_value = _capture()
    camera = OpenCVCamera()

    camera.open(1)

    video_capture.assert_called_once_with(1, cv2.CAP_ANY)
    assert camera.is_open


def test_open_failure_raises_and_releases(video_capture):
    capture = _capture(opened=False)
    video_capture.return_value = capture
    camera = OpenCVCamera()

    with pytest.raises(DeviceUnavailableError) as exc_info:
        camera.open(0)

    capture.release.assert_called_once()
    assert exc_info.value.camera_id == "0"
    assert not camera.is_open


def test_resolution_read_back_from_device(video_capture):
    capture = _capture(width=320, height=200)
    video_capture.return_value = capture
    camera = OpenCVCamera()
    camera.open(0)

    camera.set_resolution(640, 480)

    capture.set.assert_any_call(cv2.CAP_PROP_FRAME_WIDTH, 640.0)
    capture.set.assert_any_call(cv2.CAP_PROP_FRAME_HEIGHT, 480.0)
    assert camera.get_resolution() == Resolution(320, 200)


def test_unknown_resolution_is_none(video_capture):
    video_capture.return_value = _capture(width=0, height=0)
    camera = OpenCVCamera()
    camera.open(0)

    assert camera.get_resolution() is None


def test_get_fps(video_capture):
    video_capture.return_value = _capture(fps=0.0)
    camera = OpenCVCamera()
    camera.open(0)

    assert camera.get_fps() == 0.0


def test_read_frame(video_capture):
    capture = _capture()
    frame = np.zeros((480, 640, 3), dtype=np.uint8)
    capture.read.side_effect = [(True, frame), (False, None), cv2.error("device lost")]
    video_capture.return_value = capture
    camera = OpenCVCamera()
    camera.open(0)

    assert camera.read_frame() is frame
    assert camera.read_frame() is None
    assert camera.read_frame() is None


def test_set_resolution_requires_open_camera():
    camera = OpenCVCamera()

    with pytest.raises(DeviceUnavailableError):
        camera.set_resolution(640, 480)
    assert camera.read_frame() is None
    assert camera.get_fps() is None


def test_close_is_idempotent(video_capture):
    capture = _capture()
    video_capture.return_value = capture
    camera = OpenCVCamera()
    camera.open(0)

    camera.close()
    camera.close()

    capture.release.assert_called_once()
    assert not camera.is_open


def test_capture_opened_after_timeout_is_released(video_capture):
    capture = _capture()
    released = threading.Event()
    capture.release.side_effect = released.set

    def slow_open(index, api):
        time.sleep(0.4)
        return capture

    video_capture.side_effect = slow_open
    camera = OpenCVCamera(open_timeout_s=0.1)

    with pytest.raises(DeviceUnavailableError, match="timed out"):
        camera.open(0)
    camera.close()

    assert not camera.is_open
    assert released.wait(timeout=2.0)
    capture.release.assert_called_once()
