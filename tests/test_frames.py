"""Tests for raw frame to display frame conversion."""

from __future__ import annotations

import numpy as np

from app.frames import is_empty_frame, to_display_frame


def test_bgr_frame_converted_to_rgb():
    frame = np.zeros((2, 3, 3), dtype=np.uint8)
    frame[..., 2] = 200  # red in BGR

    display = to_display_frame(frame, frame_index=7)

    assert display is not None
    assert (display.width, display.height) == (3, 2)
    assert display.frame_index == 7
    assert display.pixels[0, 0].tolist() == [200, 0, 0]


def test_grayscale_frame_expanded_to_rgb():
    frame = np.full((4, 5), 17, dtype=np.uint8)

    display = to_display_frame(frame)

    assert display.pixels.shape == (4, 5, 3)
    assert display.pixels[3, 4].tolist() == [17, 17, 17]


def test_bgra_frame_drops_alpha():
    frame = np.zeros((2, 2, 4), dtype=np.uint8)
    frame[..., 0] = 10
    frame[..., 3] = 255

    display = to_display_frame(frame)

    assert display.pixels.shape == (2, 2, 3)
    assert display.pixels[0, 0].tolist() == [0, 0, 10]


def test_unsupported_channel_count_rejected():
    assert to_display_frame(np.zeros((2, 2, 2), dtype=np.uint8)) is None


def test_empty_frames():
    assert is_empty_frame(None)
    assert is_empty_frame(np.empty((0, 0, 3), dtype=np.uint8))
    assert not is_empty_frame(np.zeros((1, 1, 3), dtype=np.uint8))
    assert to_display_frame(np.empty((0, 0, 3), dtype=np.uint8)) is None


def test_non_uint8_frame_rejected():
    # Wider sample types would be truncated, not scaled, by a uint8 cast
    assert to_display_frame(np.full((2, 2, 3), 300, dtype=np.uint16)) is None
    assert to_display_frame(np.full((2, 2, 3), 0.5, dtype=np.float32)) is None
