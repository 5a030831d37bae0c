"""Tests for YAML configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from configs.settings import DEFAULT_CONFIG_PATH, AppConfig, default_config, load_config, parse_config
from contracts import CameraPosition, Resolution
from exceptions import ConfigError, InvalidConfigError


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(text)
    return path


def test_default_yaml_matches_builtin_defaults():
    config = load_config(DEFAULT_CONFIG_PATH)

    assert isinstance(config, AppConfig)
    assert config == default_config()
    assert config.camera.resolution == Resolution(640, 480)
    assert config.camera.device_indices[CameraPosition.REAR] == 0
    assert config.camera.device_indices[CameraPosition.FRONT] == 1
    assert config.recording.codecs == ("mp4v", "MJPG")
    assert config.ui.title == "Camera App"


def test_minimal_config_filled_with_defaults(tmp_path):
    path = _write(
        tmp_path,
        "camera:\n  width: 1280\n  height: 720\nrecording: {}\n",
    )

    config = load_config(path)

    assert config.camera.resolution == Resolution(1280, 720)
    assert config.camera.position == CameraPosition.REAR
    assert config.camera.backend == "opencv"
    assert config.camera.open_timeout_s == 5.0
    assert config.recording.output_dir == "camera_output"
    assert config.recording.default_fps == 30.0
    assert config.recording.jpeg_quality == 95


def test_custom_device_indices(tmp_path):
    path = _write(
        tmp_path,
        "camera:\n  width: 640\n  height: 480\n  position: front\n"
        "  device_indices: {rear: 2, front: 0}\nrecording: {}\n",
    )

    config = load_config(path)

    assert config.camera.position == CameraPosition.FRONT
    assert config.camera.device_indices[CameraPosition.REAR] == 2
    assert config.camera.device_indices[CameraPosition.FRONT] == 0


def test_same_device_for_both_positions_rejected():
    data = {
        "camera": {"width": 640, "height": 480, "device_indices": {"rear": 1, "front": 1}},
        "recording": {},
    }
    with pytest.raises(InvalidConfigError, match="different devices"):
        parse_config(data)


def test_default_fps_above_max_rejected():
    data = {
        "camera": {"width": 640, "height": 480},
        "recording": {"default_fps": 60, "max_fps": 30},
    }
    with pytest.raises(InvalidConfigError, match="exceeds max_fps"):
        parse_config(data)


def test_parse_config_does_not_mutate_input():
    data = {"camera": {"width": 640, "height": 480}, "recording": {}}

    parse_config(data)

    assert data == {"camera": {"width": 640, "height": 480}, "recording": {}}


def test_missing_file(tmp_path):
    with pytest.raises(InvalidConfigError, match="not found"):
        load_config(tmp_path / "missing.yaml")


def test_malformed_yaml(tmp_path):
    path = _write(tmp_path, "camera: [width: 640\n")

    with pytest.raises(ConfigError):
        load_config(path)


def test_non_mapping_root(tmp_path):
    path = _write(tmp_path, "- camera\n- recording\n")

    with pytest.raises(InvalidConfigError, match="mapping"):
        load_config(path)
