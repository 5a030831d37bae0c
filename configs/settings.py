"""Configuration loading for the camera app."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from configs.validator import validate_config
from contracts import CameraPosition, Resolution
from exceptions import ConfigError, InvalidConfigError
from log_config.logger import get_logger

logger = get_logger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent / "default.yaml"


@dataclass(frozen=True)
class CameraConfig:
    width: int = 640
    height: int = 480
    position: CameraPosition = CameraPosition.REAR
    backend: str = "opencv"
    # Index convention rear -> 0, front -> 1; no enumeration is performed
    device_indices: Dict[CameraPosition, int] = field(
        default_factory=lambda: {CameraPosition.REAR: 0, CameraPosition.FRONT: 1}
    )
    open_timeout_s: float = 5.0

    @property
    def resolution(self) -> Resolution:
        return Resolution(self.width, self.height)


@dataclass(frozen=True)
class RecordingConfig:
    output_dir: str = "camera_output"
    codecs: Tuple[str, ...] = ("mp4v", "MJPG")
    default_fps: float = 30.0
    max_fps: float = 120.0
    jpeg_quality: int = 95


@dataclass(frozen=True)
class UiConfig:
    title: str = "Camera App"
    window_width: int = 800
    window_height: int = 600
    max_preview_width: int = 800
    controls_reserve_px: int = 150


@dataclass(frozen=True)
class LoggingConfig:
    level: str = "INFO"
    log_dir: Optional[str] = None


@dataclass(frozen=True)
class AppConfig:
    camera: CameraConfig = field(default_factory=CameraConfig)
    recording: RecordingConfig = field(default_factory=RecordingConfig)
    ui: UiConfig = field(default_factory=UiConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def default_config() -> AppConfig:
    """Return the built-in defaults without touching the filesystem."""
    return AppConfig()


def _parse_camera(data: Dict[str, Any]) -> CameraConfig:
    indices = {CameraPosition.REAR: 0, CameraPosition.FRONT: 1}
    for name, index in (data.get("device_indices") or {}).items():
        indices[CameraPosition(name)] = int(index)
    if indices[CameraPosition.REAR] == indices[CameraPosition.FRONT]:
        raise InvalidConfigError(
            f"camera.device_indices must map rear and front to different devices: {indices}"
        )
    return CameraConfig(
        width=int(data["width"]),
        height=int(data["height"]),
        position=CameraPosition(data.get("position", "rear")),
        backend=data.get("backend", "opencv"),
        device_indices=indices,
        open_timeout_s=float(data.get("open_timeout_s", 5.0)),
    )


def parse_config(data: Dict[str, Any]) -> AppConfig:
    """Validate a raw config mapping and build an AppConfig.

    Args:
        data: Parsed YAML mapping (not modified)

    Returns:
        Validated AppConfig instance

    Raises:
        ConfigError: If configuration is invalid
    """
    data = copy.deepcopy(data)

    # Validate against JSON Schema
    validate_config(data)

    try:
        camera = _parse_camera(data["camera"])
        recording_data = data.get("recording", {})
        recording = RecordingConfig(
            output_dir=recording_data.get("output_dir", "camera_output"),
            codecs=tuple(recording_data.get("codecs", ("mp4v", "MJPG"))),
            default_fps=float(recording_data.get("default_fps", 30.0)),
            max_fps=float(recording_data.get("max_fps", 120.0)),
            jpeg_quality=int(recording_data.get("jpeg_quality", 95)),
        )
        ui = UiConfig(**data.get("ui", {}))
        logging_config = LoggingConfig(**data.get("logging", {}))

    except ConfigError:
        raise
    except (KeyError, TypeError, ValueError) as e:
        logger.error(f"Failed to construct configuration objects: {e}")
        raise InvalidConfigError(f"Failed to construct configuration: {e}")

    if recording.default_fps > recording.max_fps:
        raise InvalidConfigError(
            f"recording.default_fps ({recording.default_fps}) exceeds max_fps ({recording.max_fps})"
        )

    return AppConfig(camera=camera, recording=recording, ui=ui, logging=logging_config)


def load_config(path: Path) -> AppConfig:
    """Load and validate configuration from YAML file.

    Args:
        path: Path to configuration file

    Returns:
        Validated AppConfig instance

    Raises:
        ConfigError: If configuration is invalid or cannot be loaded
    """
    path = Path(path)
    logger.info(f"Loading configuration from {path}")
    if not path.exists():
        raise InvalidConfigError(f"Configuration file not found: {path}")

    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        logger.error(f"Failed to parse YAML configuration: {e}")
        raise InvalidConfigError(f"Failed to parse configuration file: {e}")

    if not isinstance(data, dict):
        raise InvalidConfigError(f"Configuration root must be a mapping: {path}")

    config = parse_config(data)
    logger.info(
        f"Configuration loaded successfully: {config.camera.backend} backend, "
        f"{config.camera.width}x{config.camera.height}, output {config.recording.output_dir}"
    )
    return config
