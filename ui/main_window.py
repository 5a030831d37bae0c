"""Main window class for the camera app."""

from __future__ import annotations

import argparse
import dataclasses
import sys
from pathlib import Path
from typing import Optional, Sequence

from PySide6 import QtCore, QtGui, QtWidgets

from app.session import CameraFactory, CaptureSession
from capture import OpenCVCamera, SimulatedCamera
from configs.app_state import load_state, save_state
from configs.settings import DEFAULT_CONFIG_PATH, AppConfig, default_config, load_config
from contracts import CameraPosition, CaptureMode
from contracts.versioning import APP_VERSION
from exceptions import ConfigError, SnapCamError
from log_config.logger import configure_logging, get_logger
from ui.drawing import display_frame_to_pixmap, preview_size, scaled_pixmap

logger = get_logger(__name__)

PLACEHOLDER_INITIALIZING = "Initializing camera..."
PLACEHOLDER_UNAVAILABLE = "Camera not available"
RECORDING_INDICATOR = "🔴 Recording..."


class MainWindow(QtWidgets.QMainWindow):
    def __init__(
        self,
        session: CaptureSession,
        config: Optional[AppConfig] = None,
        state_root: Optional[Path] = None,
    ) -> None:
        super().__init__()
        self._session = session
        self._config = config or default_config()
        self._state_root = state_root
        self._shown_frame_index: Optional[int] = None
        self._preview_pixmap: Optional[QtGui.QPixmap] = None

        ui = self._config.ui
        self.setWindowTitle(ui.title)
        self.resize(ui.window_width, ui.window_height)

        self._preview_label = QtWidgets.QLabel(PLACEHOLDER_INITIALIZING)
        self._preview_label.setAlignment(QtCore.Qt.AlignmentFlag.AlignCenter)
        self._preview_label.setSizePolicy(
            QtWidgets.QSizePolicy.Policy.Ignored,
            QtWidgets.QSizePolicy.Policy.Ignored,
        )

        self._photo_radio = QtWidgets.QRadioButton("📷 Photo")
        self._video_radio = QtWidgets.QRadioButton("🎥 Video")
        self._mode_group = QtWidgets.QButtonGroup(self)
        self._mode_group.addButton(self._photo_radio)
        self._mode_group.addButton(self._video_radio)

        self._rear_radio = QtWidgets.QRadioButton("Rear")
        self._front_radio = QtWidgets.QRadioButton("Front")
        self._position_group = QtWidgets.QButtonGroup(self)
        self._position_group.addButton(self._rear_radio)
        self._position_group.addButton(self._front_radio)

        self._capture_button = QtWidgets.QPushButton("📸 Take Photo")
        self._record_button = QtWidgets.QPushButton("⏺ Start Recording")
        self._recording_label = QtWidgets.QLabel(RECORDING_INDICATOR)
        self._recording_label.setStyleSheet("color: #d32f2f; font-weight: bold;")
        self._retry_button = QtWidgets.QPushButton("Retry Camera")

        self._output_label = QtWidgets.QLabel(f"Output: {self._session.output_dir}")
        self._status_label = QtWidgets.QLabel("")

        self._build_layout()
        self._sync_controls()

        self._photo_radio.clicked.connect(lambda: self._on_mode_selected(CaptureMode.PHOTO))
        self._video_radio.clicked.connect(lambda: self._on_mode_selected(CaptureMode.VIDEO))
        self._rear_radio.clicked.connect(lambda: self._on_position_selected(CameraPosition.REAR))
        self._front_radio.clicked.connect(lambda: self._on_position_selected(CameraPosition.FRONT))
        self._capture_button.clicked.connect(self._on_capture_photo)
        self._record_button.clicked.connect(self._on_toggle_recording)
        self._retry_button.clicked.connect(self._on_retry_camera)

        # Interval 0: redraw continuously to keep the preview live
        self._timer = QtCore.QTimer(self)
        self._timer.setInterval(0)
        self._timer.timeout.connect(self._update_preview)
        self._timer.start()

    def _build_layout(self) -> None:
        mode_row = QtWidgets.QHBoxLayout()
        mode_row.addWidget(QtWidgets.QLabel("Mode:"))
        mode_row.addWidget(self._photo_radio)
        mode_row.addWidget(self._video_radio)
        mode_row.addSpacing(24)
        mode_row.addWidget(QtWidgets.QLabel("Camera:"))
        mode_row.addWidget(self._rear_radio)
        mode_row.addWidget(self._front_radio)
        mode_row.addStretch()

        action_row = QtWidgets.QHBoxLayout()
        action_row.addWidget(self._capture_button)
        action_row.addWidget(self._record_button)
        action_row.addWidget(self._recording_label)
        action_row.addWidget(self._retry_button)
        action_row.addStretch()

        layout = QtWidgets.QVBoxLayout()
        layout.addWidget(self._preview_label, 1)
        layout.addLayout(mode_row)
        layout.addLayout(action_row)
        layout.addWidget(self._output_label)
        layout.addWidget(self._status_label)

        central = QtWidgets.QWidget()
        central.setLayout(layout)
        self.setCentralWidget(central)

    # ---------------------------------------------------------------- preview

    def _update_preview(self) -> None:
        self._session.tick()

        frame = self._session.current_frame
        if frame is None:
            self._preview_pixmap = None
            self._preview_label.setPixmap(QtGui.QPixmap())
            self._preview_label.setText(
                PLACEHOLDER_INITIALIZING if self._session.camera_available else PLACEHOLDER_UNAVAILABLE
            )
        elif frame.frame_index != self._shown_frame_index:
            self._shown_frame_index = frame.frame_index
            self._preview_pixmap = display_frame_to_pixmap(frame)
            self._render_preview()

        self._sync_controls()

    def _render_preview(self) -> None:
        if self._preview_pixmap is None:
            return
        central = self.centralWidget()
        width, height = preview_size(
            central.width(),
            central.height(),
            self._config.ui.max_preview_width,
            self._config.ui.controls_reserve_px,
        )
        self._preview_label.setPixmap(scaled_pixmap(self._preview_pixmap, width, height))

    def resizeEvent(self, event: QtGui.QResizeEvent) -> None:
        super().resizeEvent(event)
        self._render_preview()

    def _sync_controls(self) -> None:
        session = self._session
        photo_mode = session.mode == CaptureMode.PHOTO

        self._photo_radio.setChecked(photo_mode)
        self._video_radio.setChecked(not photo_mode)
        self._rear_radio.setChecked(session.position == CameraPosition.REAR)
        self._front_radio.setChecked(session.position == CameraPosition.FRONT)

        self._capture_button.setVisible(photo_mode)
        self._record_button.setVisible(not photo_mode)
        self._record_button.setText("⏹ Stop Recording" if session.is_recording else "⏺ Start Recording")
        self._recording_label.setVisible(not photo_mode and session.is_recording)
        recording = session.recording
        if recording is not None:
            elapsed = int(recording.elapsed_s)
            self._recording_label.setText(f"{RECORDING_INDICATOR} {elapsed // 60:02d}:{elapsed % 60:02d}")
        self._retry_button.setVisible(not session.camera_available)

    def _show_status(self, message: str) -> None:
        self._status_label.setText(message)

    # --------------------------------------------------------------- handlers

    def _on_mode_selected(self, mode: CaptureMode) -> None:
        was_recording = self._session.is_recording
        self._session.set_mode(mode)
        if was_recording and not self._session.is_recording:
            self._show_status("Recording stopped")
        self._sync_controls()

    def _on_position_selected(self, position: CameraPosition) -> None:
        if position == self._session.position:
            return
        was_recording = self._session.is_recording
        available = self._session.switch_camera(position)
        self._shown_frame_index = None
        if available:
            message = f"Switched to {position.value} camera"
        else:
            message = f"{position.value.capitalize()} camera not available: {self._session.last_error}"
        if was_recording:
            message = f"Recording stopped. {message}"
        self._show_status(message)
        self._sync_controls()

    def _on_capture_photo(self) -> None:
        try:
            path = self._session.capture_photo()
        except SnapCamError as e:
            logger.error(f"Photo capture failed: {e}")
            self._show_status(f"Photo failed: {e}")
            return
        self._show_status(f"Saved photo: {path}")

    def _on_toggle_recording(self) -> None:
        if self._session.is_recording:
            path = self._session.stop_recording()
            self._show_status(f"Saved video: {path}")
        else:
            try:
                path = self._session.start_recording()
            except SnapCamError as e:
                logger.error(f"Recording failed to start: {e}")
                self._show_status(f"Recording failed: {e}")
            else:
                self._show_status(f"Recording to {path}")
        self._sync_controls()

    def _on_retry_camera(self) -> None:
        if self._session.reopen():
            self._show_status("Camera connected")
        else:
            self._show_status(f"Camera not available: {self._session.last_error}")
        self._sync_controls()

    def closeEvent(self, event: QtGui.QCloseEvent) -> None:
        """Stop the redraw loop, finalize any recording and release the camera."""
        self._timer.stop()
        try:
            save_state(
                {"mode": self._session.mode.value, "position": self._session.position.value},
                self._state_root,
            )
        except OSError as e:
            logger.warning(f"Could not save app state: {e}")
        self._session.close()
        event.accept()


def build_camera_factory(config: AppConfig) -> CameraFactory:
    if config.camera.backend == "sim":
        return lambda: SimulatedCamera(throttle=True)
    timeout = config.camera.open_timeout_s
    return lambda: OpenCVCamera(open_timeout_s=timeout)


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Camera preview, photo and video capture.")
    parser.add_argument("--config", type=Path, default=None, help="YAML configuration file")
    parser.add_argument("--backend", choices=["opencv", "sim"], default=None)
    parser.add_argument("--position", choices=[p.value for p in CameraPosition], default=None)
    parser.add_argument("--output-dir", type=Path, default=None)
    parser.add_argument("--log-level", default=None)
    parser.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION}")
    return parser.parse_args(argv)


def _resolve_config(args: argparse.Namespace) -> AppConfig:
    if args.config is not None:
        config = load_config(args.config)
    elif DEFAULT_CONFIG_PATH.exists():
        config = load_config(DEFAULT_CONFIG_PATH)
    else:
        config = default_config()

    if args.backend:
        config = dataclasses.replace(config, camera=dataclasses.replace(config.camera, backend=args.backend))
    if args.output_dir:
        config = dataclasses.replace(
            config, recording=dataclasses.replace(config.recording, output_dir=str(args.output_dir))
        )
    if args.log_level:
        config = dataclasses.replace(config, logging=dataclasses.replace(config.logging, level=args.log_level))
    return config


def _state_value(enum_cls, raw, fallback):
    try:
        return enum_cls(raw) if raw is not None else fallback
    except ValueError:
        logger.warning(f"Ignoring unknown saved {enum_cls.__name__}: {raw!r}")
        return fallback


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    try:
        config = _resolve_config(args)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    configure_logging(config.logging.level, config.logging.log_dir)

    state = load_state()
    position = CameraPosition(args.position) if args.position else _state_value(
        CameraPosition, state.get("position"), config.camera.position
    )
    mode = _state_value(CaptureMode, state.get("mode"), CaptureMode.PHOTO)

    app = QtWidgets.QApplication(sys.argv[:1])
    session = CaptureSession.from_config(config, build_camera_factory(config), position=position, mode=mode)
    window = MainWindow(session, config)
    window.show()
    logger.info(f"Started {config.ui.title} {APP_VERSION}")
    return app.exec()


__all__ = ["MainWindow", "build_camera_factory", "main"]
