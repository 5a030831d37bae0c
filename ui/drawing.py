"""Drawing functions for rendering display frames."""

from __future__ import annotations

from PySide6 import QtCore, QtGui

from contracts import DisplayFrame


def preview_size(
    available_width: int,
    available_height: int,
    max_width: int = 800,
    controls_reserve_px: int = 150,
) -> tuple[int, int]:
    """Box the preview may occupy: full width up to ``max_width``, height
    minus the strip reserved for controls. Never negative."""
    width = max(0, min(available_width, max_width))
    height = max(0, available_height - controls_reserve_px)
    return width, height


def display_frame_to_pixmap(frame: DisplayFrame) -> QtGui.QPixmap:
    """Convert an RGB888 DisplayFrame to QPixmap.

    Args:
        frame: Packed RGB frame

    Returns:
        QPixmap ready for display
    """
    pixels = frame.pixels
    qimage = QtGui.QImage(
        pixels.data,
        frame.width,
        frame.height,
        pixels.strides[0],
        QtGui.QImage.Format_RGB888,
    )
    # fromImage copies, so the numpy buffer may be released afterwards
    return QtGui.QPixmap.fromImage(qimage)


def scaled_pixmap(pixmap: QtGui.QPixmap, width: int, height: int) -> QtGui.QPixmap:
    """Scale ``pixmap`` to fit in width x height, keeping aspect ratio."""
    if width <= 0 or height <= 0:
        return pixmap
    return pixmap.scaled(
        width,
        height,
        QtCore.Qt.AspectRatioMode.KeepAspectRatio,
        QtCore.Qt.TransformationMode.SmoothTransformation,
    )


__all__ = ["display_frame_to_pixmap", "preview_size", "scaled_pixmap"]
