"""UI module."""

from .drawing import display_frame_to_pixmap, preview_size, scaled_pixmap

__all__ = ["display_frame_to_pixmap", "preview_size", "scaled_pixmap"]
