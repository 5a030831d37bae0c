"""Photo and video output."""

from .naming import ensure_output_dir, photo_path, timestamped_path, video_path
from .photo import save_photo
from .video_writer import clamp_fps, open_video_writer

__all__ = [
    "clamp_fps",
    "ensure_output_dir",
    "open_video_writer",
    "photo_path",
    "save_photo",
    "timestamped_path",
    "video_path",
]
