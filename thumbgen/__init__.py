"""Thumbnail, palette and gif generation on top of ffmpeg."""

from thumbgen.application.thumbnail_generator import ThumbnailGenerator
from thumbgen.core.exceptions import (
    CommandStateError,
    FFmpegError,
    InvalidArgumentError,
    ThumbGenError,
)

__version__ = "0.1.0"

__all__ = [
    "ThumbnailGenerator",
    "ThumbGenError",
    "InvalidArgumentError",
    "FFmpegError",
    "CommandStateError",
    "__version__",
]
