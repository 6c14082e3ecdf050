"""Custom exception hierarchy for thumbgen."""
from __future__ import annotations

from typing import Optional


class ThumbGenError(Exception):
    """Base exception for all thumbgen errors."""


class InvalidArgumentError(ThumbGenError, ValueError):
    """Raised when an operation argument is out of its accepted range."""


class FFmpegError(ThumbGenError):
    """Raised when an FFmpeg or FFprobe process exits with a non-zero code."""

    def __init__(self, message: str, returncode: Optional[int] = None, stderr: str = "") -> None:
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(message)


class CommandStateError(ThumbGenError):
    """Raised when an engine command is configured or started in the wrong state."""
