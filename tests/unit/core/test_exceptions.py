"""Unit tests for the exception hierarchy."""
from __future__ import annotations

from thumbgen.core.exceptions import (
    CommandStateError,
    FFmpegError,
    InvalidArgumentError,
    ThumbGenError,
)


def test_hierarchy():
    assert issubclass(InvalidArgumentError, ThumbGenError)
    assert issubclass(InvalidArgumentError, ValueError)
    assert issubclass(FFmpegError, ThumbGenError)
    assert issubclass(CommandStateError, ThumbGenError)


def test_ffmpeg_error_carries_process_details():
    error = FFmpegError("failed", returncode=183, stderr="Invalid argument")
    assert str(error) == "failed"
    assert error.returncode == 183
    assert error.stderr == "Invalid argument"
