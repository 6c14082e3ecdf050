"""
Shared FFmpeg path resolution and command execution utilities.
"""
from __future__ import annotations

import logging
import os
import shutil
import subprocess
from typing import Optional

from thumbgen.core.exceptions import FFmpegError

logger = logging.getLogger(__name__)

# Common install locations when ffmpeg is not on PATH
_KNOWN_FFMPEG_PATHS = [
    "/usr/local/bin/ffmpeg",
    "/opt/homebrew/bin/ffmpeg",
    r"C:\Program Files\ffmpeg\bin\ffmpeg.exe",
    r"C:\ffmpeg\bin\ffmpeg.exe",
]


def get_ffmpeg_path() -> str:
    """Resolve ffmpeg executable path. Checks PATH first, then known locations."""
    path = shutil.which("ffmpeg")
    if path:
        return path

    for candidate in _KNOWN_FFMPEG_PATHS:
        if os.path.exists(candidate):
            logger.info("Found FFmpeg at: %s", candidate)
            return candidate

    return "ffmpeg"


def get_ffprobe_path() -> str:
    """Resolve ffprobe executable path derived from ffmpeg path."""
    ffmpeg = get_ffmpeg_path()
    if "ffmpeg.exe" in ffmpeg:
        probe = ffmpeg.replace("ffmpeg.exe", "ffprobe.exe")
        if os.path.exists(probe):
            return probe
    probe = shutil.which("ffprobe")
    return probe or "ffprobe"


# Module-level singletons (resolved once at import time)
FFMPEG_PATH: str = get_ffmpeg_path()
FFPROBE_PATH: str = get_ffprobe_path()


def run_ffmpeg(
    args: list[str],
    *,
    binary: Optional[str] = None,
    check: bool = True,
    timeout: Optional[int] = None,
) -> subprocess.CompletedProcess[str]:
    """Run an FFmpeg command with standard error handling.

    Args:
        args: Command arguments *without* the ffmpeg binary itself.
        binary: Override for the resolved ffmpeg executable.
        check: Raise on non-zero return code.
        timeout: Optional timeout in seconds.

    Returns:
        CompletedProcess instance.

    Raises:
        FFmpegError: The process exited with a non-zero code and *check* is set.
        FileNotFoundError: The ffmpeg executable does not exist.
    """
    cmd = [binary or FFMPEG_PATH, *args]
    logger.debug("Running: %s", " ".join(cmd))
    result = subprocess.run(
        cmd, capture_output=True, text=True, encoding="utf-8", errors="replace", timeout=timeout
    )
    if check and result.returncode != 0:
        logger.error("FFmpeg error: %s", result.stderr)
        raise FFmpegError(
            f"FFmpeg failed (rc={result.returncode}): {result.stderr[-500:]}",
            returncode=result.returncode,
            stderr=result.stderr,
        )
    return result


def run_ffprobe(
    args: list[str], *, binary: Optional[str] = None, timeout: int = 30
) -> subprocess.CompletedProcess[str]:
    """Run an FFprobe command."""
    cmd = [binary or FFPROBE_PATH, *args]
    logger.debug("Running: %s", " ".join(cmd))
    result = subprocess.run(
        cmd, capture_output=True, text=True, encoding="utf-8", errors="replace", timeout=timeout
    )
    if result.returncode != 0:
        raise FFmpegError(
            f"FFprobe failed: {result.stderr[:500]}",
            returncode=result.returncode,
            stderr=result.stderr,
        )
    return result


def get_video_duration(video_path: str, *, binary: Optional[str] = None) -> float:
    """Get video duration in seconds."""
    result = run_ffprobe([
        "-v", "error",
        "-show_entries", "format=duration",
        "-of", "default=noprint_wrappers=1:nokey=1",
        video_path,
    ], binary=binary)
    return float(result.stdout.strip())
