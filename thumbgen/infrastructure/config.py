"""
thumbgen configuration using Pydantic Settings.
Values come from the environment (or a .env file) with the prefixes below.
"""

from __future__ import annotations

from typing import Optional

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings

# Load .env before any BaseSettings subclass reads env vars
load_dotenv()


class FFmpegSettings(BaseSettings):
    binary: Optional[str] = None
    probe_binary: Optional[str] = None

    model_config = {"env_prefix": "FFMPEG_"}


class LoggingSettings(BaseSettings):
    level: str = "INFO"

    model_config = {"env_prefix": "LOG_"}


class Settings(BaseSettings):
    """Root settings for building thumbnail generators."""

    thumbnail_path: str = "./thumbnails"
    percent: float = Field(default=90, ge=0, le=100)
    tmp_dir: str = "/tmp"
    size: Optional[str] = None

    ffmpeg: FFmpegSettings = Field(default_factory=FFmpegSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = {
        "env_prefix": "THUMBGEN_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


def get_settings() -> Settings:
    """Create and return application settings."""
    return Settings()
