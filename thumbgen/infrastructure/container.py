"""
Dependency container wiring ports and adapters from Settings.
"""
from __future__ import annotations

import functools
import logging
from typing import Optional

from thumbgen.application.thumbnail_generator import ThumbnailGenerator
from thumbgen.infrastructure.config import Settings
from thumbgen.infrastructure.logging_config import setup_logging

logger = logging.getLogger(__name__)


class ApplicationContainer:
    """Simplified container that builds concrete instances from settings.

    Usage::

        container = ApplicationContainer(settings)
        generator = container.thumbnail_generator("/videos/clip.mp4")
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or Settings()
        self._cache: dict[str, object] = {}

    def _get_or_create(self, key: str, factory):
        if key not in self._cache:
            self._cache[key] = factory(self.settings)
        return self._cache[key]

    # ── Lazy factory helpers ──────────────────────────────────────

    @staticmethod
    def _build_file_storage(settings: Settings):
        from thumbgen.adapters.outbound.persistence.local_file_storage import LocalFileStorage
        return LocalFileStorage()

    @staticmethod
    def _build_command_factory(settings: Settings):
        from thumbgen.adapters.outbound.ffmpeg.ffmpeg_command import FFmpegCommand
        return functools.partial(
            FFmpegCommand,
            ffmpeg_binary=settings.ffmpeg.binary,
            ffprobe_binary=settings.ffmpeg.probe_binary,
        )

    # ── Public accessors ──────────────────────────────────────────

    def configure_logging(self) -> None:
        """Install the root log handler at the configured level. Opt-in."""
        setup_logging(self.settings.logging.level)

    def file_storage(self):
        return self._get_or_create("file_storage", self._build_file_storage)

    def command_factory(self):
        return self._get_or_create("command_factory", self._build_command_factory)

    def thumbnail_generator(
        self, source_path: str, logger: Optional[logging.Logger] = None
    ) -> ThumbnailGenerator:
        """Build a generator for *source_path*; one instance per source video."""
        return ThumbnailGenerator(
            source_path=source_path,
            thumbnail_path=self.settings.thumbnail_path,
            percent=self.settings.percent,
            tmp_dir=self.settings.tmp_dir,
            logger=logger,
            size=self.settings.size,
            command_factory=self.command_factory(),
            file_deleter=self.file_storage(),
        )
