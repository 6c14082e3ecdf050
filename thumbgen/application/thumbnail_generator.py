"""
Thumbnail, palette and gif generation use case.
"""
from __future__ import annotations

import asyncio
import logging
import time
from pathlib import Path
from typing import Any, Callable, Coroutine, Mapping, Optional

from thumbgen.adapters.outbound.ffmpeg.ffmpeg_command import FFmpegCommand
from thumbgen.adapters.outbound.persistence.local_file_storage import LocalFileStorage
from thumbgen.core.exceptions import InvalidArgumentError
from thumbgen.core.value_objects import (
    GIF_DEFAULTS,
    PALETTE_DEFAULTS,
    THUMBNAIL_DEFAULTS,
    CommandOutcome,
    GeneratorConfig,
    format_percent,
    merge_options,
)
from thumbgen.ports.outbound import FileDeletionPort, MediaCommandPort

logger = logging.getLogger(__name__)

Options = Optional[Mapping[str, Any]]
Callback = Callable[[Optional[BaseException], Any], None]
CommandFactory = Callable[[str, Optional[logging.Logger]], MediaCommandPort]


def _now_millis() -> int:
    return int(time.time() * 1000)


def _split_callback(options: Any, callback: Optional[Callback]) -> tuple[Options, Callback]:
    """Allow the callback to be passed in the options position."""
    if callback is None and callable(options):
        return None, options
    if callback is None:
        raise TypeError("A completion callback is required")
    return options, callback


class ThumbnailGenerator:
    """Extracts thumbnails, palettes and gifs from one source video.

    Every operation builds a single engine command, binds its ``filenames``,
    ``end`` and ``error`` notifications, starts it and awaits the one
    terminal notification. Nothing is shared between calls, so operations
    may run concurrently on the same instance.
    """

    def __init__(
        self,
        source_path: str,
        thumbnail_path: str,
        percent: float = 90,
        tmp_dir: str = "/tmp",
        logger: Optional[logging.Logger] = None,
        size: Optional[str] = None,
        *,
        command_factory: Optional[CommandFactory] = None,
        file_deleter: Optional[FileDeletionPort] = None,
    ) -> None:
        self._config = GeneratorConfig(
            source_path=source_path,
            thumbnail_path=thumbnail_path,
            percent=percent,
            tmp_dir=tmp_dir,
            size=size,
            logger=logger,
        )
        # Engine and filesystem collaborators are injectable.
        self._command_factory: CommandFactory = command_factory or FFmpegCommand
        self._file_deleter: FileDeletionPort = file_deleter or LocalFileStorage()

    @property
    def config(self) -> GeneratorConfig:
        return self._config

    # -- engine plumbing -------------------------------------------------------

    def _new_command(self) -> MediaCommandPort:
        return self._command_factory(self._config.source_path, self._config.logger)

    async def _execute(
        self,
        command: MediaCommandPort,
        start: Callable[[MediaCommandPort], None],
    ) -> CommandOutcome:
        """Bind the three notifications, start *command* once, await the outcome."""
        loop = asyncio.get_running_loop()
        pending: asyncio.Future[CommandOutcome] = loop.create_future()
        produced: list[str] = []

        def on_filenames(filenames):
            produced[:] = list(filenames)

        def on_end(*_):
            if not pending.done():
                pending.set_result(CommandOutcome.success(produced))

        def on_error(error, *_):
            if not pending.done():
                pending.set_result(CommandOutcome.failure(error))

        command.on("filenames", on_filenames).on("end", on_end).on("error", on_error)
        start(command)
        return await pending

    @staticmethod
    def _seek_options(conf: Mapping[str, Any]) -> list[str]:
        options: list[str] = []
        if conf.get("offset"):
            options.extend(["-ss", str(conf["offset"])])
        if conf.get("duration"):
            options.extend(["-t", str(conf["duration"])])
        return options

    def _discard_palette(self, palette_path: str) -> None:
        try:
            self._file_deleter.delete_sync([palette_path], force=True)
        except Exception as exc:
            logger.warning("Could not remove palette %s: %s", palette_path, exc)

    # -- thumbnails ------------------------------------------------------------

    async def generate(self, options: Options = None) -> list[str]:
        """Extract a batch of thumbnails.

        Args:
            options: ``folder``, ``count``, ``size``, ``filename`` and
                ``timestamps`` overrides.

        Returns:
            The filenames reported by the engine, in the order it reported them.
        """
        defaults = merge_options(
            THUMBNAIL_DEFAULTS,
            {"folder": self._config.thumbnail_path, "size": self._config.size},
        )
        settings = merge_options(defaults, options)
        logger.info("Generating %s thumbnail(s) from %s", settings.get("count"), self._config.source_name)

        outcome = await self._execute(self._new_command(), lambda command: command.screenshots(settings))
        return outcome.unwrap()

    async def generate_one_by_percent(
        self, percent: Optional[float] = None, options: Options = None
    ) -> Optional[str]:
        """Extract one thumbnail at *percent* of the video's duration.

        When *percent* is ``None`` the generator's configured percent is used.

        Raises:
            InvalidArgumentError: *percent* is outside 0-100. No engine
                command is created in that case.
        """
        if percent is None:
            percent = self._config.percent
        if percent < 0 or percent > 100:
            raise InvalidArgumentError("Percent must be a value from 0-100")

        forced = merge_options(options or {}, {"count": 1, "timestamps": [format_percent(percent)]})
        result = await self.generate(forced)
        return result[-1] if result else None

    # -- palette / gif ---------------------------------------------------------

    async def generate_palette(self, options: Options = None) -> str:
        """Generate the color palette image a high quality gif is encoded with.

        Args:
            options: ``video_filters``, ``offset`` and ``duration`` overrides.

        Returns:
            Path of the palette png under the configured temp directory.
        """
        conf = merge_options(PALETTE_DEFAULTS, options)
        output = str(Path(self._config.tmp_dir) / f"palette-{_now_millis()}.png")

        command = (
            self._new_command()
            .input_options(["-y", *self._seek_options(conf)])
            .output_options(["-vf", conf["video_filters"]])
            .output(output)
        )
        outcome = await self._execute(command, lambda cmd: cmd.run())
        outcome.unwrap()
        logger.debug("Palette written to %s", output)
        return output

    async def generate_gif(self, options: Options = None) -> str:
        """Create a short, sped-up gif of the source video.

        Args:
            options: ``fps``, ``scale``, ``speed_multiplier``, ``offset``,
                ``duration``, ``file_name`` and ``delete_palette`` overrides.

        Returns:
            Path of the gif under the configured output directory.
        """
        conf = merge_options(GIF_DEFAULTS, options)
        file_name = conf.get("file_name") or f"video-{_now_millis()}.gif"
        output = str(Path(self._config.thumbnail_path) / file_name)

        # The palette is sampled with its own defaults; gif offset/duration
        # are not applied to it.
        palette_path = await self.generate_palette()

        filter_complex = (
            f"fps={conf['fps']},setpts=(1/{conf['speed_multiplier']})*PTS,"
            f"scale={conf['scale']}:-1:flags=lanczos[x];[x][1:v]paletteuse"
        )
        command = (
            self._new_command()
            .input_options(self._seek_options(conf))
            .input(palette_path)
            .output_options(["-filter_complex", filter_complex])
            .output(output)
        )
        outcome = await self._execute(command, lambda cmd: cmd.run())
        outcome.unwrap()

        if conf["delete_palette"] is True:
            self._discard_palette(palette_path)
        logger.info("Gif written to %s", output)
        return output

    # -- callback-style adapters -----------------------------------------------

    @staticmethod
    def _schedule(coro: Coroutine[Any, Any, Any], callback: Callback) -> asyncio.Task:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            coro.close()
            raise
        task = loop.create_task(coro)

        def _done(finished: asyncio.Task) -> None:
            if finished.cancelled():
                callback(asyncio.CancelledError(), None)
                return
            error = finished.exception()
            if error is not None:
                callback(error, None)
            else:
                callback(None, finished.result())

        task.add_done_callback(_done)
        return task

    def generate_cb(self, options: Any = None, callback: Optional[Callback] = None) -> asyncio.Task:
        options, callback = _split_callback(options, callback)
        return self._schedule(self.generate(options), callback)

    def generate_one_by_percent_cb(
        self, percent: Optional[float], options: Any = None, callback: Optional[Callback] = None
    ) -> asyncio.Task:
        options, callback = _split_callback(options, callback)
        return self._schedule(self.generate_one_by_percent(percent, options), callback)

    def generate_palette_cb(self, options: Any = None, callback: Optional[Callback] = None) -> asyncio.Task:
        options, callback = _split_callback(options, callback)
        return self._schedule(self.generate_palette(options), callback)

    def generate_gif_cb(self, options: Any = None, callback: Optional[Callback] = None) -> asyncio.Task:
        options, callback = _split_callback(options, callback)
        return self._schedule(self.generate_gif(options), callback)
