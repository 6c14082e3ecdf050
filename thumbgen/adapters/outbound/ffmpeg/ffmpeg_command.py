"""Event-notifying FFmpeg command used for every generator operation.

A command is built in three steps: register handlers and options while
``IDLE``, start it once with :meth:`FFmpegCommand.run` or
:meth:`FFmpegCommand.screenshots`, then wait for exactly one of the ``end``
or ``error`` notifications. ``screenshots`` additionally fires ``filenames``
with the names it is about to write before any frame is extracted.
"""
from __future__ import annotations

import asyncio
import functools
import logging
import re
import uuid
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Awaitable, Callable, Mapping, Optional, Sequence, Union

from thumbgen.adapters.outbound.ffmpeg.ffmpeg_base import get_video_duration, run_ffmpeg
from thumbgen.core.exceptions import CommandStateError

EVENTS = ("filenames", "end", "error")

_DEFAULT_SCREENSHOT_NAME = "tn.png"
_FILENAME_TOKEN = re.compile(r"%(0*i|[bfsr])")
_SIZE_PERCENT = re.compile(r"(\d+(?:\.\d+)?)%")
_SIZE_DIMENSIONS = re.compile(r"(\d+|\?)x(\d+|\?)")

Timemark = Union[int, float, str]


class CommandState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    SETTLED = "settled"


@dataclass
class _Input:
    path: str
    options: list[str] = field(default_factory=list)


def parse_timemark(mark: Timemark, duration: Optional[float] = None) -> float:
    """Convert a timemark to seconds.

    Accepts numbers, numeric strings, ``"HH:MM:SS.ms"`` strings and
    percentages of *duration* such as ``"25%"``.
    """
    if isinstance(mark, (int, float)):
        return float(mark)
    text = str(mark).strip()
    if text.endswith("%"):
        if duration is None:
            raise ValueError(f"Cannot resolve percent timemark {text!r} without a duration")
        return duration * float(text[:-1]) / 100
    if ":" in text:
        seconds = 0.0
        for part in text.split(":"):
            seconds = seconds * 60 + float(part)
        return seconds
    return float(text)


def default_timemarks(count: int) -> list[str]:
    """Evenly spaced percent marks that avoid the very first and last frame."""
    interval = 100 / (count + 1)
    return [f"{interval * (i + 1):g}%" for i in range(count)]


def render_filename(pattern: str, source: str, seconds: float, index: int, token: str) -> str:
    """Expand the ``%b %f %s %r %i %0..0i`` tokens of a screenshot filename pattern."""
    src = Path(source)

    def _expand(match: re.Match) -> str:
        key = match.group(1)
        if key == "b":
            return src.stem
        if key == "f":
            return src.name
        if key == "s":
            return f"{seconds:g}"
        if key == "r":
            return token
        return str(index).zfill(len(key) - 1)

    name = _FILENAME_TOKEN.sub(_expand, pattern)
    if not Path(pattern).suffix:
        name += ".png"
    return name


def size_to_filter(size: Optional[str]) -> Optional[str]:
    """Translate a ``WxH`` / ``Wx?`` / ``?xH`` / ``N%`` size into a scale filter."""
    if not size:
        return None
    size = str(size).strip()
    percent = _SIZE_PERCENT.fullmatch(size)
    if percent:
        value = percent.group(1)
        return f"scale=iw*{value}/100:ih*{value}/100"
    dims = _SIZE_DIMENSIONS.fullmatch(size)
    if dims and dims.groups() != ("?", "?"):
        width, height = ("-1" if d == "?" else d for d in dims.groups())
        return f"scale={width}:{height}"
    raise ValueError(f"Invalid size specification: {size!r}")


class FFmpegCommand:
    """Implements :class:`MediaCommandPort` on top of the ffmpeg CLI.

    Blocking ffmpeg/ffprobe runs are pushed to the default executor so the
    event loop stays free while the engine works.
    """

    def __init__(
        self,
        source: str,
        logger: Optional[logging.Logger] = None,
        *,
        ffmpeg_binary: Optional[str] = None,
        ffprobe_binary: Optional[str] = None,
        runner: Callable[..., Any] = run_ffmpeg,
        duration_probe: Callable[..., float] = get_video_duration,
    ) -> None:
        self._inputs: list[_Input] = [_Input(str(source))]
        self._output_options: list[str] = []
        self._output: Optional[str] = None
        self._handlers: dict[str, list[Callable[..., Any]]] = {event: [] for event in EVENTS}
        self._state = CommandState.IDLE
        self._task: Optional[asyncio.Task] = None
        self._log = logger if logger is not None else logging.getLogger(__name__)
        self._ffmpeg_binary = ffmpeg_binary
        self._ffprobe_binary = ffprobe_binary
        self._runner = runner
        self._duration_probe = duration_probe

    @property
    def state(self) -> CommandState:
        return self._state

    @property
    def source(self) -> str:
        return self._inputs[0].path

    # -- configuration (IDLE only) ---------------------------------------------

    def on(self, event: str, handler: Callable[..., Any]) -> FFmpegCommand:
        self._require_idle("register a handler")
        if event not in self._handlers:
            raise ValueError(f"Unknown event {event!r}; expected one of {', '.join(EVENTS)}")
        self._handlers[event].append(handler)
        return self

    def input(self, path: str) -> FFmpegCommand:
        self._require_idle("add an input")
        self._inputs.append(_Input(str(path)))
        return self

    def input_options(self, options: Sequence[str]) -> FFmpegCommand:
        """Add options that apply to the most recently added input."""
        self._require_idle("add input options")
        self._inputs[-1].options.extend(str(opt) for opt in options)
        return self

    def output_options(self, options: Sequence[str]) -> FFmpegCommand:
        self._require_idle("add output options")
        self._output_options.extend(str(opt) for opt in options)
        return self

    def output(self, path: str) -> FFmpegCommand:
        self._require_idle("set the output")
        self._output = str(path)
        return self

    def build_args(self) -> list[str]:
        """Return the ffmpeg argv (without the binary) for :meth:`run`."""
        if self._output is None:
            raise ValueError("No output specified")
        args: list[str] = []
        for inp in self._inputs:
            args.extend(inp.options)
            args.extend(["-i", inp.path])
        args.extend(self._output_options)
        args.append(self._output)
        return args

    # -- start (exactly once) --------------------------------------------------

    def run(self) -> None:
        """Start the configured transcode."""
        self._start(self._run_job)

    def screenshots(self, config: Mapping[str, Any]) -> None:
        """Start extracting still frames described by *config*.

        Recognised keys: ``folder``, ``count``, ``timestamps``, ``filename``
        and ``size``.
        """
        settings = dict(config)
        self._start(lambda loop: self._screenshots_job(loop, settings))

    async def wait(self) -> None:
        """Wait until the command has settled."""
        if self._task is None:
            raise CommandStateError("Command has not been started")
        await self._task

    # -- internals -------------------------------------------------------------

    def _require_idle(self, action: str) -> None:
        if self._state is not CommandState.IDLE:
            raise CommandStateError(f"Cannot {action}: command is {self._state.value}")

    def _start(self, job: Callable[[asyncio.AbstractEventLoop], Awaitable[None]]) -> None:
        if self._state is not CommandState.IDLE:
            raise CommandStateError(f"Command cannot be started twice (state={self._state.value})")
        loop = asyncio.get_running_loop()
        self._state = CommandState.RUNNING
        self._task = loop.create_task(self._execute(loop, job))

    async def _execute(
        self,
        loop: asyncio.AbstractEventLoop,
        job: Callable[[asyncio.AbstractEventLoop], Awaitable[None]],
    ) -> None:
        try:
            await job(loop)
        except Exception as exc:
            self._log.debug("FFmpeg command failed: %s", exc)
            self._settle("error", exc)
        else:
            self._settle("end")

    def _settle(self, event: str, *args: Any) -> None:
        if self._state is CommandState.SETTLED:
            return
        self._state = CommandState.SETTLED
        self._emit(event, *args)

    def _emit(self, event: str, *args: Any) -> None:
        for handler in list(self._handlers[event]):
            handler(*args)

    async def _invoke(self, loop: asyncio.AbstractEventLoop, args: list[str]) -> None:
        self._log.debug("ffmpeg %s", " ".join(args))
        await loop.run_in_executor(
            None, functools.partial(self._runner, args, binary=self._ffmpeg_binary)
        )

    async def _run_job(self, loop: asyncio.AbstractEventLoop) -> None:
        await self._invoke(loop, self.build_args())

    async def _screenshots_job(self, loop: asyncio.AbstractEventLoop, config: dict[str, Any]) -> None:
        source = self.source
        marks: list[Timemark] = list(config.get("timestamps") or [])
        if not marks:
            marks = default_timemarks(int(config.get("count") or 1))

        duration: Optional[float] = None
        if any(isinstance(m, str) and m.strip().endswith("%") for m in marks):
            duration = await loop.run_in_executor(
                None, functools.partial(self._duration_probe, source, binary=self._ffprobe_binary)
            )
        seconds = [parse_timemark(m, duration) for m in marks]

        pattern = config.get("filename") or _DEFAULT_SCREENSHOT_NAME
        if len(seconds) > 1 and not re.search(r"%(0*i|s)", pattern):
            path = Path(pattern)
            pattern = f"{path.stem}_%i{path.suffix}"
        token = uuid.uuid4().hex[:8]
        filenames = [
            render_filename(pattern, source, sec, index, token)
            for index, sec in enumerate(seconds, start=1)
        ]
        self._emit("filenames", list(filenames))

        folder = Path(config.get("folder") or ".")
        folder.mkdir(parents=True, exist_ok=True)
        scale = size_to_filter(config.get("size"))

        for sec, name in zip(seconds, filenames):
            args = ["-y", *self._inputs[0].options, "-ss", f"{sec:.3f}", "-i", source, "-frames:v", "1"]
            if scale:
                args.extend(["-vf", scale])
            args.extend(self._output_options)
            args.append(str(folder / name))
            await self._invoke(loop, args)
