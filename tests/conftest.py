"""Shared test fixtures for all tests."""
from __future__ import annotations

import asyncio
from typing import Any, Optional
from unittest.mock import MagicMock

import pytest

from thumbgen.application.thumbnail_generator import ThumbnailGenerator


# ── Fake engine ────────────────────────────────────────────────────────────

class FakeCommand:
    """Records how it was configured and settles on the next loop iteration."""

    def __init__(
        self,
        source: str,
        logger=None,
        *,
        filenames: Optional[list[str]] = None,
        error: Optional[BaseException] = None,
    ) -> None:
        self.source = source
        self.logger = logger
        self.handlers: dict[str, list] = {"filenames": [], "end": [], "error": []}
        self.inputs: list[str] = []
        self.input_opts: list[str] = []
        self.output_opts: list[str] = []
        self.output_path: Optional[str] = None
        self.screenshot_config: Optional[dict[str, Any]] = None
        self.start_count = 0
        self._filenames = filenames
        self._error = error

    def on(self, event, handler):
        self.handlers[event].append(handler)
        return self

    def input(self, path):
        self.inputs.append(path)
        return self

    def input_options(self, options):
        self.input_opts.extend(options)
        return self

    def output_options(self, options):
        self.output_opts.extend(options)
        return self

    def output(self, path):
        self.output_path = path
        return self

    def run(self):
        self.start_count += 1
        asyncio.get_running_loop().call_soon(self._settle)

    def screenshots(self, config):
        self.start_count += 1
        self.screenshot_config = dict(config)
        filenames = self._filenames
        if filenames is None:
            count = int(config.get("count") or 1)
            filenames = [f"thumb-{i}.png" for i in range(1, count + 1)]
        asyncio.get_running_loop().call_soon(self._emit, "filenames", list(filenames))
        asyncio.get_running_loop().call_soon(self._settle)

    def _emit(self, event, *args):
        for handler in self.handlers[event]:
            handler(*args)

    def _settle(self):
        if self._error is not None:
            self._emit("error", self._error)
        else:
            self._emit("end")


class FakeEngine:
    """Command factory handing out FakeCommands with pre-planned outcomes."""

    def __init__(self) -> None:
        self.commands: list[FakeCommand] = []
        self._plans: list[dict[str, Any]] = []

    def plan(self, *, filenames: Optional[list[str]] = None, error: Optional[BaseException] = None) -> None:
        self._plans.append({"filenames": filenames, "error": error})

    def __call__(self, source: str, logger=None) -> FakeCommand:
        plan = self._plans.pop(0) if self._plans else {}
        command = FakeCommand(source, logger, **plan)
        self.commands.append(command)
        return command


# ── Fixtures ───────────────────────────────────────────────────────────────

SOURCE_PATH = "/videos/clip.mp4"


@pytest.fixture
def engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture
def mock_file_deleter():
    mock = MagicMock()
    mock.delete_sync.return_value = []
    return mock


@pytest.fixture
def thumbnail_dir(tmp_path):
    return str(tmp_path / "thumbnails")


@pytest.fixture
def tmp_dir(tmp_path):
    return str(tmp_path / "tmp")


@pytest.fixture
def generator(engine, mock_file_deleter, thumbnail_dir, tmp_dir) -> ThumbnailGenerator:
    return ThumbnailGenerator(
        source_path=SOURCE_PATH,
        thumbnail_path=thumbnail_dir,
        tmp_dir=tmp_dir,
        command_factory=engine,
        file_deleter=mock_file_deleter,
    )
