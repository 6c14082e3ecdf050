"""GeneratorConfig value object holding the per-generator settings."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


def format_percent(percent: float) -> str:
    """Render *percent* as an engine timemark, keeping full precision.

    Integral floats drop their fraction so ``100.0`` gives ``"100%"``.
    """
    if isinstance(percent, float) and percent.is_integer():
        percent = int(percent)
    return f"{percent}%"


@dataclass(frozen=True)
class GeneratorConfig:
    """Immutable configuration fixed when a ThumbnailGenerator is built."""

    source_path: str
    thumbnail_path: str
    percent: float = 90
    tmp_dir: str = "/tmp"
    size: Optional[str] = None
    logger: Optional[logging.Logger] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "source_path", str(self.source_path))
        object.__setattr__(self, "thumbnail_path", str(self.thumbnail_path))
        object.__setattr__(self, "tmp_dir", str(self.tmp_dir))

    @property
    def percent_mark(self) -> str:
        """The default sample position as an engine timestamp, e.g. ``"90%"``."""
        return format_percent(self.percent)

    @property
    def source_name(self) -> str:
        return Path(self.source_path).name
