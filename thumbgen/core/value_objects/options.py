"""Per-operation option templates and the non-mutating option merge."""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping, Optional

DEFAULT_FILENAME_PATTERN = "%b-thumbnail-%r-%000i"
DEFAULT_PALETTE_FILTERS = "fps=10,scale=320:-1:flags=lanczos,palettegen"

# Read-only templates; every call merges into a fresh dict.
THUMBNAIL_DEFAULTS: Mapping[str, Any] = MappingProxyType({
    "count": 10,
    "filename": DEFAULT_FILENAME_PATTERN,
})

PALETTE_DEFAULTS: Mapping[str, Any] = MappingProxyType({
    "video_filters": DEFAULT_PALETTE_FILTERS,
})

GIF_DEFAULTS: Mapping[str, Any] = MappingProxyType({
    "fps": 0.75,
    "scale": 180,
    "speed_multiplier": 4,
    "delete_palette": True,
})


def merge_options(
    defaults: Mapping[str, Any],
    overrides: Optional[Mapping[str, Any]] = None,
) -> dict[str, Any]:
    """Return a new dict with *overrides* laid over *defaults*.

    Single-level merge. Override values of ``None`` are treated as not
    supplied, so they never clobber a default. Neither argument is modified.
    """
    merged = dict(defaults)
    if overrides:
        merged.update({key: value for key, value in overrides.items() if value is not None})
    return merged
