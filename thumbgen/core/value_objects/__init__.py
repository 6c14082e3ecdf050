from thumbgen.core.value_objects.command_outcome import CommandOutcome
from thumbgen.core.value_objects.generator_config import GeneratorConfig, format_percent
from thumbgen.core.value_objects.options import (
    DEFAULT_FILENAME_PATTERN,
    DEFAULT_PALETTE_FILTERS,
    GIF_DEFAULTS,
    PALETTE_DEFAULTS,
    THUMBNAIL_DEFAULTS,
    merge_options,
)

__all__ = [
    "CommandOutcome",
    "GeneratorConfig",
    "format_percent",
    "DEFAULT_FILENAME_PATTERN",
    "DEFAULT_PALETTE_FILTERS",
    "THUMBNAIL_DEFAULTS",
    "PALETTE_DEFAULTS",
    "GIF_DEFAULTS",
    "merge_options",
]
