"""Port for a single-shot, event-notifying media engine command."""
from __future__ import annotations
from typing import Any, Callable, Mapping, Protocol, Sequence, runtime_checkable


@runtime_checkable
class MediaCommandPort(Protocol):
    def on(self, event: str, handler: Callable[..., Any]) -> MediaCommandPort: ...
    def input(self, path: str) -> MediaCommandPort: ...
    def input_options(self, options: Sequence[str]) -> MediaCommandPort: ...
    def output_options(self, options: Sequence[str]) -> MediaCommandPort: ...
    def output(self, path: str) -> MediaCommandPort: ...
    def run(self) -> None: ...
    def screenshots(self, config: Mapping[str, Any]) -> None: ...
