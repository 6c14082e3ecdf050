"""Port for synchronous file deletion."""
from __future__ import annotations
from typing import Iterable, Protocol, runtime_checkable


@runtime_checkable
class FileDeletionPort(Protocol):
    def delete_sync(self, paths: Iterable[str], force: bool = False) -> list[str]: ...
