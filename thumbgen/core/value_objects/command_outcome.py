"""CommandOutcome value object: the settled result of one engine invocation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class CommandOutcome:
    """Either the filenames an invocation produced, or the error it reported."""

    filenames: tuple[str, ...] = field(default_factory=tuple)
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, filenames: list[str] | tuple[str, ...] = ()) -> CommandOutcome:
        return cls(filenames=tuple(filenames))

    @classmethod
    def failure(cls, error: BaseException) -> CommandOutcome:
        return cls(error=error)

    def unwrap(self) -> list[str]:
        """Return the filenames, raising the stored error if the invocation failed."""
        if self.error is not None:
            raise self.error
        return list(self.filenames)
