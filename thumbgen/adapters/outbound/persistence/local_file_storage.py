"""Local filesystem implementation of FileDeletionPort."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

logger = logging.getLogger(__name__)


class LocalFileStorage:
    """Implements :class:`FileDeletionPort` using the local filesystem."""

    def delete_sync(self, paths: Iterable[str], force: bool = False) -> list[str]:
        """Delete each of *paths* and return the ones actually removed.

        With *force* a missing file is skipped silently; without it a
        :class:`FileNotFoundError` is raised.
        """
        deleted: list[str] = []
        for filepath in paths:
            target = Path(filepath)
            if not target.exists():
                if force:
                    logger.debug("File to delete does not exist: %s", target)
                    continue
                raise FileNotFoundError(f"File to delete does not exist: {target}")

            target.unlink()
            logger.debug("Deleted file %s", target)
            deleted.append(str(target))
        return deleted
