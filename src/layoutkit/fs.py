"""Filesystem capability consumed by the registry scanners."""

from __future__ import annotations

import fnmatch
import logging
import os
from pathlib import Path
from typing import Protocol, runtime_checkable

__all__ = ["FileSystem", "LocalFileSystem"]

logger = logging.getLogger(__name__)


@runtime_checkable
class FileSystem(Protocol):
    """Protocol for the read-only filesystem operations the registry needs."""

    def exists(self, path: str) -> bool:
        """Return True if ``path`` exists."""
        ...

    def is_dir(self, path: str) -> bool:
        """Return True if ``path`` is an existing directory."""
        ...

    def read_bytes(self, path: str) -> bytes | None:
        """Return the file contents, or None if it cannot be read."""
        ...

    def list_dir(self, path: str, pattern: str = "*") -> list[str]:
        """Return sorted paths of the direct children of ``path`` matching ``pattern``."""
        ...


class LocalFileSystem:
    """FileSystem backed by the local disk."""

    def exists(self, path: str) -> bool:
        return Path(path).exists()

    def is_dir(self, path: str) -> bool:
        return Path(path).is_dir()

    def read_bytes(self, path: str) -> bytes | None:
        try:
            return Path(path).read_bytes()
        except OSError as e:
            logger.warning("Cannot read %s: %s", path, e)
            return None

    def list_dir(self, path: str, pattern: str = "*") -> list[str]:
        try:
            names = os.listdir(path)
        except OSError as e:
            logger.debug("Cannot list %s: %s", path, e)
            return []
        return [os.path.join(path, name) for name in sorted(names) if fnmatch.fnmatchcase(name, pattern)]
