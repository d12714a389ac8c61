"""Filesystem abstraction used by :class:`~.storage.Storage`.

The storage component never touches the disk itself; it goes through an
object implementing :class:`Filesystem`.  That keeps the component easy to
test with a fake and lets a different backend be dropped in later.
"""
from __future__ import annotations

import os
import shutil
from typing import Protocol


class Filesystem(Protocol):
    """Operations the storage layer needs from a filesystem."""

    def exists(self, path: str) -> bool:
        """Check if a file or directory exists."""
        ...

    def mkdir(self, path: str) -> None:
        """Create a directory and its parents.  Existing directories are fine."""
        ...

    def remove(self, path: str) -> None:
        """Remove a file, symlink or whole directory tree."""
        ...


class LocalFilesystem:
    """Host filesystem implementation."""

    def exists(self, path: str) -> bool:
        return os.path.exists(path)

    def mkdir(self, path: str) -> None:
        os.makedirs(path, exist_ok=True)

    def remove(self, path: str) -> None:
        # symlinks are unlinked, never followed
        if os.path.islink(path) or os.path.isfile(path):
            os.remove(path)
        elif os.path.isdir(path):
            shutil.rmtree(path)
