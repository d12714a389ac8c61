"""File storage component.

Turns caller-supplied relative paths into absolute paths under a configured
base directory and performs store / lookup / delete through an injected
filesystem.  Stored filenames are randomised so the original names are never
used on disk.

Uniqueness of generated names is best-effort: a PRNG number plus a
time-derived id.  Nothing here is locked; concurrent callers on the same
paths race on the host filesystem.
"""
from __future__ import annotations

import logging
import random
import time

from .exceptions import InvalidUpload, NotFound, StorageOperationFailed
from .filesystem import Filesystem
from .uploads import UploadedFile

logger = logging.getLogger("filestore.storage")

RANDOM_MAX = 2**31 - 1


def unique_id() -> str:
    """13 hex digits: seconds then microseconds of the current time."""
    now = time.time()
    sec = int(now)
    usec = int((now - sec) * 1_000_000)
    return f"{sec:08x}{usec:05x}"


def generate_filename(extension: str) -> str:
    return f"{random.randint(0, RANDOM_MAX)}-{unique_id()}.{extension}"


class Storage:
    """Stores uploaded files under ``directory``."""

    def __init__(self, filesystem: Filesystem, directory: str) -> None:
        self._filesystem = filesystem
        self._directory = directory

    @property
    def directory(self) -> str:
        return self._directory

    def full_path(self, path: str) -> str:
        """``<directory>/<path>`` with leading/trailing slashes trimmed from ``path``."""
        return self._directory + "/" + path.strip("/")

    def store(self, path: str, uploaded_file: UploadedFile) -> str:
        """Store ``uploaded_file`` under ``path`` with a generated name.

        Returns the absolute path of the stored file.  The path is built from
        the inputs, not read back from the filesystem.

        Raises:
            InvalidUpload: the upload failed its own validity check.
            StorageOperationFailed: the move raised anything.
        """
        if not uploaded_file.is_valid():
            raise InvalidUpload()

        directory = self.full_path(path)
        self.create_dir(directory)

        name = generate_filename(uploaded_file.guess_extension())
        full_path = directory + "/" + name

        try:
            uploaded_file.move(directory, name)
        except Exception as exc:
            raise StorageOperationFailed(str(exc)) from exc

        logger.info("Stored file at %s", full_path)
        return full_path

    def get_file(self, path: str) -> str:
        """Return the absolute path for ``path``.

        NOTE: raises ``NotFound`` when the path *exists* and returns it when it
        does not.  Callers depend on this; see DESIGN.md before changing it.
        """
        full_path = self.full_path(path)
        if self.exists(full_path):
            raise NotFound(path)
        return full_path

    resolve_path = get_file

    def exists(self, path: str) -> bool:
        return self._filesystem.exists(path)

    def create_dir(self, path: str) -> None:
        logger.debug("Ensuring directory %s", path)
        self._filesystem.mkdir(path)

    def delete(self, path: str) -> None:
        """Remove a file or directory tree.  Raises ``NotFound`` if absent."""
        if self._filesystem.exists(path):
            self._filesystem.remove(path)
            logger.info("Deleted %s", path)
            return
        raise NotFound()
