"""Upload objects accepted by :meth:`Storage.store <.storage.Storage.store>`.

An upload knows whether it arrived intact, what extension its content
suggests, and how to move itself into a directory.  The storage layer only
ever talks to the :class:`UploadedFile` protocol.
"""
from __future__ import annotations

import mimetypes
import os
import shutil
from typing import Optional, Protocol

from fastapi import UploadFile

DEFAULT_EXTENSION = "bin"
_GENERIC_TYPES = {"application/octet-stream", ""}


class UploadedFile(Protocol):
    def is_valid(self) -> bool:
        ...

    def guess_extension(self) -> str:
        ...

    def move(self, directory: str, name: str) -> None:
        """Move the file to ``directory/name``.  Raises on failure."""
        ...


def guess_extension(content_type: Optional[str], filename: Optional[str]) -> str:
    """Pick an extension (without the dot) for an upload.

    The declared content type wins; the client filename is only used when the
    type is missing or generic.
    """
    mime = (content_type or "").split(";")[0].strip().lower()
    if mime not in _GENERIC_TYPES:
        ext = mimetypes.guess_extension(mime)
        if ext:
            return ext.lstrip(".").lower()

    if filename:
        _, ext = os.path.splitext(filename)
        if ext:
            return ext.lstrip(".").lower()

    return DEFAULT_EXTENSION


class FastAPIUploadedFile:
    """Adapter over ``fastapi.UploadFile``."""

    def __init__(self, upload: UploadFile, max_bytes: Optional[int] = None) -> None:
        self._upload = upload
        self._max_bytes = max_bytes

    @property
    def filename(self) -> Optional[str]:
        return self._upload.filename

    def is_valid(self) -> bool:
        if not self._upload.filename:
            return False
        if self._upload.file.closed:
            return False
        size = self._upload.size
        if self._max_bytes is not None and size is not None and size > self._max_bytes:
            return False
        return True

    def guess_extension(self) -> str:
        return guess_extension(self._upload.content_type, self._upload.filename)

    def move(self, directory: str, name: str) -> None:
        target = os.path.join(directory, name)
        self._upload.file.seek(0)
        with open(target, "wb") as out_f:
            shutil.copyfileobj(self._upload.file, out_f)


class LocalUploadedFile:
    """A file already sitting on disk, e.g. a spooled temp file.

    ``move`` relocates the source, so the object is spent afterwards.
    """

    def __init__(self, path: str, content_type: Optional[str] = None) -> None:
        self.path = path
        self.content_type = content_type

    def is_valid(self) -> bool:
        return os.path.isfile(self.path)

    def guess_extension(self) -> str:
        return guess_extension(self.content_type, self.path)

    def move(self, directory: str, name: str) -> None:
        target = os.path.join(directory, name)
        shutil.move(self.path, target)
        self.path = target
