"""Errors raised by the storage layer.

Every error is raised straight to the caller.  Nothing here is retried or
classified further; the HTTP layer decides which status code each maps to.
"""
from __future__ import annotations

from typing import Optional


class StorageError(Exception):
    """Base class for storage failures."""


class InvalidUpload(StorageError):
    """The upload object failed its own validity check."""

    def __init__(self, message: str = "The uploaded file is not a valid file.") -> None:
        super().__init__(message)


class StorageOperationFailed(StorageError):
    """Moving a file into place failed.  Carries the original message."""


class NotFound(StorageError):
    def __init__(self, path: Optional[str] = None) -> None:
        self.path = path
        if path is None:
            super().__init__("File not found.")
        else:
            super().__init__(f"File not found: {path}")
