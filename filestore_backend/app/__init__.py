"""
FileStore Backend Package

This package contains the FastAPI application and the storage component it
exposes: randomised-name uploads, path lookup, existence checks and deletion
under one configured base directory.
"""

from .main import app  # noqa: F401
