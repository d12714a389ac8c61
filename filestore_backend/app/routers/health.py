# filestore_backend/app/routers/health.py
from __future__ import annotations

import os

from fastapi import APIRouter, Depends

from .. import schemas
from ..dependencies import get_storage
from ..storage import Storage

router = APIRouter(prefix="/health", tags=["health"])


@router.get("/bootcheck")
def bootcheck():
    # does not touch the storage directory
    return {"status": "starting-ok"}


@router.get("/", response_model=schemas.HealthOut)
def health(storage: Storage = Depends(get_storage)):
    directory = storage.directory
    writable = storage.exists(directory) and os.access(directory, os.W_OK)
    return schemas.HealthOut(
        status="ok" if writable else "degraded",
        storage_dir=directory,
        writable=writable,
    )
