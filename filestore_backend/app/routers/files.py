from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, File, HTTPException, Response, UploadFile, status

from .. import schemas
from ..core.config import settings
from ..dependencies import get_storage
from ..exceptions import InvalidUpload, NotFound, StorageOperationFailed
from ..storage import Storage
from ..uploads import FastAPIUploadedFile

logger = logging.getLogger("filestore.files")

router = APIRouter(prefix="/files", tags=["files"])
# separate prefix so no stored path can shadow the existence check
exists_router = APIRouter(prefix="/exists", tags=["files"])


def _checked(path: str, allow_root: bool = True) -> str:
    # Storage itself does no traversal sanitizing
    if ".." in path.split("/"):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Path must not contain '..' segments",
        )
    if not allow_root and path.strip("/") == "":
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Path must not be empty",
        )
    return path


@router.post("/{path:path}", status_code=status.HTTP_201_CREATED, response_model=schemas.StoredFileOut)
def upload_file(
    path: str,
    file: UploadFile = File(...),
    storage: Storage = Depends(get_storage),
):
    """Store the upload under ``path`` with a generated name."""
    uploaded = FastAPIUploadedFile(file, max_bytes=settings.MAX_UPLOAD_BYTES)
    try:
        stored_path = storage.store(_checked(path), uploaded)
    except InvalidUpload as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except (StorageOperationFailed, OSError) as e:
        # OSError comes from creating the target directory
        logger.exception("Failed to store upload under %r: %s", path, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to save uploaded file: {e}",
        )
    return schemas.StoredFileOut(path=stored_path)


@router.get("/{path:path}", response_model=schemas.StoredFileOut)
def get_file(path: str, storage: Storage = Depends(get_storage)):
    try:
        full_path = storage.get_file(_checked(path))
    except NotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return schemas.StoredFileOut(path=full_path)


@router.delete("/{path:path}", status_code=status.HTTP_204_NO_CONTENT)
def delete_file(path: str, storage: Storage = Depends(get_storage)):
    # an empty path would resolve to the base directory itself
    full_path = storage.full_path(_checked(path, allow_root=False))
    try:
        storage.delete(full_path)
    except NotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@exists_router.get("/{path:path}", response_model=schemas.ExistsOut)
def file_exists(path: str, storage: Storage = Depends(get_storage)):
    full_path = storage.full_path(_checked(path))
    return schemas.ExistsOut(path=full_path, exists=storage.exists(full_path))
