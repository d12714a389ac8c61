from __future__ import annotations

from pydantic import BaseModel, Field


# =========================
# Files
# =========================
class StoredFileOut(BaseModel):
    path: str = Field(..., description="Absolute path on the storage host")


class ExistsOut(BaseModel):
    path: str
    exists: bool


# =========================
# Health
# =========================
class HealthOut(BaseModel):
    status: str
    storage_dir: str
    writable: bool
