"""FastAPI dependencies shared by the routers."""
from functools import lru_cache

from .core.config import settings
from .filesystem import LocalFilesystem
from .storage import Storage


@lru_cache(maxsize=1)
def get_storage() -> Storage:
    """One ``Storage`` per process, rooted at ``settings.STORAGE_DIR``.

    Tests swap it out through ``app.dependency_overrides``.
    """
    return Storage(LocalFilesystem(), settings.STORAGE_DIR)
