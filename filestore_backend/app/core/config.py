"""Application configuration settings.

Values can be overridden via environment variables.
"""
import os


def _optional_int(name: str) -> int | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return int(raw)


def _storage_dir() -> str:
    directory = os.getenv("STORAGE_DIR", "./storage").strip().rstrip("/")
    if not directory:
        # "/" would make every produced path start with "//"
        raise RuntimeError(
            "FATAL: STORAGE_DIR must not be empty or the filesystem root. "
            "Point it at a dedicated directory."
        )
    return directory


class Settings:
    # Base directory every relative path is resolved under; never "/"
    STORAGE_DIR: str = _storage_dir()

    # Upload size cap in bytes; unset means no limit
    MAX_UPLOAD_BYTES: int | None = _optional_int("MAX_UPLOAD_BYTES")

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # comma-separated, "*" allows everything
    CORS_ORIGINS: list[str] = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]


settings = Settings()
