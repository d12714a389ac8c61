import pytest

from filestore_backend.app.core.config import _storage_dir


def test_storage_dir_default(monkeypatch):
    monkeypatch.delenv("STORAGE_DIR", raising=False)
    assert _storage_dir() == "./storage"


def test_storage_dir_drops_trailing_slash(monkeypatch):
    monkeypatch.setenv("STORAGE_DIR", "/var/www/storage/")
    assert _storage_dir() == "/var/www/storage"


@pytest.mark.parametrize("value", ["/", "//", "", "  "])
def test_storage_dir_rejects_root_and_empty(monkeypatch, value):
    monkeypatch.setenv("STORAGE_DIR", value)
    with pytest.raises(RuntimeError, match="STORAGE_DIR"):
        _storage_dir()
