import re
from unittest.mock import Mock

import pytest

from filestore_backend.app.exceptions import InvalidUpload, NotFound, StorageOperationFailed
from filestore_backend.app.filesystem import LocalFilesystem
from filestore_backend.app.storage import Storage, generate_filename, unique_id
from filestore_backend.app.uploads import LocalUploadedFile

BASE_DIR = "/var/www/storage"


@pytest.fixture
def filesystem():
    return Mock(spec=LocalFilesystem)


@pytest.fixture
def storage(filesystem):
    return Storage(filesystem, BASE_DIR)


def make_upload(valid=True, extension="png"):
    upload = Mock(spec=["is_valid", "guess_extension", "move"])
    upload.is_valid.return_value = valid
    upload.guess_extension.return_value = extension
    return upload


# --- store() ---

def test_store_rejects_invalid_upload(storage, filesystem):
    upload = make_upload(valid=False)

    with pytest.raises(InvalidUpload, match="The uploaded file is not a valid file."):
        storage.store("avatars", upload)

    filesystem.mkdir.assert_not_called()
    upload.move.assert_not_called()


def test_store_moves_file_and_returns_full_path(storage, filesystem):
    upload = make_upload(extension="png")

    result = storage.store("images", upload)

    assert result.startswith("/var/www/storage/images/")
    assert result.endswith(".png")
    filesystem.mkdir.assert_called_once_with("/var/www/storage/images")

    name = result.rsplit("/", 1)[1]
    assert re.fullmatch(r"\d+-[0-9a-f]{13}\.png", name), name
    upload.move.assert_called_once_with("/var/www/storage/images", name)


def test_store_trims_slashes_from_relative_path(storage, filesystem):
    result = storage.store("/nested/dir/", make_upload(extension="pdf"))

    filesystem.mkdir.assert_called_once_with("/var/www/storage/nested/dir")
    assert result.startswith("/var/www/storage/nested/dir/")
    assert result.endswith(".pdf")


def test_store_wraps_move_failure(storage, filesystem):
    upload = make_upload()
    upload.move.side_effect = PermissionError("permission denied")

    with pytest.raises(StorageOperationFailed, match="permission denied") as excinfo:
        storage.store("images", upload)

    assert isinstance(excinfo.value.__cause__, PermissionError)
    # the directory is not rolled back
    filesystem.mkdir.assert_called_once_with("/var/www/storage/images")


# --- get_file() ---

def test_get_file_returns_path_when_exists_check_is_false(storage, filesystem):
    filesystem.exists.return_value = False

    assert storage.get_file("docs/test.pdf") == "/var/www/storage/docs/test.pdf"
    filesystem.exists.assert_called_once_with("/var/www/storage/docs/test.pdf")


def test_get_file_raises_when_exists_check_is_true(storage, filesystem):
    filesystem.exists.return_value = True

    with pytest.raises(NotFound) as excinfo:
        storage.get_file("missing.jpg")

    assert excinfo.value.path == "missing.jpg"
    filesystem.exists.assert_called_once_with("/var/www/storage/missing.jpg")


def test_resolve_path_is_get_file(storage, filesystem):
    filesystem.exists.return_value = False

    assert storage.resolve_path("/docs/") == "/var/www/storage/docs"


# --- exists() / create_dir() ---

def test_exists_passes_path_through_untouched(storage, filesystem):
    filesystem.exists.return_value = True

    assert storage.exists("relative/x/") is True
    filesystem.exists.assert_called_once_with("relative/x/")


def test_create_dir_is_idempotent(tmp_path):
    storage = Storage(LocalFilesystem(), str(tmp_path))
    target = str(tmp_path / "a" / "b")

    storage.create_dir(target)
    storage.create_dir(target)

    assert (tmp_path / "a" / "b").is_dir()


# --- delete() ---

def test_delete_removes_existing_path(storage, filesystem):
    filesystem.exists.return_value = True

    storage.delete("/tmp/file.txt")

    filesystem.exists.assert_called_once_with("/tmp/file.txt")
    filesystem.remove.assert_called_once_with("/tmp/file.txt")


def test_delete_missing_path_raises_without_removing(storage, filesystem):
    filesystem.exists.return_value = False

    with pytest.raises(NotFound) as excinfo:
        storage.delete("/tmp/void.txt")

    assert excinfo.value.path is None
    filesystem.remove.assert_not_called()


# --- filenames ---

def test_generate_filename_format():
    name = generate_filename("txt")
    assert re.fullmatch(r"\d+-[0-9a-f]{13}\.txt", name), name
    assert int(name.split("-", 1)[0]) <= 2**31 - 1


def test_unique_id_is_13_hex_digits():
    assert re.fullmatch(r"[0-9a-f]{13}", unique_id())


# --- against the real filesystem ---

def test_store_and_delete_on_disk(tmp_path):
    base = tmp_path / "store"
    source = tmp_path / "incoming.pdf"
    source.write_bytes(b"%PDF-1.4")
    storage = Storage(LocalFilesystem(), str(base))

    stored = storage.store("docs", LocalUploadedFile(str(source)))

    assert stored.startswith(f"{base}/docs/")
    assert stored.endswith(".pdf")
    assert not source.exists()
    with open(stored, "rb") as f:
        assert f.read() == b"%PDF-1.4"

    relative = stored[len(str(base)) + 1:]
    with pytest.raises(NotFound):
        storage.get_file(relative)

    storage.delete(stored)
    assert not storage.exists(stored)
    with pytest.raises(NotFound):
        storage.delete(stored)
