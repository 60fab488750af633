"""Tests for the filesystem blob reader."""

from __future__ import annotations

from pathlib import Path

import pytest

from position_ledger.adapters import BlobKeyError, BlobNotFoundError, FilesystemBlobReader


def test_adapter_blob_read_returns_file_bytes(tmp_path: Path) -> None:
    """Resolve nested keys beneath the root directory."""

    blob_path = tmp_path / "2019" / "11" / "transactions.csv"
    blob_path.parent.mkdir(parents=True)
    blob_path.write_bytes(b"1572723958024;a;b;D;200\n")
    reader = FilesystemBlobReader(root_path=tmp_path)

    assert reader.adapter_blob_read("2019/11/transactions.csv") == b"1572723958024;a;b;D;200\n"
    assert reader.adapter_source_name() == f"filesystem:{tmp_path.resolve()}"


def test_adapter_blob_read_raises_not_found_for_missing_key(tmp_path: Path) -> None:
    """Missing files raise a typed not-found error that is also a FileNotFoundError."""

    reader = FilesystemBlobReader(root_path=tmp_path)

    with pytest.raises(BlobNotFoundError) as error_info:
        reader.adapter_blob_read("missing.csv")

    assert isinstance(error_info.value, FileNotFoundError)
    assert error_info.value.key == "missing.csv"


@pytest.mark.parametrize("key", ["", "  ", "../outside.csv", "nested/../../outside.csv"])
def test_adapter_blob_read_rejects_blank_or_escaping_keys(tmp_path: Path, key: str) -> None:
    """Keys must name a path inside the root."""

    root_path = tmp_path / "root"
    root_path.mkdir()
    (tmp_path / "outside.csv").write_bytes(b"secret")
    reader = FilesystemBlobReader(root_path=root_path)

    with pytest.raises(BlobKeyError):
        reader.adapter_blob_read(key)


def test_adapter_blob_read_treats_directories_as_missing(tmp_path: Path) -> None:
    """A directory key is not a blob."""

    (tmp_path / "folder").mkdir()

    with pytest.raises(BlobNotFoundError):
        FilesystemBlobReader(root_path=tmp_path).adapter_blob_read("folder")


def test_filesystem_blob_reader_rejects_blank_root() -> None:
    """Reject an empty root path."""

    with pytest.raises(ValueError, match="root_path must not be blank"):
        FilesystemBlobReader(root_path=" ")
