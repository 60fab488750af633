"""Filesystem blob reader for uploaded transaction files."""

from __future__ import annotations

from pathlib import Path
from typing import Final

from .blob_errors import BlobAdapterError, BlobKeyError, BlobNotFoundError
from .interfaces import BlobReaderPort


class FilesystemBlobReader(BlobReaderPort):
    """Blob reader resolving keys as relative paths under one root directory."""

    _SOURCE_NAME: Final[str] = "filesystem"

    def __init__(self, root_path: str | Path):
        """Initialize filesystem blob reader.

        Args:
            root_path: Directory holding blobs; keys resolve beneath it.

        Raises:
            ValueError: Raised when root path is blank.
        """

        if not str(root_path).strip():
            raise ValueError("root_path must not be blank")
        self._root_path = Path(root_path).resolve()

    def adapter_source_name(self) -> str:
        """Return adapter source identifier with the resolved root."""

        return f"{self._SOURCE_NAME}:{self._root_path}"

    def adapter_blob_read(self, key: str) -> bytes:
        """Read one blob by key.

        Args:
            key: Relative blob key such as `2019/11/transactions.csv`.

        Returns:
            bytes: Raw file content.

        Raises:
            BlobKeyError: Raised when key is blank or resolves outside the root.
            BlobNotFoundError: Raised when the file does not exist.
            BlobAdapterError: Raised when the file cannot be read.
        """

        normalized_key = key.strip() if isinstance(key, str) else ""
        if not normalized_key:
            raise BlobKeyError("blob key must not be blank", key=key)

        blob_path = (self._root_path / normalized_key).resolve()
        if not blob_path.is_relative_to(self._root_path):
            raise BlobKeyError(f"blob key escapes root: {normalized_key}", key=normalized_key)
        if not blob_path.is_file():
            raise BlobNotFoundError(f"blob not found: {normalized_key}", key=normalized_key)

        try:
            return blob_path.read_bytes()
        except OSError as error:
            raise BlobAdapterError(f"blob read failed: {normalized_key}", key=normalized_key) from error


__all__ = ["FilesystemBlobReader"]
