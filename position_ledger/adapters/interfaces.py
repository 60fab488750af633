"""Typed interfaces for adapter-layer responsibilities."""

from typing import Protocol


class BlobReaderPort(Protocol):
    """Port definition for reading uploaded transaction files by key."""

    def adapter_source_name(self) -> str:
        """Return adapter source identifier for diagnostics.

        Returns:
            str: Human-readable blob source identifier.
        """

    def adapter_blob_read(self, key: str) -> bytes:
        """Read the full content of one blob.

        Args:
            key: Blob key.

        Returns:
            bytes: Raw blob content.

        Raises:
            BlobNotFoundError: Raised when no blob exists for the key.
            BlobAdapterError: Raised when the key is invalid or the read fails.
        """
