"""Project-native typed exceptions for blob adapter failures."""

from __future__ import annotations


class BlobAdapterError(Exception):
    """Base exception for blob read failures.

    Attributes:
        key: Blob key involved in the failure.
    """

    def __init__(self, message: str, key: str | None = None):
        super().__init__(message)
        self.key = key


class BlobKeyError(BlobAdapterError, ValueError):
    """Blob key is blank or escapes the configured root."""


class BlobNotFoundError(BlobAdapterError, FileNotFoundError):
    """No blob exists for the requested key."""
