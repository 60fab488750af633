"""Adapter layer package for external blob sources."""

from .blob_errors import BlobAdapterError, BlobKeyError, BlobNotFoundError
from .filesystem_blob import FilesystemBlobReader
from .interfaces import BlobReaderPort

__all__ = [
	"BlobAdapterError",
	"BlobKeyError",
	"BlobNotFoundError",
	"BlobReaderPort",
	"FilesystemBlobReader",
]
