class StorageError(Exception):
    """Base exception for blob storage errors."""


class BlobNotFoundError(StorageError):
    """Raised when no blob exists at the requested path."""


class AccessDeniedError(StorageError):
    """Raised when a path resolves outside the storage root."""


class StorageIOError(StorageError):
    """Raised on transient file I/O failures such as a locked file."""
