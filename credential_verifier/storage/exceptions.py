class StorageError(Exception):
    """Base exception for content store and temp file errors."""


class FetchError(StorageError):
    """Raised when the reference document cannot be fetched from the content store."""
