"""Infrastructure adapters: file storage."""

from .errors import StorageError, StorageNotFoundError, StorageQuotaError
from .in_memory_file_storage import InMemoryFileStorage

__all__ = [
    "InMemoryFileStorage",
    "StorageError",
    "StorageNotFoundError",
    "StorageQuotaError",
]
