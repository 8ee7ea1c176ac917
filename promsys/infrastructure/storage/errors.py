"""
Name: Typed Storage Errors

Responsibilities:
  - Common failure vocabulary for the file storage subsystem
  - Keep backend-specific exceptions from leaking to upper layers
"""


class StorageError(Exception):
    """Base for file storage failures."""


class StorageNotFoundError(StorageError):
    def __init__(self, key: str):
        super().__init__(f"File not found in storage. key={key}")
        self.key = key


class StorageQuotaError(StorageError):
    """Upload exceeds the configured size limit."""

    def __init__(self, size: int, limit: int):
        super().__init__(f"File of {size} bytes exceeds the {limit} byte limit")
        self.size = size
        self.limit = limit
