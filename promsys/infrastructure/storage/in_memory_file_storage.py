"""
Name: In-Memory File Storage

Responsibilities:
  - Keep uploaded attachment bytes and metadata in memory
  - Enforce the upload size limit before storing anything

Collaborators:
  - domain/repositories.py: FileStorage protocol
  - application/files.py: upload helper used by task/invoice/reimbursement services
  - interfaces/api/http/routers/files.py: GET /files/{id}

Constraints:
  - Thread-safe via Lock
  - Data is lost on process restart
"""

from __future__ import annotations

from threading import Lock
from typing import Dict, Optional

from ...domain.entities import StoredFile, new_id
from .errors import StorageNotFoundError, StorageQuotaError


class InMemoryFileStorage:
    def __init__(self, *, max_bytes: int) -> None:
        self._lock = Lock()
        self._max_bytes = max_bytes
        self._meta: Dict[str, StoredFile] = {}
        self._blobs: Dict[str, bytes] = {}

    def save(
        self,
        *,
        original_name: str,
        content_type: str,
        data: bytes,
        uploaded_by_id: str,
    ) -> StoredFile:
        if len(data) > self._max_bytes:
            raise StorageQuotaError(len(data), self._max_bytes)
        stored = StoredFile(
            id=new_id(),
            original_name=original_name or "upload.bin",
            content_type=content_type or "application/octet-stream",
            size=len(data),
            uploaded_by_id=uploaded_by_id,
        )
        with self._lock:
            self._meta[stored.id] = stored
            self._blobs[stored.id] = bytes(data)
        return stored

    def get(self, file_id: str) -> Optional[StoredFile]:
        with self._lock:
            return self._meta.get(file_id)

    def read(self, file_id: str) -> Optional[bytes]:
        with self._lock:
            return self._blobs.get(file_id)

    def require(self, file_id: str) -> tuple[StoredFile, bytes]:
        with self._lock:
            meta = self._meta.get(file_id)
            blob = self._blobs.get(file_id)
        if meta is None or blob is None:
            raise StorageNotFoundError(file_id)
        return meta, blob
