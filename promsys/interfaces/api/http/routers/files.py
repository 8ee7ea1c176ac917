"""GET /files/{id}: stream a stored attachment back to a signed-in user."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from .....container import get_file_storage
from .....crosscutting.error_responses import not_found
from .....domain.entities import User
from .....identity.auth import require_user
from .....infrastructure.storage import InMemoryFileStorage, StorageNotFoundError

router = APIRouter(prefix="/files", tags=["files"])


@router.get("/{file_id}")
def download_file(
    file_id: str,
    _actor: User = Depends(require_user()),
    storage: InMemoryFileStorage = Depends(get_file_storage),
):
    try:
        meta, blob = storage.require(file_id)
    except StorageNotFoundError:
        raise not_found("File", file_id)
    return Response(
        content=blob,
        media_type=meta.content_type,
        headers={"Content-Disposition": f'inline; filename="{meta.original_name}"'},
    )
