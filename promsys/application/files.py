"""Upload helper shared by the task, invoice and reimbursement services."""

from __future__ import annotations

from dataclasses import dataclass

from ..crosscutting.exceptions import ValidationFailedError
from ..domain.entities import Attachment, new_id
from ..domain.reimbursement_workflow import AttachmentType
from ..domain.repositories import FileStorage
from ..infrastructure.storage import StorageQuotaError


@dataclass(frozen=True)
class UploadedFile:
    filename: str
    content_type: str
    data: bytes


def store_attachment(
    storage: FileStorage,
    upload: UploadedFile,
    *,
    uploaded_by_id: str,
    attachment_type: AttachmentType | None = None,
) -> Attachment:
    if not upload.data:
        raise ValidationFailedError("File is empty", field="file")
    try:
        stored = storage.save(
            original_name=upload.filename,
            content_type=upload.content_type,
            data=upload.data,
            uploaded_by_id=uploaded_by_id,
        )
    except StorageQuotaError as exc:
        raise ValidationFailedError(str(exc), field="file") from exc
    return Attachment(id=new_id(), file=stored, type=attachment_type)
