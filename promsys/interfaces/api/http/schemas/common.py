"""
Name: Shared HTTP Schemas

Responsibilities:
  - ApiModel: camelCase aliases on the wire, snake_case in Python,
    construction straight from domain dataclasses (from_attributes)
  - The response envelope {data, paging?, meta{timestamp, path}}
  - File/attachment/user DTOs reused by several routers

Notes:
  - Money (Decimal) serializes as a string to avoid float rounding
  - paging keeps its snake_case keys (current_page, size, total_page)
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

from fastapi import Request
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from .....crosscutting.pagination import Paging
from .....domain.reimbursement_workflow import AttachmentType
from .....domain.roles import UserRole


class ApiModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def provided_fields(model: BaseModel) -> set[str]:
    """Python field names the client actually sent (PATCH semantics)."""
    return set(model.model_fields_set)


# -----------------------------------------------------------------------------
# Envelope
# -----------------------------------------------------------------------------
def to_payload(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    if isinstance(value, (list, tuple)):
        return [to_payload(v) for v in value]
    if isinstance(value, Decimal):
        return str(value)
    return value


def envelope(request: Request, data: Any, paging: Paging | None = None) -> dict:
    body: dict[str, Any] = {"data": to_payload(data)}
    if paging is not None:
        body["paging"] = paging.model_dump()
    body["meta"] = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "path": request.url.path,
    }
    return body


# -----------------------------------------------------------------------------
# Shared DTOs
# -----------------------------------------------------------------------------
class FileRes(ApiModel):
    id: str
    original_name: str
    content_type: str
    size: int
    url: str
    created_at: datetime


class AttachmentRes(ApiModel):
    id: str
    type: AttachmentType | None = None
    file: FileRes
    created_at: datetime


class UserRes(ApiModel):
    id: str
    name: str
    email: str
    image: str | None = None
    role: UserRole
    banned: bool = False
    ban_reason: str | None = None
    created_at: datetime
