"""
Name: Shared Router Dependencies

Responsibilities:
  - Page/size query parsing clamped by settings
  - Reading multipart uploads under a hard byte limit
  - Parsing enum query filters into 422 instead of 500

Collaborators:
  - crosscutting.config.get_settings
  - crosscutting.error_responses (RFC7807 factories)
  - application.files.UploadedFile
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import TypeVar

from fastapi import Query, UploadFile

from ....application.files import UploadedFile
from ....crosscutting.config import get_settings
from ....crosscutting.error_responses import payload_too_large, validation_error

E = TypeVar("E", bound=Enum)


@dataclass(frozen=True)
class PageParams:
    page: int
    size: int


def page_params(
    page: int = Query(1, ge=1),
    size: int | None = Query(None, ge=1),
) -> PageParams:
    settings = get_settings()
    effective = size or settings.default_page_size
    return PageParams(page=page, size=min(effective, settings.max_page_size))


def parse_enum(enum_type: type[E], raw: str | None, field: str) -> E | None:
    if raw is None or raw == "":
        return None
    try:
        return enum_type(raw.strip().upper())
    except ValueError:
        allowed = ", ".join(m.value for m in enum_type)
        raise validation_error(
            f"{field} must be one of: {allowed}",
            errors=[{"field": field, "msg": f"invalid value '{raw}'"}],
        )


def sanitize_filename(filename: str | None) -> str:
    if not filename:
        return "upload"
    return os.path.basename(filename)


async def read_upload(file: UploadFile, *, max_bytes: int | None = None) -> UploadedFile:
    """
    Read an UploadFile into memory in chunks, failing fast with 413.

    Starlette buffers to disk for large files; reading in 1MB pieces keeps
    the in-memory copy bounded by the configured limit.
    """
    limit = max_bytes if max_bytes is not None else get_settings().max_upload_bytes
    chunk_size = 1024 * 1024
    data = bytearray()

    while True:
        piece = await file.read(chunk_size)
        if not piece:
            break
        data.extend(piece)
        if len(data) > limit:
            raise payload_too_large(f"{limit} bytes")

    return UploadedFile(
        filename=sanitize_filename(file.filename),
        content_type=file.content_type or "application/octet-stream",
        data=bytes(data),
    )
