"""
HTTP DTOs (pydantic v2).

Wire names are camelCase (alias_generator); Python code uses snake_case.
"""

from .common import (
    ApiModel,
    AttachmentRes,
    FileRes,
    UserRes,
    envelope,
    provided_fields,
    to_payload,
)

__all__ = [
    "ApiModel",
    "AttachmentRes",
    "FileRes",
    "UserRes",
    "envelope",
    "provided_fields",
    "to_payload",
]
