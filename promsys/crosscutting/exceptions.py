"""
Name: Typed Domain Exceptions

Responsibilities:
  - Give every internal failure a stable error_code
  - Generate an error_id for log correlation
  - Keep a human readable message (never secrets)

Collaborators:
  - api/exception_handlers.py: maps each subclass to an HTTP status
  - application/*: raise these when a rule is violated
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from uuid import uuid4


@dataclass(frozen=True)
class ErrorResponse:
    error_code: str
    message: str
    error_id: str

    def to_dict(self) -> dict:
        return {
            "error_code": self.error_code,
            "message": self.message,
            "error_id": self.error_id,
        }


class PromsysError(Exception):
    """Base for internal errors: error_code + error_id + message."""

    error_code: str = "PROMSYS_ERROR"

    def __init__(
        self,
        message: str,
        error_id: str | None = None,
        original_error: Exception | None = None,
    ):
        self.message = message
        self.error_id = error_id or str(uuid4())
        self.original_error = original_error
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(
            error_code=self.error_code, message=self.message, error_id=self.error_id
        )


class NotFoundError(PromsysError):
    error_code: str = "NOT_FOUND"

    def __init__(self, resource: str, identifier: str):
        super().__init__(f"{resource} '{identifier}' not found")
        self.resource = resource
        self.identifier = identifier


class ForbiddenError(PromsysError):
    """The caller's role lacks the capability for the operation."""

    error_code: str = "FORBIDDEN"


class TransitionNotAllowedError(PromsysError):
    """A status change outside the workflow's transition set."""

    error_code: str = "TRANSITION_NOT_ALLOWED"

    def __init__(self, entity: str, current: Any, target: Any):
        current_value = getattr(current, "value", current)
        target_value = getattr(target, "value", target)
        super().__init__(
            f"{entity} cannot move from {current_value} to {target_value}"
        )
        self.entity = entity
        self.current = current
        self.target = target


class ValidationFailedError(PromsysError):
    error_code: str = "VALIDATION_ERROR"

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class ConflictError(PromsysError):
    error_code: str = "CONFLICT"
