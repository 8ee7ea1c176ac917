"""
Name: Centralized Exception Handlers

Responsibilities:
  - Translate domain exceptions into RFC7807 responses
  - Log every mapped error with request_id + error_id
  - Never leak internals for untyped exceptions in production

Collaborators:
  - crosscutting.error_responses: AppHTTPException, ErrorCode, app_exception_handler
  - crosscutting.exceptions: PromsysError and subclasses
  - crosscutting.config.get_settings

Notes:
  | exception                  | status | code                    |
  |----------------------------|--------|-------------------------|
  | NotFoundError              | 404    | NOT_FOUND               |
  | ForbiddenError             | 403    | FORBIDDEN               |
  | TransitionNotAllowedError  | 409    | TRANSITION_NOT_ALLOWED  |
  | ValidationFailedError      | 422    | VALIDATION_ERROR        |
  | ConflictError              | 409    | CONFLICT                |
  | PromsysError (other)       | 500    | INTERNAL_ERROR          |
"""

from __future__ import annotations

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..crosscutting.config import get_settings
from ..crosscutting.error_responses import (
    AppHTTPException,
    ErrorCode,
    app_exception_handler,
)
from ..crosscutting.exceptions import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    PromsysError,
    TransitionNotAllowedError,
    ValidationFailedError,
)
from ..crosscutting.logger import logger

_MAPPING: tuple[tuple[type[PromsysError], int, ErrorCode], ...] = (
    (NotFoundError, 404, ErrorCode.NOT_FOUND),
    (ForbiddenError, 403, ErrorCode.FORBIDDEN),
    (TransitionNotAllowedError, 409, ErrorCode.TRANSITION_NOT_ALLOWED),
    (ValidationFailedError, 422, ErrorCode.VALIDATION_ERROR),
    (ConflictError, 409, ErrorCode.CONFLICT),
)


def _request_id_from(request: Request) -> str | None:
    return getattr(getattr(request, "state", None), "request_id", None)


def _classify(exc: PromsysError) -> tuple[int, ErrorCode]:
    for exc_type, status_code, code in _MAPPING:
        if isinstance(exc, exc_type):
            return status_code, code
    return 500, ErrorCode.INTERNAL_ERROR


async def promsys_error_handler(request: Request, exc: PromsysError) -> JSONResponse:
    status_code, code = _classify(exc)
    log = logger.error if status_code >= 500 else logger.warning
    log(
        "domain error",
        extra={
            "code": code.value,
            "error_id": exc.error_id,
            "message": exc.message,
            "request_id": _request_id_from(request),
        },
    )

    errors: list[dict] = [{"error_id": exc.error_id}]
    field = getattr(exc, "field", None)
    if field:
        errors.insert(0, {"field": field, "msg": exc.message})

    detail = exc.message
    if status_code >= 500 and get_settings().is_production():
        detail = "Internal error."

    app_exc = AppHTTPException(
        status_code=status_code, code=code, detail=detail, errors=errors
    )
    return await app_exception_handler(request, app_exc)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Body/query schema failures as problem+json instead of FastAPI's default."""
    errors = [
        {
            "field": ".".join(str(p) for p in err.get("loc", ()) if p != "body"),
            "msg": err.get("msg", ""),
        }
        for err in exc.errors()
    ]
    first = errors[0]["msg"] if errors else "Invalid request"
    app_exc = AppHTTPException(
        status_code=422,
        code=ErrorCode.VALIDATION_ERROR,
        detail=first,
        errors=errors,
    )
    return await app_exception_handler(request, app_exc)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    request_id = _request_id_from(request)
    logger.error(
        "unhandled exception",
        exc_info=True,
        extra={"request_id": request_id, "error": str(exc)},
    )

    detail = str(exc) if not get_settings().is_production() else "Internal error."
    app_exc = AppHTTPException(
        status_code=500,
        code=ErrorCode.INTERNAL_ERROR,
        detail=detail,
    )
    return await app_exception_handler(request, app_exc)


def register_exception_handlers(app) -> None:
    """AppHTTPException keeps RFC7807; Exception is the last-resort fallback."""
    app.add_exception_handler(PromsysError, promsys_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(AppHTTPException, app_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = ["register_exception_handlers"]
