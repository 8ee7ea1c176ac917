"""
Name: Toast Notifications

Responsibilities:
  - Collect non-blocking success/error messages for the user
  - Turn client exceptions into error toasts (server message + HTTP status)

Collaborators:
  - client.api: ApiError, ClientError

Notes:
  - Listeners stand in for the rendering layer; tests read `toasts`
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from ..crosscutting.logger import logger
from .api import ApiError, ClientError


class ToastKind(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Toast:
    kind: ToastKind
    message: str
    status_code: Optional[int] = None


class Toaster:
    def __init__(self, listener: Callable[[Toast], None] | None = None):
        self.toasts: list[Toast] = []
        self._listener = listener

    def _push(self, toast: Toast) -> Toast:
        self.toasts.append(toast)
        if self._listener is not None:
            self._listener(toast)
        return toast

    def success(self, message: str) -> Toast:
        return self._push(Toast(ToastKind.SUCCESS, message))

    def error(self, message: str, status_code: int | None = None) -> Toast:
        if status_code is not None:
            message = f"{message} (HTTP {status_code})"
        logger.info("error toast", extra={"toast": message})
        return self._push(Toast(ToastKind.ERROR, message, status_code))

    def error_from(self, exc: Exception, fallback: str = "Something went wrong") -> Toast:
        if isinstance(exc, ApiError):
            return self.error(exc.message or fallback, exc.status_code)
        if isinstance(exc, ClientError):
            return self.error(exc.message or fallback)
        return self.error(fallback)

    @property
    def errors(self) -> list[Toast]:
        return [t for t in self.toasts if t.kind == ToastKind.ERROR]

    @property
    def successes(self) -> list[Toast]:
        return [t for t in self.toasts if t.kind == ToastKind.SUCCESS]

    def clear(self) -> None:
        self.toasts.clear()
