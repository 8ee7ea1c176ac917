"""
Name: REST API Client (httpx)

Responsibilities:
  - Talk to the PROMSYS REST API under settings.api_base_url + api_prefix
  - Send JSON bodies and multipart uploads with the session cookie attached
  - Unwrap the {data, paging?, meta?} envelope
  - Turn non-2xx responses into ApiError and transport failures into
    TransportError

Collaborators:
  - httpx.Client (sync)
  - crosscutting.config.get_settings: base URL, prefix, timeout, cookie name

Constraints:
  - No retries here; the query layer decides what to retry
  - Never log the session token

Notes:
  - ApiError.message is the server-provided `detail` (problem+json) or
    `message`, so toasts can show it verbatim
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

import httpx

from ..crosscutting.config import get_settings
from ..crosscutting.logger import logger


class ClientError(Exception):
    """Base for every failure raised by the dashboard client."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ApiError(ClientError):
    """The server answered with a non-2xx status."""

    def __init__(self, status_code: int, message: str, code: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.code = code

    def __str__(self) -> str:
        return f"{self.message} (HTTP {self.status_code})"


class TransportError(ClientError):
    """The request never got an HTTP answer (timeout, refused, DNS...)."""


@dataclass
class ApiResponse:
    data: Any = None
    paging: Optional[dict[str, Any]] = None
    meta: dict[str, Any] = field(default_factory=dict)
    status_code: int = 200


@dataclass(frozen=True)
class UploadFile:
    """File payload for multipart endpoints."""

    filename: str
    content: bytes
    content_type: str = "application/octet-stream"


def _error_message(response: httpx.Response) -> tuple[str, str | None]:
    fallback = response.reason_phrase or f"HTTP {response.status_code}"
    try:
        body = response.json()
    except ValueError:
        return (response.text.strip()[:200] or fallback), None
    if not isinstance(body, dict):
        return fallback, None

    code = body.get("code")
    detail = body.get("detail", body.get("message"))
    if isinstance(detail, list):
        # R: FastAPI-style [{loc, msg}] lists
        parts = [
            str(item.get("msg", item)) if isinstance(item, dict) else str(item)
            for item in detail
        ]
        detail = "; ".join(p for p in parts if p)
    if not detail:
        return fallback, code
    return str(detail), code


def _clean_params(params: Mapping[str, Any] | None) -> dict[str, Any] | None:
    if not params:
        return None
    cleaned = {}
    for key, value in params.items():
        if value is None:
            continue
        if hasattr(value, "value"):
            value = value.value
        cleaned[key] = value
    return cleaned or None


class ApiClient:
    """
    Thin synchronous wrapper around httpx.Client.

    `transport` lets tests inject httpx.MockTransport (or an ASGI transport)
    without touching the network.
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        session_token: str | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        settings = get_settings()
        root = (base_url or settings.api_base_url).rstrip("/")
        self._cookie_name = settings.session_cookie_name
        self._client = httpx.Client(
            base_url=f"{root}{settings.api_prefix}",
            timeout=timeout if timeout is not None else settings.request_timeout_seconds,
            transport=transport,
            headers={"Accept": "application/json"},
        )
        if session_token:
            self.set_session_token(session_token)

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------

    def set_session_token(self, token: str | None) -> None:
        self._client.cookies.clear()
        if token:
            self._client.cookies.set(self._cookie_name, token)

    # ------------------------------------------------------------------
    # Requests
    # ------------------------------------------------------------------

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        json: Any = None,
        files: Mapping[str, UploadFile] | None = None,
        data: Mapping[str, Any] | None = None,
    ) -> ApiResponse:
        """
        Send one request and unwrap the envelope.

        Raises:
            ApiError: non-2xx answer
            TransportError: timeout or connection failure
        """
        multipart = None
        if files:
            multipart = {
                name: (f.filename, f.content, f.content_type)
                for name, f in files.items()
            }
        try:
            response = self._client.request(
                method,
                path,
                params=_clean_params(params),
                json=json,
                files=multipart,
                data=_clean_params(data),
            )
        except httpx.TransportError as exc:
            logger.warning(
                "api transport error",
                extra={"method": method, "path": path, "error_type": type(exc).__name__},
            )
            raise TransportError(f"Network error: {exc}") from exc

        if response.is_error:
            message, code = _error_message(response)
            logger.info(
                "api error response",
                extra={"method": method, "path": path, "status": response.status_code},
            )
            raise ApiError(response.status_code, message, code)

        return self._unwrap(response)

    @staticmethod
    def _unwrap(response: httpx.Response) -> ApiResponse:
        if response.status_code == 204 or not response.content:
            return ApiResponse(status_code=response.status_code)
        try:
            body = response.json()
        except ValueError:
            return ApiResponse(data=response.content, status_code=response.status_code)
        if isinstance(body, dict) and "data" in body:
            return ApiResponse(
                data=body.get("data"),
                paging=body.get("paging"),
                meta=body.get("meta") or {},
                status_code=response.status_code,
            )
        return ApiResponse(data=body, status_code=response.status_code)

    def get(self, path: str, *, params: Mapping[str, Any] | None = None) -> Any:
        return self.request("GET", path, params=params).data

    def get_page(self, path: str, *, params: Mapping[str, Any] | None = None) -> ApiResponse:
        """Like get() but keeps paging for list screens."""
        return self.request("GET", path, params=params)

    def post(self, path: str, json: Any = None) -> Any:
        return self.request("POST", path, json=json).data

    def patch(self, path: str, json: Any = None) -> Any:
        return self.request("PATCH", path, json=json).data

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path).data

    def upload(
        self,
        path: str,
        file: UploadFile,
        *,
        fields: Mapping[str, Any] | None = None,
    ) -> Any:
        return self.request("POST", path, files={"file": file}, data=fields).data

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "ApiClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
