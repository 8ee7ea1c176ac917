"""
Name: Session Authentication (JWT)

Responsibilities:
  - Mint and decode session tokens shared with the external auth provider
  - Extract the token from the session cookie or an Authorization: Bearer header
  - Resolve the current user from the user store (role and ban flag are read
    from the store, never trusted from the token alone)
  - Expose FastAPI dependencies: require_user, require_capability

Collaborators:
  - crosscutting/config.py: session secret, cookie name, TTL
  - crosscutting/error_responses.py: 401/403 problem+json
  - container.py: user repository
  - domain/roles.py: UserRole, Capability

Constraints:
  - Password hashing and sign-in flows are owned by the auth provider
  - Never log tokens
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable

import jwt
from fastapi import Header, Request

from ..crosscutting.config import get_settings
from ..crosscutting.error_responses import AppHTTPException, forbidden, unauthorized
from ..crosscutting.logger import logger
from ..domain.entities import User
from ..domain.roles import Capability, UserRole, has_capability

JWT_ALGORITHM: str = "HS256"

CLAIM_SUB: str = "sub"
CLAIM_EMAIL: str = "email"
CLAIM_ROLE: str = "role"
CLAIM_IAT: str = "iat"
CLAIM_EXP: str = "exp"
CLAIM_TYP: str = "typ"

TOKEN_TYPE_SESSION: str = "session"


@dataclass(frozen=True, slots=True)
class SessionPayload:
    user_id: str
    email: str
    role: UserRole


def create_session_token(
    user: User, *, ttl_minutes: int | None = None, secret: str | None = None
) -> str:
    settings = get_settings()
    now = datetime.now(timezone.utc)
    ttl = ttl_minutes if ttl_minutes is not None else settings.session_ttl_minutes

    payload: dict[str, object] = {
        CLAIM_SUB: user.id,
        CLAIM_EMAIL: user.email,
        CLAIM_ROLE: user.role.value,
        CLAIM_IAT: int(now.timestamp()),
        CLAIM_EXP: int((now + timedelta(minutes=ttl)).timestamp()),
        CLAIM_TYP: TOKEN_TYPE_SESSION,
    }
    return jwt.encode(
        payload, secret or settings.session_secret, algorithm=JWT_ALGORITHM
    )


def decode_session_token(token: str) -> SessionPayload:
    """
    Validate signature, expiry and minimum claims.

    Raises:
        AppHTTPException(401): expired, badly signed or incomplete token
    """
    try:
        payload = jwt.decode(
            token,
            get_settings().session_secret,
            algorithms=[JWT_ALGORITHM],
            options={"require": [CLAIM_SUB, CLAIM_ROLE, CLAIM_EXP]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise unauthorized("Session expired") from exc
    except jwt.InvalidTokenError as exc:
        raise unauthorized("Invalid session") from exc

    token_type = payload.get(CLAIM_TYP)
    if token_type is not None and token_type != TOKEN_TYPE_SESSION:
        raise unauthorized("Invalid session type")

    role = UserRole.parse(payload.get(CLAIM_ROLE))
    if role is None:
        raise unauthorized("Invalid session")

    return SessionPayload(
        user_id=str(payload[CLAIM_SUB]),
        email=str(payload.get(CLAIM_EMAIL) or ""),
        role=role,
    )


def _extract_bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    parts = authorization.strip().split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    return parts[1].strip() or None


def extract_session_token(request: Request, authorization: str | None) -> str | None:
    token = _extract_bearer_token(authorization)
    if token:
        return token
    settings = get_settings()
    return request.cookies.get(settings.session_cookie_name) or request.cookies.get(
        f"__Secure-{settings.session_cookie_name}"
    )


def resolve_session_user(token: str) -> User:
    from ..container import get_user_repository

    payload = decode_session_token(token)
    user = get_user_repository().get(payload.user_id)
    if user is None:
        raise unauthorized("Invalid session")
    if user.banned:
        logger.warning("banned user rejected", extra={"user_id": user.id})
        raise forbidden("User is banned")
    return user


def optional_session_user(request: Request) -> User | None:
    """Session user or None; never raises for a missing/invalid token."""
    token = extract_session_token(request, request.headers.get("authorization"))
    if not token:
        return None
    try:
        return resolve_session_user(token)
    except AppHTTPException:
        return None


# ---------------------------------------------------------------------------
# FastAPI dependencies
# ---------------------------------------------------------------------------


def require_user() -> Callable:
    async def dependency(
        request: Request,
        authorization: str | None = Header(None, alias="Authorization"),
    ) -> User:
        token = extract_session_token(request, authorization)
        if not token:
            raise unauthorized("Authentication required")
        user = resolve_session_user(token)
        request.state.user = user
        return user

    return dependency


def require_capability(capability: Capability) -> Callable:
    async def dependency(
        request: Request,
        authorization: str | None = Header(None, alias="Authorization"),
    ) -> User:
        user = await require_user()(request, authorization)
        if not has_capability(user.role, capability):
            raise forbidden("Insufficient role")
        return user

    return dependency
