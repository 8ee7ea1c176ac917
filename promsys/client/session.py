"""
Name: Auth Context and Guards

Responsibilities:
  - AuthState: explicit (user, is_pending) context handed to every view
  - AuthProvider: load the session from GET /auth/session
  - AuthGuard / RoleGuard: loading, login redirect and role gate decisions

Collaborators:
  - client.api.ApiClient
  - domain.navigation: check_route_access, iter_entries, LOGIN_PATH

Constraints:
  - No module-level user state; callers pass AuthState down
  - While the session is loading nothing is rendered (PENDING)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from ..crosscutting.logger import logger
from ..domain.navigation import (
    LOGIN_PATH,
    AccessDecision,
    check_route_access,
    iter_entries,
    path_matches,
)
from ..domain.roles import UserRole
from .api import ApiClient, ApiError, TransportError


@dataclass(frozen=True)
class SessionUser:
    id: str
    name: str
    email: str
    role: Optional[UserRole]
    image: Optional[str] = None

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> "SessionUser":
        return cls(
            id=str(data["id"]),
            name=data.get("name") or "",
            email=data.get("email") or "",
            role=UserRole.parse(data.get("role")),
            image=data.get("image"),
        )


@dataclass(frozen=True)
class AuthState:
    user: Optional[SessionUser] = None
    is_pending: bool = True

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def role(self) -> Optional[UserRole]:
        return self.user.role if self.user else None


PENDING_AUTH = AuthState()
ANONYMOUS = AuthState(user=None, is_pending=False)


class AuthProvider:
    def __init__(self, api: ApiClient):
        self._api = api
        self._state = PENDING_AUTH

    @property
    def state(self) -> AuthState:
        return self._state

    def load(self) -> AuthState:
        """Resolve the session; any failure leaves the user signed out."""
        try:
            data = self._api.get("/auth/session") or {}
        except (ApiError, TransportError) as exc:
            logger.info("session lookup failed", extra={"error": str(exc)})
            self._state = ANONYMOUS
            return self._state

        user = data.get("user")
        self._state = AuthState(
            user=SessionUser.from_payload(user) if user else None, is_pending=False
        )
        return self._state

    def sign_in_with_token(self, token: str) -> AuthState:
        self._api.set_session_token(token)
        return self.load()

    def sign_out(self) -> AuthState:
        self._api.set_session_token(None)
        self._state = ANONYMOUS
        return self._state


def auth_guard(state: AuthState) -> Optional[str]:
    """Login URL when the user must sign in, None otherwise (including while loading)."""
    if state.is_pending or state.is_authenticated:
        return None
    return LOGIN_PATH


class RoleGuard:
    def __init__(self, state: AuthState):
        self.state = state

    def check(self, path: str) -> AccessDecision:
        if self.state.is_pending:
            return AccessDecision.PENDING
        role = self.state.role
        if role is not None:
            return check_route_access(path, role)
        # R: signed-out or unknown role: any role-restricted match denies
        for entry in iter_entries():
            if path_matches(path, entry.url) and entry.allowed_roles is not None:
                return AccessDecision.DENY
        return AccessDecision.ALLOW
