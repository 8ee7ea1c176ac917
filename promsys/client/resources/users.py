"""
Name: User Administration

Responsibilities:
  - List users and run the admin actions (create, set role, ban, unban, remove)
  - Toast the outcome of each admin action the way the user table does

Keys: ("users",); every admin action invalidates it.
"""

from __future__ import annotations

from typing import Any, Callable

from ...domain.roles import UserRole
from ..api import ClientError
from ..toasts import Toaster
from .base import Resource, camel_payload

USERS = ("users",)


class UserAdminResource(Resource):
    def __init__(self, api, queries, toaster: Toaster):
        super().__init__(api, queries)
        self.toaster = toaster

    def list(self, limit: int = 100) -> list[dict[str, Any]]:
        return self._query(
            USERS, lambda: self.api.get("/auth/admin/users", params={"limit": limit})
        )

    def _admin_action(self, fn: Callable[[], Any], success: str) -> Any:
        try:
            result = self._mutate(fn, [USERS])
        except ClientError as exc:
            self.toaster.error_from(exc)
            return None
        self.toaster.success(success)
        return result

    def create(self, *, name: str, email: str, role: UserRole = UserRole.EMPLOYEES) -> Any:
        body = camel_payload({"name": name, "email": email, "role": role})
        return self._admin_action(
            lambda: self.api.post("/auth/admin/users", body), "User created successfully"
        )

    def set_role(self, user_id: str, role: UserRole) -> Any:
        return self._admin_action(
            lambda: self.api.post(f"/auth/admin/users/{user_id}/role", {"role": role.value}),
            "User role updated successfully",
        )

    def ban(self, user_id: str, ban_reason: str | None = None) -> Any:
        body = camel_payload({"ban_reason": ban_reason}, drop_none=True)
        return self._admin_action(
            lambda: self.api.post(f"/auth/admin/users/{user_id}/ban", body),
            "User banned successfully",
        )

    def unban(self, user_id: str) -> Any:
        return self._admin_action(
            lambda: self.api.post(f"/auth/admin/users/{user_id}/unban"),
            "User unbanned successfully",
        )

    def remove(self, user_id: str) -> Any:
        return self._admin_action(
            lambda: self.api.delete(f"/auth/admin/users/{user_id}"),
            "User deleted successfully",
        )
