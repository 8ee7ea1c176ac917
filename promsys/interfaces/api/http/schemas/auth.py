"""Auth provider bridge DTOs (session + admin user management)."""

from __future__ import annotations

from pydantic import Field

from .....domain.roles import UserRole
from .common import ApiModel, UserRes


class SessionRes(ApiModel):
    user: UserRes | None = None


class CreateUserReq(ApiModel):
    name: str = Field(..., min_length=1, max_length=200)
    email: str = Field(..., min_length=3, max_length=320)
    role: UserRole = UserRole.EMPLOYEES


class SetRoleReq(ApiModel):
    role: UserRole


class BanReq(ApiModel):
    ban_reason: str | None = Field(default=None, max_length=500)
