"""
Name: Auth Provider Bridge Router

Responsibilities:
  - GET /auth/session: the signed-in user (or null) for the dashboard's
    AuthProvider
  - Admin user management mirroring the provider's admin plugin:
    list, create, set role, ban, unban, remove

Collaborators:
  - identity.auth (optional_session_user, require_capability)
  - application.users.UserAdminService

Constraints:
  - Sign-in/sign-up stay with the external provider
  - Admin routes need USER_ADMIN
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request, status

from .....application.users import UserAdminService
from .....container import get_user_admin_service
from .....domain.entities import User
from .....domain.roles import Capability
from .....identity.auth import optional_session_user, require_capability
from ..schemas.auth import BanReq, CreateUserReq, SessionRes, SetRoleReq
from ..schemas.common import UserRes, envelope

router = APIRouter(prefix="/auth", tags=["auth"])

_user_admin = require_capability(Capability.USER_ADMIN)


@router.get("/session")
def get_session(request: Request):
    user = optional_session_user(request)
    return envelope(
        request, SessionRes(user=UserRes.model_validate(user) if user else None)
    )


@router.get("/admin/users")
def list_users(
    request: Request,
    limit: int = Query(100, ge=1, le=500),
    _actor: User = Depends(_user_admin),
    service: UserAdminService = Depends(get_user_admin_service),
):
    users = service.list_users(limit=limit)
    return envelope(request, [UserRes.model_validate(u) for u in users])


@router.post("/admin/users", status_code=status.HTTP_201_CREATED)
def create_user(
    request: Request,
    body: CreateUserReq,
    _actor: User = Depends(_user_admin),
    service: UserAdminService = Depends(get_user_admin_service),
):
    user = service.create_user(name=body.name, email=body.email, role=body.role)
    return envelope(request, UserRes.model_validate(user))


@router.post("/admin/users/{user_id}/role")
def set_role(
    request: Request,
    user_id: str,
    body: SetRoleReq,
    actor: User = Depends(_user_admin),
    service: UserAdminService = Depends(get_user_admin_service),
):
    return envelope(request, UserRes.model_validate(service.set_role(actor, user_id, body.role)))


@router.post("/admin/users/{user_id}/ban")
def ban_user(
    request: Request,
    user_id: str,
    body: BanReq,
    actor: User = Depends(_user_admin),
    service: UserAdminService = Depends(get_user_admin_service),
):
    user = service.ban(actor, user_id, body.ban_reason)
    return envelope(request, UserRes.model_validate(user))


@router.post("/admin/users/{user_id}/unban")
def unban_user(
    request: Request,
    user_id: str,
    _actor: User = Depends(_user_admin),
    service: UserAdminService = Depends(get_user_admin_service),
):
    return envelope(request, UserRes.model_validate(service.unban(user_id)))


@router.delete("/admin/users/{user_id}")
def remove_user(
    request: Request,
    user_id: str,
    actor: User = Depends(_user_admin),
    service: UserAdminService = Depends(get_user_admin_service),
):
    service.remove(actor, user_id)
    return envelope(request, {"id": user_id, "deleted": True})
