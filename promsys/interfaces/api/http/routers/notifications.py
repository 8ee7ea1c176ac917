"""
Name: Notification Router

Responsibilities:
  - The signed-in user's inbox, unread badge count, mark one/all read

Notes:
  - /read-all and /unread-count are declared before /{notification_id}
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request

from .....application.notifications import NotificationService
from .....container import get_notification_service
from .....domain.entities import User
from .....identity.auth import require_user
from ..schemas.common import envelope
from ..schemas.dashboard import NotificationRes, UnreadCountRes

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("")
def list_notifications(
    request: Request,
    unread_only: bool = Query(False, alias="unreadOnly"),
    limit: int = Query(50, ge=1, le=200),
    actor: User = Depends(require_user()),
    service: NotificationService = Depends(get_notification_service),
):
    items = service.list_for_user(actor.id)
    if unread_only:
        items = [n for n in items if not n.is_read]
    return envelope(request, [NotificationRes.model_validate(n) for n in items[:limit]])


@router.get("/unread-count")
def unread_count(
    request: Request,
    actor: User = Depends(require_user()),
    service: NotificationService = Depends(get_notification_service),
):
    return envelope(request, UnreadCountRes(count=service.unread_count(actor.id)))


@router.patch("/read-all")
def mark_all_read(
    request: Request,
    actor: User = Depends(require_user()),
    service: NotificationService = Depends(get_notification_service),
):
    return envelope(request, {"updated": service.mark_all_read(actor.id)})


@router.patch("/{notification_id}/read")
def mark_read(
    request: Request,
    notification_id: str,
    actor: User = Depends(require_user()),
    service: NotificationService = Depends(get_notification_service),
):
    notification = service.mark_read(actor.id, notification_id)
    return envelope(request, NotificationRes.model_validate(notification))
