"""
Name: Notification Service

Responsibilities:
  - Emit in-app notifications for workflow events
  - List a user's inbox, count unread, mark one/all read

Collaborators:
  - domain.repositories.NotificationRepository
  - application.usecases.*: emit after a successful transition

Constraints:
  - Recipients are de-duplicated; the actor never notifies themself
"""

from __future__ import annotations

from typing import Iterable, List

from ..crosscutting.exceptions import NotFoundError
from ..crosscutting.logger import logger
from ..domain.entities import Notification, NotificationType, new_id
from ..domain.repositories import NotificationRepository


class NotificationService:
    def __init__(self, repository: NotificationRepository):
        self.repository = repository

    def notify(
        self,
        recipients: Iterable[str | None],
        *,
        type: NotificationType,
        title: str,
        message: str,
        link_url: str | None = None,
        actor_id: str | None = None,
    ) -> List[Notification]:
        created: List[Notification] = []
        seen: set[str] = set()
        for user_id in recipients:
            if not user_id or user_id == actor_id or user_id in seen:
                continue
            seen.add(user_id)
            created.append(
                self.repository.add(
                    Notification(
                        id=new_id(),
                        user_id=user_id,
                        type=type,
                        title=title,
                        message=message,
                        link_url=link_url,
                    )
                )
            )
        if created:
            logger.info(
                "notifications emitted",
                extra={"notification_type": type.value, "recipients": len(created)},
            )
        return created

    def list_for_user(self, user_id: str) -> List[Notification]:
        return self.repository.list_for_user(user_id)

    def unread_count(self, user_id: str) -> int:
        return sum(1 for n in self.repository.list_for_user(user_id) if not n.is_read)

    def mark_read(self, user_id: str, notification_id: str) -> Notification:
        notification = self.repository.get(notification_id)
        # R: another user's notification is reported as missing
        if notification is None or notification.user_id != user_id:
            raise NotFoundError("Notification", notification_id)
        notification.is_read = True
        return self.repository.update(notification)

    def mark_all_read(self, user_id: str) -> int:
        return self.repository.mark_all_read(user_id)
