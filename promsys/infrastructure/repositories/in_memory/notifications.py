"""In-memory notification inbox."""

from __future__ import annotations

from typing import List

from ....domain.entities import Notification
from .base import InMemoryRepository


class InMemoryNotificationRepository(InMemoryRepository[Notification]):
    def list_for_user(self, user_id: str) -> List[Notification]:
        return self.list(lambda n: n.user_id == user_id)

    def mark_all_read(self, user_id: str) -> int:
        changed = 0
        with self._lock:
            for notification in self._items.values():
                if notification.user_id == user_id and not notification.is_read:
                    notification.is_read = True
                    changed += 1
        return changed
