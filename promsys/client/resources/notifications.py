"""
Name: Notification Queries

Keys: ("notifications",) for the list, ("notifications", "unread-count") for
the badge. The badge polls every settings.unread_count_refresh_seconds; marking
read invalidates the whole "notifications" prefix.
"""

from __future__ import annotations

from typing import Any, Callable

from ...crosscutting.config import get_settings
from ..query import QueryObserver
from .base import Resource

NOTIFICATIONS = ("notifications",)
UNREAD_COUNT = ("notifications", "unread-count")


class NotificationResource(Resource):
    def list(self) -> list[dict[str, Any]]:
        return self._query(NOTIFICATIONS, lambda: self.api.get("/notifications"))

    def unread_count(self) -> int:
        return self._query(UNREAD_COUNT, self._fetch_unread_count)

    def _fetch_unread_count(self) -> int:
        data = self.api.get("/notifications/unread-count") or {}
        return int(data.get("count", 0))

    def watch_unread_count(
        self,
        *,
        interval: float | None = None,
        on_change: Callable[[QueryObserver], None] | None = None,
    ) -> QueryObserver:
        """Mount the header badge; QueryClient.tick() keeps it fresh."""
        every = interval if interval is not None else get_settings().unread_count_refresh_seconds
        return self._watch(
            UNREAD_COUNT,
            self._fetch_unread_count,
            refetch_interval=every,
            on_change=on_change,
        )

    def mark_read(self, notification_id: str) -> Any:
        return self._mutate(
            lambda: self.api.patch(f"/notifications/{notification_id}/read"),
            [NOTIFICATIONS],
        )

    def mark_all_read(self) -> Any:
        return self._mutate(lambda: self.api.patch("/notifications/read-all"), [NOTIFICATIONS])
