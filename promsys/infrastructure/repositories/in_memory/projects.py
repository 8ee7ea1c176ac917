"""In-memory stores for projects and their activity log."""

from __future__ import annotations

from typing import List

from ....domain.entities import Project, ProjectActivity
from .base import InMemoryRepository


class InMemoryProjectRepository(InMemoryRepository[Project]):
    pass


class InMemoryProjectActivityRepository(InMemoryRepository[ProjectActivity]):
    def list_for_project(self, project_id: str) -> List[ProjectActivity]:
        # R: timeline order, most recent activity date first
        return sorted(
            self.list(lambda a: a.project_id == project_id),
            key=lambda a: (a.activity_date, a.created_at),
            reverse=True,
        )

    def delete_for_project(self, project_id: str) -> int:
        with self._lock:
            doomed = [k for k, v in self._items.items() if v.project_id == project_id]
            for key in doomed:
                del self._items[key]
        return len(doomed)
