"""In-memory task store."""

from __future__ import annotations

from typing import List

from ....domain.entities import Task
from .base import InMemoryRepository


class InMemoryTaskRepository(InMemoryRepository[Task]):
    def list_for_project(self, project_id: str) -> List[Task]:
        return self.list(lambda t: t.project_id == project_id)
