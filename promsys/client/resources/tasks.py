"""
Name: Task Queries and Mutations

Keys:
  - ("tasks", page, size): global task list
  - ("tasks", "project", project_id, page, size): kanban board of a project
  - ("tasks", id): task detail

Every task mutation invalidates the "tasks" prefix.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from ...domain.task_workflow import TaskPriority, TaskStatus
from ..api import ApiResponse, UploadFile
from .base import Resource, camel_payload

TASKS = ("tasks",)


def tasks_key(page: int = 1, size: int = 10) -> tuple:
    return ("tasks", page, size)


def project_tasks_key(project_id: str, page: int = 1, size: int = 10) -> tuple:
    return ("tasks", "project", project_id, page, size)


def task_key(task_id: str) -> tuple:
    return ("tasks", task_id)


class TaskResource(Resource):
    def list(self, page: int = 1, size: int = 10) -> ApiResponse:
        return self._query(
            tasks_key(page, size),
            lambda: self.api.get_page("/tasks", params={"page": page, "size": size}),
        )

    def list_for_project(self, project_id: str, page: int = 1, size: int = 10) -> ApiResponse:
        return self._query(
            project_tasks_key(project_id, page, size),
            lambda: self.api.get_page(
                f"/projects/{project_id}/tasks", params={"page": page, "size": size}
            ),
        )

    def get(self, task_id: str) -> dict[str, Any]:
        return self._query(task_key(task_id), lambda: self.api.get(f"/tasks/{task_id}"))

    def create(
        self,
        project_id: str,
        *,
        title: str,
        assigned_to_id: str,
        deadline: datetime,
        description: str | None = None,
        priority: TaskPriority = TaskPriority.MEDIUM,
    ) -> dict[str, Any]:
        body = camel_payload(
            {
                "title": title,
                "description": description,
                "assigned_to_id": assigned_to_id,
                "deadline": deadline,
                "priority": priority,
            },
            drop_none=True,
        )
        return self._mutate(
            lambda: self.api.post(f"/projects/{project_id}/tasks", body), [TASKS]
        )

    def update(self, task_id: str, **changes: Any) -> dict[str, Any]:
        body = camel_payload(changes)
        return self._mutate(lambda: self.api.patch(f"/tasks/{task_id}", body), [TASKS])

    def delete(self, task_id: str) -> Any:
        return self._mutate(lambda: self.api.delete(f"/tasks/{task_id}"), [TASKS])

    def update_status(self, task_id: str, status: TaskStatus) -> dict[str, Any]:
        return self._mutate(
            lambda: self.api.patch(f"/tasks/{task_id}/status", {"status": status.value}),
            [TASKS],
        )

    def add_comment(self, task_id: str, content: str) -> dict[str, Any]:
        return self._mutate(
            lambda: self.api.post(f"/tasks/{task_id}/comments", {"content": content}),
            [TASKS],
        )

    def upload_attachment(self, task_id: str, file: UploadFile) -> dict[str, Any]:
        return self._mutate(
            lambda: self.api.upload(f"/tasks/{task_id}/attachments", file), [TASKS]
        )
