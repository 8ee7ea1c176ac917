"""
Name: Change Task Status Use Case

Responsibilities:
  - Apply one task status transition after validating adjacency and the
    review capability
  - Notify the assignee and the creator once the change is persisted

Collaborators:
  - domain.task_workflow.ensure_transition
  - domain.repositories.TaskRepository
  - application.notifications.NotificationService

Constraints:
  - The stored task is untouched when validation fails
  - Assignment is not checked: any actor who can see the task may move it
"""

from __future__ import annotations

from dataclasses import dataclass

from ...crosscutting.exceptions import NotFoundError
from ...crosscutting.logger import logger
from ...domain.entities import NotificationType, Task, User
from ...domain.repositories import TaskRepository
from ...domain.task_workflow import TaskStatus, ensure_transition
from ..notifications import NotificationService

_STATUS_MESSAGES = {
    TaskStatus.IN_PROGRESS: "is now in progress",
    TaskStatus.SUBMITTED: "was submitted for review",
    TaskStatus.DONE: "was approved",
    TaskStatus.REVISION: "needs revision",
}


@dataclass
class ChangeTaskStatusInput:
    task_id: str
    status: TaskStatus
    actor: User


class ChangeTaskStatusUseCase:
    """R: Single authoritative path for task status changes."""

    def __init__(self, tasks: TaskRepository, notifications: NotificationService, visible):
        self.tasks = tasks
        self.notifications = notifications
        # R: visibility predicate (actor, task) -> bool, owned by TaskService
        self.visible = visible

    def execute(self, input_data: ChangeTaskStatusInput) -> Task:
        task = self.tasks.get(input_data.task_id)
        if task is None or not self.visible(input_data.actor, task):
            raise NotFoundError("Task", input_data.task_id)

        previous = task.status
        ensure_transition(previous, input_data.status, input_data.actor.role)

        task.set_status(input_data.status)
        self.tasks.update(task)

        logger.info(
            "task status changed",
            extra={
                "task_id": task.id,
                "from_status": previous.value,
                "to_status": task.status.value,
            },
        )
        self.notifications.notify(
            [task.assigned_to_id, task.created_by_id],
            type=NotificationType.TASK_STATUS_CHANGED,
            title="Task status updated",
            message=f'"{task.title}" {_STATUS_MESSAGES[task.status]}',
            link_url="/dashboard/project-management/tasks",
            actor_id=input_data.actor.id,
        )
        return task
