"""
Name: Task Service

Responsibilities:
  - Task CRUD inside a project, comments and attachments
  - Visibility: task managers see every task, other roles only the tasks
    assigned to them
  - Delegate status changes to ChangeTaskStatusUseCase

Collaborators:
  - domain.repositories: Task, Project, User stores, FileStorage
  - application.usecases.change_task_status
  - application.notifications.NotificationService: TASK_ASSIGNED
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import List, Optional

from ..crosscutting.exceptions import ForbiddenError, NotFoundError, ValidationFailedError
from ..domain.entities import NotificationType, Task, TaskComment, User, new_id, utcnow
from ..domain.repositories import (
    FileStorage,
    ProjectRepository,
    TaskRepository,
    UserRepository,
)
from ..domain.roles import Capability, has_capability
from ..domain.task_workflow import TaskPriority, TaskStatus
from .files import UploadedFile, store_attachment
from .notifications import NotificationService
from .usecases.change_task_status import ChangeTaskStatusInput, ChangeTaskStatusUseCase


@dataclass
class TaskInput:
    title: Optional[str] = None
    description: Optional[str] = None
    assigned_to_id: Optional[str] = None
    deadline: Optional[datetime] = None
    priority: Optional[TaskPriority] = None
    project_id: Optional[str] = None


class TaskService:
    def __init__(
        self,
        tasks: TaskRepository,
        projects: ProjectRepository,
        users: UserRepository,
        storage: FileStorage,
        notifications: NotificationService,
    ):
        self.tasks = tasks
        self.projects = projects
        self.users = users
        self.storage = storage
        self.notifications = notifications
        self.change_status_use_case = ChangeTaskStatusUseCase(
            tasks, notifications, self.can_see
        )

    @staticmethod
    def can_see(actor: User, task: Task) -> bool:
        if has_capability(actor.role, Capability.TASK_MANAGE):
            return True
        return task.assigned_to_id == actor.id

    @staticmethod
    def _require_manager(actor: User) -> None:
        if not has_capability(actor.role, Capability.TASK_MANAGE):
            raise ForbiddenError("Only managers can edit tasks")

    def list_visible(self, actor: User, project_id: str | None = None) -> List[Task]:
        if project_id is not None:
            if self.projects.get(project_id) is None:
                raise NotFoundError("Project", project_id)
            candidates = self.tasks.list_for_project(project_id)
        else:
            candidates = self.tasks.list()
        return [t for t in candidates if self.can_see(actor, t)]

    def get_visible(self, actor: User, task_id: str) -> Task:
        task = self.tasks.get(task_id)
        if task is None or not self.can_see(actor, task):
            raise NotFoundError("Task", task_id)
        return task

    def _require_assignee(self, user_id: str | None) -> str:
        if not user_id:
            raise ValidationFailedError("Assignee is required", field="assignedToId")
        if self.users.get(user_id) is None:
            raise NotFoundError("User", user_id)
        return user_id

    def _notify_assigned(self, actor: User, task: Task) -> None:
        self.notifications.notify(
            [task.assigned_to_id],
            type=NotificationType.TASK_ASSIGNED,
            title="New task assigned",
            message=f'You were assigned "{task.title}"',
            link_url="/dashboard/project-management/tasks",
            actor_id=actor.id,
        )

    def create(self, actor: User, project_id: str, data: TaskInput) -> Task:
        self._require_manager(actor)
        if self.projects.get(project_id) is None:
            raise NotFoundError("Project", project_id)
        title = (data.title or "").strip()
        if not title:
            raise ValidationFailedError("Task title is required", field="title")
        if data.deadline is None:
            raise ValidationFailedError("Deadline is required", field="deadline")
        task = Task(
            id=new_id(),
            project_id=project_id,
            title=title,
            description=data.description,
            assigned_to_id=self._require_assignee(data.assigned_to_id),
            deadline=data.deadline,
            priority=data.priority or TaskPriority.MEDIUM,
            created_by_id=actor.id,
        )
        self.tasks.add(task)
        self._notify_assigned(actor, task)
        return task

    def update(
        self, actor: User, task_id: str, data: TaskInput, provided: set[str]
    ) -> Task:
        """PATCH semantics; status is only changed through change_status()."""
        self._require_manager(actor)
        current = self.get_visible(actor, task_id)
        task = replace(current)

        if "title" in provided:
            title = (data.title or "").strip()
            if not title:
                raise ValidationFailedError("Task title is required", field="title")
            task.title = title
        if "description" in provided:
            task.description = data.description
        if "deadline" in provided and data.deadline is not None:
            task.deadline = data.deadline
        if "priority" in provided and data.priority is not None:
            task.priority = data.priority
        if "assigned_to_id" in provided:
            task.assigned_to_id = self._require_assignee(data.assigned_to_id)
        if "project_id" in provided and data.project_id:
            if self.projects.get(data.project_id) is None:
                raise NotFoundError("Project", data.project_id)
            task.project_id = data.project_id

        task.updated_at = utcnow()
        self.tasks.update(task)
        if task.assigned_to_id != current.assigned_to_id:
            self._notify_assigned(actor, task)
        return task

    def delete(self, actor: User, task_id: str) -> None:
        self._require_manager(actor)
        self.get_visible(actor, task_id)
        self.tasks.delete(task_id)

    def change_status(self, actor: User, task_id: str, status: TaskStatus) -> Task:
        return self.change_status_use_case.execute(
            ChangeTaskStatusInput(task_id=task_id, status=status, actor=actor)
        )

    def add_comment(self, actor: User, task_id: str, content: str) -> TaskComment:
        task = self.get_visible(actor, task_id)
        text = (content or "").strip()
        if not text:
            raise ValidationFailedError("Comment cannot be empty", field="content")
        comment = TaskComment(id=new_id(), user_id=actor.id, content=text)
        task.comments.append(comment)
        self.tasks.update(task)
        return comment

    def add_attachment(self, actor: User, task_id: str, upload: UploadedFile) -> Task:
        task = self.get_visible(actor, task_id)
        attachment = store_attachment(self.storage, upload, uploaded_by_id=actor.id)
        task.attachments.append(attachment)
        task.updated_at = utcnow()
        return self.tasks.update(task)
