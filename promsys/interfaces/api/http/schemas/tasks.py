"""Task DTOs (kanban cards, detail, status change, comments)."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from .....domain.task_workflow import TaskPriority, TaskStatus
from .common import ApiModel, AttachmentRes


class TaskReq(ApiModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    assigned_to_id: str
    deadline: datetime
    priority: TaskPriority = TaskPriority.MEDIUM


class UpdateTaskReq(ApiModel):
    title: str | None = Field(default=None, max_length=200)
    description: str | None = None
    assigned_to_id: str | None = None
    deadline: datetime | None = None
    priority: TaskPriority | None = None
    project_id: str | None = None


class TaskStatusReq(ApiModel):
    status: TaskStatus


class CommentReq(ApiModel):
    content: str = Field(..., max_length=5000)


class CommentRes(ApiModel):
    id: str
    user_id: str
    content: str
    created_at: datetime


class TaskRes(ApiModel):
    id: str
    project_id: str
    title: str
    description: str | None = None
    assigned_to_id: str
    deadline: datetime
    priority: TaskPriority
    status: TaskStatus
    created_by_id: str
    attachments: list[AttachmentRes] = []
    comments: list[CommentRes] = []
    created_at: datetime
    updated_at: datetime
