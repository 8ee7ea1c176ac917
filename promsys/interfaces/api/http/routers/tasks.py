"""
Name: Task Router

Responsibilities:
  - Task list (paginated, visibility-filtered), detail, edit and delete
  - PATCH /tasks/{id}/status: the authoritative workflow gate
    (409 off-graph, 403 review without capability)
  - Comments and multipart attachments

Collaborators:
  - application.tasks.TaskService
  - identity.auth.require_user
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, Query, Request, UploadFile, status

from .....application.tasks import TaskInput, TaskService
from .....container import get_task_service
from .....crosscutting.pagination import paginate
from .....domain.entities import User
from .....domain.task_workflow import TaskPriority, TaskStatus
from .....identity.auth import require_user
from ..dependencies import PageParams, page_params, parse_enum, read_upload
from ..schemas.common import envelope, provided_fields
from ..schemas.tasks import CommentReq, CommentRes, TaskRes, TaskStatusReq, UpdateTaskReq

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("")
def list_tasks(
    request: Request,
    project_id: str | None = Query(None, alias="projectId"),
    status_filter: str | None = Query(None, alias="status"),
    priority: str | None = Query(None),
    assigned_to_id: str | None = Query(None, alias="assignedToId"),
    paging: PageParams = Depends(page_params),
    actor: User = Depends(require_user()),
    service: TaskService = Depends(get_task_service),
):
    wanted_status = parse_enum(TaskStatus, status_filter, "status")
    wanted_priority = parse_enum(TaskPriority, priority, "priority")
    tasks = [
        t
        for t in service.list_visible(actor, project_id=project_id)
        if (wanted_status is None or t.status == wanted_status)
        and (wanted_priority is None or t.priority == wanted_priority)
        and (assigned_to_id is None or t.assigned_to_id == assigned_to_id)
    ]
    page = paginate(tasks, paging.page, paging.size)
    return envelope(request, [TaskRes.model_validate(t) for t in page.items], page.paging)


@router.get("/{task_id}")
def get_task(
    request: Request,
    task_id: str,
    actor: User = Depends(require_user()),
    service: TaskService = Depends(get_task_service),
):
    return envelope(request, TaskRes.model_validate(service.get_visible(actor, task_id)))


@router.patch("/{task_id}")
def update_task(
    request: Request,
    task_id: str,
    body: UpdateTaskReq,
    actor: User = Depends(require_user()),
    service: TaskService = Depends(get_task_service),
):
    task = service.update(
        actor, task_id, TaskInput(**body.model_dump(by_alias=False)), provided_fields(body)
    )
    return envelope(request, TaskRes.model_validate(task))


@router.delete("/{task_id}")
def delete_task(
    request: Request,
    task_id: str,
    actor: User = Depends(require_user()),
    service: TaskService = Depends(get_task_service),
):
    service.delete(actor, task_id)
    return envelope(request, {"id": task_id, "deleted": True})


@router.patch("/{task_id}/status")
def change_task_status(
    request: Request,
    task_id: str,
    body: TaskStatusReq,
    actor: User = Depends(require_user()),
    service: TaskService = Depends(get_task_service),
):
    task = service.change_status(actor, task_id, body.status)
    return envelope(request, TaskRes.model_validate(task))


@router.post("/{task_id}/comments", status_code=status.HTTP_201_CREATED)
def add_comment(
    request: Request,
    task_id: str,
    body: CommentReq,
    actor: User = Depends(require_user()),
    service: TaskService = Depends(get_task_service),
):
    comment = service.add_comment(actor, task_id, body.content)
    return envelope(request, CommentRes.model_validate(comment))


@router.post("/{task_id}/attachments", status_code=status.HTTP_201_CREATED)
async def add_attachment(
    request: Request,
    task_id: str,
    file: UploadFile = File(...),
    actor: User = Depends(require_user()),
    service: TaskService = Depends(get_task_service),
):
    upload = await read_upload(file)
    task = service.add_attachment(actor, task_id, upload)
    return envelope(request, TaskRes.model_validate(task))
