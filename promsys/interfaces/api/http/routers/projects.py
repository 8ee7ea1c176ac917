"""
Name: Project Router

Responsibilities:
  - Project CRUD, member picker and membership endpoints
  - Project-scoped task list/create and the activity log
  - Attach the financial summary to the project detail

Collaborators:
  - application.projects.ProjectService
  - application.tasks.TaskService
  - application.dashboard.DashboardService (financial summary)
  - identity.auth (require_user, require_capability)

Notes:
  - /projects/users is declared before /projects/{project_id}
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request, status

from .....application.dashboard import DashboardService
from .....application.projects import ActivityInput, ProjectInput, ProjectService
from .....application.tasks import TaskInput, TaskService
from .....application.users import UserAdminService
from .....container import (
    get_dashboard_service,
    get_project_service,
    get_task_service,
    get_user_admin_service,
)
from .....crosscutting.pagination import paginate
from .....domain.entities import ProjectStatus, User
from .....domain.roles import Capability
from .....identity.auth import require_capability, require_user
from ..dependencies import PageParams, page_params, parse_enum
from ..schemas.common import UserRes, envelope, provided_fields
from ..schemas.projects import (
    ActivityReq,
    ActivityRes,
    AddMemberReq,
    FinancialSummaryRes,
    ProjectDetailRes,
    ProjectReq,
    ProjectRes,
    UpdateActivityReq,
    UpdateProjectReq,
)
from ..schemas.tasks import TaskReq, TaskRes

router = APIRouter(prefix="/projects", tags=["projects"])


def _project_input(body: ProjectReq | UpdateProjectReq) -> ProjectInput:
    return ProjectInput(**body.model_dump(by_alias=False))


def _activity_input(body: ActivityReq | UpdateActivityReq) -> ActivityInput:
    return ActivityInput(**body.model_dump(by_alias=False))


@router.get("")
def list_projects(
    request: Request,
    search: str | None = Query(None),
    status_filter: str | None = Query(None, alias="status"),
    paging: PageParams = Depends(page_params),
    actor: User = Depends(require_user()),
    service: ProjectService = Depends(get_project_service),
):
    wanted = parse_enum(ProjectStatus, status_filter, "status")
    term = (search or "").strip().lower()
    projects = [
        p
        for p in service.list_visible(actor)
        if (wanted is None or p.status == wanted)
        and (not term or term in p.name.lower() or term in (p.client_name or "").lower())
    ]
    page = paginate(projects, paging.page, paging.size)
    return envelope(
        request, [ProjectRes.model_validate(p) for p in page.items], page.paging
    )


@router.post("", status_code=status.HTTP_201_CREATED)
def create_project(
    request: Request,
    body: ProjectReq,
    actor: User = Depends(require_capability(Capability.PROJECT_MANAGE)),
    service: ProjectService = Depends(get_project_service),
):
    project = service.create(actor, _project_input(body))
    return envelope(request, ProjectRes.model_validate(project))


@router.get("/users")
def search_users(
    request: Request,
    search: str | None = Query(None),
    _actor: User = Depends(require_user()),
    users: UserAdminService = Depends(get_user_admin_service),
):
    return envelope(request, [UserRes.model_validate(u) for u in users.search(search)])


@router.get("/{project_id}")
def get_project(
    request: Request,
    project_id: str,
    actor: User = Depends(require_user()),
    service: ProjectService = Depends(get_project_service),
    dashboard: DashboardService = Depends(get_dashboard_service),
):
    project = service.get_visible(actor, project_id)
    detail = ProjectDetailRes(
        **ProjectRes.model_validate(project).model_dump(),
        financial_summary=FinancialSummaryRes.model_validate(
            dashboard.project_financials(project.id)
        ),
        counts=dashboard.task_counts(project),
    )
    return envelope(request, detail)


@router.patch("/{project_id}")
def update_project(
    request: Request,
    project_id: str,
    body: UpdateProjectReq,
    _actor: User = Depends(require_capability(Capability.PROJECT_MANAGE)),
    service: ProjectService = Depends(get_project_service),
):
    project = service.update(project_id, _project_input(body), provided_fields(body))
    return envelope(request, ProjectRes.model_validate(project))


@router.delete("/{project_id}")
def delete_project(
    request: Request,
    project_id: str,
    _actor: User = Depends(require_capability(Capability.PROJECT_MANAGE)),
    service: ProjectService = Depends(get_project_service),
):
    service.delete(project_id)
    return envelope(request, {"id": project_id, "deleted": True})


# -----------------------------------------------------------------------------
# Tasks inside a project
# -----------------------------------------------------------------------------
@router.get("/{project_id}/tasks")
def list_project_tasks(
    request: Request,
    project_id: str,
    actor: User = Depends(require_user()),
    projects: ProjectService = Depends(get_project_service),
    tasks: TaskService = Depends(get_task_service),
):
    projects.get_visible(actor, project_id)
    items = tasks.list_visible(actor, project_id=project_id)
    return envelope(request, [TaskRes.model_validate(t) for t in items])


@router.post("/{project_id}/tasks", status_code=status.HTTP_201_CREATED)
def create_project_task(
    request: Request,
    project_id: str,
    body: TaskReq,
    actor: User = Depends(require_capability(Capability.TASK_MANAGE)),
    tasks: TaskService = Depends(get_task_service),
):
    task = tasks.create(actor, project_id, TaskInput(**body.model_dump(by_alias=False)))
    return envelope(request, TaskRes.model_validate(task))


# -----------------------------------------------------------------------------
# Members
# -----------------------------------------------------------------------------
@router.post("/{project_id}/members", status_code=status.HTTP_201_CREATED)
def add_member(
    request: Request,
    project_id: str,
    body: AddMemberReq,
    actor: User = Depends(require_capability(Capability.PROJECT_MANAGE)),
    service: ProjectService = Depends(get_project_service),
):
    project = service.add_member(actor, project_id, body.user_id, body.role)
    return envelope(request, ProjectRes.model_validate(project))


@router.delete("/{project_id}/members/{user_id}")
def remove_member(
    request: Request,
    project_id: str,
    user_id: str,
    _actor: User = Depends(require_capability(Capability.PROJECT_MANAGE)),
    service: ProjectService = Depends(get_project_service),
):
    project = service.remove_member(project_id, user_id)
    return envelope(request, ProjectRes.model_validate(project))


# -----------------------------------------------------------------------------
# Activities
# -----------------------------------------------------------------------------
@router.get("/{project_id}/activities")
def list_activities(
    request: Request,
    project_id: str,
    actor: User = Depends(require_user()),
    service: ProjectService = Depends(get_project_service),
):
    service.get_visible(actor, project_id)
    items = service.list_activities(project_id)
    return envelope(request, [ActivityRes.model_validate(a) for a in items])


@router.post("/{project_id}/activities", status_code=status.HTTP_201_CREATED)
def add_activity(
    request: Request,
    project_id: str,
    body: ActivityReq,
    actor: User = Depends(require_capability(Capability.PROJECT_MANAGE)),
    service: ProjectService = Depends(get_project_service),
):
    activity = service.add_activity(actor, project_id, _activity_input(body))
    return envelope(request, ActivityRes.model_validate(activity))


@router.patch("/{project_id}/activities/{activity_id}")
def update_activity(
    request: Request,
    project_id: str,
    activity_id: str,
    body: UpdateActivityReq,
    _actor: User = Depends(require_capability(Capability.PROJECT_MANAGE)),
    service: ProjectService = Depends(get_project_service),
):
    activity = service.update_activity(
        project_id, activity_id, _activity_input(body), provided_fields(body)
    )
    return envelope(request, ActivityRes.model_validate(activity))


@router.delete("/{project_id}/activities/{activity_id}")
def delete_activity(
    request: Request,
    project_id: str,
    activity_id: str,
    _actor: User = Depends(require_capability(Capability.PROJECT_MANAGE)),
    service: ProjectService = Depends(get_project_service),
):
    service.delete_activity(project_id, activity_id)
    return envelope(request, {"id": activity_id, "deleted": True})
