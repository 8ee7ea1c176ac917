"""
Name: Project Service

Responsibilities:
  - Project CRUD, membership and the activity log
  - Visibility: managers see every project, other roles only the ones
    they are members of

Collaborators:
  - domain.repositories: Project, ProjectActivity, Task, User stores
  - application.notifications.NotificationService: PROJECT_MEMBER_ADDED
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from datetime import date
from decimal import Decimal
from typing import Any, List, Optional

from ..crosscutting.exceptions import NotFoundError, ValidationFailedError
from ..domain.entities import (
    NotificationType,
    Project,
    ProjectActivity,
    ProjectStatus,
    User,
    new_id,
    utcnow,
)
from ..domain.repositories import (
    ProjectActivityRepository,
    ProjectRepository,
    TaskRepository,
    UserRepository,
)
from ..domain.roles import Capability, has_capability
from .notifications import NotificationService


@dataclass
class ProjectInput:
    name: Optional[str] = None
    client_name: Optional[str] = None
    pt_name: Optional[str] = None
    description: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    contract_value: Optional[Decimal] = None
    status: Optional[ProjectStatus] = None


@dataclass
class ActivityInput:
    title: Optional[str] = None
    description: Optional[str] = None
    activity_date: Optional[date] = None


def _changes(data: Any, provided: set[str] | None) -> dict[str, Any]:
    """Fields explicitly provided by the caller (PATCH semantics)."""
    names = [f.name for f in fields(data)]
    if provided is None:
        return {n: getattr(data, n) for n in names if getattr(data, n) is not None}
    return {n: getattr(data, n) for n in names if n in provided}


class ProjectService:
    def __init__(
        self,
        projects: ProjectRepository,
        activities: ProjectActivityRepository,
        tasks: TaskRepository,
        users: UserRepository,
        notifications: NotificationService,
    ):
        self.projects = projects
        self.activities = activities
        self.tasks = tasks
        self.users = users
        self.notifications = notifications

    # -- queries ------------------------------------------------------------

    def can_see(self, actor: User, project: Project) -> bool:
        if has_capability(actor.role, Capability.PROJECT_MANAGE):
            return True
        return actor.id in project.member_ids() or project.created_by_id == actor.id

    def list_visible(self, actor: User) -> List[Project]:
        return self.projects.list(lambda p: self.can_see(actor, p))

    def require(self, project_id: str) -> Project:
        project = self.projects.get(project_id)
        if project is None:
            raise NotFoundError("Project", project_id)
        return project

    def get_visible(self, actor: User, project_id: str) -> Project:
        project = self.require(project_id)
        if not self.can_see(actor, project):
            raise NotFoundError("Project", project_id)
        return project

    # -- commands -----------------------------------------------------------

    @staticmethod
    def _check_dates(project: Project) -> None:
        if project.start_date and project.end_date and project.end_date < project.start_date:
            raise ValidationFailedError("End date must be after start date", field="endDate")

    def create(self, actor: User, data: ProjectInput) -> Project:
        name = (data.name or "").strip()
        if not name:
            raise ValidationFailedError("Project name is required", field="name")
        project = Project(
            id=new_id(),
            name=name,
            created_by_id=actor.id,
            status=data.status or ProjectStatus.PLANNING,
            client_name=data.client_name,
            pt_name=data.pt_name,
            description=data.description,
            start_date=data.start_date,
            end_date=data.end_date,
            contract_value=data.contract_value,
        )
        self._check_dates(project)
        project.add_member(actor.id, "Owner")
        return self.projects.add(project)

    def update(
        self, project_id: str, data: ProjectInput, provided: set[str] | None = None
    ) -> Project:
        project = self.require(project_id)
        changes = _changes(data, provided)
        if "name" in changes and not (changes["name"] or "").strip():
            raise ValidationFailedError("Project name is required", field="name")
        updated = replace(project, **changes)
        self._check_dates(updated)
        updated.updated_at = utcnow()
        return self.projects.update(updated)

    def delete(self, project_id: str) -> None:
        self.require(project_id)
        for task in self.tasks.list_for_project(project_id):
            self.tasks.delete(task.id)
        self.activities.delete_for_project(project_id)
        self.projects.delete(project_id)

    def add_member(
        self, actor: User, project_id: str, user_id: str, role: str | None = None
    ) -> Project:
        project = self.require(project_id)
        if self.users.get(user_id) is None:
            raise NotFoundError("User", user_id)
        already = user_id in project.member_ids()
        project.add_member(user_id, role)
        self.projects.update(project)
        if not already:
            self.notifications.notify(
                [user_id],
                type=NotificationType.PROJECT_MEMBER_ADDED,
                title="Added to project",
                message=f"You were added to {project.name}",
                link_url=f"/dashboard/project-management/project/{project.id}",
                actor_id=actor.id,
            )
        return project

    def remove_member(self, project_id: str, user_id: str) -> Project:
        project = self.require(project_id)
        if not project.remove_member(user_id):
            raise NotFoundError("Project member", user_id)
        return self.projects.update(project)

    # -- activities ---------------------------------------------------------

    def list_activities(self, project_id: str) -> List[ProjectActivity]:
        self.require(project_id)
        return self.activities.list_for_project(project_id)

    def add_activity(
        self, actor: User, project_id: str, data: ActivityInput
    ) -> ProjectActivity:
        self.require(project_id)
        title = (data.title or "").strip()
        if not title:
            raise ValidationFailedError("Activity title is required", field="title")
        return self.activities.add(
            ProjectActivity(
                id=new_id(),
                project_id=project_id,
                title=title,
                description=data.description,
                activity_date=data.activity_date or date.today(),
                created_by_id=actor.id,
            )
        )

    def _require_activity(self, project_id: str, activity_id: str) -> ProjectActivity:
        activity = self.activities.get(activity_id)
        if activity is None or activity.project_id != project_id:
            raise NotFoundError("Activity", activity_id)
        return activity

    def update_activity(
        self,
        project_id: str,
        activity_id: str,
        data: ActivityInput,
        provided: set[str] | None = None,
    ) -> ProjectActivity:
        activity = self._require_activity(project_id, activity_id)
        changes = _changes(data, provided)
        if "title" in changes and not (changes["title"] or "").strip():
            raise ValidationFailedError("Activity title is required", field="title")
        for key, value in changes.items():
            if key == "activity_date" and value is None:
                continue
            setattr(activity, key, value)
        activity.updated_at = utcnow()
        return self.activities.update(activity)

    def delete_activity(self, project_id: str, activity_id: str) -> None:
        self._require_activity(project_id, activity_id)
        self.activities.delete(activity_id)
