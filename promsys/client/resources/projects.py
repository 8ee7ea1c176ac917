"""
Name: Project Queries and Mutations

Keys:
  - ("projects", page, size), ("projects", id)
  - ("projects", id, "activities")
  - ("project-users", search)

Project mutations invalidate the "projects" prefix; activity mutations only
invalidate the project's activity list.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any

from ...domain.entities import ProjectStatus
from ..api import ApiResponse
from .base import Resource, camel_payload

PROJECTS = ("projects",)


def projects_key(page: int = 1, size: int = 10) -> tuple:
    return ("projects", page, size)


def project_key(project_id: str) -> tuple:
    return ("projects", project_id)


def activities_key(project_id: str) -> tuple:
    return ("projects", project_id, "activities")


def project_users_key(search: str | None = None) -> tuple:
    return ("project-users", search)


class ProjectResource(Resource):
    def list(self, page: int = 1, size: int = 10) -> ApiResponse:
        return self._query(
            projects_key(page, size),
            lambda: self.api.get_page("/projects", params={"page": page, "size": size}),
        )

    def get(self, project_id: str) -> dict[str, Any]:
        return self._query(
            project_key(project_id), lambda: self.api.get(f"/projects/{project_id}")
        )

    def create(
        self,
        *,
        name: str,
        client_name: str | None = None,
        pt_name: str | None = None,
        description: str | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
        contract_value: Decimal | None = None,
        status: ProjectStatus | None = None,
    ) -> dict[str, Any]:
        body = camel_payload(
            {
                "name": name,
                "client_name": client_name,
                "pt_name": pt_name,
                "description": description,
                "start_date": start_date,
                "end_date": end_date,
                "contract_value": contract_value,
                "status": status,
            },
            drop_none=True,
        )
        return self._mutate(lambda: self.api.post("/projects", body), [PROJECTS])

    def update(self, project_id: str, **changes: Any) -> dict[str, Any]:
        body = camel_payload(changes)
        return self._mutate(
            lambda: self.api.patch(f"/projects/{project_id}", body), [PROJECTS]
        )

    def delete(self, project_id: str) -> Any:
        return self._mutate(lambda: self.api.delete(f"/projects/{project_id}"), [PROJECTS])

    def add_member(self, project_id: str, user_id: str, role: str | None = None) -> Any:
        body = camel_payload({"user_id": user_id, "role": role}, drop_none=True)
        return self._mutate(
            lambda: self.api.post(f"/projects/{project_id}/members", body), [PROJECTS]
        )

    def remove_member(self, project_id: str, user_id: str) -> Any:
        return self._mutate(
            lambda: self.api.delete(f"/projects/{project_id}/members/{user_id}"),
            [PROJECTS],
        )

    def users(self, search: str | None = None) -> list[dict[str, Any]]:
        params = {"search": search} if search else None
        return self._query(
            project_users_key(search), lambda: self.api.get("/projects/users", params=params)
        )

    # ------------------------------------------------------------------
    # Activities
    # ------------------------------------------------------------------

    def activities(self, project_id: str) -> list[dict[str, Any]]:
        return self._query(
            activities_key(project_id),
            lambda: self.api.get(f"/projects/{project_id}/activities"),
        )

    def create_activity(
        self,
        project_id: str,
        *,
        title: str,
        description: str | None = None,
        activity_date: date | None = None,
    ) -> dict[str, Any]:
        body = camel_payload(
            {"title": title, "description": description, "activity_date": activity_date},
            drop_none=True,
        )
        return self._mutate(
            lambda: self.api.post(f"/projects/{project_id}/activities", body),
            [activities_key(project_id)],
        )

    def update_activity(self, project_id: str, activity_id: str, **changes: Any) -> Any:
        body = camel_payload(changes)
        return self._mutate(
            lambda: self.api.patch(f"/projects/{project_id}/activities/{activity_id}", body),
            [activities_key(project_id)],
        )

    def delete_activity(self, project_id: str, activity_id: str) -> Any:
        return self._mutate(
            lambda: self.api.delete(f"/projects/{project_id}/activities/{activity_id}"),
            [activities_key(project_id)],
        )
