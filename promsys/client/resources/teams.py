"""Team queries: ("teams", page, size) and ("teams", id); writes invalidate "teams"."""

from __future__ import annotations

from typing import Any

from ..api import ApiResponse
from .base import Resource, camel_payload

TEAMS = ("teams",)


def teams_key(page: int = 1, size: int = 10) -> tuple:
    return ("teams", page, size)


def team_key(team_id: str) -> tuple:
    return ("teams", team_id)


class TeamResource(Resource):
    def list(self, page: int = 1, size: int = 10) -> ApiResponse:
        return self._query(
            teams_key(page, size),
            lambda: self.api.get_page("/teams", params={"page": page, "size": size}),
        )

    def get(self, team_id: str) -> dict[str, Any]:
        return self._query(team_key(team_id), lambda: self.api.get(f"/teams/{team_id}"))

    def create(self, *, name: str, description: str | None = None) -> dict[str, Any]:
        body = camel_payload({"name": name, "description": description}, drop_none=True)
        return self._mutate(lambda: self.api.post("/teams", body), [TEAMS])

    def update(self, team_id: str, **changes: Any) -> dict[str, Any]:
        body = camel_payload(changes)
        return self._mutate(lambda: self.api.patch(f"/teams/{team_id}", body), [TEAMS])

    def delete(self, team_id: str) -> Any:
        return self._mutate(lambda: self.api.delete(f"/teams/{team_id}"), [TEAMS])

    def add_member(self, team_id: str, user_id: str) -> Any:
        return self._mutate(
            lambda: self.api.post(f"/teams/{team_id}/members", {"userId": user_id}), [TEAMS]
        )

    def remove_member(self, team_id: str, user_id: str) -> Any:
        return self._mutate(
            lambda: self.api.delete(f"/teams/{team_id}/members/{user_id}"), [TEAMS]
        )
