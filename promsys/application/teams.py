"""Team CRUD and membership."""

from __future__ import annotations

from typing import List

from ..crosscutting.exceptions import NotFoundError, ValidationFailedError
from ..domain.entities import Team, TeamMember, new_id
from ..domain.repositories import TeamRepository, UserRepository


class TeamService:
    def __init__(self, teams: TeamRepository, users: UserRepository):
        self.teams = teams
        self.users = users

    def list(self) -> List[Team]:
        return self.teams.list()

    def require(self, team_id: str) -> Team:
        team = self.teams.get(team_id)
        if team is None:
            raise NotFoundError("Team", team_id)
        return team

    def create(self, name: str | None, description: str | None = None) -> Team:
        cleaned = (name or "").strip()
        if not cleaned:
            raise ValidationFailedError("Team name is required", field="name")
        return self.teams.add(Team(id=new_id(), name=cleaned, description=description))

    def update(
        self, team_id: str, *, name: str | None = None, description: str | None = None
    ) -> Team:
        team = self.require(team_id)
        if name is not None:
            cleaned = name.strip()
            if not cleaned:
                raise ValidationFailedError("Team name is required", field="name")
            team.name = cleaned
        if description is not None:
            team.description = description
        return self.teams.update(team)

    def delete(self, team_id: str) -> None:
        self.require(team_id)
        self.teams.delete(team_id)

    def add_member(self, team_id: str, user_id: str) -> Team:
        team = self.require(team_id)
        if self.users.get(user_id) is None:
            raise NotFoundError("User", user_id)
        if all(m.user_id != user_id for m in team.members):
            team.members.append(TeamMember(user_id=user_id))
        return self.teams.update(team)

    def remove_member(self, team_id: str, user_id: str) -> Team:
        team = self.require(team_id)
        remaining = [m for m in team.members if m.user_id != user_id]
        if len(remaining) == len(team.members):
            raise NotFoundError("Team member", user_id)
        team.members = remaining
        return self.teams.update(team)
