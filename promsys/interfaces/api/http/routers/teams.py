"""Team router: paginated list, CRUD and membership (TEAM_MANAGE for writes)."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, status

from .....application.teams import TeamService
from .....container import get_team_service
from .....crosscutting.pagination import paginate
from .....domain.entities import User
from .....domain.roles import Capability
from .....identity.auth import require_capability, require_user
from ..dependencies import PageParams, page_params
from ..schemas.catalog import TeamMemberReq, TeamReq, TeamRes, UpdateTeamReq
from ..schemas.common import envelope

router = APIRouter(prefix="/teams", tags=["teams"])

_team_admin = require_capability(Capability.TEAM_MANAGE)


@router.get("")
def list_teams(
    request: Request,
    paging: PageParams = Depends(page_params),
    _actor: User = Depends(require_user()),
    service: TeamService = Depends(get_team_service),
):
    page = paginate(service.list(), paging.page, paging.size)
    return envelope(request, [TeamRes.model_validate(t) for t in page.items], page.paging)


@router.post("", status_code=status.HTTP_201_CREATED)
def create_team(
    request: Request,
    body: TeamReq,
    _actor: User = Depends(_team_admin),
    service: TeamService = Depends(get_team_service),
):
    return envelope(
        request, TeamRes.model_validate(service.create(body.name, body.description))
    )


@router.get("/{team_id}")
def get_team(
    request: Request,
    team_id: str,
    _actor: User = Depends(require_user()),
    service: TeamService = Depends(get_team_service),
):
    return envelope(request, TeamRes.model_validate(service.require(team_id)))


@router.patch("/{team_id}")
def update_team(
    request: Request,
    team_id: str,
    body: UpdateTeamReq,
    _actor: User = Depends(_team_admin),
    service: TeamService = Depends(get_team_service),
):
    team = service.update(team_id, name=body.name, description=body.description)
    return envelope(request, TeamRes.model_validate(team))


@router.delete("/{team_id}")
def delete_team(
    request: Request,
    team_id: str,
    _actor: User = Depends(_team_admin),
    service: TeamService = Depends(get_team_service),
):
    service.delete(team_id)
    return envelope(request, {"id": team_id, "deleted": True})


@router.post("/{team_id}/members", status_code=status.HTTP_201_CREATED)
def add_team_member(
    request: Request,
    team_id: str,
    body: TeamMemberReq,
    _actor: User = Depends(_team_admin),
    service: TeamService = Depends(get_team_service),
):
    return envelope(request, TeamRes.model_validate(service.add_member(team_id, body.user_id)))


@router.delete("/{team_id}/members/{user_id}")
def remove_team_member(
    request: Request,
    team_id: str,
    user_id: str,
    _actor: User = Depends(_team_admin),
    service: TeamService = Depends(get_team_service),
):
    return envelope(request, TeamRes.model_validate(service.remove_member(team_id, user_id)))
