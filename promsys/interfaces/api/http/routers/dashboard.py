"""
Name: Dashboard Router

Responsibilities:
  - GET /dashboard/summary (admin), /dashboard/finance (admin, finance),
    /dashboard/projects (any signed-in user)
  - GET /calendar/events?start=&end=

Collaborators:
  - application.dashboard.DashboardService
"""

from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Query, Request

from .....application.dashboard import DashboardService
from .....container import get_dashboard_service
from .....domain.entities import User
from .....domain.roles import Capability
from .....identity.auth import require_capability, require_user
from ..schemas.common import envelope
from ..schemas.dashboard import (
    CalendarEventRes,
    FinanceRes,
    ProjectsOverviewRes,
    SummaryRes,
)

router = APIRouter(tags=["dashboard"])


def _aware(value: datetime | None) -> datetime | None:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


@router.get("/dashboard/summary")
def dashboard_summary(
    request: Request,
    _actor: User = Depends(require_capability(Capability.DASHBOARD_SUMMARY)),
    service: DashboardService = Depends(get_dashboard_service),
):
    return envelope(request, SummaryRes.model_validate(service.summary()))


@router.get("/dashboard/finance")
def dashboard_finance(
    request: Request,
    _actor: User = Depends(require_capability(Capability.DASHBOARD_FINANCE)),
    service: DashboardService = Depends(get_dashboard_service),
):
    return envelope(request, FinanceRes.model_validate(service.finance()))


@router.get("/dashboard/projects")
def dashboard_projects(
    request: Request,
    _actor: User = Depends(require_user()),
    service: DashboardService = Depends(get_dashboard_service),
):
    return envelope(request, ProjectsOverviewRes.model_validate(service.projects_overview()))


@router.get("/calendar/events")
def calendar_events(
    request: Request,
    start: datetime | None = Query(None),
    end: datetime | None = Query(None),
    _actor: User = Depends(require_user()),
    service: DashboardService = Depends(get_dashboard_service),
):
    events = service.calendar(_aware(start), _aware(end))
    return envelope(request, [CalendarEventRes.model_validate(e) for e in events])
