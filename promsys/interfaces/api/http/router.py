"""
Name: Root API Router (composition)

Responsibilities:
  - Compose the feature routers into one APIRouter
  - Attach the RFC7807 responses to the OpenAPI schema

Collaborators:
  - crosscutting.error_responses.OPENAPI_ERROR_RESPONSES
  - routers.* (one sub-router per feature)

Notes:
  - Mounted by api/main.py under settings.api_prefix ("/api")
"""

from __future__ import annotations

from fastapi import APIRouter

from ....crosscutting.error_responses import OPENAPI_ERROR_RESPONSES
from .routers.auth import router as auth_router
from .routers.catalog import router as catalog_router
from .routers.dashboard import router as dashboard_router
from .routers.files import router as files_router
from .routers.invoices import router as invoices_router
from .routers.notifications import router as notifications_router
from .routers.projects import router as projects_router
from .routers.reimbursements import router as reimbursements_router
from .routers.tasks import router as tasks_router
from .routers.teams import router as teams_router


def build_router() -> APIRouter:
    """Build the root router; a factory keeps imports free of side effects."""
    api_router = APIRouter(responses=OPENAPI_ERROR_RESPONSES)

    api_router.include_router(projects_router)
    api_router.include_router(tasks_router)
    api_router.include_router(invoices_router)
    api_router.include_router(reimbursements_router)
    api_router.include_router(catalog_router)
    api_router.include_router(teams_router)
    api_router.include_router(notifications_router)
    api_router.include_router(dashboard_router)
    api_router.include_router(files_router)
    api_router.include_router(auth_router)

    return api_router


__all__ = ["build_router"]
