"""
Name: Page Shells (session proxy + role gate)

Responsibilities:
  - Serve the dashboard's page routes as JSON view models
  - Apply the session proxy first (public pages vs. login redirect), then the
    role gate; denied pages answer 403 with the unauthorized view
  - Provide the view model: title, role-filtered sidebar, current user

Collaborators:
  - domain.navigation (resolve_redirect, check_route_access, sidebar)
  - identity.auth (extract_session_token, optional_session_user)

Notes:
  - Like the browser proxy, the redirect step only looks at cookie presence;
    an invalid token is caught by the auth guard right after
  - "/dashboard" itself redirects to the project list
"""

from __future__ import annotations

from dataclasses import asdict
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, RedirectResponse

from ...domain.entities import User
from ...domain.navigation import (
    APP_NAME,
    HOME_PATH,
    LOGIN_PATH,
    SIDEBAR_ITEMS,
    AccessDecision,
    check_route_access,
    filter_sidebar_by_role,
    is_public_path,
    resolve_page_title,
    resolve_redirect,
)
from ...identity.auth import extract_session_token, optional_session_user

PAGE_PREFIXES: tuple[str, ...] = ("/dashboard", "/pages", "/settings", "/auth", "/unauthorized")

UNAUTHORIZED_VIEW: dict[str, Any] = {
    "view": "unauthorized",
    "title": "Unauthorized",
    "message": "You do not have permission to access this page.",
    "homeUrl": HOME_PATH,
}


def _sidebar_payload(user: User) -> list[dict[str, Any]]:
    groups = filter_sidebar_by_role(SIDEBAR_ITEMS, user.role)
    payload = []
    for group in groups:
        data = asdict(group)
        data.pop("allowed_roles", None)
        for item in data["items"]:
            item.pop("allowed_roles", None)
            for sub in item["sub_items"]:
                sub.pop("allowed_roles", None)
        payload.append(data)
    return payload


def render_page(request: Request, path: str):
    if path.rstrip("/") == "/dashboard":
        return RedirectResponse(HOME_PATH, status_code=307)

    has_session = extract_session_token(request, request.headers.get("authorization")) is not None
    redirect_to = resolve_redirect(path, has_session)
    if redirect_to is not None:
        return RedirectResponse(redirect_to, status_code=307)

    if is_public_path(path):
        if path.startswith("/unauthorized"):
            return JSONResponse(UNAUTHORIZED_VIEW)
        return JSONResponse({"view": "public", "title": APP_NAME, "path": path})

    user = optional_session_user(request)
    if user is None:
        return RedirectResponse(LOGIN_PATH, status_code=307)

    decision = check_route_access(path, user.role)
    if decision == AccessDecision.DENY:
        return JSONResponse(UNAUTHORIZED_VIEW, status_code=403)

    return JSONResponse(
        {
            "view": "page",
            "path": path,
            "title": resolve_page_title(path),
            "user": {
                "id": user.id,
                "name": user.name,
                "email": user.email,
                "image": user.image,
                "role": user.role.value,
            },
            "sidebar": _sidebar_payload(user),
        }
    )


def build_pages_router() -> APIRouter:
    router = APIRouter(include_in_schema=False)

    for prefix in PAGE_PREFIXES:

        async def page(request: Request, rest: str = ""):
            return render_page(request, request.url.path)

        router.add_api_route(prefix, page, methods=["GET"])
        router.add_api_route(f"{prefix}/{{rest:path}}", page, methods=["GET"])

    return router


__all__ = ["build_pages_router", "render_page", "UNAUTHORIZED_VIEW"]
