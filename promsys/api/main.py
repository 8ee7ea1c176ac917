"""
Name: FastAPI Application Entry Point

Responsibilities:
  - Build the FastAPI app (create_app) with metadata and lifespan
  - Configure middleware (body limit, request context, CORS)
  - Mount the REST API under settings.api_prefix and the page shells at root
  - Expose /healthz and /metrics

Collaborators:
  - interfaces.api.http.router.build_router
  - interfaces.web.pages.build_pages_router
  - crosscutting.middleware: RequestContextMiddleware, BodyLimitMiddleware
  - api.exception_handlers.register_exception_handlers
  - application.dev_seed_demo.ensure_dev_demo

Notes:
  - Middleware order (last added runs first): CORS -> RequestContext -> BodyLimit
  - Run with: uvicorn promsys.api.main:app
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from ..application.dev_seed_demo import ensure_dev_demo
from ..container import (
    get_category_repository,
    get_project_repository,
    get_tax_repository,
    get_user_repository,
)
from ..crosscutting.config import get_settings
from ..crosscutting.logger import logger
from ..crosscutting.metrics import get_metrics_response
from ..crosscutting.middleware import BodyLimitMiddleware, RequestContextMiddleware
from ..interfaces.api.http.router import build_router
from ..interfaces.web.pages import build_pages_router
from .exception_handlers import register_exception_handlers

APP_TITLE = "PROMSYS API"
APP_VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    ensure_dev_demo(
        settings,
        users=get_user_repository(),
        categories=get_category_repository(),
        taxes=get_tax_repository(),
        projects=get_project_repository(),
    )
    logger.info(
        "PROMSYS API starting up",
        extra={
            "app_env": settings.app_env,
            "api_prefix": settings.api_prefix,
            "max_upload_bytes": settings.max_upload_bytes,
        },
    )
    yield
    logger.info("PROMSYS API shutting down")


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title=APP_TITLE,
        version=APP_VERSION,
        lifespan=lifespan,
        openapi_tags=[
            {"name": "projects", "description": "Projects, members and activities"},
            {"name": "tasks", "description": "Kanban tasks and the status workflow"},
            {"name": "invoices", "description": "Invoices (admin, finance)"},
            {"name": "reimbursements", "description": "Reimbursement workflow"},
            {"name": "settings", "description": "Vendors, taxes and categories"},
            {"name": "auth", "description": "Session and user administration"},
        ],
    )

    # R: Body limit first so oversized uploads never reach the routers
    app.add_middleware(BodyLimitMiddleware)
    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_allowed_origins_list(),
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Request-Id"],
    )

    app.include_router(build_router(), prefix=settings.api_prefix)
    app.include_router(build_pages_router())
    register_exception_handlers(app)

    @app.get("/healthz", include_in_schema=False)
    def healthz(request: Request):
        return {
            "ok": True,
            "request_id": getattr(request.state, "request_id", None),
        }

    @app.get("/metrics", include_in_schema=False)
    def metrics():
        body, content_type = get_metrics_response()
        return Response(content=body, media_type=content_type)

    return app


app = create_app()
