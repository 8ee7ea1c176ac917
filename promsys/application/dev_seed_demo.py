"""
Name: Dev Seed Demo (local only)

Responsibilities:
  - Provision one user per role plus a starter catalog (categories, a tax)
    and a demo project so the dashboard has something to render
  - Refuse to run outside local/development environments
  - Stay idempotent (safe to run on every startup)

Collaborators:
  - domain.repositories: User, Category, Tax, Project stores
  - crosscutting.config.Settings (dev_seed_demo, app_env)

Constraints:
  - Must never run in production
  - No credentials: sessions come from the auth provider (or
    scripts/issue_session_token.py in development)
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from ..crosscutting.config import Settings
from ..crosscutting.logger import logger
from ..domain.entities import (
    Category,
    CategoryType,
    Project,
    ProjectStatus,
    Tax,
    User,
    new_id,
)
from ..domain.repositories import (
    CategoryRepository,
    ProjectRepository,
    TaxRepository,
    UserRepository,
)
from ..domain.roles import UserRole

_ALLOWED_ENVS = {"local", "development", "dev"}


@dataclass(frozen=True, slots=True)
class _SeedUserSpec:
    id: str
    name: str
    email: str
    role: UserRole


_DEMO_USERS: tuple[_SeedUserSpec, ...] = (
    _SeedUserSpec("demo-admin", "Admin", "admin@promsys.local", UserRole.ADMIN),
    _SeedUserSpec("demo-pm", "Project Manager", "pm@promsys.local", UserRole.PROJECTMANAGER),
    _SeedUserSpec("demo-finance", "Finance", "finance@promsys.local", UserRole.FINANCE),
    _SeedUserSpec("demo-employee", "Employee", "employee@promsys.local", UserRole.EMPLOYEES),
)

_DEMO_CATEGORIES: tuple[tuple[str, CategoryType], ...] = (
    ("Consulting", CategoryType.INCOME),
    ("Operational", CategoryType.EXPENSE),
    ("Travel", CategoryType.EXPENSE),
)

_DEMO_PROJECT = "Demo Project"


def _assert_local_env(settings: Settings) -> None:
    env = (settings.app_env or "").strip().lower()
    if env not in _ALLOWED_ENVS:
        raise RuntimeError(
            f"DEV_SEED_DEMO is enabled but APP_ENV is '{env}'; "
            "demo data is only seeded in local/development"
        )


def _ensure_user(spec: _SeedUserSpec, users: UserRepository) -> User:
    user = users.find_by_email(spec.email)
    if user is not None:
        return user
    user = users.add(User(id=spec.id, name=spec.name, email=spec.email, role=spec.role))
    logger.info(
        "Dev seed demo: user created",
        extra={"email": spec.email, "role": spec.role.value},
    )
    return user


def ensure_dev_demo(
    settings: Settings,
    *,
    users: UserRepository,
    categories: CategoryRepository,
    taxes: TaxRepository,
    projects: ProjectRepository,
) -> None:
    if not settings.dev_seed_demo:
        return

    _assert_local_env(settings)
    logger.info("Dev seed demo: starting provisioning")

    seeded = {spec.role: _ensure_user(spec, users) for spec in _DEMO_USERS}

    existing_categories = {(c.name, c.type) for c in categories.list()}
    for name, category_type in _DEMO_CATEGORIES:
        if (name, category_type) not in existing_categories:
            categories.add(Category(id=new_id(), name=name, type=category_type))

    if not taxes.list(lambda t: t.name == "VAT"):
        taxes.add(Tax(id=new_id(), name="VAT", percentage=Decimal("11")))

    if not projects.list(lambda p: p.name == _DEMO_PROJECT):
        manager = seeded[UserRole.PROJECTMANAGER]
        project = Project(
            id=new_id(),
            name=_DEMO_PROJECT,
            created_by_id=manager.id,
            status=ProjectStatus.ACTIVE,
            client_name="Demo Client",
        )
        project.add_member(manager.id, "Owner")
        project.add_member(seeded[UserRole.EMPLOYEES].id, "Member")
        projects.add(project)

    logger.info("Dev seed demo: provisioning complete")
