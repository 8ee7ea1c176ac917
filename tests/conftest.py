"""
Name: Pytest Configuration and Shared Fixtures

Responsibilities:
  - Configure a deterministic test environment (no .env, fixed secret)
  - Reset the settings cache and the in-memory container between tests
  - Provide one seeded user per role plus session helpers
  - Provide a FastAPI TestClient over the real app factory

Collaborators:
  - promsys.container: in-memory repositories and services
  - promsys.identity.auth.create_session_token
  - fastapi.testclient.TestClient

Notes:
  - Every test gets a fresh container, so data never leaks across tests
"""

import os
import sys
from decimal import Decimal
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("SESSION_SECRET", "test-secret")

from promsys.crosscutting import config as app_config  # noqa: E402

app_config.Settings.model_config["env_file"] = None

from promsys.container import (  # noqa: E402
    get_category_repository,
    get_project_repository,
    get_tax_repository,
    get_user_repository,
    reset_container,
)
from promsys.domain.entities import (  # noqa: E402
    Category,
    CategoryType,
    Project,
    ProjectStatus,
    Tax,
    User,
)
from promsys.domain.roles import UserRole  # noqa: E402
from promsys.identity.auth import create_session_token  # noqa: E402


def pytest_configure(config) -> None:
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )


@pytest.fixture(autouse=True)
def _fresh_state():
    """R: Settings and container singletons are rebuilt for every test."""
    app_config.get_settings.cache_clear()
    reset_container()
    yield
    app_config.get_settings.cache_clear()
    reset_container()


# ============================================================================
# Users and sessions
# ============================================================================


@pytest.fixture
def users() -> dict[UserRole, User]:
    """R: One stored user per role."""
    repo = get_user_repository()
    seeded = {}
    for role in UserRole:
        slug = role.value.lower()
        seeded[role] = repo.add(
            User(id=f"user-{slug}", name=role.value.title(), email=f"{slug}@example.com", role=role)
        )
    return seeded


@pytest.fixture
def admin(users) -> User:
    return users[UserRole.ADMIN]


@pytest.fixture
def manager(users) -> User:
    return users[UserRole.PROJECTMANAGER]


@pytest.fixture
def finance(users) -> User:
    return users[UserRole.FINANCE]


@pytest.fixture
def employee(users) -> User:
    return users[UserRole.EMPLOYEES]


def auth_headers(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_session_token(user)}"}


@pytest.fixture
def headers_for():
    return auth_headers


# ============================================================================
# Catalog / project data
# ============================================================================


@pytest.fixture
def expense_category() -> Category:
    return get_category_repository().add(
        Category(id="cat-expense", name="Operational", type=CategoryType.EXPENSE)
    )


@pytest.fixture
def income_category() -> Category:
    return get_category_repository().add(
        Category(id="cat-income", name="Consulting", type=CategoryType.INCOME)
    )


@pytest.fixture
def vat() -> Tax:
    return get_tax_repository().add(Tax(id="tax-vat", name="VAT", percentage=Decimal("11")))


@pytest.fixture
def project(manager, employee) -> Project:
    p = Project(
        id="project-1",
        name="Road Map",
        created_by_id=manager.id,
        status=ProjectStatus.ACTIVE,
    )
    p.add_member(manager.id, "Owner")
    p.add_member(employee.id, "Member")
    return get_project_repository().add(p)


# ============================================================================
# HTTP
# ============================================================================


@pytest.fixture
def app():
    from promsys.api.main import create_app

    return create_app()


@pytest.fixture
def client(app):
    from fastapi.testclient import TestClient

    return TestClient(app)
