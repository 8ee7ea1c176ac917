"""
Name: Composition Root (manual DI)

Responsibilities:
  - Build repositories, file storage and application services
  - Expose factories usable as FastAPI dependencies (Depends)
  - Keep singletons with lru_cache; reset_container() drops them for tests

Collaborators:
  - crosscutting.config.get_settings
  - domain.repositories (ports)
  - infrastructure.* (in-memory implementations)
  - application.* (services)

Notes:
  - No business logic here
  - No FastAPI imports: factories are plain callables
"""

from __future__ import annotations

from functools import lru_cache

from .application.catalog import CatalogService
from .application.dashboard import DashboardService
from .application.invoices import InvoiceService
from .application.notifications import NotificationService
from .application.projects import ProjectService
from .application.reimbursements import ReimbursementService
from .application.tasks import TaskService
from .application.teams import TeamService
from .application.users import UserAdminService
from .crosscutting.config import get_settings
from .domain.repositories import (
    CategoryRepository,
    InvoiceRepository,
    NotificationRepository,
    ProjectActivityRepository,
    ProjectRepository,
    ReimbursementRepository,
    TaskRepository,
    TaxRepository,
    TeamRepository,
    UserRepository,
    VendorRepository,
)
from .infrastructure.repositories import (
    InMemoryCategoryRepository,
    InMemoryInvoiceRepository,
    InMemoryNotificationRepository,
    InMemoryProjectActivityRepository,
    InMemoryProjectRepository,
    InMemoryReimbursementRepository,
    InMemoryTaskRepository,
    InMemoryTaxRepository,
    InMemoryTeamRepository,
    InMemoryUserRepository,
    InMemoryVendorRepository,
)
from .infrastructure.storage import InMemoryFileStorage

# =============================================================================
# Repositories (singletons)
# =============================================================================


@lru_cache(maxsize=1)
def get_user_repository() -> UserRepository:
    return InMemoryUserRepository()


@lru_cache(maxsize=1)
def get_project_repository() -> ProjectRepository:
    return InMemoryProjectRepository()


@lru_cache(maxsize=1)
def get_project_activity_repository() -> ProjectActivityRepository:
    return InMemoryProjectActivityRepository()


@lru_cache(maxsize=1)
def get_task_repository() -> TaskRepository:
    return InMemoryTaskRepository()


@lru_cache(maxsize=1)
def get_invoice_repository() -> InvoiceRepository:
    return InMemoryInvoiceRepository()


@lru_cache(maxsize=1)
def get_reimbursement_repository() -> ReimbursementRepository:
    return InMemoryReimbursementRepository()


@lru_cache(maxsize=1)
def get_vendor_repository() -> VendorRepository:
    return InMemoryVendorRepository()


@lru_cache(maxsize=1)
def get_tax_repository() -> TaxRepository:
    return InMemoryTaxRepository()


@lru_cache(maxsize=1)
def get_category_repository() -> CategoryRepository:
    return InMemoryCategoryRepository()


@lru_cache(maxsize=1)
def get_team_repository() -> TeamRepository:
    return InMemoryTeamRepository()


@lru_cache(maxsize=1)
def get_notification_repository() -> NotificationRepository:
    return InMemoryNotificationRepository()


@lru_cache(maxsize=1)
def get_file_storage() -> InMemoryFileStorage:
    """Attachment storage, bounded by MAX_UPLOAD_BYTES."""
    return InMemoryFileStorage(max_bytes=get_settings().max_upload_bytes)


# =============================================================================
# Services
# =============================================================================


@lru_cache(maxsize=1)
def get_notification_service() -> NotificationService:
    return NotificationService(get_notification_repository())


@lru_cache(maxsize=1)
def get_user_admin_service() -> UserAdminService:
    return UserAdminService(get_user_repository())


@lru_cache(maxsize=1)
def get_project_service() -> ProjectService:
    return ProjectService(
        projects=get_project_repository(),
        activities=get_project_activity_repository(),
        tasks=get_task_repository(),
        users=get_user_repository(),
        notifications=get_notification_service(),
    )


@lru_cache(maxsize=1)
def get_task_service() -> TaskService:
    return TaskService(
        tasks=get_task_repository(),
        projects=get_project_repository(),
        users=get_user_repository(),
        storage=get_file_storage(),
        notifications=get_notification_service(),
    )


@lru_cache(maxsize=1)
def get_invoice_service() -> InvoiceService:
    return InvoiceService(
        invoices=get_invoice_repository(),
        categories=get_category_repository(),
        taxes=get_tax_repository(),
        vendors=get_vendor_repository(),
        projects=get_project_repository(),
        users=get_user_repository(),
        storage=get_file_storage(),
        notifications=get_notification_service(),
    )


@lru_cache(maxsize=1)
def get_reimbursement_service() -> ReimbursementService:
    return ReimbursementService(
        reimbursements=get_reimbursement_repository(),
        categories=get_category_repository(),
        projects=get_project_repository(),
        users=get_user_repository(),
        storage=get_file_storage(),
        notifications=get_notification_service(),
    )


@lru_cache(maxsize=1)
def get_catalog_service() -> CatalogService:
    return CatalogService(
        vendors=get_vendor_repository(),
        taxes=get_tax_repository(),
        categories=get_category_repository(),
        invoices=get_invoice_repository(),
        reimbursements=get_reimbursement_repository(),
    )


@lru_cache(maxsize=1)
def get_team_service() -> TeamService:
    return TeamService(get_team_repository(), get_user_repository())


@lru_cache(maxsize=1)
def get_dashboard_service() -> DashboardService:
    return DashboardService(
        projects=get_project_repository(),
        tasks=get_task_repository(),
        invoices=get_invoice_repository(),
        reimbursements=get_reimbursement_repository(),
        users=get_user_repository(),
    )


_FACTORIES = (
    get_user_repository,
    get_project_repository,
    get_project_activity_repository,
    get_task_repository,
    get_invoice_repository,
    get_reimbursement_repository,
    get_vendor_repository,
    get_tax_repository,
    get_category_repository,
    get_team_repository,
    get_notification_repository,
    get_file_storage,
    get_notification_service,
    get_user_admin_service,
    get_project_service,
    get_task_service,
    get_invoice_service,
    get_reimbursement_service,
    get_catalog_service,
    get_team_service,
    get_dashboard_service,
)


def reset_container() -> None:
    """Drop every cached singleton (fresh stores on next access)."""
    for factory in _FACTORIES:
        factory.cache_clear()
