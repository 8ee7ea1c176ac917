"""
Application layer (public exports).

One service per aggregate; workflow transitions go through the use cases in
`usecases/` so the API and tests share a single authoritative path.
"""

from .catalog import CatalogService, VendorInput
from .dashboard import DashboardService
from .files import UploadedFile, store_attachment
from .invoices import InvoiceFilters, InvoiceInput, InvoiceService
from .notifications import NotificationService
from .projects import ActivityInput, ProjectInput, ProjectService
from .reimbursements import ReimbursementInput, ReimbursementService
from .tasks import TaskInput, TaskService
from .teams import TeamService
from .users import UserAdminService

__all__ = [
    "ActivityInput",
    "CatalogService",
    "DashboardService",
    "InvoiceFilters",
    "InvoiceInput",
    "InvoiceService",
    "NotificationService",
    "ProjectInput",
    "ProjectService",
    "ReimbursementInput",
    "ReimbursementService",
    "TaskInput",
    "TaskService",
    "TeamService",
    "UploadedFile",
    "UserAdminService",
    "VendorInput",
    "store_attachment",
]
