from .catalog import CategoryResource, TaxResource, VendorResource
from .dashboard import DashboardResource
from .invoices import InvoiceResource
from .notifications import NotificationResource
from .projects import ProjectResource
from .reimbursements import ReimbursementResource
from .tasks import TaskResource
from .teams import TeamResource
from .users import UserAdminResource

__all__ = [
    "CategoryResource",
    "DashboardResource",
    "InvoiceResource",
    "NotificationResource",
    "ProjectResource",
    "ReimbursementResource",
    "TaskResource",
    "TaxResource",
    "TeamResource",
    "UserAdminResource",
    "VendorResource",
]
