"""
Name: Domain Layer Exports

Responsibilities:
  - Re-export roles, workflow enums and the entities application code uses
  - Keep the domain surface stable for application/interfaces/client imports

Constraints:
  - Pure exports; no infrastructure imports here
"""

from .entities import (
    Attachment,
    Category,
    CategoryType,
    Invoice,
    Notification,
    NotificationType,
    Project,
    ProjectActivity,
    ProjectStatus,
    Reimbursement,
    StoredFile,
    Task,
    Tax,
    Team,
    User,
    Vendor,
)
from .invoice_workflow import InvoicePaymentStatus, InvoiceStatus, InvoiceType
from .navigation import AccessDecision, check_route_access
from .reimbursement_workflow import AttachmentType, ReimbursementStatus
from .roles import Capability, UserRole, has_capability
from .task_workflow import TaskPriority, TaskStatus

__all__ = [
    "AccessDecision",
    "Attachment",
    "AttachmentType",
    "Capability",
    "Category",
    "CategoryType",
    "Invoice",
    "InvoicePaymentStatus",
    "InvoiceStatus",
    "InvoiceType",
    "Notification",
    "NotificationType",
    "Project",
    "ProjectActivity",
    "ProjectStatus",
    "Reimbursement",
    "StoredFile",
    "Task",
    "Tax",
    "Team",
    "User",
    "Vendor",
    "check_route_access",
    "has_capability",
]
