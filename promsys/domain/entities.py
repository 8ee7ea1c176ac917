"""
Name: Domain Entities

Responsibilities:
  - Define the core business structures (no infrastructure)
  - Offer minimal helpers that keep simple invariants in one place

Collaborators:
  - domain/repositories.py: persistence contracts for these entities
  - application/*: build and mutate entities
  - interfaces/api/http/schemas: serialize entities into camelCase DTOs

Constraints:
  - No FastAPI/httpx imports
  - Money is Decimal; timestamps are timezone-aware UTC
  - Ids are opaque strings
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import List, Optional
from uuid import uuid4

from .invoice_workflow import InvoiceStatus, InvoiceType
from .reimbursement_workflow import AttachmentType, ReimbursementStatus
from .roles import UserRole
from .task_workflow import TaskPriority, TaskStatus


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return uuid4().hex


class ProjectStatus(str, Enum):
    PLANNING = "PLANNING"
    ACTIVE = "ACTIVE"
    ON_HOLD = "ON_HOLD"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


# R: categories share the income/expense split with invoices
CategoryType = InvoiceType


class NotificationType(str, Enum):
    TASK_ASSIGNED = "TASK_ASSIGNED"
    TASK_STATUS_CHANGED = "TASK_STATUS_CHANGED"
    INVOICE_CREATED = "INVOICE_CREATED"
    INVOICE_STATUS_CHANGED = "INVOICE_STATUS_CHANGED"
    REIMBURSEMENT_SUBMITTED = "REIMBURSEMENT_SUBMITTED"
    REIMBURSEMENT_STATUS_CHANGED = "REIMBURSEMENT_STATUS_CHANGED"
    PROJECT_MEMBER_ADDED = "PROJECT_MEMBER_ADDED"
    GENERAL = "GENERAL"


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


@dataclass
class User:
    id: str
    name: str
    email: str
    role: UserRole = UserRole.EMPLOYEES
    image: Optional[str] = None
    banned: bool = False
    ban_reason: Optional[str] = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def ban(self, reason: str | None) -> None:
        self.banned = True
        self.ban_reason = reason
        self.updated_at = utcnow()

    def unban(self) -> None:
        self.banned = False
        self.ban_reason = None
        self.updated_at = utcnow()


# ---------------------------------------------------------------------------
# Files
# ---------------------------------------------------------------------------


@dataclass
class StoredFile:
    """Uploaded file metadata; bytes live in the file storage."""

    id: str
    original_name: str
    content_type: str
    size: int
    uploaded_by_id: str
    created_at: datetime = field(default_factory=utcnow)

    @property
    def url(self) -> str:
        return f"/api/files/{self.id}"


@dataclass
class Attachment:
    id: str
    file: StoredFile
    type: Optional[AttachmentType] = None
    created_at: datetime = field(default_factory=utcnow)


# ---------------------------------------------------------------------------
# Projects
# ---------------------------------------------------------------------------


@dataclass
class ProjectMember:
    user_id: str
    role: Optional[str] = None
    joined_at: datetime = field(default_factory=utcnow)


@dataclass
class ProjectActivity:
    id: str
    project_id: str
    title: str
    activity_date: date
    created_by_id: str
    description: Optional[str] = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)


@dataclass
class Project:
    id: str
    name: str
    created_by_id: str
    status: ProjectStatus = ProjectStatus.PLANNING
    client_name: Optional[str] = None
    pt_name: Optional[str] = None
    description: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    contract_value: Optional[Decimal] = None
    members: List[ProjectMember] = field(default_factory=list)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def member_ids(self) -> set[str]:
        return {m.user_id for m in self.members}

    def add_member(self, user_id: str, role: str | None = None) -> ProjectMember:
        for member in self.members:
            if member.user_id == user_id:
                return member
        member = ProjectMember(user_id=user_id, role=role)
        self.members.append(member)
        self.updated_at = utcnow()
        return member

    def remove_member(self, user_id: str) -> bool:
        before = len(self.members)
        self.members = [m for m in self.members if m.user_id != user_id]
        removed = len(self.members) != before
        if removed:
            self.updated_at = utcnow()
        return removed


# ---------------------------------------------------------------------------
# Tasks
# ---------------------------------------------------------------------------


@dataclass
class TaskComment:
    id: str
    user_id: str
    content: str
    created_at: datetime = field(default_factory=utcnow)


@dataclass
class Task:
    id: str
    project_id: str
    title: str
    assigned_to_id: str
    deadline: datetime
    created_by_id: str
    description: Optional[str] = None
    priority: TaskPriority = TaskPriority.MEDIUM
    status: TaskStatus = TaskStatus.TODO
    attachments: List[Attachment] = field(default_factory=list)
    comments: List[TaskComment] = field(default_factory=list)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def set_status(self, status: TaskStatus) -> None:
        """Persist-side setter; transition rules live in task_workflow."""
        self.status = status
        self.updated_at = utcnow()


# ---------------------------------------------------------------------------
# Finance
# ---------------------------------------------------------------------------


@dataclass
class Invoice:
    id: str
    invoice_number: str
    type: InvoiceType
    category_id: str
    subtotal: Decimal
    tax_amount: Decimal
    total: Decimal
    due_date: date
    created_by_id: str
    status: InvoiceStatus = InvoiceStatus.DRAFT
    project_id: Optional[str] = None
    vendor_id: Optional[str] = None
    tax_id: Optional[str] = None
    notes: Optional[str] = None
    attachments: List[Attachment] = field(default_factory=list)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def set_status(self, status: InvoiceStatus) -> None:
        self.status = status
        self.updated_at = utcnow()


@dataclass
class Reimbursement:
    id: str
    title: str
    amount: Decimal
    category_id: str
    submitted_by_id: str
    status: ReimbursementStatus = ReimbursementStatus.PENDING
    description: Optional[str] = None
    rejection_reason: Optional[str] = None
    project_id: Optional[str] = None
    approved_by_id: Optional[str] = None
    attachments: List[Attachment] = field(default_factory=list)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def set_status(self, status: ReimbursementStatus) -> None:
        self.status = status
        self.updated_at = utcnow()

    def payment_attachments(self) -> List[Attachment]:
        return [a for a in self.attachments if a.type == AttachmentType.PAYMENT]

    @property
    def missing_payment_proof(self) -> bool:
        return self.status == ReimbursementStatus.PAID and not self.payment_attachments()


# ---------------------------------------------------------------------------
# Settings catalogs
# ---------------------------------------------------------------------------


@dataclass
class Category:
    id: str
    name: str
    type: CategoryType
    created_at: datetime = field(default_factory=utcnow)


@dataclass
class Tax:
    id: str
    name: str
    percentage: Decimal
    is_active: bool = True
    created_at: datetime = field(default_factory=utcnow)


@dataclass
class Vendor:
    id: str
    name: str
    location: str
    category_id: Optional[str] = None
    contact_person: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    created_at: datetime = field(default_factory=utcnow)


@dataclass
class TeamMember:
    user_id: str
    role: Optional[str] = None
    joined_at: datetime = field(default_factory=utcnow)


@dataclass
class Team:
    id: str
    name: str
    description: Optional[str] = None
    members: List[TeamMember] = field(default_factory=list)
    created_at: datetime = field(default_factory=utcnow)


# ---------------------------------------------------------------------------
# Notifications
# ---------------------------------------------------------------------------


@dataclass
class Notification:
    id: str
    user_id: str
    type: NotificationType
    title: str
    message: str
    link_url: Optional[str] = None
    is_read: bool = False
    created_at: datetime = field(default_factory=utcnow)
