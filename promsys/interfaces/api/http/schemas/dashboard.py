"""Dashboard, calendar and notification DTOs."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from .....domain.entities import NotificationType
from .common import ApiModel
from .finance import InvoiceRes
from .projects import ProjectRes


class SummaryRes(ApiModel):
    total_projects: int
    active_projects: int
    total_tasks: int
    completed_tasks: int
    task_completion_rate: float
    total_invoices: int
    unpaid_invoices: int
    total_reimbursements: int
    pending_reimbursements: int
    total_users: int


class MonthlyAmountRes(ApiModel):
    month: str
    amount: Decimal


class StatusTotalRes(ApiModel):
    status: str
    count: int
    total: Decimal


class FinanceRes(ApiModel):
    monthly_income: list[MonthlyAmountRes]
    monthly_expense: list[MonthlyAmountRes]
    outstanding_invoices: int
    outstanding_amount: Decimal
    overdue_invoices: int
    total_paid_invoices: int
    recent_invoices: list[InvoiceRes]
    reimbursements_by_status: list[StatusTotalRes]


class StatusCountRes(ApiModel):
    status: str
    count: int


class UpcomingDeadlineRes(ApiModel):
    id: str
    title: str
    deadline: datetime
    project_name: str


class ProjectsOverviewRes(ApiModel):
    projects_by_status: list[StatusCountRes]
    recent_projects: list[ProjectRes]
    tasks_by_status: list[StatusCountRes]
    upcoming_deadlines: list[UpcomingDeadlineRes]


class CalendarEventRes(ApiModel):
    id: str
    title: str
    start: datetime
    end: datetime
    type: str
    status: str
    project_id: str | None = None


class NotificationRes(ApiModel):
    id: str
    type: NotificationType
    title: str
    message: str
    link_url: str | None = None
    is_read: bool
    created_at: datetime


class UnreadCountRes(ApiModel):
    count: int
