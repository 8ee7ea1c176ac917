"""
Name: Dashboard Aggregations

Responsibilities:
  - Summary counters (projects, tasks, invoices, reimbursements, users)
  - Finance overview (monthly income/expense, outstanding, recent invoices,
    reimbursements by status)
  - Project overview (status breakdowns, recent projects, upcoming deadlines)
  - Calendar events (project spans and task deadlines)
  - Per-project financial summary

Collaborators:
  - domain.repositories: every aggregate store (read-only)
  - domain.invoice_workflow: UNPAID_STATUSES, OUTSTANDING_STATUSES

Notes:
  - Money stays Decimal until serialization
  - Months are "YYYY-MM" keys, oldest first
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone
from decimal import Decimal
from typing import Callable, List, Optional

from ..domain.entities import Invoice, Project, ProjectStatus, Task
from ..domain.invoice_workflow import (
    OUTSTANDING_STATUSES,
    UNPAID_STATUSES,
    InvoiceStatus,
    InvoiceType,
)
from ..domain.reimbursement_workflow import ReimbursementStatus
from ..domain.repositories import (
    InvoiceRepository,
    ProjectRepository,
    ReimbursementRepository,
    TaskRepository,
    UserRepository,
)
from ..domain.task_workflow import TaskStatus

_ZERO = Decimal("0")
RECENT_LIMIT = 5
FINANCE_MONTHS = 6


@dataclass
class DashboardSummary:
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


@dataclass
class MonthlyAmount:
    month: str
    amount: Decimal


@dataclass
class StatusTotal:
    status: str
    count: int
    total: Decimal = _ZERO


@dataclass
class FinanceDashboard:
    monthly_income: List[MonthlyAmount]
    monthly_expense: List[MonthlyAmount]
    outstanding_invoices: int
    outstanding_amount: Decimal
    overdue_invoices: int
    total_paid_invoices: int
    recent_invoices: List[Invoice]
    reimbursements_by_status: List[StatusTotal]


@dataclass
class UpcomingDeadline:
    id: str
    title: str
    deadline: datetime
    project_name: str


@dataclass
class ProjectDashboard:
    projects_by_status: List[StatusTotal]
    recent_projects: List[Project]
    tasks_by_status: List[StatusTotal]
    upcoming_deadlines: List[UpcomingDeadline]


@dataclass
class CalendarEvent:
    id: str
    title: str
    start: datetime
    end: datetime
    type: str
    status: str
    project_id: Optional[str] = None


@dataclass
class FinancialSummary:
    total_income: Decimal = _ZERO
    outstanding_income: Decimal = _ZERO
    invoice_expense: Decimal = _ZERO
    reimbursement_expense: Decimal = _ZERO
    total_expense: Decimal = _ZERO
    net_profit: Decimal = _ZERO
    extra: dict = field(default_factory=dict)


def _month_keys(today: date, count: int) -> List[str]:
    keys: List[str] = []
    year, month = today.year, today.month
    for _ in range(count):
        keys.append(f"{year:04d}-{month:02d}")
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    return list(reversed(keys))


def _at_midnight(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


class DashboardService:
    def __init__(
        self,
        projects: ProjectRepository,
        tasks: TaskRepository,
        invoices: InvoiceRepository,
        reimbursements: ReimbursementRepository,
        users: UserRepository,
        today: Callable[[], date] = date.today,
    ):
        self.projects = projects
        self.tasks = tasks
        self.invoices = invoices
        self.reimbursements = reimbursements
        self.users = users
        self.today = today

    def summary(self) -> DashboardSummary:
        projects = self.projects.list()
        tasks = self.tasks.list()
        invoices = self.invoices.list()
        reimbursements = self.reimbursements.list()

        completed = sum(1 for t in tasks if t.status == TaskStatus.DONE)
        rate = round(completed / len(tasks) * 100, 1) if tasks else 0.0
        return DashboardSummary(
            total_projects=len(projects),
            active_projects=sum(1 for p in projects if p.status == ProjectStatus.ACTIVE),
            total_tasks=len(tasks),
            completed_tasks=completed,
            task_completion_rate=rate,
            total_invoices=len(invoices),
            unpaid_invoices=sum(1 for i in invoices if i.status in UNPAID_STATUSES),
            total_reimbursements=len(reimbursements),
            pending_reimbursements=sum(
                1 for r in reimbursements if r.status == ReimbursementStatus.PENDING
            ),
            total_users=len(self.users.list()),
        )

    def finance(self) -> FinanceDashboard:
        invoices = self.invoices.list()
        months = _month_keys(self.today(), FINANCE_MONTHS)
        income = {m: _ZERO for m in months}
        expense = {m: _ZERO for m in months}

        for invoice in invoices:
            if invoice.status != InvoiceStatus.PAID:
                continue
            key = f"{invoice.updated_at:%Y-%m}"
            bucket = income if invoice.type == InvoiceType.INCOME else expense
            if key in bucket:
                bucket[key] += invoice.total

        outstanding = [i for i in invoices if i.status in OUTSTANDING_STATUSES]
        by_status: dict[ReimbursementStatus, StatusTotal] = {}
        for reimbursement in self.reimbursements.list():
            entry = by_status.setdefault(
                reimbursement.status, StatusTotal(reimbursement.status.value, 0)
            )
            entry.count += 1
            entry.total += reimbursement.amount

        return FinanceDashboard(
            monthly_income=[MonthlyAmount(m, income[m]) for m in months],
            monthly_expense=[MonthlyAmount(m, expense[m]) for m in months],
            outstanding_invoices=len(outstanding),
            outstanding_amount=sum((i.total for i in outstanding), _ZERO),
            overdue_invoices=sum(1 for i in invoices if i.status == InvoiceStatus.OVERDUE),
            total_paid_invoices=sum(1 for i in invoices if i.status == InvoiceStatus.PAID),
            recent_invoices=invoices[:RECENT_LIMIT],
            reimbursements_by_status=[
                by_status[s] for s in ReimbursementStatus if s in by_status
            ],
        )

    def projects_overview(self) -> ProjectDashboard:
        projects = self.projects.list()
        tasks = self.tasks.list()
        project_counts = Counter(p.status for p in projects)
        task_counts = Counter(t.status for t in tasks)
        names = {p.id: p.name for p in projects}

        upcoming = sorted(
            (t for t in tasks if t.status != TaskStatus.DONE),
            key=lambda t: t.deadline,
        )[:RECENT_LIMIT]
        return ProjectDashboard(
            projects_by_status=[
                StatusTotal(s.value, project_counts[s]) for s in ProjectStatus if project_counts[s]
            ],
            recent_projects=projects[:RECENT_LIMIT],
            tasks_by_status=[
                StatusTotal(s.value, task_counts[s]) for s in TaskStatus if task_counts[s]
            ],
            upcoming_deadlines=[
                UpcomingDeadline(t.id, t.title, t.deadline, names.get(t.project_id, ""))
                for t in upcoming
            ],
        )

    def calendar(
        self, start: datetime | None = None, end: datetime | None = None
    ) -> List[CalendarEvent]:
        def in_range(event_start: datetime, event_end: datetime) -> bool:
            if start is not None and event_end < start:
                return False
            if end is not None and event_start > end:
                return False
            return True

        events: List[CalendarEvent] = []
        for project in self.projects.list():
            if project.start_date is None:
                continue
            p_start = _at_midnight(project.start_date)
            p_end = _at_midnight(project.end_date or project.start_date)
            if in_range(p_start, p_end):
                events.append(
                    CalendarEvent(
                        id=project.id,
                        title=project.name,
                        start=p_start,
                        end=p_end,
                        type="project",
                        status=project.status.value,
                    )
                )
        for task in self.tasks.list():
            if in_range(task.deadline, task.deadline):
                events.append(
                    CalendarEvent(
                        id=task.id,
                        title=task.title,
                        start=task.deadline,
                        end=task.deadline,
                        type="task",
                        status=task.status.value,
                        project_id=task.project_id,
                    )
                )
        return sorted(events, key=lambda e: e.start)

    def project_financials(self, project_id: str) -> FinancialSummary:
        invoices = self.invoices.list(lambda i: i.project_id == project_id)
        summary = FinancialSummary()
        for invoice in invoices:
            if invoice.type == InvoiceType.INCOME:
                if invoice.status == InvoiceStatus.PAID:
                    summary.total_income += invoice.total
                elif invoice.status in OUTSTANDING_STATUSES:
                    summary.outstanding_income += invoice.total
            elif invoice.status == InvoiceStatus.PAID:
                summary.invoice_expense += invoice.total
        summary.reimbursement_expense = sum(
            (
                r.amount
                for r in self.reimbursements.list(lambda r: r.project_id == project_id)
                if r.status == ReimbursementStatus.PAID
            ),
            _ZERO,
        )
        summary.total_expense = summary.invoice_expense + summary.reimbursement_expense
        summary.net_profit = summary.total_income - summary.total_expense
        return summary

    def task_counts(self, project: Project) -> dict[str, int]:
        return {
            "tasks": len(self.tasks.list_for_project(project.id)),
            "invoices": len(self.invoices.list(lambda i: i.project_id == project.id)),
            "members": len(project.members),
        }

    @staticmethod
    def is_task_overdue(task: Task, now: datetime) -> bool:
        return task.status != TaskStatus.DONE and task.deadline < now
