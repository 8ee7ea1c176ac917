"""
Name: Dashboard Client Composition

Responsibilities:
  - Wire ApiClient, QueryClient, Toaster and AuthProvider together
  - Expose one resource object per API area
  - Build the workflow action surfaces for the current AuthState

Notes:
  - Actions are rebuilt from the current auth state on every access so a
    role change after load() is picked up
"""

from __future__ import annotations

from .api import ApiClient
from .query import QueryClient
from .resources import (
    CategoryResource,
    DashboardResource,
    InvoiceResource,
    NotificationResource,
    ProjectResource,
    ReimbursementResource,
    TaskResource,
    TaxResource,
    TeamResource,
    UserAdminResource,
    VendorResource,
)
from .session import AuthProvider, RoleGuard
from .toasts import Toaster
from .workflows import InvoiceActions, KanbanBoard, ReimbursementActions, TaskActions


class DashboardClient:
    def __init__(
        self,
        api: ApiClient,
        *,
        queries: QueryClient | None = None,
        toaster: Toaster | None = None,
    ):
        self.api = api
        self.queries = queries or QueryClient()
        self.toaster = toaster or Toaster()
        self.auth = AuthProvider(api)

        self.projects = ProjectResource(api, self.queries)
        self.tasks = TaskResource(api, self.queries)
        self.invoices = InvoiceResource(api, self.queries)
        self.reimbursements = ReimbursementResource(api, self.queries)
        self.vendors = VendorResource(api, self.queries)
        self.taxes = TaxResource(api, self.queries)
        self.categories = CategoryResource(api, self.queries)
        self.teams = TeamResource(api, self.queries)
        self.notifications = NotificationResource(api, self.queries)
        self.dashboard = DashboardResource(api, self.queries)
        self.users = UserAdminResource(api, self.queries, self.toaster)

    @property
    def role_guard(self) -> RoleGuard:
        return RoleGuard(self.auth.state)

    @property
    def task_actions(self) -> TaskActions:
        return TaskActions(self.tasks, self.toaster, self.auth.state)

    @property
    def kanban(self) -> KanbanBoard:
        return KanbanBoard(self.task_actions)

    @property
    def reimbursement_actions(self) -> ReimbursementActions:
        return ReimbursementActions(self.reimbursements, self.toaster, self.auth.state)

    @property
    def invoice_actions(self) -> InvoiceActions:
        return InvoiceActions(self.invoices, self.toaster, self.auth.state)

    def close(self) -> None:
        self.api.close()
