"""
Name: Invoice Service

Responsibilities:
  - Invoice CRUD with computed tax/total and daily numbering
  - Filtered listing (type / status / project)
  - Attachments and status changes (delegated to ChangeInvoiceStatusUseCase)

Collaborators:
  - domain.invoice_workflow: compute_totals
  - domain.repositories: Invoice, Category, Tax, Vendor, Project stores, FileStorage
  - application.notifications.NotificationService: INVOICE_CREATED

Constraints:
  - Only DRAFT invoices can be edited or deleted
  - Totals are always recomputed server-side; clients never send them
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal
from typing import Callable, List, Optional

from ..crosscutting.exceptions import ConflictError, NotFoundError, ValidationFailedError
from ..domain.entities import Invoice, NotificationType, User, new_id, utcnow
from ..domain.invoice_workflow import (
    InvoiceStatus,
    InvoiceType,
    compute_totals,
)
from ..domain.repositories import (
    CategoryRepository,
    FileStorage,
    InvoiceRepository,
    ProjectRepository,
    TaxRepository,
    UserRepository,
    VendorRepository,
)
from ..domain.roles import UserRole
from .files import UploadedFile, store_attachment
from .notifications import NotificationService
from .usecases.change_invoice_status import (
    ChangeInvoiceStatusInput,
    ChangeInvoiceStatusUseCase,
    mark_overdue_invoices,
)


@dataclass
class InvoiceInput:
    type: Optional[InvoiceType] = None
    category_id: Optional[str] = None
    subtotal: Optional[Decimal] = None
    due_date: Optional[date] = None
    project_id: Optional[str] = None
    vendor_id: Optional[str] = None
    tax_id: Optional[str] = None
    notes: Optional[str] = None


@dataclass
class InvoiceFilters:
    type: Optional[InvoiceType] = None
    status: Optional[InvoiceStatus] = None
    project_id: Optional[str] = None

    def matches(self, invoice: Invoice) -> bool:
        if self.type is not None and invoice.type != self.type:
            return False
        if self.status is not None and invoice.status != self.status:
            return False
        if self.project_id is not None and invoice.project_id != self.project_id:
            return False
        return True


class InvoiceService:
    def __init__(
        self,
        invoices: InvoiceRepository,
        categories: CategoryRepository,
        taxes: TaxRepository,
        vendors: VendorRepository,
        projects: ProjectRepository,
        users: UserRepository,
        storage: FileStorage,
        notifications: NotificationService,
        today: Callable[[], date] = date.today,
    ):
        self.invoices = invoices
        self.categories = categories
        self.taxes = taxes
        self.vendors = vendors
        self.projects = projects
        self.users = users
        self.storage = storage
        self.notifications = notifications
        self.today = today
        self.change_status_use_case = ChangeInvoiceStatusUseCase(invoices, notifications)

    def refresh_overdue(self) -> List[Invoice]:
        return mark_overdue_invoices(self.invoices, self.today())

    def list(self, filters: InvoiceFilters | None = None) -> List[Invoice]:
        self.refresh_overdue()
        filters = filters or InvoiceFilters()
        return self.invoices.list(filters.matches)

    def require(self, invoice_id: str) -> Invoice:
        invoice = self.invoices.get(invoice_id)
        if invoice is None:
            raise NotFoundError("Invoice", invoice_id)
        return invoice

    def get(self, invoice_id: str) -> Invoice:
        self.refresh_overdue()
        return self.require(invoice_id)

    # -- validation helpers -------------------------------------------------

    def _check_references(self, invoice: Invoice) -> None:
        category = self.categories.get(invoice.category_id)
        if category is None:
            raise NotFoundError("Category", invoice.category_id)
        if category.type != invoice.type:
            raise ValidationFailedError(
                f"Category type {category.type.value} does not match invoice type "
                f"{invoice.type.value}",
                field="categoryId",
            )
        if invoice.vendor_id and self.vendors.get(invoice.vendor_id) is None:
            raise NotFoundError("Vendor", invoice.vendor_id)
        if invoice.project_id and self.projects.get(invoice.project_id) is None:
            raise NotFoundError("Project", invoice.project_id)

    def _tax_percentage(self, tax_id: str | None) -> Decimal | None:
        if not tax_id:
            return None
        tax = self.taxes.get(tax_id)
        if tax is None:
            raise NotFoundError("Tax", tax_id)
        if not tax.is_active:
            raise ValidationFailedError("Tax is inactive", field="taxId")
        return tax.percentage

    @staticmethod
    def _check_subtotal(subtotal: Decimal | None) -> Decimal:
        if subtotal is None:
            raise ValidationFailedError("Subtotal is required", field="subtotal")
        if subtotal < 0:
            raise ValidationFailedError("Subtotal must not be negative", field="subtotal")
        return subtotal

    # -- commands -----------------------------------------------------------

    def create(self, actor: User, data: InvoiceInput) -> Invoice:
        if data.type is None:
            raise ValidationFailedError("Invoice type is required", field="type")
        if not data.category_id:
            raise ValidationFailedError("Category is required", field="categoryId")
        if data.due_date is None:
            raise ValidationFailedError("Due date is required", field="dueDate")
        subtotal = self._check_subtotal(data.subtotal)
        tax_amount, total = compute_totals(subtotal, self._tax_percentage(data.tax_id))

        today = self.today()
        invoice = Invoice(
            id=new_id(),
            invoice_number="",
            type=data.type,
            category_id=data.category_id,
            subtotal=subtotal,
            tax_amount=tax_amount,
            total=total,
            due_date=data.due_date,
            created_by_id=actor.id,
            project_id=data.project_id,
            vendor_id=data.vendor_id,
            tax_id=data.tax_id,
            notes=data.notes,
        )
        self._check_references(invoice)
        self.invoices.add_numbered(invoice, today)

        finance_team = [
            u.id
            for u in self.users.list(lambda u: u.role in (UserRole.ADMIN, UserRole.FINANCE))
        ]
        self.notifications.notify(
            finance_team,
            type=NotificationType.INVOICE_CREATED,
            title="Invoice created",
            message=f"{invoice.invoice_number} ({invoice.type.value}) was created",
            link_url=f"/dashboard/invoice/{invoice.id}",
            actor_id=actor.id,
        )
        return invoice

    def update(self, invoice_id: str, data: InvoiceInput, provided: set[str]) -> Invoice:
        invoice = self.require(invoice_id)
        if invoice.status != InvoiceStatus.DRAFT:
            raise ConflictError("Only draft invoices can be edited")

        # R: changes land on a copy; the stored invoice is replaced only once valid
        draft = replace(invoice)
        for name in ("type", "category_id", "due_date"):
            if name in provided and getattr(data, name) is not None:
                setattr(draft, name, getattr(data, name))
        for name in ("project_id", "vendor_id", "tax_id", "notes"):
            if name in provided:
                setattr(draft, name, getattr(data, name) or None)
        if "subtotal" in provided:
            draft.subtotal = self._check_subtotal(data.subtotal)

        draft.tax_amount, draft.total = compute_totals(
            draft.subtotal, self._tax_percentage(draft.tax_id)
        )
        self._check_references(draft)
        draft.updated_at = utcnow()
        return self.invoices.update(draft)

    def delete(self, invoice_id: str) -> None:
        invoice = self.require(invoice_id)
        if invoice.status != InvoiceStatus.DRAFT:
            raise ConflictError("Only draft invoices can be deleted")
        self.invoices.delete(invoice_id)

    def change_status(self, actor: User, invoice_id: str, status: InvoiceStatus) -> Invoice:
        self.refresh_overdue()
        return self.change_status_use_case.execute(
            ChangeInvoiceStatusInput(invoice_id=invoice_id, status=status, actor=actor)
        )

    def add_attachment(self, actor: User, invoice_id: str, upload: UploadedFile) -> Invoice:
        invoice = self.require(invoice_id)
        invoice.attachments.append(
            store_attachment(self.storage, upload, uploaded_by_id=actor.id)
        )
        invoice.updated_at = utcnow()
        return self.invoices.update(invoice)
