"""
Name: Change Invoice Status Use Case

Responsibilities:
  - Apply a user-requested invoice transition (Mark as Sent / Paid / Cancel)
  - Apply the system-only SENT -> OVERDUE sweep for invoices past due

Collaborators:
  - domain.invoice_workflow
  - domain.repositories.InvoiceRepository
  - application.notifications.NotificationService
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import List

from ...crosscutting.exceptions import NotFoundError
from ...crosscutting.logger import logger
from ...domain.entities import Invoice, NotificationType, User
from ...domain.invoice_workflow import InvoiceStatus, ensure_transition, is_overdue
from ...domain.repositories import InvoiceRepository
from ..notifications import NotificationService


@dataclass
class ChangeInvoiceStatusInput:
    invoice_id: str
    status: InvoiceStatus
    actor: User


class ChangeInvoiceStatusUseCase:
    def __init__(self, invoices: InvoiceRepository, notifications: NotificationService):
        self.invoices = invoices
        self.notifications = notifications

    def execute(self, input_data: ChangeInvoiceStatusInput) -> Invoice:
        invoice = self.invoices.get(input_data.invoice_id)
        if invoice is None:
            raise NotFoundError("Invoice", input_data.invoice_id)

        previous = invoice.status
        ensure_transition(previous, input_data.status, input_data.actor.role)
        invoice.set_status(input_data.status)
        self.invoices.update(invoice)

        logger.info(
            "invoice status changed",
            extra={
                "invoice_id": invoice.id,
                "from_status": previous.value,
                "to_status": invoice.status.value,
            },
        )
        self.notifications.notify(
            [invoice.created_by_id],
            type=NotificationType.INVOICE_STATUS_CHANGED,
            title="Invoice status updated",
            message=f"{invoice.invoice_number} is now {invoice.status.value}",
            link_url=f"/dashboard/invoice/{invoice.id}",
            actor_id=input_data.actor.id,
        )
        return invoice


def mark_overdue_invoices(invoices: InvoiceRepository, today: date) -> List[Invoice]:
    """System transition; never offered to users."""
    changed: List[Invoice] = []
    for invoice in invoices.list(lambda inv: is_overdue(inv.status, inv.due_date, today)):
        invoice.set_status(InvoiceStatus.OVERDUE)
        invoices.update(invoice)
        changed.append(invoice)
    if changed:
        logger.info("invoices marked overdue", extra={"count": len(changed)})
    return changed
