"""
Name: Invoice Status Workflow and Totals

Responsibilities:
  - Declare the invoice transition graph and its user-facing actions
  - Apply the system-only SENT -> OVERDUE transition once the due date passed
  - Compute tax/total amounts and daily invoice numbers

Collaborators:
  - application/invoices.py: authoritative checks, numbering, totals
  - client/workflows.py: InvoiceActions

Constraints:
  - PAID and CANCELLED are terminal
  - OVERDUE is never offered as a user action
  - InvoicePaymentStatus (PAID/UNPAID/DEBT) is a separate vocabulary used by
    finance overview cards; it is never derived from or mapped onto InvoiceStatus
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum

from ..crosscutting.exceptions import ForbiddenError, TransitionNotAllowedError
from .roles import Capability, UserRole, has_capability


class InvoiceStatus(str, Enum):
    DRAFT = "DRAFT"
    SENT = "SENT"
    PAID = "PAID"
    OVERDUE = "OVERDUE"
    CANCELLED = "CANCELLED"


class InvoicePaymentStatus(str, Enum):
    PAID = "PAID"
    UNPAID = "UNPAID"
    DEBT = "DEBT"

    @classmethod
    def parse(cls, value: str | None) -> "InvoicePaymentStatus | None":
        """None for anything outside this vocabulary (including InvoiceStatus values)."""
        try:
            return cls(value) if value else None
        except ValueError:
            return None


class InvoiceType(str, Enum):
    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


INVOICE_TRANSITIONS: dict[InvoiceStatus, frozenset[InvoiceStatus]] = {
    InvoiceStatus.DRAFT: frozenset({InvoiceStatus.SENT, InvoiceStatus.CANCELLED}),
    InvoiceStatus.SENT: frozenset(
        {InvoiceStatus.PAID, InvoiceStatus.CANCELLED, InvoiceStatus.OVERDUE}
    ),
    InvoiceStatus.OVERDUE: frozenset({InvoiceStatus.PAID, InvoiceStatus.CANCELLED}),
    InvoiceStatus.PAID: frozenset(),
    InvoiceStatus.CANCELLED: frozenset(),
}

SYSTEM_ONLY_TARGETS = frozenset({InvoiceStatus.OVERDUE})
UNPAID_STATUSES = frozenset(
    {InvoiceStatus.DRAFT, InvoiceStatus.SENT, InvoiceStatus.OVERDUE}
)
OUTSTANDING_STATUSES = frozenset({InvoiceStatus.SENT, InvoiceStatus.OVERDUE})


@dataclass(frozen=True)
class InvoiceAction:
    label: str
    target: InvoiceStatus


_ACTION_LABELS: dict[InvoiceStatus, str] = {
    InvoiceStatus.SENT: "Mark as Sent",
    InvoiceStatus.PAID: "Mark as Paid",
    InvoiceStatus.CANCELLED: "Cancel",
}


def user_targets(status: InvoiceStatus) -> frozenset[InvoiceStatus]:
    return INVOICE_TRANSITIONS[status] - SYSTEM_ONLY_TARGETS


def can_manage(role: UserRole | None) -> bool:
    return has_capability(role, Capability.INVOICE_MANAGE)


def available_actions(
    status: InvoiceStatus, role: UserRole | None
) -> tuple[InvoiceAction, ...]:
    if not can_manage(role):
        return ()
    targets = user_targets(status)
    return tuple(
        InvoiceAction(label, target)
        for target, label in _ACTION_LABELS.items()
        if target in targets
    )


def ensure_transition(
    current: InvoiceStatus, target: InvoiceStatus, role: UserRole | None
) -> None:
    if not can_manage(role):
        raise ForbiddenError("Only admin or finance can manage invoices")
    if target not in user_targets(current):
        raise TransitionNotAllowedError("Invoice", current, target)


def is_overdue(status: InvoiceStatus, due_date: date | datetime, today: date) -> bool:
    if isinstance(due_date, datetime):
        due_date = due_date.date()
    return status == InvoiceStatus.SENT and due_date < today


_CENT = Decimal("0.01")


def compute_totals(
    subtotal: Decimal, tax_percentage: Decimal | None
) -> tuple[Decimal, Decimal]:
    """Return (tax_amount, total), rounded half-up to cents."""
    subtotal = Decimal(subtotal).quantize(_CENT, rounding=ROUND_HALF_UP)
    if tax_percentage is None:
        tax_amount = Decimal("0.00")
    else:
        tax_amount = (subtotal * Decimal(tax_percentage) / Decimal(100)).quantize(
            _CENT, rounding=ROUND_HALF_UP
        )
    return tax_amount, subtotal + tax_amount


def format_invoice_number(day: date, sequence: int) -> str:
    return f"INV-{day:%Y%m%d}-{sequence:04d}"
