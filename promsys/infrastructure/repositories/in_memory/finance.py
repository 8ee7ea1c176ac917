"""In-memory stores for invoices and reimbursements."""

from __future__ import annotations

from datetime import date

from ....domain.entities import Invoice, Reimbursement
from ....domain.invoice_workflow import format_invoice_number
from .base import InMemoryRepository


class InMemoryInvoiceRepository(InMemoryRepository[Invoice]):
    def _next_sequence(self, day: date) -> int:
        """Caller holds the lock."""
        prefix = f"INV-{day:%Y%m%d}-"
        # R: max+1 so deleting an invoice never re-issues a number still in use
        return 1 + max(
            (
                int(inv.invoice_number[len(prefix):])
                for inv in self._items.values()
                if inv.invoice_number.startswith(prefix)
                and inv.invoice_number[len(prefix):].isdigit()
            ),
            default=0,
        )

    def add_numbered(self, invoice: Invoice, day: date) -> Invoice:
        """Assign the next INV-YYYYMMDD-NNNN number and store, atomically."""
        with self._lock:
            invoice.invoice_number = format_invoice_number(day, self._next_sequence(day))
            self._items[invoice.id] = invoice
        return invoice


class InMemoryReimbursementRepository(InMemoryRepository[Reimbursement]):
    pass
