"""
Workflow use cases.

    from promsys.application.usecases import ChangeTaskStatusUseCase
"""

from .change_invoice_status import (
    ChangeInvoiceStatusInput,
    ChangeInvoiceStatusUseCase,
    mark_overdue_invoices,
)
from .change_task_status import ChangeTaskStatusInput, ChangeTaskStatusUseCase
from .process_reimbursement import (
    ProcessReimbursementInput,
    ProcessReimbursementUseCase,
)

__all__ = [
    "ChangeInvoiceStatusInput",
    "ChangeInvoiceStatusUseCase",
    "ChangeTaskStatusInput",
    "ChangeTaskStatusUseCase",
    "ProcessReimbursementInput",
    "ProcessReimbursementUseCase",
    "mark_overdue_invoices",
]
