"""
Invoice and reimbursement DTOs.

Totals are response-only: clients send the subtotal and a tax id, the
service computes tax_amount and total.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from pydantic import Field

from .....domain.invoice_workflow import InvoiceStatus, InvoiceType
from .....domain.reimbursement_workflow import ReimbursementStatus
from .common import ApiModel, AttachmentRes


# -----------------------------------------------------------------------------
# Invoices
# -----------------------------------------------------------------------------
class InvoiceReq(ApiModel):
    type: InvoiceType
    category_id: str
    subtotal: Decimal = Field(..., ge=0)
    due_date: date
    project_id: str | None = None
    vendor_id: str | None = None
    tax_id: str | None = None
    notes: str | None = None


class UpdateInvoiceReq(ApiModel):
    type: InvoiceType | None = None
    category_id: str | None = None
    subtotal: Decimal | None = Field(default=None, ge=0)
    due_date: date | None = None
    project_id: str | None = None
    vendor_id: str | None = None
    tax_id: str | None = None
    notes: str | None = None


class InvoiceStatusReq(ApiModel):
    status: InvoiceStatus


class InvoiceRes(ApiModel):
    id: str
    invoice_number: str
    type: InvoiceType
    status: InvoiceStatus
    project_id: str | None = None
    vendor_id: str | None = None
    category_id: str
    tax_id: str | None = None
    subtotal: Decimal
    tax_amount: Decimal
    total: Decimal
    due_date: date
    notes: str | None = None
    created_by_id: str
    attachments: list[AttachmentRes] = []
    created_at: datetime
    updated_at: datetime


# -----------------------------------------------------------------------------
# Reimbursements
# -----------------------------------------------------------------------------
class ReimbursementReq(ApiModel):
    title: str = Field(..., min_length=1, max_length=200)
    amount: Decimal
    category_id: str
    description: str | None = None
    project_id: str | None = None


class RejectReq(ApiModel):
    # R: blank reasons reach the service so the 422 carries field="reason"
    reason: str | None = None


class ReimbursementRes(ApiModel):
    id: str
    title: str
    description: str | None = None
    amount: Decimal
    status: ReimbursementStatus
    rejection_reason: str | None = None
    project_id: str | None = None
    category_id: str
    submitted_by_id: str
    approved_by_id: str | None = None
    attachments: list[AttachmentRes] = []
    missing_payment_proof: bool = False
    created_at: datetime
    updated_at: datetime
