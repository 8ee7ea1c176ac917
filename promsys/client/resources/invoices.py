"""
Name: Invoice Queries and Mutations

Keys: ("invoices", params) for lists, ("invoices", id) for detail. Every
mutation invalidates the "invoices" prefix.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any

from ...domain.invoice_workflow import InvoiceStatus, InvoiceType
from ..api import UploadFile
from .base import Resource, camel_payload

INVOICES = ("invoices",)


def invoices_key(params: dict[str, Any] | None = None) -> tuple:
    return ("invoices", params)


def invoice_key(invoice_id: str) -> tuple:
    return ("invoices", invoice_id)


class InvoiceResource(Resource):
    def list(
        self,
        *,
        type: InvoiceType | None = None,
        status: InvoiceStatus | None = None,
        project_id: str | None = None,
    ) -> list[dict[str, Any]]:
        params = camel_payload(
            {"type": type, "status": status, "project_id": project_id}, drop_none=True
        )
        return self._query(
            invoices_key(params or None), lambda: self.api.get("/invoices", params=params)
        )

    def get(self, invoice_id: str) -> dict[str, Any]:
        return self._query(
            invoice_key(invoice_id), lambda: self.api.get(f"/invoices/{invoice_id}")
        )

    def create(
        self,
        *,
        type: InvoiceType,
        category_id: str,
        subtotal: Decimal,
        due_date: date,
        project_id: str | None = None,
        vendor_id: str | None = None,
        tax_id: str | None = None,
        notes: str | None = None,
    ) -> dict[str, Any]:
        body = camel_payload(
            {
                "type": type,
                "category_id": category_id,
                "subtotal": subtotal,
                "due_date": due_date,
                "project_id": project_id,
                "vendor_id": vendor_id,
                "tax_id": tax_id,
                "notes": notes,
            },
            drop_none=True,
        )
        return self._mutate(lambda: self.api.post("/invoices", body), [INVOICES])

    def update(self, invoice_id: str, **changes: Any) -> dict[str, Any]:
        body = camel_payload(changes)
        return self._mutate(
            lambda: self.api.patch(f"/invoices/{invoice_id}", body), [INVOICES]
        )

    def delete(self, invoice_id: str) -> Any:
        return self._mutate(lambda: self.api.delete(f"/invoices/{invoice_id}"), [INVOICES])

    def update_status(self, invoice_id: str, status: InvoiceStatus) -> dict[str, Any]:
        return self._mutate(
            lambda: self.api.patch(
                f"/invoices/{invoice_id}/status", {"status": status.value}
            ),
            [INVOICES],
        )

    def upload_attachment(self, invoice_id: str, file: UploadFile) -> dict[str, Any]:
        return self._mutate(
            lambda: self.api.upload(f"/invoices/{invoice_id}/attachments", file),
            [INVOICES],
        )
