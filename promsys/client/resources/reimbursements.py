"""
Name: Reimbursement Queries and Mutations

Keys: ("reimbursements", params) for lists, ("reimbursements", id) for
detail. Every mutation invalidates the "reimbursements" prefix.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from ...domain.reimbursement_workflow import AttachmentType, ReimbursementStatus
from ..api import UploadFile
from .base import Resource, camel_payload

REIMBURSEMENTS = ("reimbursements",)


def reimbursements_key(params: dict[str, Any] | None = None) -> tuple:
    return ("reimbursements", params)


def reimbursement_key(reimbursement_id: str) -> tuple:
    return ("reimbursements", reimbursement_id)


class ReimbursementResource(Resource):
    def list(
        self,
        *,
        status: ReimbursementStatus | None = None,
        project_id: str | None = None,
    ) -> list[dict[str, Any]]:
        params = camel_payload({"status": status, "project_id": project_id}, drop_none=True)
        return self._query(
            reimbursements_key(params or None),
            lambda: self.api.get("/reimbursements", params=params),
        )

    def get(self, reimbursement_id: str) -> dict[str, Any]:
        return self._query(
            reimbursement_key(reimbursement_id),
            lambda: self.api.get(f"/reimbursements/{reimbursement_id}"),
        )

    def create(
        self,
        *,
        title: str,
        amount: Decimal,
        category_id: str,
        description: str | None = None,
        project_id: str | None = None,
    ) -> dict[str, Any]:
        body = camel_payload(
            {
                "title": title,
                "amount": amount,
                "category_id": category_id,
                "description": description,
                "project_id": project_id,
            },
            drop_none=True,
        )
        return self._mutate(lambda: self.api.post("/reimbursements", body), [REIMBURSEMENTS])

    def approve(self, reimbursement_id: str) -> dict[str, Any]:
        return self._mutate(
            lambda: self.api.patch(f"/reimbursements/{reimbursement_id}/approve"),
            [REIMBURSEMENTS],
        )

    def reject(self, reimbursement_id: str, reason: str) -> dict[str, Any]:
        return self._mutate(
            lambda: self.api.patch(
                f"/reimbursements/{reimbursement_id}/reject", {"reason": reason}
            ),
            [REIMBURSEMENTS],
        )

    def mark_paid(self, reimbursement_id: str) -> dict[str, Any]:
        return self._mutate(
            lambda: self.api.patch(f"/reimbursements/{reimbursement_id}/pay"),
            [REIMBURSEMENTS],
        )

    def upload_attachment(
        self,
        reimbursement_id: str,
        file: UploadFile,
        type: AttachmentType = AttachmentType.RECEIPT,
    ) -> dict[str, Any]:
        return self._mutate(
            lambda: self.api.upload(
                f"/reimbursements/{reimbursement_id}/attachments",
                file,
                fields={"type": type.value},
            ),
            [REIMBURSEMENTS],
        )
