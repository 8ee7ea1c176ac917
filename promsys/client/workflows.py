"""
Name: Workflow Action Surfaces

Responsibilities:
  - Decide which task/reimbursement/invoice actions to present for a role
  - Block illegal attempts locally (toast, zero requests)
  - Run the legal ones through the resource mutations and toast the outcome
  - Run the multi-step flows (submit with attachment, mark paid with proof)

Collaborators:
  - domain.task_workflow / reimbursement_workflow / invoice_workflow
  - client.resources: TaskResource, ReimbursementResource, InvoiceResource
  - client.toasts.Toaster
  - client.session.AuthState

Constraints:
  - The API stays the authority: a 403/409 answer only produces an error toast
    and leaves the cache untouched
  - Multi-step flows never roll back; a failed second step is reported in the
    returned outcome

Notes:
  - Actions never raise ClientError; they toast and return None/False
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from ..crosscutting.exceptions import ValidationFailedError
from ..crosscutting.logger import logger
from ..domain import invoice_workflow, reimbursement_workflow, task_workflow
from ..domain.invoice_workflow import InvoiceStatus
from ..domain.reimbursement_workflow import (
    AttachmentType,
    ReimbursementAction,
    ReimbursementStatus,
)
from ..domain.task_workflow import TaskStatus
from .api import ClientError, UploadFile
from .resources.invoices import InvoiceResource
from .resources.reimbursements import ReimbursementResource
from .resources.tasks import TaskResource
from .session import AuthState
from .toasts import Toaster


def _label(status: Any) -> str:
    return str(getattr(status, "value", status)).replace("_", " ").title()


# ---------------------------------------------------------------------------
# Tasks
# ---------------------------------------------------------------------------


class TaskActions:
    def __init__(self, tasks: TaskResource, toaster: Toaster, auth: AuthState):
        self.tasks = tasks
        self.toaster = toaster
        self.auth = auth

    def actions_for(self, task: dict[str, Any]) -> tuple[task_workflow.TaskAction, ...]:
        return task_workflow.available_actions(TaskStatus(task["status"]), self.auth.role)

    def can_move(self, task: dict[str, Any], target: TaskStatus) -> bool:
        """Local gate; toasts and returns False for moves the workflow forbids."""
        current = TaskStatus(task["status"])
        if target not in task_workflow.allowed_targets(current):
            self.toaster.error(f"Cannot move task from {_label(current)} to {_label(target)}")
            return False
        if not task_workflow.can_transition(current, target, self.auth.role):
            self.toaster.error("Only reviewers can approve or request revision")
            return False
        return True

    def change_status(
        self, task: dict[str, Any], target: TaskStatus
    ) -> Optional[dict[str, Any]]:
        if not self.can_move(task, target):
            return None
        try:
            updated = self.tasks.update_status(task["id"], target)
        except ClientError as exc:
            self.toaster.error_from(exc, "Failed to update task status")
            return None
        self.toaster.success(f"Task moved to {_label(target)}")
        return updated

    def submit(
        self,
        task: dict[str, Any],
        *,
        attachment: UploadFile | None = None,
    ) -> Optional[dict[str, Any]]:
        """Optional upload first, then the status change to SUBMITTED."""
        if not self.can_move(task, TaskStatus.SUBMITTED):
            return None
        if attachment is not None:
            try:
                self.tasks.upload_attachment(task["id"], attachment)
            except ClientError as exc:
                self.toaster.error_from(exc, "Failed to upload attachment")
                return None
        return self.change_status(task, TaskStatus.SUBMITTED)

    def comment(self, task_id: str, content: str) -> Optional[dict[str, Any]]:
        if not (content or "").strip():
            self.toaster.error("Comment cannot be empty")
            return None
        try:
            result = self.tasks.add_comment(task_id, content.strip())
        except ClientError as exc:
            self.toaster.error_from(exc, "Failed to add comment")
            return None
        return result


class KanbanBoard:
    """Drag and drop between status columns."""

    COLUMNS: tuple[TaskStatus, ...] = (
        TaskStatus.TODO,
        TaskStatus.IN_PROGRESS,
        TaskStatus.SUBMITTED,
        TaskStatus.REVISION,
        TaskStatus.DONE,
    )

    def __init__(self, actions: TaskActions):
        self.actions = actions

    @staticmethod
    def group(tasks: list[dict[str, Any]]) -> dict[TaskStatus, list[dict[str, Any]]]:
        columns: dict[TaskStatus, list[dict[str, Any]]] = {s: [] for s in KanbanBoard.COLUMNS}
        for task in tasks:
            columns[TaskStatus(task["status"])].append(task)
        return columns

    def drop(self, task: dict[str, Any], column: TaskStatus) -> bool:
        """
        Attempt the move; True when a request was sent and succeeded.

        Same column is a no-op; moves the workflow forbids are blocked locally.
        """
        if column == TaskStatus(task["status"]):
            return False
        return self.actions.change_status(task, column) is not None


# ---------------------------------------------------------------------------
# Reimbursements
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PaymentOutcome:
    """Result of mark-paid-with-proof; paid without proof is a reportable gap."""

    paid: bool
    proof_uploaded: bool
    error: Optional[str] = None

    @property
    def missing_proof(self) -> bool:
        return self.paid and not self.proof_uploaded


class ReimbursementActions:
    def __init__(
        self,
        reimbursements: ReimbursementResource,
        toaster: Toaster,
        auth: AuthState,
    ):
        self.reimbursements = reimbursements
        self.toaster = toaster
        self.auth = auth

    def actions_for(self, reimbursement: dict[str, Any]) -> tuple[ReimbursementAction, ...]:
        return reimbursement_workflow.available_actions(
            ReimbursementStatus(reimbursement["status"]), self.auth.role
        )

    @staticmethod
    def needs_payment_proof(reimbursement: dict[str, Any]) -> bool:
        return reimbursement.get("status") == ReimbursementStatus.PAID.value and bool(
            reimbursement.get("missingPaymentProof")
        )

    def approve(self, reimbursement_id: str) -> Optional[dict[str, Any]]:
        try:
            result = self.reimbursements.approve(reimbursement_id)
        except ClientError as exc:
            self.toaster.error_from(exc, "Failed to approve reimbursement")
            return None
        self.toaster.success("Reimbursement approved")
        return result

    def reject(self, reimbursement_id: str, reason: str | None) -> Optional[dict[str, Any]]:
        try:
            cleaned = reimbursement_workflow.validate_rejection_reason(reason)
        except ValidationFailedError as exc:
            self.toaster.error(exc.message)
            return None
        try:
            result = self.reimbursements.reject(reimbursement_id, cleaned)
        except ClientError as exc:
            self.toaster.error_from(exc, "Failed to reject reimbursement")
            return None
        self.toaster.success("Reimbursement rejected")
        return result

    def mark_paid_with_proof(
        self, reimbursement_id: str, proof: UploadFile | None
    ) -> PaymentOutcome:
        if proof is None:
            self.toaster.error("Please upload payment proof")
            return PaymentOutcome(paid=False, proof_uploaded=False, error="missing proof")

        try:
            self.reimbursements.mark_paid(reimbursement_id)
        except ClientError as exc:
            self.toaster.error_from(exc, "Failed to mark reimbursement as paid")
            return PaymentOutcome(paid=False, proof_uploaded=False, error=exc.message)

        try:
            self.reimbursements.upload_attachment(
                reimbursement_id, proof, type=AttachmentType.PAYMENT
            )
        except ClientError as exc:
            logger.warning(
                "reimbursement paid without proof",
                extra={"reimbursement_id": reimbursement_id, "error": exc.message},
            )
            self.toaster.error_from(exc, "Marked as paid but the proof upload failed")
            return PaymentOutcome(paid=True, proof_uploaded=False, error=exc.message)

        self.toaster.success("Reimbursement marked as paid")
        return PaymentOutcome(paid=True, proof_uploaded=True)

    def attach_payment_proof(
        self, reimbursement_id: str, proof: UploadFile | None
    ) -> Optional[dict[str, Any]]:
        """Manual follow-up for PAID reimbursements that have no proof yet."""
        if proof is None:
            self.toaster.error("Please upload payment proof")
            return None
        try:
            result = self.reimbursements.upload_attachment(
                reimbursement_id, proof, type=AttachmentType.PAYMENT
            )
        except ClientError as exc:
            self.toaster.error_from(exc, "Failed to upload payment proof")
            return None
        self.toaster.success("Payment proof uploaded")
        return result


# ---------------------------------------------------------------------------
# Invoices
# ---------------------------------------------------------------------------


class InvoiceActions:
    def __init__(self, invoices: InvoiceResource, toaster: Toaster, auth: AuthState):
        self.invoices = invoices
        self.toaster = toaster
        self.auth = auth

    def actions_for(self, invoice: dict[str, Any]) -> tuple[invoice_workflow.InvoiceAction, ...]:
        return invoice_workflow.available_actions(
            InvoiceStatus(invoice["status"]), self.auth.role
        )

    def change_status(
        self, invoice: dict[str, Any], target: InvoiceStatus
    ) -> Optional[dict[str, Any]]:
        current = InvoiceStatus(invoice["status"])
        if target not in invoice_workflow.user_targets(current):
            self.toaster.error(
                f"Cannot change invoice from {_label(current)} to {_label(target)}"
            )
            return None
        try:
            result = self.invoices.update_status(invoice["id"], target)
        except ClientError as exc:
            self.toaster.error_from(exc, "Failed to update invoice status")
            return None
        self.toaster.success(f"Invoice marked as {_label(target)}")
        return result
