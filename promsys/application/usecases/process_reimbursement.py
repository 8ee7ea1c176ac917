"""
Name: Process Reimbursement Use Case

Responsibilities:
  - Approve, reject (with a reason) or mark paid one reimbursement
  - Record the approver and notify the submitter

Collaborators:
  - domain.reimbursement_workflow
  - domain.repositories.ReimbursementRepository
  - application.notifications.NotificationService

Constraints:
  - Mark-paid does not require proof here: the payment proof upload is a
    separate call and a PAID reimbursement may exist without it
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ...crosscutting.exceptions import NotFoundError
from ...crosscutting.logger import logger
from ...domain.entities import NotificationType, Reimbursement, User
from ...domain.reimbursement_workflow import (
    ReimbursementAction,
    ReimbursementStatus,
    ensure_action,
    validate_rejection_reason,
)
from ...domain.repositories import ReimbursementRepository
from ..notifications import NotificationService


@dataclass
class ProcessReimbursementInput:
    reimbursement_id: str
    action: ReimbursementAction
    actor: User
    reason: Optional[str] = None


class ProcessReimbursementUseCase:
    def __init__(
        self, reimbursements: ReimbursementRepository, notifications: NotificationService
    ):
        self.reimbursements = reimbursements
        self.notifications = notifications

    def execute(self, input_data: ProcessReimbursementInput) -> Reimbursement:
        reimbursement = self.reimbursements.get(input_data.reimbursement_id)
        if reimbursement is None:
            raise NotFoundError("Reimbursement", input_data.reimbursement_id)

        target = ensure_action(
            reimbursement.status, input_data.action, input_data.actor.role
        )
        if input_data.action == ReimbursementAction.REJECT:
            reimbursement.rejection_reason = validate_rejection_reason(input_data.reason)
        if target == ReimbursementStatus.APPROVED:
            reimbursement.approved_by_id = input_data.actor.id

        previous = reimbursement.status
        reimbursement.set_status(target)
        self.reimbursements.update(reimbursement)

        logger.info(
            "reimbursement processed",
            extra={
                "reimbursement_id": reimbursement.id,
                "from_status": previous.value,
                "to_status": target.value,
            },
        )
        message = f'"{reimbursement.title}" was {target.value.lower()}'
        if reimbursement.rejection_reason and target == ReimbursementStatus.REJECTED:
            message = f"{message}: {reimbursement.rejection_reason}"
        self.notifications.notify(
            [reimbursement.submitted_by_id],
            type=NotificationType.REIMBURSEMENT_STATUS_CHANGED,
            title="Reimbursement updated",
            message=message,
            link_url=f"/dashboard/reimbursement/{reimbursement.id}",
            actor_id=input_data.actor.id,
        )
        return reimbursement
