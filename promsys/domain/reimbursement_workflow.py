"""
Name: Reimbursement Status Workflow

Responsibilities:
  - Declare the reimbursement transition graph
  - Gate approve/reject/pay on REIMBURSEMENT_PROCESS
  - Validate the rejection reason before anything is sent or stored

Collaborators:
  - application/reimbursements.py: authoritative checks
  - client/workflows.py: ReimbursementActions

Constraints:
  - REJECTED and PAID are terminal
  - A rejection without a non-blank reason never leaves the caller
"""

from __future__ import annotations

from enum import Enum

from ..crosscutting.exceptions import (
    ForbiddenError,
    TransitionNotAllowedError,
    ValidationFailedError,
)
from .roles import Capability, UserRole, has_capability


class ReimbursementStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    PAID = "PAID"


class AttachmentType(str, Enum):
    RECEIPT = "RECEIPT"
    PAYMENT = "PAYMENT"


class ReimbursementAction(str, Enum):
    APPROVE = "approve"
    REJECT = "reject"
    PAY = "pay"


REIMBURSEMENT_TRANSITIONS: dict[ReimbursementStatus, frozenset[ReimbursementStatus]] = {
    ReimbursementStatus.PENDING: frozenset(
        {ReimbursementStatus.APPROVED, ReimbursementStatus.REJECTED}
    ),
    ReimbursementStatus.APPROVED: frozenset({ReimbursementStatus.PAID}),
    ReimbursementStatus.REJECTED: frozenset(),
    ReimbursementStatus.PAID: frozenset(),
}

ACTION_TARGETS: dict[ReimbursementAction, ReimbursementStatus] = {
    ReimbursementAction.APPROVE: ReimbursementStatus.APPROVED,
    ReimbursementAction.REJECT: ReimbursementStatus.REJECTED,
    ReimbursementAction.PAY: ReimbursementStatus.PAID,
}

TERMINAL_STATUSES = frozenset(
    status for status, targets in REIMBURSEMENT_TRANSITIONS.items() if not targets
)


def is_processor(role: UserRole | None) -> bool:
    return has_capability(role, Capability.REIMBURSEMENT_PROCESS)


def available_actions(
    status: ReimbursementStatus, role: UserRole | None
) -> tuple[ReimbursementAction, ...]:
    if not is_processor(role):
        return ()
    allowed = REIMBURSEMENT_TRANSITIONS[status]
    return tuple(
        action for action, target in ACTION_TARGETS.items() if target in allowed
    )


def validate_rejection_reason(reason: str | None) -> str:
    cleaned = (reason or "").strip()
    if not cleaned:
        raise ValidationFailedError("Please provide a reason", field="reason")
    return cleaned


def ensure_action(
    status: ReimbursementStatus,
    action: ReimbursementAction,
    role: UserRole | None,
) -> ReimbursementStatus:
    """Return the target status, or raise ForbiddenError/TransitionNotAllowedError."""
    if not is_processor(role):
        raise ForbiddenError("Only admin or finance can process reimbursements")
    target = ACTION_TARGETS[action]
    if target not in REIMBURSEMENT_TRANSITIONS[status]:
        raise TransitionNotAllowedError("Reimbursement", status, target)
    return target
