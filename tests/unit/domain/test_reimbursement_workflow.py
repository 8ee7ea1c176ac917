"""Reimbursement graph, processor gating and rejection reason."""

import pytest

from promsys.crosscutting.exceptions import (
    ForbiddenError,
    TransitionNotAllowedError,
    ValidationFailedError,
)
from promsys.domain.reimbursement_workflow import (
    TERMINAL_STATUSES,
    ReimbursementAction,
    ReimbursementStatus,
    available_actions,
    ensure_action,
    validate_rejection_reason,
)
from promsys.domain.roles import UserRole

pytestmark = pytest.mark.unit


def test_terminal_statuses():
    assert TERMINAL_STATUSES == {ReimbursementStatus.REJECTED, ReimbursementStatus.PAID}


@pytest.mark.parametrize("role", [UserRole.ADMIN, UserRole.FINANCE])
def test_processor_actions(role):
    assert available_actions(ReimbursementStatus.PENDING, role) == (
        ReimbursementAction.APPROVE,
        ReimbursementAction.REJECT,
    )
    assert available_actions(ReimbursementStatus.APPROVED, role) == (
        ReimbursementAction.PAY,
    )
    assert available_actions(ReimbursementStatus.PAID, role) == ()


@pytest.mark.parametrize("role", [UserRole.PROJECTMANAGER, UserRole.EMPLOYEES, None])
def test_non_processors_get_no_actions(role):
    assert available_actions(ReimbursementStatus.PENDING, role) == ()
    with pytest.raises(ForbiddenError):
        ensure_action(ReimbursementStatus.PENDING, ReimbursementAction.APPROVE, role)


def test_pay_requires_approval_first():
    with pytest.raises(TransitionNotAllowedError):
        ensure_action(ReimbursementStatus.PENDING, ReimbursementAction.PAY, UserRole.FINANCE)
    assert (
        ensure_action(ReimbursementStatus.APPROVED, ReimbursementAction.PAY, UserRole.FINANCE)
        == ReimbursementStatus.PAID
    )


@pytest.mark.parametrize("reason", [None, "", "   ", "\n\t"])
def test_blank_reason_is_rejected(reason):
    with pytest.raises(ValidationFailedError) as exc_info:
        validate_rejection_reason(reason)
    assert exc_info.value.field == "reason"


def test_reason_is_trimmed():
    assert validate_rejection_reason("  missing receipt ") == "missing receipt"
