"""ReimbursementService: submit, process and payment proof."""

from decimal import Decimal

import pytest

from promsys.application.files import UploadedFile
from promsys.application.reimbursements import ReimbursementInput
from promsys.container import get_notification_service, get_reimbursement_service
from promsys.crosscutting.exceptions import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    TransitionNotAllowedError,
    ValidationFailedError,
)
from promsys.domain.entities import NotificationType
from promsys.domain.reimbursement_workflow import (
    AttachmentType,
    ReimbursementAction,
    ReimbursementStatus,
)

pytestmark = pytest.mark.unit

PROOF = UploadedFile("transfer.png", "image/png", b"\x89PNG")


@pytest.fixture
def claim(employee, expense_category, admin, finance):
    return get_reimbursement_service().create(
        employee,
        ReimbursementInput(
            title="Taxi", amount=Decimal("125000"), category_id=expense_category.id
        ),
    )


def test_submission_notifies_processors(claim, admin, finance, manager):
    notifications = get_notification_service()
    for user in (admin, finance):
        assert [n.type for n in notifications.list_for_user(user.id)] == [
            NotificationType.REIMBURSEMENT_SUBMITTED
        ]
    assert notifications.list_for_user(manager.id) == []


@pytest.mark.parametrize("amount", [None, Decimal("0"), Decimal("-1")])
def test_amount_must_be_positive(employee, expense_category, amount):
    with pytest.raises(ValidationFailedError):
        get_reimbursement_service().create(
            employee,
            ReimbursementInput(title="x", amount=amount, category_id=expense_category.id),
        )


def test_submitters_only_see_their_own(claim, employee, manager, finance):
    service = get_reimbursement_service()
    assert [r.id for r in service.list_visible(employee)] == [claim.id]
    assert service.list_visible(manager) == []
    assert [r.id for r in service.list_visible(finance)] == [claim.id]
    with pytest.raises(NotFoundError):
        service.get_visible(manager, claim.id)


class TestProcess:
    def test_approve_then_pay(self, claim, finance):
        service = get_reimbursement_service()
        approved = service.process(finance, claim.id, ReimbursementAction.APPROVE)
        assert approved.approved_by_id == finance.id
        paid = service.process(finance, claim.id, ReimbursementAction.PAY)
        assert paid.status == ReimbursementStatus.PAID
        assert paid.missing_payment_proof

    def test_blank_reason_leaves_status_untouched(self, claim, finance):
        service = get_reimbursement_service()
        with pytest.raises(ValidationFailedError) as exc_info:
            service.process(finance, claim.id, ReimbursementAction.REJECT, "  ")
        assert exc_info.value.field == "reason"
        assert service.get_visible(finance, claim.id).status == ReimbursementStatus.PENDING

    def test_reject_reason_reaches_submitter(self, claim, finance, employee):
        get_reimbursement_service().process(
            finance, claim.id, ReimbursementAction.REJECT, " no receipt "
        )
        inbox = get_notification_service().list_for_user(employee.id)
        assert inbox[0].type == NotificationType.REIMBURSEMENT_STATUS_CHANGED
        assert inbox[0].message.endswith(": no receipt")

    def test_pay_before_approval(self, claim, finance):
        with pytest.raises(TransitionNotAllowedError):
            get_reimbursement_service().process(finance, claim.id, ReimbursementAction.PAY)

    def test_manager_cannot_process(self, claim, manager):
        with pytest.raises(ForbiddenError):
            get_reimbursement_service().process(manager, claim.id, ReimbursementAction.APPROVE)

    def test_terminal_status_is_final(self, claim, finance):
        service = get_reimbursement_service()
        service.process(finance, claim.id, ReimbursementAction.REJECT, "duplicate")
        with pytest.raises(TransitionNotAllowedError):
            service.process(finance, claim.id, ReimbursementAction.APPROVE)


class TestPaymentProof:
    def test_proof_requires_paid_status(self, claim, finance):
        with pytest.raises(ConflictError):
            get_reimbursement_service().add_attachment(
                finance, claim.id, PROOF, AttachmentType.PAYMENT
            )

    def test_submitter_cannot_attach_proof(self, claim, finance, employee):
        service = get_reimbursement_service()
        service.process(finance, claim.id, ReimbursementAction.APPROVE)
        service.process(finance, claim.id, ReimbursementAction.PAY)
        with pytest.raises(ForbiddenError):
            service.add_attachment(employee, claim.id, PROOF, AttachmentType.PAYMENT)

    def test_proof_clears_the_gap(self, claim, finance):
        service = get_reimbursement_service()
        service.process(finance, claim.id, ReimbursementAction.APPROVE)
        service.process(finance, claim.id, ReimbursementAction.PAY)
        updated = service.add_attachment(finance, claim.id, PROOF, AttachmentType.PAYMENT)
        assert not updated.missing_payment_proof

    def test_receipt_is_allowed_for_submitter(self, claim, employee):
        updated = get_reimbursement_service().add_attachment(employee, claim.id, PROOF)
        assert [a.type for a in updated.attachments] == [AttachmentType.RECEIPT]
