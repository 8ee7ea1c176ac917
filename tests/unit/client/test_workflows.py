"""Task, reimbursement and invoice action surfaces over a scripted server."""

import json

import pytest

from promsys.client.api import UploadFile
from promsys.client.resources import InvoiceResource, ReimbursementResource, TaskResource
from promsys.client.resources.tasks import tasks_key
from promsys.client.session import AuthState, SessionUser
from promsys.client.toasts import Toaster, ToastKind
from promsys.client.workflows import (
    InvoiceActions,
    KanbanBoard,
    ReimbursementActions,
    TaskActions,
)
from promsys.domain.invoice_workflow import InvoiceStatus
from promsys.domain.reimbursement_workflow import ReimbursementAction
from promsys.domain.roles import UserRole
from promsys.domain.task_workflow import TaskStatus

pytestmark = pytest.mark.unit


def signed_in(role: UserRole) -> AuthState:
    return AuthState(
        user=SessionUser(id=f"u-{role.value.lower()}", name="Tester", email="t@example.com", role=role),
        is_pending=False,
    )


@pytest.fixture
def toaster() -> Toaster:
    return Toaster()


@pytest.fixture
def task_actions(api, queries, toaster) -> TaskActions:
    return TaskActions(TaskResource(api, queries), toaster, signed_in(UserRole.PROJECTMANAGER))


@pytest.fixture
def board(task_actions) -> KanbanBoard:
    return KanbanBoard(task_actions)


@pytest.fixture
def finance_reimbursements(api, queries, toaster) -> ReimbursementActions:
    return ReimbursementActions(
        ReimbursementResource(api, queries), toaster, signed_in(UserRole.FINANCE)
    )


PROOF = UploadFile("transfer.pdf", b"%PDF-1.4", "application/pdf")
IN_PROGRESS_TASK = {"id": "t1", "status": "IN_PROGRESS"}


# ============================================================================
# Kanban
# ============================================================================


class TestKanban:
    def test_group_puts_every_task_in_its_column(self):
        columns = KanbanBoard.group(
            [{"id": "a", "status": "TODO"}, {"id": "b", "status": "DONE"}, {"id": "c", "status": "TODO"}]
        )
        assert [t["id"] for t in columns[TaskStatus.TODO]] == ["a", "c"]
        assert columns[TaskStatus.REVISION] == []

    def test_same_column_is_a_noop(self, board, server, toaster):
        assert board.drop({"id": "t1", "status": "TODO"}, TaskStatus.TODO) is False
        assert server.requests == []
        assert toaster.toasts == []

    def test_non_adjacent_column_is_blocked_locally(self, board, server, toaster):
        assert board.drop({"id": "t1", "status": "TODO"}, TaskStatus.DONE) is False
        assert server.requests == []
        assert toaster.errors[0].message == "Cannot move task from Todo to Done"

    def test_adjacent_drop_updates_and_refreshes_the_board(self, board, server, queries, api, toaster):
        server.add(
            "GET",
            "/tasks",
            server.ok([{"id": "t1", "status": "TODO"}]),
            server.ok([{"id": "t1", "status": "IN_PROGRESS"}]),
        )
        server.add("PATCH", "/tasks/t1/status", server.ok({"id": "t1", "status": "IN_PROGRESS"}))
        observer = queries.watch(tasks_key(), lambda: api.get("/tasks"))

        assert board.drop({"id": "t1", "status": "TODO"}, TaskStatus.IN_PROGRESS) is True

        assert server.calls("PATCH", "/tasks/t1/status") == 1
        assert json.loads(server.requests[1].content) == {"status": "IN_PROGRESS"}
        assert observer.data == [{"id": "t1", "status": "IN_PROGRESS"}]
        assert toaster.successes[0].message == "Task moved to In Progress"

    def test_server_refusal_toasts_and_keeps_the_cache(self, board, api, queries, server, toaster):
        server.add("GET", "/tasks", server.ok([{"id": "t1", "status": "SUBMITTED"}]))
        server.add(
            "PATCH",
            "/tasks/t1/status",
            server.problem(403, "Task belongs to another project team", "FORBIDDEN"),
        )
        queries.watch(tasks_key(), lambda: api.get("/tasks"))

        assert board.drop({"id": "t1", "status": "SUBMITTED"}, TaskStatus.DONE) is False

        assert server.calls("GET", "/tasks") == 1
        toast = toaster.errors[0]
        assert toast.status_code == 403
        assert toast.message == "Task belongs to another project team (HTTP 403)"

    def test_employee_review_is_blocked_locally(self, api, queries, server, toaster):
        employee_board = KanbanBoard(
            TaskActions(TaskResource(api, queries), toaster, signed_in(UserRole.EMPLOYEES))
        )
        assert employee_board.drop({"id": "t1", "status": "SUBMITTED"}, TaskStatus.DONE) is False
        assert server.requests == []
        assert toaster.errors[0].message == "Only reviewers can approve or request revision"


# ============================================================================
# Task actions
# ============================================================================


class TestTaskActions:
    def test_actions_follow_the_role(self, task_actions, api, queries, toaster):
        targets = {a.target for a in task_actions.actions_for({"status": "SUBMITTED"})}
        assert targets == {TaskStatus.DONE, TaskStatus.REVISION}
        employee = TaskActions(TaskResource(api, queries), toaster, signed_in(UserRole.EMPLOYEES))
        assert employee.actions_for({"status": "SUBMITTED"}) == ()

    def test_submit_uploads_then_changes_status(self, task_actions, server):
        server.add("POST", "/tasks/t1/attachments", (201, {"data": {"id": "att-1"}}))
        server.add("PATCH", "/tasks/t1/status", server.ok({"id": "t1", "status": "SUBMITTED"}))

        result = task_actions.submit(IN_PROGRESS_TASK, attachment=PROOF)

        assert result == {"id": "t1", "status": "SUBMITTED"}
        assert [(r.method, server._path(r)) for r in server.requests] == [
            ("POST", "/tasks/t1/attachments"),
            ("PATCH", "/tasks/t1/status"),
        ]

    def test_failed_upload_stops_the_submit(self, task_actions, server, toaster):
        server.add("POST", "/tasks/t1/attachments", server.problem(413, "File too large"))

        assert task_actions.submit(IN_PROGRESS_TASK, attachment=PROOF) is None
        assert server.calls("PATCH") == 0
        assert toaster.errors[0].message == "File too large (HTTP 413)"

    def test_revision_cannot_go_back_to_todo(self, task_actions, server, toaster):
        assert task_actions.change_status({"id": "t1", "status": "REVISION"}, TaskStatus.TODO) is None
        assert server.requests == []
        assert toaster.errors[0].message == "Cannot move task from Revision to Todo"

    @pytest.mark.parametrize("target", list(TaskStatus))
    def test_done_is_final(self, task_actions, server, target):
        assert task_actions.change_status({"id": "t1", "status": "DONE"}, target) is None
        assert server.requests == []

    def test_submit_from_todo_sends_nothing(self, task_actions, server):
        todo = {"id": "t1", "status": "TODO"}
        assert task_actions.submit(todo, attachment=PROOF) is None
        assert server.requests == []

    def test_blank_comment_sends_nothing(self, task_actions, server, toaster):
        assert task_actions.comment("t1", "   ") is None
        assert server.requests == []
        assert toaster.errors[0].message == "Comment cannot be empty"

    def test_comment_is_trimmed(self, task_actions, server):
        server.add("POST", "/tasks/t1/comments", (201, {"data": {"id": "c1"}}))
        task_actions.comment("t1", "  looks good  ")
        assert json.loads(server.requests[0].content) == {"content": "looks good"}


# ============================================================================
# Reimbursements
# ============================================================================


class TestReimbursementActions:
    def test_processor_actions(self, finance_reimbursements):
        actions = finance_reimbursements.actions_for({"status": "PENDING"})
        assert set(actions) == {ReimbursementAction.APPROVE, ReimbursementAction.REJECT}

    def test_blank_reason_is_rejected_locally(self, finance_reimbursements, server, toaster):
        assert finance_reimbursements.reject("r1", "  ") is None
        assert server.requests == []
        assert toaster.errors[0].message == "Please provide a reason"

    def test_reject_sends_trimmed_reason(self, finance_reimbursements, server, toaster):
        server.add("PATCH", "/reimbursements/r1/reject", server.ok({"id": "r1", "status": "REJECTED"}))
        finance_reimbursements.reject("r1", " duplicate claim ")
        assert json.loads(server.requests[0].content) == {"reason": "duplicate claim"}
        assert toaster.successes[0].message == "Reimbursement rejected"

    def test_mark_paid_with_proof(self, finance_reimbursements, server, toaster):
        server.add("PATCH", "/reimbursements/r1/pay", server.ok({"id": "r1", "status": "PAID"}))
        server.add("POST", "/reimbursements/r1/attachments", (201, {"data": {"id": "a1"}}))

        outcome = finance_reimbursements.mark_paid_with_proof("r1", PROOF)

        assert outcome.paid and outcome.proof_uploaded
        assert not outcome.missing_proof
        assert b'name="type"' in server.requests[1].read()
        assert toaster.successes[0].message == "Reimbursement marked as paid"

    def test_failed_proof_upload_reports_the_gap(self, finance_reimbursements, server, toaster):
        server.add("PATCH", "/reimbursements/r1/pay", server.ok({"id": "r1", "status": "PAID"}))
        server.add(
            "POST",
            "/reimbursements/r1/attachments",
            server.problem(422, "File is empty", "VALIDATION_ERROR"),
        )

        outcome = finance_reimbursements.mark_paid_with_proof("r1", PROOF)

        assert outcome.paid is True
        assert outcome.missing_proof is True
        assert outcome.error == "File is empty"
        assert toaster.errors[0].status_code == 422

    def test_no_proof_means_no_requests(self, finance_reimbursements, server, toaster):
        outcome = finance_reimbursements.mark_paid_with_proof("r1", None)
        assert outcome.paid is False
        assert server.requests == []
        assert toaster.errors[0].message == "Please upload payment proof"

    def test_failed_payment_skips_the_upload(self, finance_reimbursements, server):
        server.add(
            "PATCH",
            "/reimbursements/r1/pay",
            server.problem(409, "Reimbursement must be approved first", "TRANSITION_NOT_ALLOWED"),
        )
        outcome = finance_reimbursements.mark_paid_with_proof("r1", PROOF)
        assert outcome.paid is False
        assert not outcome.missing_proof
        assert server.calls("POST") == 0

    def test_attach_payment_proof_closes_the_gap(self, finance_reimbursements, server, toaster):
        server.add("POST", "/reimbursements/r1/attachments", (201, {"data": {"id": "a2"}}))
        assert finance_reimbursements.attach_payment_proof("r1", PROOF) == {"id": "a2"}
        assert toaster.successes[0].message == "Payment proof uploaded"

    def test_needs_payment_proof(self):
        assert ReimbursementActions.needs_payment_proof({"status": "PAID", "missingPaymentProof": True})
        assert not ReimbursementActions.needs_payment_proof({"status": "PAID", "missingPaymentProof": False})
        assert not ReimbursementActions.needs_payment_proof({"status": "APPROVED", "missingPaymentProof": True})


# ============================================================================
# Invoices
# ============================================================================


class TestInvoiceActions:
    @pytest.fixture
    def invoice_actions(self, api, queries, toaster) -> InvoiceActions:
        return InvoiceActions(InvoiceResource(api, queries), toaster, signed_in(UserRole.FINANCE))

    def test_overdue_is_never_set_by_hand(self, invoice_actions, server, toaster):
        result = invoice_actions.change_status({"id": "i1", "status": "SENT"}, InvoiceStatus.OVERDUE)
        assert result is None
        assert server.requests == []
        assert toaster.errors[0].kind == ToastKind.ERROR

    def test_mark_sent(self, invoice_actions, server, toaster):
        server.add("PATCH", "/invoices/i1/status", server.ok({"id": "i1", "status": "SENT"}))
        result = invoice_actions.change_status({"id": "i1", "status": "DRAFT"}, InvoiceStatus.SENT)
        assert result["status"] == "SENT"
        assert toaster.successes[0].message == "Invoice marked as Sent"

    def test_employee_sees_no_actions(self, api, queries, toaster):
        actions = InvoiceActions(InvoiceResource(api, queries), toaster, signed_in(UserRole.EMPLOYEES))
        assert actions.actions_for({"status": "DRAFT"}) == ()
