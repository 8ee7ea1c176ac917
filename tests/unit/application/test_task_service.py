"""TaskService: creation, visibility, status changes and notifications."""

from datetime import datetime, timedelta, timezone

import pytest

from promsys.application.files import UploadedFile
from promsys.application.tasks import TaskInput
from promsys.container import (
    get_notification_service,
    get_task_repository,
    get_task_service,
)
from promsys.crosscutting.exceptions import (
    ForbiddenError,
    NotFoundError,
    TransitionNotAllowedError,
    ValidationFailedError,
)
from promsys.domain.entities import NotificationType
from promsys.domain.task_workflow import TaskStatus

pytestmark = pytest.mark.unit

DEADLINE = datetime(2030, 1, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def task(manager, employee, project):
    return get_task_service().create(
        manager,
        project.id,
        TaskInput(title="Write report", assigned_to_id=employee.id, deadline=DEADLINE),
    )


class TestCreate:
    def test_assignee_is_notified(self, task, employee):
        inbox = get_notification_service().list_for_user(employee.id)
        assert [n.type for n in inbox] == [NotificationType.TASK_ASSIGNED]
        assert task.status == TaskStatus.TODO

    def test_employee_cannot_create(self, employee, project):
        with pytest.raises(ForbiddenError):
            get_task_service().create(
                employee,
                project.id,
                TaskInput(title="x", assigned_to_id=employee.id, deadline=DEADLINE),
            )

    def test_title_is_required(self, manager, employee, project):
        with pytest.raises(ValidationFailedError) as exc_info:
            get_task_service().create(
                manager,
                project.id,
                TaskInput(title="  ", assigned_to_id=employee.id, deadline=DEADLINE),
            )
        assert exc_info.value.field == "title"

    def test_unknown_project(self, manager, employee):
        with pytest.raises(NotFoundError):
            get_task_service().create(
                manager,
                "missing",
                TaskInput(title="x", assigned_to_id=employee.id, deadline=DEADLINE),
            )


class TestVisibility:
    def test_employee_sees_only_assigned_tasks(self, task, manager, employee, finance, project):
        service = get_task_service()
        service.create(
            manager,
            project.id,
            TaskInput(title="Other", assigned_to_id=finance.id, deadline=DEADLINE),
        )
        assert [t.id for t in service.list_visible(employee)] == [task.id]
        assert len(service.list_visible(manager)) == 2

    def test_hidden_task_reads_as_missing(self, finance, manager, employee, project):
        other = get_task_service().create(
            manager,
            project.id,
            TaskInput(title="Finance only", assigned_to_id=finance.id, deadline=DEADLINE),
        )
        with pytest.raises(NotFoundError):
            get_task_service().get_visible(employee, other.id)


class TestChangeStatus:
    def test_full_cycle_with_revision(self, task, employee, manager):
        service = get_task_service()
        service.change_status(employee, task.id, TaskStatus.IN_PROGRESS)
        service.change_status(employee, task.id, TaskStatus.SUBMITTED)
        service.change_status(manager, task.id, TaskStatus.REVISION)
        service.change_status(employee, task.id, TaskStatus.SUBMITTED)
        done = service.change_status(manager, task.id, TaskStatus.DONE)
        assert done.status == TaskStatus.DONE

    def test_skipping_is_rejected_and_task_untouched(self, task, employee):
        service = get_task_service()
        with pytest.raises(TransitionNotAllowedError):
            service.change_status(employee, task.id, TaskStatus.DONE)
        assert service.get_visible(employee, task.id).status == TaskStatus.TODO

    def test_employee_cannot_approve(self, task, employee):
        service = get_task_service()
        service.change_status(employee, task.id, TaskStatus.IN_PROGRESS)
        service.change_status(employee, task.id, TaskStatus.SUBMITTED)
        with pytest.raises(ForbiddenError):
            service.change_status(employee, task.id, TaskStatus.DONE)
        assert service.get_visible(employee, task.id).status == TaskStatus.SUBMITTED

    def test_status_change_notifies_creator_not_actor(self, task, employee, manager):
        get_task_service().change_status(employee, task.id, TaskStatus.IN_PROGRESS)
        notifications = get_notification_service()
        manager_inbox = notifications.list_for_user(manager.id)
        assert [n.type for n in manager_inbox] == [NotificationType.TASK_STATUS_CHANGED]
        employee_types = [n.type for n in notifications.list_for_user(employee.id)]
        assert NotificationType.TASK_STATUS_CHANGED not in employee_types


class TestCommentsAndAttachments:
    def test_blank_comment_is_rejected(self, task, employee):
        with pytest.raises(ValidationFailedError):
            get_task_service().add_comment(employee, task.id, "   ")

    def test_comment_is_trimmed(self, task, employee):
        comment = get_task_service().add_comment(employee, task.id, "  done soon ")
        assert comment.content == "done soon"
        assert get_task_service().get_visible(employee, task.id).comments == [comment]

    def test_empty_upload_is_rejected(self, task, employee):
        with pytest.raises(ValidationFailedError):
            get_task_service().add_attachment(
                employee, task.id, UploadedFile("a.pdf", "application/pdf", b"")
            )

    def test_attachment_is_stored(self, task, employee):
        updated = get_task_service().add_attachment(
            employee, task.id, UploadedFile("a.pdf", "application/pdf", b"%PDF")
        )
        assert [a.file.original_name for a in updated.attachments] == ["a.pdf"]


def test_reassignment_notifies_new_assignee(task, manager, finance):
    service = get_task_service()
    service.update(
        manager,
        task.id,
        TaskInput(assigned_to_id=finance.id, deadline=DEADLINE + timedelta(days=1)),
        {"assigned_to_id", "deadline"},
    )
    inbox = get_notification_service().list_for_user(finance.id)
    assert [n.type for n in inbox] == [NotificationType.TASK_ASSIGNED]


def test_rejected_update_leaves_task_untouched(task, manager, employee):
    with pytest.raises(NotFoundError):
        get_task_service().update(
            manager,
            task.id,
            TaskInput(title="Hijacked", assigned_to_id="ghost"),
            {"title", "assigned_to_id"},
        )
    stored = get_task_repository().get(task.id)
    assert stored.title == "Write report"
    assert stored.assigned_to_id == employee.id
