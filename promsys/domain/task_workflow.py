"""
Name: Task Status Workflow

Responsibilities:
  - Declare the task transition graph
  - List the actions a role is offered for a task in a given status
  - Validate a requested transition (adjacency + review capability)

Collaborators:
  - domain/roles.py: TASK_REVIEW capability
  - application/tasks.py: authoritative check before persisting
  - client/workflows.py: kanban drop and action menu

Constraints:
  - DONE is terminal
  - Review transitions (SUBMITTED -> DONE / REVISION) need TASK_REVIEW
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..crosscutting.exceptions import ForbiddenError, TransitionNotAllowedError
from .roles import Capability, UserRole, has_capability


class TaskStatus(str, Enum):
    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    SUBMITTED = "SUBMITTED"
    REVISION = "REVISION"
    DONE = "DONE"


class TaskPriority(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    URGENT = "URGENT"


TASK_TRANSITIONS: dict[TaskStatus, frozenset[TaskStatus]] = {
    TaskStatus.TODO: frozenset({TaskStatus.IN_PROGRESS}),
    TaskStatus.IN_PROGRESS: frozenset({TaskStatus.SUBMITTED}),
    TaskStatus.SUBMITTED: frozenset({TaskStatus.DONE, TaskStatus.REVISION}),
    TaskStatus.REVISION: frozenset({TaskStatus.SUBMITTED}),
    TaskStatus.DONE: frozenset(),
}

REVIEW_TARGETS: frozenset[TaskStatus] = frozenset({TaskStatus.DONE, TaskStatus.REVISION})


@dataclass(frozen=True)
class TaskAction:
    label: str
    target: TaskStatus
    # R: submit-style actions open the attachment dialog before the status change
    opens_submit_dialog: bool = False


# R: menu order per status, mirrors the kanban card menu
_ACTIONS: dict[TaskStatus, tuple[TaskAction, ...]] = {
    TaskStatus.TODO: (TaskAction("Start Work", TaskStatus.IN_PROGRESS),),
    TaskStatus.IN_PROGRESS: (
        TaskAction("Submit", TaskStatus.SUBMITTED, opens_submit_dialog=True),
    ),
    TaskStatus.SUBMITTED: (
        TaskAction("Approve", TaskStatus.DONE),
        TaskAction("Revision", TaskStatus.REVISION),
    ),
    TaskStatus.REVISION: (
        TaskAction("Re-submit", TaskStatus.SUBMITTED, opens_submit_dialog=True),
    ),
    TaskStatus.DONE: (),
}


def allowed_targets(status: TaskStatus) -> frozenset[TaskStatus]:
    return TASK_TRANSITIONS[status]


def is_review_transition(current: TaskStatus, target: TaskStatus) -> bool:
    return current == TaskStatus.SUBMITTED and target in REVIEW_TARGETS


def can_transition(
    current: TaskStatus, target: TaskStatus, role: UserRole | None
) -> bool:
    if target not in TASK_TRANSITIONS[current]:
        return False
    if is_review_transition(current, target):
        return has_capability(role, Capability.TASK_REVIEW)
    return role is not None


def available_actions(
    status: TaskStatus, role: UserRole | None
) -> tuple[TaskAction, ...]:
    """Actions to present for a task card; empty while the role is unknown."""
    return tuple(
        action
        for action in _ACTIONS[status]
        if can_transition(status, action.target, role)
    )


def ensure_transition(
    current: TaskStatus, target: TaskStatus, role: UserRole | None
) -> None:
    """
    Raise when the transition is outside the graph or the role may not review.

    Raises:
        TransitionNotAllowedError: target is not adjacent to current
        ForbiddenError: review transition without TASK_REVIEW
    """
    if target not in TASK_TRANSITIONS[current]:
        raise TransitionNotAllowedError("Task", current, target)
    if is_review_transition(current, target) and not has_capability(
        role, Capability.TASK_REVIEW
    ):
        raise ForbiddenError("Only reviewers can approve or request revision")
