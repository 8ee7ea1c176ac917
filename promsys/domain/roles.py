"""
Name: Roles and Capabilities

Responsibilities:
  - Define the closed role catalog (UserRole)
  - Define the capability catalog (Capability)
  - Map every role to its capability set (ROLE_CAPABILITIES)

Collaborators:
  - domain/navigation.py: route allow-lists are keyed by UserRole
  - domain/*_workflow.py: review/process gates use has_capability()
  - identity/auth.py: require_capability() FastAPI dependency

Constraints:
  - Pure data, no I/O
  - ROLE_CAPABILITIES lists every UserRole (asserted at import and in tests)
"""

from __future__ import annotations

from enum import Enum


class UserRole(str, Enum):
    ADMIN = "ADMIN"
    PROJECTMANAGER = "PROJECTMANAGER"
    FINANCE = "FINANCE"
    EMPLOYEES = "EMPLOYEES"

    @classmethod
    def parse(cls, value: str | None) -> "UserRole | None":
        """Case-insensitive lookup; None for unknown or empty input."""
        if not value:
            return None
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            return None


class Capability(str, Enum):
    PROJECT_MANAGE = "project:manage"
    TEAM_MANAGE = "team:manage"
    TASK_MANAGE = "task:manage"
    TASK_REVIEW = "task:review"
    INVOICE_VIEW = "invoice:view"
    INVOICE_MANAGE = "invoice:manage"
    REIMBURSEMENT_PROCESS = "reimbursement:process"
    SETTINGS_MANAGE = "settings:manage"
    CATEGORY_MANAGE = "category:manage"
    USER_ADMIN = "user:admin"
    DASHBOARD_SUMMARY = "dashboard:summary"
    DASHBOARD_FINANCE = "dashboard:finance"


ROLE_CAPABILITIES: dict[UserRole, frozenset[Capability]] = {
    UserRole.ADMIN: frozenset(Capability),
    UserRole.PROJECTMANAGER: frozenset(
        {
            Capability.PROJECT_MANAGE,
            Capability.TEAM_MANAGE,
            Capability.TASK_MANAGE,
            Capability.TASK_REVIEW,
        }
    ),
    UserRole.FINANCE: frozenset(
        {
            Capability.TASK_MANAGE,
            Capability.TASK_REVIEW,
            Capability.INVOICE_VIEW,
            Capability.INVOICE_MANAGE,
            Capability.REIMBURSEMENT_PROCESS,
            Capability.SETTINGS_MANAGE,
            Capability.DASHBOARD_FINANCE,
        }
    ),
    UserRole.EMPLOYEES: frozenset(),
}

# R: adding a role without a capability entry is a programming error
_missing = set(UserRole) - set(ROLE_CAPABILITIES)
if _missing:
    raise RuntimeError(f"ROLE_CAPABILITIES missing roles: {sorted(r.value for r in _missing)}")


def capabilities_for(role: UserRole | None) -> frozenset[Capability]:
    if role is None:
        return frozenset()
    return ROLE_CAPABILITIES[role]


def has_capability(role: UserRole | None, capability: Capability) -> bool:
    return capability in capabilities_for(role)
