"""Role catalog and capability table."""

import pytest

from promsys.domain.roles import (
    ROLE_CAPABILITIES,
    Capability,
    UserRole,
    capabilities_for,
    has_capability,
)

pytestmark = pytest.mark.unit


def test_every_role_has_a_capability_entry():
    assert set(ROLE_CAPABILITIES) == set(UserRole)


def test_admin_holds_every_capability():
    assert capabilities_for(UserRole.ADMIN) == frozenset(Capability)


@pytest.mark.parametrize(
    "capability, roles",
    [
        (Capability.PROJECT_MANAGE, {UserRole.ADMIN, UserRole.PROJECTMANAGER}),
        (Capability.TEAM_MANAGE, {UserRole.ADMIN, UserRole.PROJECTMANAGER}),
        (Capability.TASK_REVIEW, {UserRole.ADMIN, UserRole.PROJECTMANAGER, UserRole.FINANCE}),
        (Capability.INVOICE_MANAGE, {UserRole.ADMIN, UserRole.FINANCE}),
        (Capability.REIMBURSEMENT_PROCESS, {UserRole.ADMIN, UserRole.FINANCE}),
        (Capability.CATEGORY_MANAGE, {UserRole.ADMIN}),
        (Capability.USER_ADMIN, {UserRole.ADMIN}),
        (Capability.DASHBOARD_FINANCE, {UserRole.ADMIN, UserRole.FINANCE}),
    ],
)
def test_capability_holders(capability, roles):
    holders = {role for role in UserRole if has_capability(role, capability)}
    assert holders == roles


def test_employees_hold_no_capability():
    assert capabilities_for(UserRole.EMPLOYEES) == frozenset()


def test_unknown_role_has_nothing():
    assert capabilities_for(None) == frozenset()
    assert not has_capability(None, Capability.TASK_REVIEW)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("admin", UserRole.ADMIN),
        (" Finance ", UserRole.FINANCE),
        ("EMPLOYEES", UserRole.EMPLOYEES),
        ("employee", None),
        ("", None),
        (None, None),
    ],
)
def test_parse_role(raw, expected):
    assert UserRole.parse(raw) is expected
