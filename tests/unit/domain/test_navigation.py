"""Route gate, sidebar filtering, session proxy and page titles."""

import pytest

from promsys.domain.navigation import (
    HOME_PATH,
    LOGIN_PATH,
    SIDEBAR_ITEMS,
    AccessDecision,
    NavGroup,
    NavMainItem,
    NavSubItem,
    check_route_access,
    filter_sidebar_by_role,
    iter_entries,
    resolve_page_title,
    resolve_redirect,
)
from promsys.domain.roles import UserRole

pytestmark = pytest.mark.unit

NON_ADMIN = [UserRole.PROJECTMANAGER, UserRole.FINANCE, UserRole.EMPLOYEES]


class TestRouteGate:
    @pytest.mark.parametrize("role", list(UserRole))
    def test_unmatched_path_is_allowed(self, role):
        assert check_route_access("/somewhere/else", role) == AccessDecision.ALLOW

    @pytest.mark.parametrize("path", [e.url for e in iter_entries()] + ["/pages/users/42"])
    def test_admin_is_always_allowed(self, path):
        assert check_route_access(path, UserRole.ADMIN) == AccessDecision.ALLOW

    def test_pending_while_role_is_unknown(self):
        assert check_route_access("/dashboard/finance", None) == AccessDecision.PENDING

    def test_employee_denied_project_list(self):
        decision = check_route_access(
            "/dashboard/project-management/project", UserRole.EMPLOYEES
        )
        assert decision == AccessDecision.DENY

    def test_finance_allowed_finance_dashboard(self):
        assert check_route_access("/dashboard/finance", UserRole.FINANCE) == AccessDecision.ALLOW

    def test_most_restrictive_match_wins(self):
        # Parent allows EMPLOYEES, the more specific sub-item does not
        assert (
            check_route_access("/dashboard/project-management", UserRole.EMPLOYEES)
            == AccessDecision.ALLOW
        )
        assert (
            check_route_access(
                "/dashboard/project-management/project/abc", UserRole.EMPLOYEES
            )
            == AccessDecision.DENY
        )

    def test_restricted_sub_item_under_permissive_parent(self):
        # /dashboard/invoice parent lists PM, the "View Invoice" sub-item does not
        assert (
            check_route_access("/dashboard/invoice", UserRole.PROJECTMANAGER)
            == AccessDecision.DENY
        )
        assert (
            check_route_access("/dashboard/reimbursement", UserRole.PROJECTMANAGER)
            == AccessDecision.ALLOW
        )

    def test_prefix_match_needs_a_path_boundary(self):
        assert check_route_access("/settingsx", UserRole.EMPLOYEES) == AccessDecision.ALLOW
        assert check_route_access("/settings/tax", UserRole.EMPLOYEES) == AccessDecision.DENY

    @pytest.mark.parametrize("role", NON_ADMIN)
    def test_users_page_is_admin_only(self, role):
        assert check_route_access("/pages/users", role) == AccessDecision.DENY

    def test_custom_tree(self):
        tree = (
            NavGroup(
                id=1,
                items=(
                    NavMainItem(
                        "Open",
                        "/open",
                        sub_items=(
                            NavSubItem("Closed", "/open/closed", frozenset({UserRole.FINANCE})),
                        ),
                    ),
                ),
            ),
        )
        assert check_route_access("/open", UserRole.EMPLOYEES, tree) == AccessDecision.ALLOW
        assert check_route_access("/open/closed", UserRole.EMPLOYEES, tree) == AccessDecision.DENY
        assert check_route_access("/open/closed", UserRole.FINANCE, tree) == AccessDecision.ALLOW


class TestSidebarFiltering:
    def _urls(self, groups):
        urls = []
        for group in groups:
            for item in group.items:
                urls.append(item.url)
                urls.extend(sub.url for sub in item.sub_items)
        return urls

    def test_admin_sees_everything(self):
        assert self._urls(filter_sidebar_by_role(SIDEBAR_ITEMS, UserRole.ADMIN)) == self._urls(
            SIDEBAR_ITEMS
        )

    def test_employee_loses_settings_group(self):
        groups = filter_sidebar_by_role(SIDEBAR_ITEMS, UserRole.EMPLOYEES)
        labels = [g.label for g in groups]
        assert "Settings" not in labels
        urls = self._urls(groups)
        assert "/dashboard/project-management/tasks" in urls
        assert "/dashboard/project-management/project" not in urls
        assert "/dashboard/finance" not in urls
        assert "/dashboard/reimbursement" in urls

    def test_finance_settings_without_category(self):
        urls = self._urls(filter_sidebar_by_role(SIDEBAR_ITEMS, UserRole.FINANCE))
        assert "/settings/vendor" in urls
        assert "/settings/category" not in urls

    def test_group_left_empty_is_dropped(self):
        tree = (
            NavGroup(id=1, label="Only admin", items=(NavMainItem("A", "/a", frozenset({UserRole.ADMIN})),)),
            NavGroup(id=2, label="Open", items=(NavMainItem("B", "/b"),)),
        )
        groups = filter_sidebar_by_role(tree, UserRole.EMPLOYEES)
        assert [g.label for g in groups] == ["Open"]


class TestSessionProxy:
    def test_anonymous_protected_path_goes_to_login(self):
        target = resolve_redirect("/dashboard/finance", has_session=False)
        assert target.startswith(LOGIN_PATH)
        assert "callbackUrl=%2Fdashboard%2Ffinance" in target

    def test_signed_in_user_skips_public_pages(self):
        assert resolve_redirect("/auth/v2/login", has_session=True) == HOME_PATH

    def test_anonymous_public_page_passes(self):
        assert resolve_redirect("/auth/v2/login", has_session=False) is None
        assert resolve_redirect("/unauthorized", has_session=False) is None

    def test_signed_in_protected_page_passes(self):
        assert resolve_redirect("/dashboard/finance", has_session=True) is None


class TestPageTitles:
    def test_most_specific_entry(self):
        assert resolve_page_title("/dashboard/invoice/create") == "Create Invoice"
        assert resolve_page_title("/settings/tax") == "Tax"

    def test_unknown_path_uses_app_name(self):
        assert resolve_page_title("/nowhere").startswith("PROMSYS")
