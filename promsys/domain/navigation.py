"""
Name: Navigation Tree and Role Gate

Responsibilities:
  - Hold the static sidebar tree (groups -> items -> sub-items)
  - Decide whether a role may view a path (check_route_access)
  - Filter the sidebar for a role (filter_sidebar_by_role)
  - Resolve session redirects for public/protected paths (resolve_redirect)
  - Resolve the page title for a path (resolve_page_title)

Collaborators:
  - domain/roles.py: UserRole
  - interfaces/web/pages.py: server-side page shells
  - client/session.py: RoleGuard

Constraints:
  - Pure functions over static data; no side effects
  - ADMIN bypasses the gate; any matching entry that excludes the role denies
  - Group-level allowed_roles only affect sidebar filtering (groups have no URL)

Notes:
  - A path matches an entry when it equals the URL or starts with URL + "/"
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterable, Iterator, Optional
from urllib.parse import urlencode

from .roles import UserRole

APP_NAME = "PROMSYS - Project Road Map and Monitoring System"

PUBLIC_PATHS: tuple[str, ...] = ("/auth", "/unauthorized")
HOME_PATH = "/dashboard/project-management/project"
LOGIN_PATH = "/auth/v2/login"
UNAUTHORIZED_PATH = "/unauthorized"


class AccessDecision(str, Enum):
    ALLOW = "ALLOW"
    DENY = "DENY"
    PENDING = "PENDING"


@dataclass(frozen=True)
class NavSubItem:
    title: str
    url: str
    allowed_roles: Optional[frozenset[UserRole]] = None
    icon: Optional[str] = None
    coming_soon: bool = False
    new_tab: bool = False
    is_new: bool = False

    def allows(self, role: UserRole) -> bool:
        return self.allowed_roles is None or role in self.allowed_roles


@dataclass(frozen=True)
class NavMainItem:
    title: str
    url: str
    allowed_roles: Optional[frozenset[UserRole]] = None
    icon: Optional[str] = None
    sub_items: tuple[NavSubItem, ...] = ()
    coming_soon: bool = False
    new_tab: bool = False
    is_new: bool = False

    def allows(self, role: UserRole) -> bool:
        return self.allowed_roles is None or role in self.allowed_roles


@dataclass(frozen=True)
class NavGroup:
    id: int
    label: Optional[str] = None
    items: tuple[NavMainItem, ...] = field(default_factory=tuple)
    allowed_roles: Optional[frozenset[UserRole]] = None

    def allows(self, role: UserRole) -> bool:
        return self.allowed_roles is None or role in self.allowed_roles


def _roles(*roles: UserRole) -> frozenset[UserRole]:
    return frozenset(roles)


_A = UserRole.ADMIN
_PM = UserRole.PROJECTMANAGER
_FIN = UserRole.FINANCE
_EMP = UserRole.EMPLOYEES

SIDEBAR_ITEMS: tuple[NavGroup, ...] = (
    NavGroup(
        id=1,
        label="Dashboards",
        items=(
            NavMainItem(
                "Default", "/dashboard/default", _roles(_A), icon="layout-dashboard"
            ),
            NavMainItem(
                "CRM",
                "/dashboard/crm",
                _roles(_A),
                icon="chart-bar",
                coming_soon=True,
            ),
            NavMainItem(
                "Project Management",
                "/dashboard/project-management",
                _roles(_A, _PM, _EMP),
                icon="folder-check",
                sub_items=(
                    NavSubItem(
                        "Project",
                        "/dashboard/project-management/project",
                        _roles(_A, _PM),
                    ),
                    NavSubItem(
                        "Tasks",
                        "/dashboard/project-management/tasks",
                        _roles(_A, _PM, _EMP),
                    ),
                    NavSubItem(
                        "Calendar",
                        "/dashboard/project-management/calendar",
                        _roles(_A, _PM, _EMP),
                    ),
                    NavSubItem(
                        "Teams",
                        "/dashboard/project-management/teams",
                        _roles(_A, _PM),
                        coming_soon=True,
                    ),
                ),
            ),
            NavMainItem(
                "Finance", "/dashboard/finance", _roles(_A, _FIN), icon="banknote"
            ),
        ),
    ),
    NavGroup(
        id=2,
        label="Pages",
        items=(
            NavMainItem(
                "Invoice",
                "/dashboard/invoice",
                _roles(_A, _FIN, _PM, _EMP),
                icon="receipt-text",
                sub_items=(
                    NavSubItem("View Invoice", "/dashboard/invoice", _roles(_A, _FIN)),
                    NavSubItem(
                        "Create Invoice", "/dashboard/invoice/create", _roles(_A, _FIN)
                    ),
                    NavSubItem(
                        "Reimbursement",
                        "/dashboard/reimbursement",
                        _roles(_A, _FIN, _PM, _EMP),
                    ),
                ),
            ),
            NavMainItem("Users", "/pages/users", _roles(_A), icon="users"),
        ),
    ),
    NavGroup(
        id=3,
        label="Settings",
        allowed_roles=_roles(_A, _FIN),
        items=(
            NavMainItem(
                "Settings",
                "/settings",
                _roles(_A, _FIN),
                icon="settings",
                sub_items=(
                    NavSubItem("Category", "/settings/category", _roles(_A)),
                    NavSubItem("Vendor", "/settings/vendor", _roles(_A, _FIN)),
                    NavSubItem("Tax", "/settings/tax", _roles(_A, _FIN)),
                ),
            ),
        ),
    ),
)


def path_matches(path: str, url: str) -> bool:
    return path == url or path.startswith(f"{url}/")


def iter_entries(
    tree: Iterable[NavGroup] = SIDEBAR_ITEMS,
) -> Iterator[NavMainItem | NavSubItem]:
    """Every item and sub-item in declaration order."""
    for group in tree:
        for item in group.items:
            yield item
            yield from item.sub_items


def check_route_access(
    path: str,
    role: UserRole | None,
    tree: Iterable[NavGroup] = SIDEBAR_ITEMS,
) -> AccessDecision:
    """
    Decide whether `role` may view `path`.

    - None role means the auth state is still loading: PENDING.
    - ADMIN is always allowed.
    - Any matching entry whose allow-list excludes the role denies.
    - A path matching no entry is allowed.
    """
    if role is None:
        return AccessDecision.PENDING
    if role == UserRole.ADMIN:
        return AccessDecision.ALLOW

    for entry in iter_entries(tree):
        if path_matches(path, entry.url) and not entry.allows(role):
            return AccessDecision.DENY
    return AccessDecision.ALLOW


def filter_sidebar_by_role(
    groups: Iterable[NavGroup], role: UserRole
) -> tuple[NavGroup, ...]:
    """Drop groups/items/sub-items the role may not see, then empty groups."""
    filtered: list[NavGroup] = []
    for group in groups:
        if not group.allows(role):
            continue
        items = tuple(
            replace(
                item,
                sub_items=tuple(sub for sub in item.sub_items if sub.allows(role)),
            )
            for item in group.items
            if item.allows(role)
        )
        if items:
            filtered.append(replace(group, items=items))
    return tuple(filtered)


def is_public_path(path: str) -> bool:
    return any(path.startswith(prefix) for prefix in PUBLIC_PATHS)


def resolve_redirect(path: str, has_session: bool) -> str | None:
    """
    Session proxy: where to send the browser, or None to let the request through.

    Signed-in users never see public pages; anonymous users land on the login
    page with the original path as callbackUrl.
    """
    public = is_public_path(path)
    if public and has_session:
        return HOME_PATH
    if public:
        return None
    if not has_session:
        return f"{LOGIN_PATH}?{urlencode({'callbackUrl': path})}"
    return None


def resolve_page_title(
    path: str, tree: Iterable[NavGroup] = SIDEBAR_ITEMS
) -> str:
    """Title of the most specific (longest URL) entry matching the path."""
    best: NavMainItem | NavSubItem | None = None
    for entry in iter_entries(tree):
        if path_matches(path, entry.url) and (
            best is None or len(entry.url) > len(best.url)
        ):
            best = entry
    if best is None:
        return APP_NAME
    return best.title
