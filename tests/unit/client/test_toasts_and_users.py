"""Toaster formatting and the user administration table actions."""

import json

import pytest

from promsys.client.api import ApiError, TransportError
from promsys.client.resources import UserAdminResource
from promsys.client.toasts import Toaster, ToastKind
from promsys.domain.roles import UserRole

pytestmark = pytest.mark.unit


class TestToaster:
    def test_api_errors_carry_message_and_status(self):
        toaster = Toaster()
        toast = toaster.error_from(ApiError(409, "Email already registered", "CONFLICT"))
        assert toast.message == "Email already registered (HTTP 409)"
        assert toast.status_code == 409

    def test_transport_errors_have_no_status(self):
        toast = Toaster().error_from(TransportError("Network error: refused"))
        assert toast.message == "Network error: refused"
        assert toast.status_code is None

    def test_unknown_errors_use_the_fallback(self):
        toast = Toaster().error_from(RuntimeError("boom"), "Failed to save")
        assert toast.message == "Failed to save"

    def test_listener_sees_every_toast(self):
        seen = []
        toaster = Toaster(listener=seen.append)
        toaster.success("Saved")
        toaster.error("Nope")
        assert [t.kind for t in seen] == [ToastKind.SUCCESS, ToastKind.ERROR]
        toaster.clear()
        assert toaster.toasts == []


class TestUserAdmin:
    @pytest.fixture
    def toaster(self):
        return Toaster()

    @pytest.fixture
    def admin_users(self, api, queries, toaster):
        return UserAdminResource(api, queries, toaster)

    def test_create_toasts_and_refreshes_the_table(self, admin_users, server, queries, toaster):
        server.add(
            "GET",
            "/auth/admin/users",
            server.ok([]),
            server.ok([{"id": "u9", "email": "new@example.com"}]),
        )
        server.add("POST", "/auth/admin/users", (201, {"data": {"id": "u9"}}))
        table = queries.watch(("users",), lambda: admin_users.api.get("/auth/admin/users"))

        created = admin_users.create(name="New", email="new@example.com", role=UserRole.FINANCE)

        assert created == {"id": "u9"}
        assert json.loads(server.requests[1].content) == {
            "name": "New",
            "email": "new@example.com",
            "role": "FINANCE",
        }
        assert table.data == [{"id": "u9", "email": "new@example.com"}]
        assert toaster.successes[0].message == "User created successfully"

    def test_failed_action_toasts_the_server_message(self, admin_users, server, toaster):
        server.add(
            "POST",
            "/auth/admin/users/u1/role",
            server.problem(409, "You cannot change your own role", "CONFLICT"),
        )
        assert admin_users.set_role("u1", UserRole.EMPLOYEES) is None
        assert toaster.errors[0].message == "You cannot change your own role (HTTP 409)"
        assert toaster.successes == []

    def test_ban_sends_the_reason(self, admin_users, server, toaster):
        server.add("POST", "/auth/admin/users/u2/ban", server.ok({"id": "u2", "banned": True}))
        admin_users.ban("u2", "spam")
        assert json.loads(server.requests[0].content) == {"banReason": "spam"}
        assert toaster.successes[0].message == "User banned successfully"

    def test_remove(self, admin_users, server, toaster):
        server.add("DELETE", "/auth/admin/users/u3", (204, None))
        admin_users.remove("u3")
        assert server.calls("DELETE", "/auth/admin/users/u3") == 1
        assert toaster.successes[0].message == "User deleted successfully"
