"""ApiClient: envelope unwrapping, error mapping and uploads."""

import httpx
import pytest

from promsys.client.api import ApiError, TransportError, UploadFile
from promsys.crosscutting.config import get_settings
from promsys.domain.task_workflow import TaskStatus


pytestmark = pytest.mark.unit


def test_get_unwraps_data(api, server):
    server.add("GET", "/tasks/t1", server.ok({"id": "t1"}))
    assert api.get("/tasks/t1") == {"id": "t1"}


def test_get_page_keeps_paging(api, server):
    paging = {"current_page": 2, "size": 5, "total_page": 3}
    server.add("GET", "/tasks", server.ok([{"id": "t1"}], paging))
    page = api.get_page("/tasks", params={"page": 2, "size": 5, "status": None})
    assert page.data == [{"id": "t1"}]
    assert page.paging == paging
    assert dict(server.requests[0].url.params) == {"page": "2", "size": "5"}


def test_enum_params_are_unwrapped(api, server):
    server.add("GET", "/tasks", server.ok([]))
    api.get("/tasks", params={"status": TaskStatus.IN_PROGRESS})
    assert server.requests[0].url.params["status"] == "IN_PROGRESS"


def test_problem_detail_becomes_message(api, server):
    server.add("PATCH", "/tasks/t1/status", server.problem(409, "Task cannot move", "TRANSITION_NOT_ALLOWED"))
    with pytest.raises(ApiError) as exc_info:
        api.patch("/tasks/t1/status", {"status": "DONE"})
    error = exc_info.value
    assert error.status_code == 409
    assert error.code == "TRANSITION_NOT_ALLOWED"
    assert error.message == "Task cannot move"
    assert str(error) == "Task cannot move (HTTP 409)"


def test_validation_detail_list_is_joined(api, server):
    server.add(
        "POST",
        "/tasks",
        (422, {"detail": [{"loc": ["body", "title"], "msg": "field required"}, {"msg": "bad date"}]}),
    )
    with pytest.raises(ApiError) as exc_info:
        api.post("/tasks", {})
    assert exc_info.value.message == "field required; bad date"


def test_non_json_error_uses_body_text():
    transport = httpx.MockTransport(lambda request: httpx.Response(502, text="Bad gateway"))
    from promsys.client.api import ApiClient

    with ApiClient("http://test", transport=transport) as client:
        with pytest.raises(ApiError) as exc_info:
            client.get("/tasks")
    assert exc_info.value.message == "Bad gateway"


def test_network_failure_is_transport_error(api, server):
    server.add("GET", "/tasks", httpx.ConnectError("connection refused"))
    with pytest.raises(TransportError):
        api.get("/tasks")


def test_session_cookie_is_sent(api, server):
    server.add("GET", "/auth/session", server.ok({"user": None}))
    api.get("/auth/session")
    cookie = server.requests[0].headers["cookie"]
    assert f"{get_settings().session_cookie_name}=token-123" in cookie

    api.set_session_token(None)
    api.get("/auth/session")
    assert "cookie" not in server.requests[1].headers


def test_upload_is_multipart_with_fields(api, server):
    server.add("POST", "/reimbursements/r1/attachments", (201, {"data": {"id": "r1"}}))
    api.upload(
        "/reimbursements/r1/attachments",
        UploadFile("proof.png", b"\x89PNG", "image/png"),
        fields={"type": "PAYMENT"},
    )
    request = server.requests[0]
    assert request.headers["content-type"].startswith("multipart/form-data")
    body = request.read()
    assert b'name="file"; filename="proof.png"' in body
    assert b'name="type"' in body
    assert b"PAYMENT" in body


def test_empty_response_body(api, server):
    server.add("DELETE", "/tasks/t1", (200, None))
    assert api.delete("/tasks/t1") is None
