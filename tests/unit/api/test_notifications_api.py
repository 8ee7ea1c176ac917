"""Notification inbox endpoints."""

import pytest

pytestmark = pytest.mark.unit


def test_unread_count_follows_workflow_events(
    client, headers_for, manager, employee, project
):
    client.post(
        f"/api/projects/{project.id}/tasks",
        json={"title": "Audit", "assignedToId": employee.id, "deadline": "2030-01-01T00:00:00Z"},
        headers=headers_for(manager),
    )
    headers = headers_for(employee)
    count = client.get("/api/notifications/unread-count", headers=headers)
    assert count.json()["data"] == {"count": 1}

    (notification,) = client.get("/api/notifications", headers=headers).json()["data"]
    assert notification["type"] == "TASK_ASSIGNED"
    read = client.patch(f"/api/notifications/{notification['id']}/read", headers=headers)
    assert read.json()["data"]["isRead"] is True

    count = client.get("/api/notifications/unread-count", headers=headers)
    assert count.json()["data"] == {"count": 0}


def test_mark_all_read(client, headers_for, employee):
    res = client.patch("/api/notifications/read-all", headers=headers_for(employee))
    assert res.json()["data"] == {"updated": 0}
