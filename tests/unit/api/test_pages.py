"""Page shells: session proxy redirects and the role gate."""

import pytest

from promsys.crosscutting.config import get_settings
from promsys.domain.navigation import HOME_PATH, LOGIN_PATH

pytestmark = pytest.mark.unit


def _get(client, path, headers=None):
    return client.get(path, headers=headers, follow_redirects=False)


def test_anonymous_is_sent_to_login(client):
    res = _get(client, "/dashboard/finance")
    assert res.status_code == 307
    assert res.headers["location"].startswith(f"{LOGIN_PATH}?callbackUrl=")


def test_signed_in_user_skips_login(client, headers_for, employee):
    res = _get(client, LOGIN_PATH, headers_for(employee))
    assert res.status_code == 307
    assert res.headers["location"] == HOME_PATH


def test_dashboard_root_redirects_home(client, headers_for, manager):
    res = _get(client, "/dashboard", headers_for(manager))
    assert res.headers["location"] == HOME_PATH


def test_employee_denied_project_list(client, headers_for, employee):
    res = _get(client, "/dashboard/project-management/project", headers_for(employee))
    assert res.status_code == 403
    assert res.json()["view"] == "unauthorized"


def test_finance_page_for_finance(client, headers_for, finance):
    res = _get(client, "/dashboard/finance", headers_for(finance))
    assert res.status_code == 200
    body = res.json()
    assert body["title"] == "Finance"
    assert body["user"]["role"] == "FINANCE"
    labels = [group["label"] for group in body["sidebar"]]
    assert "Settings" in labels


def test_employee_sidebar_hides_settings(client, headers_for, employee):
    res = _get(client, "/dashboard/project-management/tasks", headers_for(employee))
    assert res.status_code == 200
    assert "Settings" not in [g["label"] for g in res.json()["sidebar"]]


def test_stale_cookie_falls_back_to_login(client):
    client.cookies.set(get_settings().session_cookie_name, "garbage")
    res = _get(client, "/dashboard/finance")
    assert res.status_code == 307
    assert res.headers["location"] == LOGIN_PATH


def test_unauthorized_page_is_public(client):
    res = _get(client, "/unauthorized")
    assert res.status_code == 200
    assert res.json()["homeUrl"] == HOME_PATH
