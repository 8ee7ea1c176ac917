"""Request metrics recorded by the middleware and exposed on /metrics."""

import pytest

from promsys.crosscutting.metrics import _normalize_endpoint, _status_bucket

pytestmark = pytest.mark.unit


def test_metrics_exposes_request_counters(client, headers_for, finance):
    client.get("/api/invoices", headers=headers_for(finance))
    client.get("/api/invoices")

    res = client.get("/metrics")

    assert res.status_code == 200
    assert res.headers["content-type"].startswith("text/plain")
    body = res.text
    assert "promsys_requests_total" in body
    assert "promsys_request_latency_seconds_bucket" in body
    assert 'endpoint="/api/invoices"' in body
    assert 'status="2xx"' in body
    assert 'status="4xx"' in body


def test_metrics_route_is_not_in_openapi(client):
    assert "/metrics" not in client.get("/openapi.json").json()["paths"]


@pytest.mark.parametrize(
    "path, expected",
    [
        ("/api/tasks", "/api/tasks"),
        ("/api/tasks/42/status", "/api/tasks/{id}/status"),
        (
            "/api/projects/3f2a1c9e-8b7d-4e6f-a5c4-1d2e3f4a5b6c/members",
            "/api/projects/{id}/members",
        ),
        ("/api/invoices/INV-20240307-0001", "/api/invoices/INV-20240307-0001"),
    ],
)
def test_endpoint_ids_collapse(path, expected):
    assert _normalize_endpoint(path) == expected


def test_status_bucket():
    assert _status_bucket(201) == "2xx"
    assert _status_bucket(404) == "4xx"
    assert _status_bucket(503) == "5xx"
