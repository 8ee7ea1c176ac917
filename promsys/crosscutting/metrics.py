"""
Name: Prometheus Request Metrics

Responsibilities:
  - Count HTTP requests per endpoint, method and status class
  - Observe request latency per endpoint and method
  - Render the registry in the Prometheus text exposition format

Collaborators:
  - prometheus_client (own CollectorRegistry, never the global one)
  - crosscutting/middleware.py: RequestContextMiddleware records every request
  - api/main.py: GET /metrics

Constraints:
  - Ids in paths collapse to {id} so label cardinality stays bounded
"""

from __future__ import annotations

import re

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

LATENCY_BUCKETS = (0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0)

_UUID_SEGMENT = re.compile(
    r"/[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
)
_NUMERIC_SEGMENT = re.compile(r"/\d+(?=/|$)")

_registry = CollectorRegistry()

requests_total = Counter(
    "promsys_requests_total",
    "Total HTTP requests",
    ["endpoint", "method", "status"],
    registry=_registry,
)

request_latency_seconds = Histogram(
    "promsys_request_latency_seconds",
    "HTTP request latency in seconds",
    ["endpoint", "method"],
    buckets=LATENCY_BUCKETS,
    registry=_registry,
)


def _normalize_endpoint(path: str) -> str:
    path = _UUID_SEGMENT.sub("/{id}", path)
    return _NUMERIC_SEGMENT.sub("/{id}", path)


def _status_bucket(status_code: int) -> str:
    return f"{status_code // 100}xx"


def record_request_metrics(
    endpoint: str, method: str, status_code: int, latency_seconds: float
) -> None:
    normalized = _normalize_endpoint(endpoint)
    requests_total.labels(
        endpoint=normalized, method=method, status=_status_bucket(status_code)
    ).inc()
    request_latency_seconds.labels(endpoint=normalized, method=method).observe(
        latency_seconds
    )


def get_metrics_response() -> tuple[bytes, str]:
    """Return (body, content_type) for the /metrics endpoint."""
    return generate_latest(_registry), CONTENT_TYPE_LATEST
