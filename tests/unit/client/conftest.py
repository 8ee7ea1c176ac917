"""
Name: Dashboard Client Fixtures

Responsibilities:
  - FakeServer: scripted httpx.MockTransport that records every request
  - ApiClient/QueryClient wired to it with zero retry delays and a fake clock

Notes:
  - server.ok() / server.problem() build envelope and problem+json bodies
  - Routes are keyed by (METHOD, path without the /api prefix); a route's
    responses are consumed in order and the last one repeats
"""

from __future__ import annotations

from typing import Any

import httpx
import pytest

from promsys.client.api import ApiClient
from promsys.client.query import QueryClient


class FakeServer:
    def __init__(self):
        self.routes: dict[tuple[str, str], list[Any]] = {}
        self.requests: list[httpx.Request] = []

    @staticmethod
    def ok(data: Any = None, paging: dict | None = None) -> tuple[int, dict]:
        body: dict[str, Any] = {"data": data, "meta": {"timestamp": "2024-01-01T00:00:00Z"}}
        if paging is not None:
            body["paging"] = paging
        return 200, body

    @staticmethod
    def problem(status: int, detail: str, code: str = "ERROR") -> tuple[int, dict]:
        return status, {"status": status, "detail": detail, "code": code, "title": code}

    def add(self, method: str, path: str, *responses: Any) -> None:
        self.routes[(method.upper(), path)] = list(responses)

    def calls(self, method: str | None = None, path: str | None = None) -> int:
        return sum(
            1
            for r in self.requests
            if (method is None or r.method == method.upper())
            and (path is None or self._path(r) == path)
        )

    @staticmethod
    def _path(request: httpx.Request) -> str:
        path = request.url.path
        return path[len("/api"):] if path.startswith("/api") else path

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        queue = self.routes.get((request.method, self._path(request)))
        if not queue:
            return httpx.Response(404, json={"detail": "Not Found", "code": "NOT_FOUND"})
        spec = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(spec, Exception):
            raise spec
        status, body = spec
        return httpx.Response(status, json=body)


class FakeClock:
    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def server() -> FakeServer:
    return FakeServer()


@pytest.fixture
def api(server):
    client = ApiClient(
        "http://test", session_token="token-123", transport=httpx.MockTransport(server.handler)
    )
    yield client
    client.close()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def queries(clock) -> QueryClient:
    return QueryClient(retries=3, retry_delay=0, clock=clock, sleep=lambda _: None)
