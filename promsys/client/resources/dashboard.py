"""Dashboard queries: ("dashboard", "summary"|"finance"|"projects") and ("calendar", "events", params)."""

from __future__ import annotations

from typing import Any

from .base import Resource

SUMMARY = ("dashboard", "summary")
FINANCE = ("dashboard", "finance")
PROJECTS = ("dashboard", "projects")


def calendar_key(params: dict[str, Any] | None = None) -> tuple:
    return ("calendar", "events", params)


class DashboardResource(Resource):
    def summary(self) -> dict[str, Any]:
        return self._query(SUMMARY, lambda: self.api.get("/dashboard/summary"))

    def finance(self) -> dict[str, Any]:
        return self._query(FINANCE, lambda: self.api.get("/dashboard/finance"))

    def projects(self) -> dict[str, Any]:
        return self._query(PROJECTS, lambda: self.api.get("/dashboard/projects"))

    def calendar_events(
        self, start: str | None = None, end: str | None = None
    ) -> list[dict[str, Any]]:
        params = {k: v for k, v in {"start": start, "end": end}.items() if v}
        return self._query(
            calendar_key(params or None),
            lambda: self.api.get("/calendar/events", params=params),
        )
