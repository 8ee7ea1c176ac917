"""
Name: Resource Base

Responsibilities:
  - Share the ApiClient + QueryClient pair between resource modules
  - Build camelCase JSON payloads (only the fields the caller passed)
  - Route reads through the query cache and writes through mutate()

Notes:
  - Keys and invalidation prefixes live next to each resource so they can be
    read side by side with the endpoints they cache
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Iterable

from pydantic.alias_generators import to_camel

from ..api import ApiClient
from ..query import QueryClient, QueryKey, QueryObserver


def jsonable(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [jsonable(v) for v in value]
    return value


def camel_payload(fields: dict[str, Any], *, drop_none: bool = False) -> dict[str, Any]:
    return {
        to_camel(name): jsonable(value)
        for name, value in fields.items()
        if not (drop_none and value is None)
    }


class Resource:
    def __init__(self, api: ApiClient, queries: QueryClient):
        self.api = api
        self.queries = queries

    def _query(self, key: QueryKey, fetcher: Callable[[], Any]) -> Any:
        return self.queries.fetch_query(key, fetcher)

    def _watch(
        self,
        key: QueryKey,
        fetcher: Callable[[], Any],
        *,
        refetch_interval: float | None = None,
        on_change: Callable[[QueryObserver], None] | None = None,
    ) -> QueryObserver:
        return self.queries.watch(
            key, fetcher, refetch_interval=refetch_interval, on_change=on_change
        )

    def _mutate(
        self,
        fn: Callable[[], Any],
        invalidate: Iterable[QueryKey],
        *,
        exact: bool = False,
    ) -> Any:
        return self.queries.mutate(fn, invalidate=invalidate, exact=exact)
