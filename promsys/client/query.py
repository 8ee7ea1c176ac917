"""
Name: Query Cache (QueryClient)

Responsibilities:
  - Cache server data under tuple keys and hand it to observers (mounted views)
  - Refetch stale or invalidated queries that are observed
  - Retry queries on transient failures; run mutations exactly once
  - Drive interval refetches (unread-count polling) through tick()

Collaborators:
  - client.retry.create_query_retry (tenacity)
  - client.resources.*: fetchers and invalidation keys per resource

Constraints:
  - Single-threaded; no serialization of racing mutations (last write wins)
  - Results are delivered only to observers still watching; an observer that
    unwatched never sees a late result

Notes:
  - Keys are tuples; dict parts are frozen into sorted (key, value) tuples with
    None values dropped, so {"status": None} and {} hash the same
  - invalidate_queries(prefix) matches every key starting with prefix unless
    exact=True
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterable, Optional

from ..crosscutting.config import get_settings
from ..crosscutting.logger import logger
from .retry import create_query_retry

QueryKey = tuple
Fetcher = Callable[[], Any]


def _freeze(part: Any) -> Any:
    if isinstance(part, dict):
        return tuple(
            sorted((k, _freeze(v)) for k, v in part.items() if v is not None)
        )
    if isinstance(part, (list, tuple)):
        return tuple(_freeze(p) for p in part)
    if isinstance(part, Enum):
        return part.value
    return part


def make_key(*parts: Any) -> QueryKey:
    return tuple(_freeze(p) for p in parts)


def key_matches(key: QueryKey, prefix: QueryKey, *, exact: bool = False) -> bool:
    prefix = make_key(*prefix)
    if exact:
        return key == prefix
    return key[: len(prefix)] == prefix


class QueryStatus(str, Enum):
    IDLE = "idle"
    SUCCESS = "success"
    ERROR = "error"


@dataclass
class QueryState:
    key: QueryKey
    fetcher: Fetcher
    data: Any = None
    error: Optional[BaseException] = None
    status: QueryStatus = QueryStatus.IDLE
    is_stale: bool = True
    updated_at: Optional[float] = None
    fetch_count: int = 0
    observers: list["QueryObserver"] = field(default_factory=list)


@dataclass(eq=False)
class QueryObserver:
    """One mounted view watching a key."""

    key: QueryKey
    refetch_interval: Optional[float] = None
    on_change: Optional[Callable[["QueryObserver"], None]] = None
    active: bool = True
    data: Any = None
    error: Optional[BaseException] = None
    last_fetched_at: Optional[float] = None


class QueryClient:
    def __init__(
        self,
        *,
        retries: int | None = None,
        retry_delay: float = 1.0,
        stale_time: float = 0.0,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self._queries: dict[QueryKey, QueryState] = {}
        self._retries = get_settings().query_retry_attempts if retries is None else retries
        self._retry_delay = retry_delay
        self._stale_time = stale_time
        self._clock = clock
        self._sleep = sleep

    # ------------------------------------------------------------------
    # Cache access
    # ------------------------------------------------------------------

    def get_state(self, key: QueryKey) -> QueryState | None:
        return self._queries.get(make_key(*key))

    def get_query_data(self, key: QueryKey) -> Any:
        state = self.get_state(key)
        return state.data if state else None

    def set_query_data(self, key: QueryKey, data: Any) -> None:
        state = self._ensure(make_key(*key), fetcher=lambda: data)
        self._store(state, data)

    def keys(self) -> list[QueryKey]:
        return list(self._queries)

    def _ensure(self, key: QueryKey, fetcher: Fetcher) -> QueryState:
        state = self._queries.get(key)
        if state is None:
            state = QueryState(key=key, fetcher=fetcher)
            self._queries[key] = state
        else:
            # R: newest fetcher wins (params captured by the latest render)
            state.fetcher = fetcher
        return state

    def _is_fresh(self, state: QueryState) -> bool:
        if state.status != QueryStatus.SUCCESS or state.is_stale:
            return False
        if state.updated_at is None:
            return False
        return (self._clock() - state.updated_at) < self._stale_time

    # ------------------------------------------------------------------
    # Fetching
    # ------------------------------------------------------------------

    def _run(self, state: QueryState) -> Any:
        retrying = create_query_retry(
            self._retries,
            base_delay=self._retry_delay,
            max_delay=max(self._retry_delay * 30, self._retry_delay),
            sleep=self._sleep,
        )
        state.fetch_count += 1
        try:
            data = retrying(state.fetcher)
        except Exception as exc:
            state.error = exc
            state.status = QueryStatus.ERROR
            for observer in list(state.observers):
                self._deliver(observer, error=exc)
            raise
        self._store(state, data)
        return data

    def _store(self, state: QueryState, data: Any) -> None:
        state.data = data
        state.error = None
        state.status = QueryStatus.SUCCESS
        state.is_stale = False
        state.updated_at = self._clock()
        for observer in list(state.observers):
            self._deliver(observer, data=data)

    def _deliver(
        self,
        observer: QueryObserver,
        *,
        data: Any = None,
        error: BaseException | None = None,
    ) -> None:
        if not observer.active:
            return
        observer.last_fetched_at = self._clock()
        observer.error = error
        if error is None:
            observer.data = data
        if observer.on_change is not None:
            observer.on_change(observer)

    def fetch_query(self, key: QueryKey, fetcher: Fetcher) -> Any:
        """
        Fresh cached data, or fetch (with retries) and cache it.

        Raises:
            The last fetch error once retries are exhausted.
        """
        state = self._ensure(make_key(*key), fetcher)
        if self._is_fresh(state):
            return state.data
        return self._run(state)

    def refetch(self, key: QueryKey) -> Any:
        state = self.get_state(key)
        if state is None:
            return None
        return self._run(state)

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    def watch(
        self,
        key: QueryKey,
        fetcher: Fetcher,
        *,
        refetch_interval: float | None = None,
        on_change: Callable[[QueryObserver], None] | None = None,
    ) -> QueryObserver:
        """Mount a view on `key`; fetches unless fresh data is cached."""
        frozen = make_key(*key)
        state = self._ensure(frozen, fetcher)
        observer = QueryObserver(
            key=frozen, refetch_interval=refetch_interval, on_change=on_change
        )
        state.observers.append(observer)

        if self._is_fresh(state):
            self._deliver(observer, data=state.data)
            return observer
        try:
            self._run(state)
        except Exception as exc:
            # R: the failure is on observer.error; views render it instead of crashing
            logger.info(
                "initial fetch failed",
                extra={"query_key": repr(frozen), "error": str(exc)},
            )
        return observer

    def unwatch(self, observer: QueryObserver) -> None:
        observer.active = False
        state = self._queries.get(observer.key)
        if state is not None and observer in state.observers:
            state.observers.remove(observer)

    def is_observed(self, key: QueryKey) -> bool:
        state = self.get_state(key)
        return bool(state and state.observers)

    # ------------------------------------------------------------------
    # Invalidation
    # ------------------------------------------------------------------

    def invalidate_queries(
        self, prefix: QueryKey = (), *, exact: bool = False
    ) -> list[QueryKey]:
        """
        Mark every matching query stale and refetch the observed ones.

        Returns the keys that were refetched. Refetch failures stay on the
        query state; invalidation itself never raises.
        """
        refetched: list[QueryKey] = []
        for key, state in list(self._queries.items()):
            if not key_matches(key, prefix, exact=exact):
                continue
            state.is_stale = True
            if not state.observers:
                continue
            refetched.append(key)
            try:
                self._run(state)
            except Exception as exc:
                logger.warning(
                    "refetch after invalidation failed",
                    extra={"query_key": repr(key), "error": str(exc)},
                )
        return refetched

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def mutate(
        self,
        fn: Callable[[], Any],
        *,
        invalidate: Iterable[QueryKey] = (),
        exact: bool = False,
    ) -> Any:
        """
        Run a mutation once (never retried), then invalidate on success.

        Raises:
            Whatever fn raises; the cache is left untouched in that case.
        """
        result = fn()
        for prefix in invalidate:
            self.invalidate_queries(prefix, exact=exact)
        return result

    # ------------------------------------------------------------------
    # Polling
    # ------------------------------------------------------------------

    def tick(self, now: float | None = None) -> list[QueryKey]:
        """
        Refetch queries whose interval observers are due.

        Fire-and-forget: failures are logged and kept on the state, the
        previous data stays visible.
        """
        current = self._clock() if now is None else now
        refreshed: list[QueryKey] = []
        for key, state in list(self._queries.items()):
            due = any(
                o.refetch_interval is not None
                and (o.last_fetched_at is None or current - o.last_fetched_at >= o.refetch_interval)
                for o in state.observers
            )
            if not due:
                continue
            refreshed.append(key)
            try:
                self._run(state)
            except Exception as exc:
                logger.info(
                    "interval refetch failed",
                    extra={"query_key": repr(key), "error": str(exc)},
                )
            for observer in state.observers:
                observer.last_fetched_at = current
        return refreshed
