"""QueryClient: caching, retries, invalidation, observers and polling."""

import pytest

from promsys.client.api import ApiError, TransportError
from promsys.client.query import QueryClient, QueryStatus, key_matches, make_key
from promsys.client.resources import NotificationResource
from promsys.client.retry import is_transient_error

pytestmark = pytest.mark.unit


class ScriptedFetcher:
    """Returns/raises the scripted outcomes in order; the last one repeats."""

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls = 0

    def __call__(self):
        self.calls += 1
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class TestKeys:
    def test_dict_parts_ignore_none_and_order(self):
        assert make_key("invoices", {"type": "INCOME", "status": None}) == make_key(
            "invoices", {"type": "INCOME"}
        )
        assert make_key("x", {"b": 1, "a": 2}) == make_key("x", {"a": 2, "b": 1})

    def test_prefix_matching(self):
        key = make_key("tasks", "project", "p1", 1, 10)
        assert key_matches(key, ("tasks",))
        assert key_matches(key, ("tasks", "project"))
        assert not key_matches(key, ("tasks",), exact=True)
        assert not key_matches(key, ("projects",))


class TestRetries:
    @pytest.mark.parametrize(
        "exc, transient",
        [
            (TransportError("down"), True),
            (ApiError(503, "unavailable"), True),
            (ApiError(429, "slow down"), True),
            (ApiError(408, "timeout"), True),
            (ApiError(404, "missing"), False),
            (ApiError(409, "conflict"), False),
            (ValueError("bug"), False),
        ],
    )
    def test_transient_classification(self, exc, transient):
        assert is_transient_error(exc) is transient

    def test_transient_failures_are_retried(self, queries):
        fetcher = ScriptedFetcher(ApiError(503, "x"), TransportError("y"), {"ok": True})
        assert queries.fetch_query(("summary",), fetcher) == {"ok": True}
        assert fetcher.calls == 3

    def test_retries_are_bounded(self, queries):
        fetcher = ScriptedFetcher(ApiError(500, "boom"))
        with pytest.raises(ApiError):
            queries.fetch_query(("summary",), fetcher)
        # R: three retries after the first attempt
        assert fetcher.calls == 4
        assert queries.get_state(("summary",)).status == QueryStatus.ERROR

    def test_client_errors_fail_fast(self, queries):
        fetcher = ScriptedFetcher(ApiError(403, "forbidden"))
        with pytest.raises(ApiError):
            queries.fetch_query(("invoices",), fetcher)
        assert fetcher.calls == 1

    def test_zero_retries(self, clock):
        client = QueryClient(retries=0, retry_delay=0, clock=clock, sleep=lambda _: None)
        fetcher = ScriptedFetcher(TransportError("down"))
        with pytest.raises(TransportError):
            client.fetch_query(("x",), fetcher)
        assert fetcher.calls == 1

    def test_mutations_run_once(self, queries):
        fetcher = ScriptedFetcher(["cached"])
        queries.watch(("tasks", 1, 10), fetcher)
        mutation = ScriptedFetcher(ApiError(503, "unavailable"))

        with pytest.raises(ApiError):
            queries.mutate(mutation, invalidate=[("tasks",)])
        assert mutation.calls == 1
        # R: failed mutation leaves the cache alone
        assert fetcher.calls == 1
        assert queries.get_query_data(("tasks", 1, 10)) == ["cached"]


class TestCaching:
    def test_fresh_data_is_served_from_cache(self, clock):
        client = QueryClient(retries=0, stale_time=60, clock=clock, sleep=lambda _: None)
        fetcher = ScriptedFetcher("v1")
        client.fetch_query(("k",), fetcher)
        clock.advance(30)
        client.fetch_query(("k",), fetcher)
        assert fetcher.calls == 1
        clock.advance(31)
        client.fetch_query(("k",), fetcher)
        assert fetcher.calls == 2

    def test_set_query_data(self, queries):
        queries.set_query_data(("k",), 5)
        assert queries.get_query_data(("k",)) == 5


class TestInvalidation:
    def test_prefix_refetches_observed_queries(self, queries):
        list_fetcher = ScriptedFetcher(["a"], ["a", "b"])
        detail_fetcher = ScriptedFetcher({"id": "t1"})
        project_fetcher = ScriptedFetcher(["p"])
        tasks_list = queries.watch(("tasks", 1, 10), list_fetcher)
        queries.watch(("tasks", "t1"), detail_fetcher)
        queries.watch(("projects", 1, 10), project_fetcher)

        refetched = queries.invalidate_queries(("tasks",))

        assert set(refetched) == {("tasks", 1, 10), ("tasks", "t1")}
        assert tasks_list.data == ["a", "b"]
        assert project_fetcher.calls == 1

    def test_exact_match_only(self, queries):
        queries.watch(("projects", "p1"), ScriptedFetcher({}))
        activities = ScriptedFetcher([])
        queries.watch(("projects", "p1", "activities"), activities)

        refetched = queries.invalidate_queries(("projects", "p1", "activities"), exact=True)
        assert refetched == [("projects", "p1", "activities")]
        assert activities.calls == 2

    def test_unobserved_queries_are_only_marked_stale(self, queries):
        fetcher = ScriptedFetcher("v")
        queries.fetch_query(("tasks", 1, 10), fetcher)
        assert queries.invalidate_queries(("tasks",)) == []
        assert fetcher.calls == 1
        assert queries.get_state(("tasks", 1, 10)).is_stale

    def test_refetch_failure_does_not_raise(self, queries):
        fetcher = ScriptedFetcher("v1", ApiError(404, "gone"))
        observer = queries.watch(("tasks", "t1"), fetcher)
        queries.invalidate_queries(("tasks",))
        assert isinstance(observer.error, ApiError)
        assert observer.data == "v1"


class TestObservers:
    def test_unwatched_observer_never_sees_late_results(self, queries):
        seen = []
        fetcher = ScriptedFetcher("v1", "v2")
        observer = queries.watch(("k",), fetcher, on_change=lambda o: seen.append(o.data))
        queries.unwatch(observer)
        queries.refetch(("k",))

        assert seen == ["v1"]
        assert observer.data == "v1"
        assert not queries.is_observed(("k",))

    def test_initial_failure_lands_on_observer(self, queries):
        observer = queries.watch(("k",), ScriptedFetcher(ApiError(404, "missing")))
        assert isinstance(observer.error, ApiError)
        assert observer.data is None


class TestPolling:
    def test_tick_refetches_on_interval(self, queries, clock):
        fetcher = ScriptedFetcher(1, 2, 3)
        observer = queries.watch(("notifications", "unread-count"), fetcher, refetch_interval=30)
        assert observer.data == 1

        clock.advance(10)
        assert queries.tick() == []
        clock.advance(20)
        assert queries.tick() == [("notifications", "unread-count")]
        assert observer.data == 2

        clock.advance(5)
        assert queries.tick() == []
        assert fetcher.calls == 2

    def test_tick_keeps_previous_data_on_failure(self, queries, clock):
        fetcher = ScriptedFetcher(4, TransportError("offline"))
        observer = queries.watch(("badge",), fetcher, refetch_interval=30)
        clock.advance(30)
        queries.tick()
        assert observer.data == 4
        assert isinstance(observer.error, TransportError)

    def test_unwatched_interval_stops_polling(self, queries, clock):
        fetcher = ScriptedFetcher(1)
        observer = queries.watch(("badge",), fetcher, refetch_interval=30)
        queries.unwatch(observer)
        clock.advance(60)
        assert queries.tick() == []
        assert fetcher.calls == 1


class TestUnreadBadge:
    def test_badge_polls_the_unread_count(self, api, server, queries, clock):
        server.add(
            "GET",
            "/notifications/unread-count",
            server.ok({"count": 2}),
            server.ok({"count": 5}),
        )
        seen = []
        badge = NotificationResource(api, queries).watch_unread_count(
            interval=30, on_change=lambda o: seen.append(o.data)
        )
        assert badge.data == 2

        clock.advance(30)
        queries.tick()
        assert seen == [2, 5]
        assert server.calls("GET", "/notifications/unread-count") == 2

    def test_mark_all_read_refreshes_the_badge(self, api, server, queries):
        notifications = NotificationResource(api, queries)
        server.add(
            "GET",
            "/notifications/unread-count",
            server.ok({"count": 3}),
            server.ok({"count": 0}),
        )
        server.add("PATCH", "/notifications/read-all", server.ok({"updated": 3}))
        badge = notifications.watch_unread_count(interval=30)

        notifications.mark_all_read()
        assert badge.data == 0
