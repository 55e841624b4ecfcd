"""Client query cache: staleness, retries, invalidation and cancellation."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from lifetracker.client.query_cache import QueryClient, freeze, matches

pytestmark = pytest.mark.unit


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return QueryClient(stale_time=60, clock=clock)


# ==================== Key Tests ====================


def test_freeze_is_order_independent():
    """Should hash equal filter dicts identically regardless of key order."""
    assert freeze({"a": 1, "b": [1, 2]}) == freeze({"b": [1, 2], "a": 1})
    assert freeze({"a": 1, "b": None}) == freeze({"a": 1})
    hash(freeze({"nested": {"x": [1]}}))


def test_prefix_matching():
    """Should match keys by tuple prefix."""
    assert matches(("goals", "list", ()), ("goals",))
    assert matches(("goals", "list", ()), ("goals", "list"))
    assert not matches(("goals", "detail", "1"), ("goals", "list"))
    assert not matches(("habits",), ("goals",))


# ==================== Fetch Tests ====================


def test_fresh_data_is_served_from_cache(cache, clock):
    """Should not refetch within the stale time."""
    fetcher = MagicMock(return_value={"v": 1})
    assert cache.fetch_query(("k",), fetcher) == {"v": 1}
    clock.advance(30)
    assert cache.fetch_query(("k",), fetcher) == {"v": 1}
    assert fetcher.call_count == 1


def test_stale_data_is_refetched(cache, clock):
    """Should refetch once the stale time has elapsed."""
    fetcher = MagicMock(side_effect=[{"v": 1}, {"v": 2}])
    cache.fetch_query(("k",), fetcher)
    clock.advance(61)
    assert cache.fetch_query(("k",), fetcher) == {"v": 2}


def test_per_query_stale_time(cache, clock):
    """Should let a query override the default stale time."""
    fetcher = MagicMock(side_effect=[1, 2])
    cache.fetch_query(("k",), fetcher, stale_time=300)
    clock.advance(120)
    assert cache.fetch_query(("k",), fetcher, stale_time=300) == 1


def test_disabled_query_never_fetches(cache):
    """Should skip the fetcher for disabled queries."""
    fetcher = MagicMock()
    assert cache.fetch_query(("k",), fetcher, enabled=False) is None
    fetcher.assert_not_called()


def test_retries_once_then_succeeds(cache):
    """Should retry a failed fetch once."""
    fetcher = MagicMock(side_effect=[RuntimeError("flaky"), {"v": 1}])
    assert cache.fetch_query(("k",), fetcher) == {"v": 1}
    assert fetcher.call_count == 2


def test_gives_up_after_retry(cache):
    """Should raise once retries are exhausted."""
    fetcher = MagicMock(side_effect=RuntimeError("down"))
    with pytest.raises(RuntimeError):
        cache.fetch_query(("k",), fetcher)
    assert fetcher.call_count == 2
    assert cache.get_query_data(("k",)) is None


def test_cached_data_is_isolated_from_callers(cache):
    """Should hand out copies so callers cannot mutate the cache."""
    cache.set_query_data(("k",), {"items": [1]})
    data = cache.get_query_data(("k",))
    data["items"].append(2)
    assert cache.get_query_data(("k",)) == {"items": [1]}


# ==================== Invalidation Tests ====================


def test_invalidate_forces_refetch(cache):
    """Should refetch invalidated queries even while fresh."""
    fetcher = MagicMock(side_effect=[1, 2])
    cache.fetch_query(("goals", "list", ()), fetcher)
    assert cache.invalidate_queries(("goals", "list")) == 1
    assert cache.fetch_query(("goals", "list", ()), fetcher) == 2


def test_invalidate_only_matching_prefix(cache):
    """Should leave queries outside the prefix fresh."""
    cache.set_query_data(("goals", "detail", "1"), {"id": "1"})
    cache.set_query_data(("goals", "list", ()), {"items": []})
    cache.invalidate_queries(("goals", "list"))
    assert cache.is_stale(("goals", "list", ())) is True
    assert cache.is_stale(("goals", "detail", "1")) is False


def test_set_query_data_accepts_updater(cache):
    """Should pass the current value to an updater callable."""
    cache.set_query_data(("n",), 1)
    cache.set_query_data(("n",), lambda current: current + 1)
    assert cache.get_query_data(("n",)) == 2


def test_cancel_discards_in_flight_result(cache):
    """Should drop the result of a fetch cancelled while running."""
    cache.set_query_data(("k",), "optimistic")
    cache.invalidate_queries(("k",))

    def fetcher():
        cache.cancel_queries(("k",))
        return "server"

    assert cache.fetch_query(("k",), fetcher) == "optimistic"
    assert cache.get_query_data(("k",)) == "optimistic"


def test_remove_and_clear(cache):
    """Should forget queries by prefix or entirely."""
    cache.set_query_data(("a", 1), 1)
    cache.set_query_data(("a", 2), 2)
    cache.set_query_data(("b",), 3)
    cache.remove_queries(("a",))
    assert cache.get_queries_data(("a",)) == []
    assert cache.get_query_data(("b",)) == 3
    cache.clear()
    assert cache.get_query_data(("b",)) is None
