"""Client-side cache of server state keyed by tuples.

Keys are hierarchical tuples such as ``("goals", "list", ...)``; every
operation taking a ``prefix`` applies to all keys that start with it. Fetches
serve cached data while it is fresh, retry failed fetches ``retry`` times and
drop results for keys cancelled while the fetch was running.
"""

from __future__ import annotations

import copy
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Hashable, List, Optional, Tuple

logger = logging.getLogger(__name__)

QueryKey = Tuple[Hashable, ...]

DEFAULT_STALE_TIME = 5 * 60  # seconds
DEFAULT_RETRY = 1


def freeze(value: Any) -> Hashable:
    """Turn filter dicts and lists into a hashable, order-independent form."""
    if isinstance(value, dict):
        return tuple(sorted((key, freeze(item)) for key, item in value.items() if item is not None))
    if isinstance(value, (list, tuple, set)):
        return tuple(freeze(item) for item in value)
    return value


def matches(key: QueryKey, prefix: QueryKey) -> bool:
    return key[: len(prefix)] == tuple(prefix)


@dataclass
class QueryState:
    data: Any = None
    has_data: bool = False
    updated_at: float = 0.0
    invalidated: bool = False
    error: Optional[BaseException] = None
    fetch_count: int = 0
    # Bumped by cancel_queries; a fetch started under an older generation is discarded.
    generation: int = 0


class QueryClient:
    def __init__(
        self,
        stale_time: float = 0.0,
        retry: int = DEFAULT_RETRY,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.stale_time = stale_time
        self.retry = retry
        self.clock = clock
        self._queries: Dict[QueryKey, QueryState] = {}

    def _state(self, key: QueryKey) -> QueryState:
        return self._queries.setdefault(tuple(key), QueryState())

    def is_stale(self, key: QueryKey, stale_time: Optional[float] = None) -> bool:
        state = self._queries.get(tuple(key))
        if state is None or not state.has_data or state.invalidated:
            return True
        window = self.stale_time if stale_time is None else stale_time
        return self.clock() - state.updated_at >= window

    def fetch_query(
        self,
        key: QueryKey,
        fetcher: Callable[[], Any],
        *,
        stale_time: Optional[float] = None,
        enabled: bool = True,
    ) -> Any:
        """Return cached data while fresh, otherwise call ``fetcher``.

        Disabled queries never fetch and return whatever is cached.
        """
        key = tuple(key)
        if not enabled:
            return self.get_query_data(key)
        if not self.is_stale(key, stale_time):
            return self.get_query_data(key)

        state = self._state(key)
        generation = state.generation
        attempt = 0
        while True:
            try:
                data = fetcher()
                break
            except Exception as exc:
                attempt += 1
                if attempt > self.retry:
                    state.error = exc
                    logger.debug("Query %r failed after %d attempts", key, attempt)
                    raise
                logger.debug("Retrying query %r after error: %s", key, exc)

        state.fetch_count += 1
        if state.generation != generation:
            logger.debug("Discarding result for cancelled query %r", key)
            return self.get_query_data(key)
        self.set_query_data(key, data)
        return self.get_query_data(key)

    def get_query_data(self, key: QueryKey) -> Any:
        state = self._queries.get(tuple(key))
        if state is None or not state.has_data:
            return None
        return copy.deepcopy(state.data)

    def get_queries_data(self, prefix: QueryKey) -> List[Tuple[QueryKey, Any]]:
        return [
            (key, copy.deepcopy(state.data))
            for key, state in self._queries.items()
            if matches(key, prefix) and state.has_data
        ]

    def set_query_data(self, key: QueryKey, data: Any) -> None:
        """Store ``data``; a callable receives the current data and returns the new value."""
        state = self._state(key)
        if callable(data):
            data = data(self.get_query_data(key))
        state.data = copy.deepcopy(data)
        state.has_data = True
        state.updated_at = self.clock()
        state.invalidated = False
        state.error = None

    def invalidate_queries(self, prefix: QueryKey) -> int:
        """Mark matching queries stale so the next fetch goes to the server."""
        count = 0
        for key, state in self._queries.items():
            if matches(key, prefix):
                state.invalidated = True
                count += 1
        return count

    def cancel_queries(self, prefix: QueryKey) -> None:
        for key, state in self._queries.items():
            if matches(key, prefix):
                state.generation += 1

    def remove_queries(self, prefix: QueryKey) -> None:
        for key in [key for key in self._queries if matches(key, prefix)]:
            del self._queries[key]

    def clear(self) -> None:
        self._queries.clear()
