"""Cached queries and optimistic mutations for one REST resource."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from lifetracker.client.api_client import ApiClient
from lifetracker.client.query_cache import DEFAULT_STALE_TIME, QueryClient, QueryKey, freeze
from lifetracker.core.errors import ApiError

logger = logging.getLogger(__name__)


class ResourceKeys:
    """Query key factory: ``all``, ``lists()``, ``list(f)``, ``details()``, ``detail(id)``."""

    def __init__(self, resource: str) -> None:
        self.all: QueryKey = (resource,)

    def lists(self) -> QueryKey:
        return (*self.all, "list")

    def list(self, filters: Optional[Dict[str, Any]] = None) -> QueryKey:
        return (*self.lists(), freeze(filters or {}))

    def details(self) -> QueryKey:
        return (*self.all, "detail")

    def detail(self, item_id: str) -> QueryKey:
        return (*self.details(), item_id)


class Notifier:
    """Collects user-facing success/failure messages and logs them."""

    def __init__(self, sink: Optional[Callable[[str, str], None]] = None) -> None:
        self.sink = sink
        self.messages: List[Tuple[str, str]] = []

    def _emit(self, level: str, message: str) -> None:
        self.messages.append((level, message))
        if level == "error":
            logger.warning(message)
        else:
            logger.info(message)
        if self.sink:
            self.sink(level, message)

    def success(self, message: str) -> None:
        self._emit("success", message)

    def error(self, message: str) -> None:
        self._emit("error", message)


class ResourceHooks:
    """Base for per-resource hooks; subclasses set the class attributes."""

    resource = ""
    label = "Item"
    path = ""
    item_key = "item"
    stale_time = DEFAULT_STALE_TIME

    def __init__(
        self,
        api: ApiClient,
        query_client: QueryClient,
        notifier: Optional[Notifier] = None,
    ) -> None:
        self.api = api
        self.query_client = query_client
        self.notifier = notifier or Notifier()
        self.keys = ResourceKeys(self.resource)

    # ---- queries ----

    def list_params(self, filters: Dict[str, Any]) -> Dict[str, Any]:
        return dict(filters)

    def use_list(self, filters: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        filters = filters or {}

        def fetch() -> Dict[str, Any]:
            body = self.api.get(self.path, params=self.list_params(filters)) or {}
            return {
                "items": body.get("items", []),
                "total": body.get("total", 0),
                "limit": body.get("limit"),
                "offset": body.get("offset"),
            }

        return self.query_client.fetch_query(self.keys.list(filters), fetch, stale_time=self.stale_time)

    def use_detail(self, item_id: Optional[str]) -> Optional[Dict[str, Any]]:
        if not item_id:
            return None
        return self.query_client.fetch_query(
            self.keys.detail(item_id),
            lambda: self.api.get(f"{self.path}/{item_id}")[self.item_key],
            stale_time=self.stale_time,
        )

    # ---- mutations ----

    def apply_optimistic_update(self, current: Dict[str, Any], updates: Dict[str, Any]) -> Dict[str, Any]:
        return {**current, **updates}

    def create(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        try:
            created = self.api.post(self.path, json=payload)[self.item_key]
        except ApiError as exc:
            self.notifier.error(exc.message or f"Failed to create {self.label.lower()}")
            raise
        self.query_client.invalidate_queries(self.keys.lists())
        self.notifier.success(f"{self.label} created successfully")
        return created

    def update(self, item_id: str, updates: Dict[str, Any]) -> Dict[str, Any]:
        key = self.keys.detail(item_id)
        self.query_client.cancel_queries(key)
        previous = self.query_client.get_query_data(key)
        if previous is not None:
            self.query_client.set_query_data(key, self.apply_optimistic_update(previous, updates))
        try:
            updated = self.api.put(f"{self.path}/{item_id}", json=updates)[self.item_key]
        except ApiError as exc:
            self.notifier.error(exc.message or f"Failed to update {self.label.lower()}")
            if previous is not None:
                self.query_client.set_query_data(key, previous)
            raise
        self.query_client.invalidate_queries(self.keys.lists())
        self.query_client.invalidate_queries(key)
        self.notifier.success(f"{self.label} updated successfully")
        return updated

    def delete(self, item_id: str) -> None:
        lists = self.keys.lists()
        self.query_client.cancel_queries(lists)
        snapshot = self.query_client.get_queries_data(lists)
        for key, page in snapshot:
            if not isinstance(page, dict) or "items" not in page:
                continue
            remaining = [item for item in page["items"] if item.get("id") != item_id]
            removed = len(page["items"]) - len(remaining)
            self.query_client.set_query_data(
                key, {**page, "items": remaining, "total": max((page.get("total") or 0) - removed, 0)}
            )
        try:
            self.api.delete(f"{self.path}/{item_id}")
        except ApiError as exc:
            self.notifier.error(exc.message or f"Failed to delete {self.label.lower()}")
            for key, page in snapshot:
                self.query_client.set_query_data(key, page)
            raise
        else:
            self.notifier.success(f"{self.label} deleted successfully")
        finally:
            self.query_client.invalidate_queries(lists)
