"""In-memory stand-ins for Cosmos DB containers and databases.

The mock mirrors the method names of ``azure.cosmos.ContainerProxy`` and
``DatabaseProxy`` so services talk to one surface whichever backing store is
configured. Behaviour is intentionally naive:

* documents live in an unbounded list per container;
* ``query_items`` only honours ``c.<field> = @<param>`` predicates and ignores
  ranges, ``ARRAY_CONTAINS``, ``ORDER BY`` and ``OFFSET/LIMIT``;
* ``partition_key`` arguments are accepted and ignored, so lookups are a
  linear scan by id and tenant isolation is up to the caller.

Missing documents raise the SDK's ``CosmosResourceNotFoundError`` (status 404)
so calling code branches the same way in both modes.
"""

from __future__ import annotations

import copy
import re
import uuid
from typing import Any, Dict, Iterator, List, Optional

from azure.cosmos.exceptions import CosmosResourceNotFoundError

_EQUALITY_PREDICATE = re.compile(r"c\.([A-Za-z_][\w.]*)\s*=\s*(@\w+)")


def _lookup(doc: Dict[str, Any], path: str) -> Any:
    value: Any = doc
    for part in path.split("."):
        if not isinstance(value, dict) or part not in value:
            return None
        value = value[part]
    return value


class MockContainer:
    """Container with the ``ContainerProxy`` item API backed by a list."""

    def __init__(self, container_id: str, partition_key_path: str = "/userId") -> None:
        self.id = container_id
        self.partition_key_path = partition_key_path
        self._items: List[Dict[str, Any]] = []

    def __repr__(self) -> str:
        return f"<MockContainer {self.id} items={len(self._items)}>"

    def read(self) -> Dict[str, Any]:
        return {"id": self.id, "partitionKey": {"paths": [self.partition_key_path]}}

    def create_item(self, body: Dict[str, Any], **kwargs: Any) -> Dict[str, Any]:
        item = copy.deepcopy(body)
        if not item.get("id"):
            item["id"] = str(uuid.uuid4())
        self._items.append(item)
        return copy.deepcopy(item)

    def upsert_item(self, body: Dict[str, Any], **kwargs: Any) -> Dict[str, Any]:
        item = copy.deepcopy(body)
        if not item.get("id"):
            item["id"] = str(uuid.uuid4())
        index = self._index_of(item["id"])
        if index is None:
            self._items.append(item)
        else:
            self._items[index] = item
        return copy.deepcopy(item)

    def query_items(
        self,
        query: str,
        parameters: Optional[List[Dict[str, Any]]] = None,
        partition_key: Any = None,
        enable_cross_partition_query: Optional[bool] = None,
        **kwargs: Any,
    ) -> Iterator[Dict[str, Any]]:
        values = {param["name"]: param["value"] for param in (parameters or [])}
        predicates = [
            (field, values[name])
            for field, name in _EQUALITY_PREDICATE.findall(query or "")
            if name in values
        ]
        matches = [
            copy.deepcopy(item)
            for item in self._items
            if all(_lookup(item, field) == expected for field, expected in predicates)
        ]
        return iter(matches)

    def read_all_items(self, **kwargs: Any) -> Iterator[Dict[str, Any]]:
        return iter(copy.deepcopy(self._items))

    def read_item(self, item: Any, partition_key: Any = None, **kwargs: Any) -> Dict[str, Any]:
        index = self._require(item)
        return copy.deepcopy(self._items[index])

    def replace_item(self, item: Any, body: Dict[str, Any], **kwargs: Any) -> Dict[str, Any]:
        index = self._require(item)
        replacement = copy.deepcopy(body)
        replacement["id"] = self._items[index]["id"]
        self._items[index] = replacement
        return copy.deepcopy(replacement)

    def delete_item(self, item: Any, partition_key: Any = None, **kwargs: Any) -> None:
        index = self._require(item)
        del self._items[index]

    def clear(self) -> None:
        self._items.clear()

    def _require(self, item: Any) -> int:
        item_id = item.get("id") if isinstance(item, dict) else item
        index = self._index_of(item_id)
        if index is None:
            raise CosmosResourceNotFoundError(
                status_code=404, message=f"Entity with the specified id does not exist: {item_id}"
            )
        return index

    def _index_of(self, item_id: Any) -> Optional[int]:
        for index, existing in enumerate(self._items):
            if existing.get("id") == item_id:
                return index
        return None


class MockDatabase:
    """Database with the ``DatabaseProxy`` container API."""

    def __init__(self, database_id: str) -> None:
        self.id = database_id
        self._containers: Dict[str, MockContainer] = {}

    def read(self) -> Dict[str, Any]:
        return {"id": self.id}

    def create_container_if_not_exists(
        self, id: str, partition_key: Any = None, **kwargs: Any  # noqa: A002 - SDK signature
    ) -> MockContainer:
        if id not in self._containers:
            path = getattr(partition_key, "path", None) or "/userId"
            self._containers[id] = MockContainer(id, path)
        return self._containers[id]

    def get_container_client(self, container: str) -> MockContainer:
        if container not in self._containers:
            raise CosmosResourceNotFoundError(
                status_code=404, message=f"Container {container} does not exist"
            )
        return self._containers[container]

    def list_containers(self) -> Iterator[Dict[str, Any]]:
        return iter(c.read() for c in self._containers.values())
