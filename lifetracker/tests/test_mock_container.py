"""In-memory container semantics."""

from __future__ import annotations

import pytest
from azure.cosmos import PartitionKey
from azure.cosmos.exceptions import CosmosHttpResponseError, CosmosResourceNotFoundError

from lifetracker.datastore.mock import MockContainer, MockDatabase
from lifetracker.datastore.queries import build_query, find_items, read_or_none, sort_by_date, within_range
from lifetracker.core.utils.dates import parse_datetime

pytestmark = pytest.mark.unit


@pytest.fixture
def container():
    return MockContainer("things")


# ==================== Item API Tests ====================


def test_create_assigns_id_when_missing(container):
    """Should generate an id for documents created without one."""
    created = container.create_item(body={"userId": "u1", "name": "a"})
    assert created["id"]
    assert container.read_item(item=created["id"], partition_key="u1")["name"] == "a"


def test_create_returns_copy(container):
    """Should not share state between the stored document and the caller."""
    body = {"id": "1", "userId": "u1", "tags": ["x"]}
    created = container.create_item(body=body)
    created["tags"].append("y")
    body["tags"].append("z")
    assert container.read_item(item="1", partition_key="u1")["tags"] == ["x"]


def test_read_missing_raises_not_found(container):
    """Should raise the SDK's 404 error for unknown ids."""
    with pytest.raises(CosmosResourceNotFoundError) as excinfo:
        container.read_item(item="missing", partition_key="u1")
    assert excinfo.value.status_code == 404
    assert isinstance(excinfo.value, CosmosHttpResponseError)


def test_replace_keeps_id(container):
    """Should replace the whole body while keeping the stored id."""
    container.create_item(body={"id": "1", "userId": "u1", "a": 1, "b": 2})
    replaced = container.replace_item(item="1", body={"id": "other", "userId": "u1", "a": 5})
    assert replaced == {"id": "1", "userId": "u1", "a": 5}


def test_replace_and_delete_missing_raise(container):
    """Should raise not found when replacing or deleting unknown ids."""
    with pytest.raises(CosmosResourceNotFoundError):
        container.replace_item(item="nope", body={"id": "nope"})
    with pytest.raises(CosmosResourceNotFoundError):
        container.delete_item(item="nope", partition_key="u1")


def test_upsert_inserts_then_replaces(container):
    """Should insert new documents and overwrite existing ones."""
    container.upsert_item(body={"id": "1", "userId": "u1", "v": 1})
    container.upsert_item(body={"id": "1", "userId": "u1", "v": 2})
    items = list(container.read_all_items())
    assert len(items) == 1
    assert items[0]["v"] == 2


def test_delete_removes_item(container):
    """Should make a deleted document unreadable."""
    container.create_item(body={"id": "1", "userId": "u1"})
    container.delete_item(item="1", partition_key="u1")
    assert list(container.read_all_items()) == []


# ==================== Query Tests ====================


def test_query_honours_equality_predicates(container):
    """Should return only documents matching every equality predicate."""
    container.create_item(body={"id": "1", "userId": "u1", "type": "run"})
    container.create_item(body={"id": "2", "userId": "u1", "type": "swim"})
    container.create_item(body={"id": "3", "userId": "u2", "type": "run"})
    results = list(
        container.query_items(
            query="SELECT * FROM c WHERE c.userId = @userId AND c.type = @type",
            parameters=[{"name": "@userId", "value": "u1"}, {"name": "@type", "value": "run"}],
        )
    )
    assert [item["id"] for item in results] == ["1"]


def test_query_without_predicates_returns_everything(container):
    """Should treat a query with no WHERE clause as a full scan."""
    container.create_item(body={"id": "1", "userId": "u1"})
    container.create_item(body={"id": "2", "userId": "u2"})
    assert len(list(container.query_items(query="SELECT * FROM c"))) == 2


def test_build_query_and_find_items(container):
    """Should build parameterised equality queries the mock understands."""
    query, params = build_query({"userId": "u1", "type": "run"})
    assert query == "SELECT * FROM c WHERE c.userId = @userId AND c.type = @type"
    assert params == [{"name": "@userId", "value": "u1"}, {"name": "@type", "value": "run"}]
    container.create_item(body={"id": "1", "userId": "u1", "type": "run"})
    container.create_item(body={"id": "2", "userId": "u1", "type": "ride"})
    assert [d["id"] for d in find_items(container, partition_key="u1", userId="u1", type="run")] == ["1"]
    assert [d["id"] for d in find_items(container, id="2")] == ["2"]


def test_read_or_none_enforces_partition(container):
    """Should treat documents from another partition as missing."""
    container.create_item(body={"id": "1", "userId": "u1"})
    assert read_or_none(container, "1", "u1")["id"] == "1"
    assert read_or_none(container, "1", "u2") is None
    assert read_or_none(container, "missing", "u1") is None


def test_range_and_sort_helpers():
    """Should keep documents inside the range and order undated ones last."""
    docs = [
        {"id": "a", "date": "2024-01-01T00:00:00.000Z"},
        {"id": "b", "date": "2024-01-10T00:00:00.000Z"},
        {"id": "c"},
        {"id": "d", "date": "2024-01-05T00:00:00.000Z"},
    ]
    kept = within_range(docs, "date", parse_datetime("2024-01-02"), parse_datetime("2024-01-31"))
    assert {d["id"] for d in kept} == {"b", "d"}
    assert [d["id"] for d in sort_by_date(docs)] == ["b", "d", "a", "c"]
    assert [d["id"] for d in sort_by_date(docs, descending=False)] == ["a", "d", "b", "c"]


# ==================== Database Tests ====================


def test_database_creates_containers_once():
    """Should return the same container for repeated create calls."""
    database = MockDatabase("db")
    first = database.create_container_if_not_exists(id="goals", partition_key=PartitionKey(path="/userId"))
    second = database.create_container_if_not_exists(id="goals", partition_key=PartitionKey(path="/userId"))
    assert first is second
    assert database.get_container_client("goals") is first
    assert [c["id"] for c in database.list_containers()] == ["goals"]


def test_database_unknown_container_raises():
    """Should raise not found for containers never created."""
    with pytest.raises(CosmosResourceNotFoundError):
        MockDatabase("db").get_container_client("missing")
