"""Query helpers shared by the document services.

Containers are only asked for equality matches, which both the hosted store
and the mock answer the same way. Ranges, ordering and paging are applied to
the returned documents here.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Tuple

from azure.cosmos.exceptions import CosmosResourceNotFoundError

from lifetracker.core.utils.dates import parse_datetime

Document = Dict[str, Any]


def build_query(filters: Dict[str, Any]) -> Tuple[str, List[Dict[str, Any]]]:
    """``SELECT * FROM c WHERE c.a = @a AND ...`` with its parameter list."""
    clauses = []
    parameters = []
    for field, value in filters.items():
        name = "@" + field.replace(".", "_")
        clauses.append(f"c.{field} = {name}")
        parameters.append({"name": name, "value": value})
    query = "SELECT * FROM c"
    if clauses:
        query += " WHERE " + " AND ".join(clauses)
    return query, parameters


def find_items(container, partition_key: Optional[str] = None, **filters: Any) -> List[Document]:
    query, parameters = build_query(filters)
    if partition_key is not None:
        return list(container.query_items(query=query, parameters=parameters, partition_key=partition_key))
    return list(
        container.query_items(query=query, parameters=parameters, enable_cross_partition_query=True)
    )


def read_or_none(container, item_id: str, partition_key: str) -> Optional[Document]:
    """Point read; documents outside the partition count as missing."""
    try:
        doc = container.read_item(item=item_id, partition_key=partition_key)
    except CosmosResourceNotFoundError:
        return None
    if doc.get("userId") != partition_key:
        return None
    return doc


def within_range(
    docs: Iterable[Document],
    field: str,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
) -> List[Document]:
    """Keep documents whose ``field`` falls inside ``[start, end]``."""
    if start is None and end is None:
        return list(docs)
    kept = []
    for doc in docs:
        value = parse_datetime(doc.get(field))
        if value is None:
            continue
        if start is not None and value < start:
            continue
        if end is not None and value > end:
            continue
        kept.append(doc)
    return kept


def sort_by_date(docs: Iterable[Document], field: str = "date", descending: bool = True) -> List[Document]:
    """Order by a timestamp field; documents missing it sort last."""
    dated = []
    undated = []
    for doc in docs:
        value = parse_datetime(doc.get(field))
        if value is None:
            undated.append(doc)
        else:
            dated.append((value, doc))
    dated.sort(key=lambda pair: pair[0], reverse=descending)
    return [doc for _, doc in dated] + undated
