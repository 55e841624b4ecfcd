"""Journal services: CRUD and filtered listing with sentiment scoring."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence, Tuple

from azure.cosmos.exceptions import CosmosHttpResponseError

from lifetracker.core.utils.dates import normalize_date, parse_datetime, utc_now_iso
from lifetracker.core.utils.pagination import clamp_window
from lifetracker.datastore.cosmos import get_container
from lifetracker.datastore.queries import find_items, read_or_none, sort_by_date, within_range
from lifetracker.domains.journal.services.sentiment_service import analyze_sentiment

logger = logging.getLogger(__name__)


def create_journal_entry(
    user_id: str,
    *,
    content: str,
    date: Optional[str] = None,
    tags: Optional[List[str]] = None,
    attachments: Optional[List[str]] = None,
) -> Dict[str, Any]:
    text = (content or "").strip()
    if not text:
        raise ValueError("validation_error")
    now = utc_now_iso()
    entry = {
        "id": str(uuid.uuid4()),
        "userId": user_id,
        "content": text,
        "date": normalize_date(date),
        "sentimentScore": analyze_sentiment(text),
        "tags": tags or [],
        "attachments": attachments or [],
        "createdAt": now,
        "updatedAt": now,
    }
    try:
        return get_container("journals").create_item(body=entry)
    except CosmosHttpResponseError:
        logger.exception("Error creating journal entry for %s", user_id)
        raise


def get_journal_entries_by_user_id(
    user_id: str,
    *,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    min_sentiment: Optional[float] = None,
    max_sentiment: Optional[float] = None,
    tags: Optional[Sequence[str]] = None,
    limit: int = 50,
    offset: int = 0,
) -> Tuple[List[Dict[str, Any]], int]:
    """Newest first; ``tags`` matches entries carrying any of the given tags."""
    entries = find_items(get_container("journals"), partition_key=user_id, userId=user_id)
    entries = within_range(entries, "date", parse_datetime(start_date), parse_datetime(end_date))
    if min_sentiment is not None:
        entries = [e for e in entries if (e.get("sentimentScore") or 0) >= min_sentiment]
    if max_sentiment is not None:
        entries = [e for e in entries if (e.get("sentimentScore") or 0) <= max_sentiment]
    if tags:
        wanted = set(tags)
        entries = [e for e in entries if wanted.intersection(e.get("tags") or [])]
    entries = sort_by_date(entries)
    limit, offset = clamp_window(limit, offset)
    return entries[offset : offset + limit], len(entries)


def get_entries_between(user_id: str, start: datetime, end: datetime) -> List[Dict[str, Any]]:
    """Entries dated inside ``[start, end]``, oldest first."""
    entries = find_items(get_container("journals"), partition_key=user_id, userId=user_id)
    return sort_by_date(within_range(entries, "date", start, end), descending=False)


def get_recent_entries(user_id: str, limit: int = 10) -> List[Dict[str, Any]]:
    entries = find_items(get_container("journals"), partition_key=user_id, userId=user_id)
    return sort_by_date(entries)[:limit]


def get_journal_entry_by_id(user_id: str, entry_id: str) -> Optional[Dict[str, Any]]:
    return read_or_none(get_container("journals"), entry_id, user_id)


def update_journal_entry(user_id: str, entry_id: str, **fields: Any) -> Optional[Dict[str, Any]]:
    entry = get_journal_entry_by_id(user_id, entry_id)
    if not entry:
        return None
    changed: Dict[str, Any] = {}
    if fields.get("content") is not None:
        text = fields["content"].strip()
        if not text:
            raise ValueError("validation_error")
        if text != entry.get("content"):
            changed["content"] = text
            changed["sentimentScore"] = analyze_sentiment(text)
    if fields.get("date") is not None:
        changed["date"] = normalize_date(fields["date"])
    for key in ("tags", "attachments"):
        if fields.get(key) is not None:
            changed[key] = list(fields[key])
    updated = {**entry, **changed, "updatedAt": utc_now_iso()}
    try:
        return get_container("journals").replace_item(item=entry_id, body=updated)
    except CosmosHttpResponseError:
        logger.exception("Error updating journal entry %s", entry_id)
        raise


def delete_journal_entry(user_id: str, entry_id: str) -> bool:
    if not get_journal_entry_by_id(user_id, entry_id):
        return False
    get_container("journals").delete_item(item=entry_id, partition_key=user_id)
    return True
