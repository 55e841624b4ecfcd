"""Journal mappers for DTO responses."""

from __future__ import annotations

from typing import Any, Dict

from lifetracker.domains.journal.schemas.journal_schemas import JournalEntryResponse


def map_entry(entry: Dict[str, Any]) -> dict:
    score = entry.get("sentimentScore")
    return JournalEntryResponse(
        id=entry["id"],
        user_id=entry["userId"],
        content=entry.get("content", ""),
        date=entry.get("date", ""),
        sentiment_score=float(score) if score is not None else 0.5,
        tags=entry.get("tags") or [],
        attachments=entry.get("attachments") or [],
        created_at=entry.get("createdAt", ""),
        updated_at=entry.get("updatedAt", ""),
    ).model_dump(by_alias=True)
