"""Pagination helpers for documents already loaded from a container."""

from __future__ import annotations

from typing import Any, Dict, List, Sequence, Tuple

MAX_LIMIT = 1000


def clamp_window(limit: Any, offset: Any, default_limit: int = 50) -> Tuple[int, int]:
    try:
        limit_val = int(limit) if limit not in (None, "") else default_limit
    except (TypeError, ValueError):
        limit_val = default_limit
    try:
        offset_val = int(offset) if offset not in (None, "") else 0
    except (TypeError, ValueError):
        offset_val = 0
    return max(min(limit_val, MAX_LIMIT), 1), max(offset_val, 0)


def paginate(items: Sequence[Dict[str, Any]], limit: int = 50, offset: int = 0) -> Dict[str, Any]:
    limit, offset = clamp_window(limit, offset)
    page: List[Dict[str, Any]] = list(items[offset : offset + limit])
    return {"items": page, "total": len(items), "limit": limit, "offset": offset}
