"""Shape helpers for per-user documents."""

from __future__ import annotations

import uuid
from typing import Any, Dict

from lifetracker.core.utils.dates import utc_now_iso

PROTECTED_FIELDS = ("id", "userId", "createdAt")


def new_document(user_id: str, **fields: Any) -> Dict[str, Any]:
    now = utc_now_iso()
    return {"id": str(uuid.uuid4()), "userId": user_id, **fields, "createdAt": now, "updatedAt": now}


def merge_update(document: Dict[str, Any], changes: Dict[str, Any]) -> Dict[str, Any]:
    """Apply ``changes`` over ``document`` keeping identity fields and bumping ``updatedAt``."""
    allowed = {key: value for key, value in changes.items() if key not in PROTECTED_FIELDS}
    return {**document, **allowed, "updatedAt": utc_now_iso()}
