"""Habit services: CRUD and paginated listing."""

from __future__ import annotations

from typing import Any, Dict, Optional

from lifetracker.core.utils.pagination import paginate
from lifetracker.datastore.cosmos import get_container
from lifetracker.datastore.documents import merge_update, new_document
from lifetracker.datastore.queries import find_items, read_or_none, sort_by_date

HABIT_FREQUENCIES = ("daily", "weekly", "monthly", "custom")


def create_habit(
    user_id: str,
    *,
    name: str,
    frequency: str = "daily",
    streak: Optional[int] = None,
    description: Optional[str] = None,
) -> Dict[str, Any]:
    name_norm = (name or "").strip()
    if not name_norm:
        raise ValueError("validation_error")
    if frequency not in HABIT_FREQUENCIES:
        raise ValueError("validation_error")
    habit = new_document(
        user_id,
        name=name_norm,
        frequency=frequency,
        streak=streak if streak is not None else 0,
        description=(description or "").strip() or None,
    )
    return get_container("habits").create_item(body=habit)


def list_habits(user_id: str, *, limit: int = 50, offset: int = 0) -> Dict[str, Any]:
    habits = find_items(get_container("habits"), partition_key=user_id, userId=user_id)
    return paginate(sort_by_date(habits, "createdAt"), limit, offset)


def get_habit(user_id: str, habit_id: str) -> Optional[Dict[str, Any]]:
    return read_or_none(get_container("habits"), habit_id, user_id)


def update_habit(user_id: str, habit_id: str, **fields: Any) -> Optional[Dict[str, Any]]:
    habit = get_habit(user_id, habit_id)
    if not habit:
        return None
    if "name" in fields:
        name_norm = (fields["name"] or "").strip()
        if not name_norm:
            raise ValueError("validation_error")
        fields["name"] = name_norm
    return get_container("habits").replace_item(item=habit_id, body=merge_update(habit, fields))


def delete_habit(user_id: str, habit_id: str) -> bool:
    if not get_habit(user_id, habit_id):
        return False
    get_container("habits").delete_item(item=habit_id, partition_key=user_id)
    return True
