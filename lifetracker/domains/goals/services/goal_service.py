"""Fitness goal services."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from lifetracker.core.utils.dates import normalize_date
from lifetracker.core.utils.pagination import paginate
from lifetracker.datastore.cosmos import get_container
from lifetracker.datastore.documents import merge_update, new_document
from lifetracker.datastore.queries import find_items, read_or_none, sort_by_date

logger = logging.getLogger(__name__)


def create_goal(
    user_id: str,
    *,
    title: str,
    target_date: str,
    description: Optional[str] = None,
    type: Optional[str] = None,  # noqa: A002
    notes: Optional[str] = None,
    achieved: bool = False,
    progress: int = 0,
) -> Dict[str, Any]:
    title_norm = (title or "").strip()
    if not title_norm:
        raise ValueError("validation_error")
    goal = new_document(
        user_id,
        title=title_norm,
        description=description,
        type=type,
        targetDate=normalize_date(target_date),
        notes=notes,
        achieved=bool(achieved),
        progress=progress or 0,
    )
    created = get_container("goals").create_item(body=goal)
    logger.info("Created goal %s for %s", created["id"], user_id)
    return created


def list_goals(user_id: str, *, limit: int = 50, offset: int = 0) -> Dict[str, Any]:
    goals = find_items(get_container("goals"), partition_key=user_id, userId=user_id)
    return paginate(sort_by_date(goals, "createdAt"), limit, offset)


def get_goal(user_id: str, goal_id: str) -> Optional[Dict[str, Any]]:
    return read_or_none(get_container("goals"), goal_id, user_id)


def update_goal(user_id: str, goal_id: str, **fields: Any) -> Optional[Dict[str, Any]]:
    goal = get_goal(user_id, goal_id)
    if not goal:
        return None
    if fields.get("targetDate"):
        fields["targetDate"] = normalize_date(fields["targetDate"])
    return get_container("goals").replace_item(item=goal_id, body=merge_update(goal, fields))


def delete_goal(user_id: str, goal_id: str) -> bool:
    if not get_goal(user_id, goal_id):
        return False
    get_container("goals").delete_item(item=goal_id, partition_key=user_id)
    return True
