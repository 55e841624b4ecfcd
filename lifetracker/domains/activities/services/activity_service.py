"""Activity services: CRUD and filtered, paginated listing."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from lifetracker.core.utils.dates import normalize_date, parse_datetime
from lifetracker.core.utils.pagination import paginate
from lifetracker.datastore.cosmos import get_container
from lifetracker.datastore.documents import merge_update, new_document
from lifetracker.datastore.queries import find_items, read_or_none, sort_by_date, within_range


def create_activity(
    user_id: str,
    *,
    type: str,  # noqa: A002
    duration: float,
    calories: float = 0,
    date: Optional[str] = None,
    notes: Optional[str] = None,
) -> Dict[str, Any]:
    activity_type = (type or "").strip()
    if not activity_type:
        raise ValueError("validation_error")
    activity = new_document(
        user_id,
        type=activity_type,
        duration=duration,
        calories=calories or 0,
        date=normalize_date(date),
        notes=notes,
    )
    return get_container("activities").create_item(body=activity)


def filter_activities(
    user_id: str,
    *,
    type: Optional[str] = None,  # noqa: A002
    start_date: Any = None,
    end_date: Any = None,
) -> List[Dict[str, Any]]:
    """All matching activities, newest first."""
    filters: Dict[str, Any] = {"userId": user_id}
    if type:
        filters["type"] = type
    activities = find_items(get_container("activities"), partition_key=user_id, **filters)
    activities = within_range(activities, "date", parse_datetime(start_date), parse_datetime(end_date))
    return sort_by_date(activities)


def get_activities_by_user_id(
    user_id: str,
    *,
    type: Optional[str] = None,  # noqa: A002
    start_date: Any = None,
    end_date: Any = None,
    limit: int = 50,
    offset: int = 0,
) -> Dict[str, Any]:
    activities = filter_activities(user_id, type=type, start_date=start_date, end_date=end_date)
    return paginate(activities, limit, offset)


def get_activity_by_id(user_id: str, activity_id: str) -> Optional[Dict[str, Any]]:
    return read_or_none(get_container("activities"), activity_id, user_id)


def update_activity(user_id: str, activity_id: str, **fields: Any) -> Optional[Dict[str, Any]]:
    activity = get_activity_by_id(user_id, activity_id)
    if not activity:
        return None
    if fields.get("date"):
        fields["date"] = normalize_date(fields["date"])
    return get_container("activities").replace_item(item=activity_id, body=merge_update(activity, fields))


def delete_activity(user_id: str, activity_id: str) -> bool:
    if not get_activity_by_id(user_id, activity_id):
        return False
    get_container("activities").delete_item(item=activity_id, partition_key=user_id)
    return True
