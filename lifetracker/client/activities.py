"""Activity queries and mutations."""

from __future__ import annotations

from typing import Any, Dict

from lifetracker.client.resources import ResourceHooks

ACTIVITY_FILTERS = ("type", "startDate", "endDate", "limit", "offset")


class ActivityHooks(ResourceHooks):
    resource = "activities"
    label = "Activity"
    path = "/api/activities"
    item_key = "activity"

    def list_params(self, filters: Dict[str, Any]) -> Dict[str, Any]:
        return {key: filters.get(key) for key in ACTIVITY_FILTERS if filters.get(key) is not None}
