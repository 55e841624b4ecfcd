"""Goal queries and mutations."""

from __future__ import annotations

from typing import Any, Dict

from lifetracker.client.resources import ResourceHooks


class GoalHooks(ResourceHooks):
    resource = "goals"
    label = "Goal"
    path = "/api/goals"
    item_key = "goal"

    def apply_optimistic_update(self, current: Dict[str, Any], updates: Dict[str, Any]) -> Dict[str, Any]:
        """Keep ``achieved`` in step with ``progress`` reaching 100 in the cached copy."""
        patched = {**current, **updates}
        if "progress" in updates and updates["progress"] is not None:
            patched["achieved"] = updates["progress"] >= 100
        elif updates.get("achieved") is True:
            patched["progress"] = 100
        return patched
