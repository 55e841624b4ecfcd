"""Tasks and their attachments in the ``tasks`` container (partitioned by user)."""

from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, List, Optional

from azure.cosmos.exceptions import CosmosHttpResponseError, CosmosResourceNotFoundError

from lifetracker.core.errors import ApiError
from lifetracker.core.utils.dates import days_from_now, normalize_date, parse_datetime, utc_now, utc_now_iso
from lifetracker.datastore.cosmos import get_container
from lifetracker.datastore.queries import find_items, read_or_none, sort_by_date

logger = logging.getLogger(__name__)

PRIORITY_RANK = {"urgent": 3, "high": 2, "medium": 1, "low": 0}
UPDATABLE_FIELDS = ("title", "description", "status", "priority", "dueDate", "tags")


class TaskModel:
    def __init__(self) -> None:
        self._container = None

    def _ensure_container(self):
        if self._container is None:
            self._container = get_container("tasks")
        return self._container

    def _replace(self, task: Dict[str, Any]) -> Dict[str, Any]:
        try:
            return self._ensure_container().replace_item(item=task["id"], body=task)
        except CosmosHttpResponseError:
            logger.exception("Error updating task %s", task["id"])
            raise

    def create_task(
        self,
        user_id: str,
        *,
        project_id: str,
        title: str,
        description: Optional[str] = None,
        priority: str = "medium",
        due_date: Optional[str] = None,
        tags: Optional[List[str]] = None,
    ) -> Dict[str, Any]:
        now = utc_now_iso()
        task = {
            "id": str(uuid.uuid4()),
            "projectId": project_id,
            "userId": user_id,
            "title": title.strip(),
            "description": description or "",
            "status": "todo",
            "priority": priority or "medium",
            "dueDate": normalize_date(due_date) if due_date else None,
            "tags": tags or [],
            "attachments": [],
            "createdAt": now,
            "updatedAt": now,
        }
        try:
            return self._ensure_container().create_item(body=task)
        except CosmosHttpResponseError:
            logger.exception("Error creating task for %s", user_id)
            raise

    def get_task_by_id(self, user_id: str, task_id: str) -> Optional[Dict[str, Any]]:
        return read_or_none(self._ensure_container(), task_id, user_id)

    def find_task(self, task_id: str) -> Optional[Dict[str, Any]]:
        """Look a task up by id across all users (ownership checks)."""
        matches = find_items(self._ensure_container(), id=task_id)
        return matches[0] if matches else None

    def get_project_tasks(self, user_id: str, project_id: str) -> List[Dict[str, Any]]:
        tasks = find_items(self._ensure_container(), partition_key=user_id, userId=user_id, projectId=project_id)
        return sort_by_date(tasks, "updatedAt")

    def get_user_tasks(self, user_id: str) -> List[Dict[str, Any]]:
        """Due date ascending (undated last), then most urgent first."""
        tasks = find_items(self._ensure_container(), partition_key=user_id, userId=user_id)
        tasks.sort(key=lambda task: -PRIORITY_RANK.get(task.get("priority"), 0))
        return sort_by_date(tasks, "dueDate", descending=False)

    def get_tasks_by_status(
        self, user_id: str, status: str, project_id: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        filters: Dict[str, Any] = {"userId": user_id, "status": status}
        if project_id:
            filters["projectId"] = project_id
        tasks = find_items(self._ensure_container(), partition_key=user_id, **filters)
        return sort_by_date(tasks, "updatedAt")

    def get_tasks_due_soon(self, user_id: str, days: int = 7) -> List[Dict[str, Any]]:
        """Open tasks due between now and ``days`` from now, soonest first."""
        now = utc_now()
        horizon = days_from_now(days)
        due = []
        for task in find_items(self._ensure_container(), partition_key=user_id, userId=user_id):
            if task.get("status") == "completed":
                continue
            due_date = parse_datetime(task.get("dueDate"))
            if due_date is not None and now <= due_date <= horizon:
                due.append(task)
        return sort_by_date(due, "dueDate", descending=False)

    def update_task(self, user_id: str, task_id: str, updates: Dict[str, Any]) -> Dict[str, Any]:
        task = self.get_task_by_id(user_id, task_id)
        if not task:
            raise ApiError.not_found("Task not found")
        changes = {key: value for key, value in updates.items() if key in UPDATABLE_FIELDS}
        if changes.get("dueDate"):
            changes["dueDate"] = normalize_date(changes["dueDate"])
        was_completed = task.get("status") == "completed"
        new_status = changes.get("status")
        updated = {**task, **changes, "updatedAt": utc_now_iso()}
        if not was_completed and new_status == "completed":
            updated["completedAt"] = updated["updatedAt"]
        elif was_completed and new_status and new_status != "completed":
            updated.pop("completedAt", None)
        return self._replace(updated)

    def complete_task(self, user_id: str, task_id: str) -> Dict[str, Any]:
        return self.update_task(user_id, task_id, {"status": "completed"})

    def add_attachment(
        self, user_id: str, task_id: str, *, name: str, url: str, size: int, type: str  # noqa: A002
    ) -> Dict[str, Any]:
        task = self.get_task_by_id(user_id, task_id)
        if not task:
            raise ApiError.not_found("Task not found")
        now = utc_now_iso()
        attachment = {
            "id": str(uuid.uuid4()),
            "name": name,
            "url": url,
            "size": size,
            "type": type,
            "uploadedAt": now,
        }
        updated = {**task, "attachments": [*(task.get("attachments") or []), attachment], "updatedAt": now}
        return self._replace(updated)

    def remove_attachment(self, user_id: str, task_id: str, attachment_id: str) -> Dict[str, Any]:
        task = self.get_task_by_id(user_id, task_id)
        if not task:
            raise ApiError.not_found("Task not found")
        attachments = task.get("attachments") or []
        remaining = [item for item in attachments if item.get("id") != attachment_id]
        if len(remaining) == len(attachments):
            return task
        updated = {**task, "attachments": remaining, "updatedAt": utc_now_iso()}
        return self._replace(updated)

    def delete_task(self, user_id: str, task_id: str) -> None:
        try:
            self._ensure_container().delete_item(item=task_id, partition_key=user_id)
        except CosmosResourceNotFoundError:
            raise ApiError.not_found("Task not found")
        except CosmosHttpResponseError:
            logger.exception("Error deleting task %s", task_id)
            raise
