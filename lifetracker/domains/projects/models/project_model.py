"""Projects and their members in the ``projects`` container.

Documents are partitioned by the owner's id (``userId == ownerId``). Members
other than the owner reach a project through a cross-partition lookup.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, List, Optional

from azure.cosmos.exceptions import CosmosHttpResponseError, CosmosResourceNotFoundError

from lifetracker.core.errors import ApiError
from lifetracker.core.utils.dates import normalize_date, utc_now_iso
from lifetracker.datastore.cosmos import get_container
from lifetracker.datastore.queries import find_items, sort_by_date

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("name", "description", "status", "startDate", "endDate", "tags")
MANAGER_ROLES = ("owner", "admin")


def member_role(project: Dict[str, Any], user_id: str) -> Optional[str]:
    for member in project.get("members") or []:
        if member.get("userId") == user_id:
            return member.get("role")
    return None


def _dates(changes: Dict[str, Any]) -> Dict[str, Any]:
    for field in ("startDate", "endDate"):
        if changes.get(field):
            changes[field] = normalize_date(changes[field])
    return changes


class ProjectModel:
    def __init__(self) -> None:
        self._container = None

    def _ensure_container(self):
        if self._container is None:
            self._container = get_container("projects")
        return self._container

    def _replace(self, project: Dict[str, Any]) -> Dict[str, Any]:
        project = {**project, "updatedAt": utc_now_iso()}
        try:
            return self._ensure_container().replace_item(item=project["id"], body=project)
        except CosmosHttpResponseError:
            logger.exception("Error updating project %s", project["id"])
            raise

    def create_project(
        self,
        owner_id: str,
        *,
        name: str,
        description: Optional[str] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        tags: Optional[List[str]] = None,
    ) -> Dict[str, Any]:
        now = utc_now_iso()
        project = {
            "id": str(uuid.uuid4()),
            "userId": owner_id,
            "ownerId": owner_id,
            "name": name.strip(),
            "description": (description or "").strip(),
            "status": "active",
            "members": [{"userId": owner_id, "role": "owner", "joinedAt": now}],
            "tags": tags or [],
            "createdAt": now,
            "updatedAt": now,
            **_dates({"startDate": start_date, "endDate": end_date}),
        }
        try:
            return self._ensure_container().create_item(body=project)
        except CosmosHttpResponseError:
            logger.exception("Error creating project for %s", owner_id)
            raise

    def find_project(self, project_id: str) -> Optional[Dict[str, Any]]:
        """Look a project up by id across owners (membership checks)."""
        matches = find_items(self._ensure_container(), id=project_id)
        return matches[0] if matches else None

    def get_owned_projects(self, user_id: str) -> List[Dict[str, Any]]:
        projects = find_items(self._ensure_container(), partition_key=user_id, ownerId=user_id)
        return sort_by_date(projects, "updatedAt")

    def get_user_projects(self, user_id: str) -> List[Dict[str, Any]]:
        """Every project the user belongs to, in any role."""
        projects = [
            project
            for project in find_items(self._ensure_container())
            if member_role(project, user_id) is not None
        ]
        return sort_by_date(projects, "updatedAt")

    def get_active_projects(self, user_id: str) -> List[Dict[str, Any]]:
        return [project for project in self.get_user_projects(user_id) if project.get("status") == "active"]

    def update_project(self, project: Dict[str, Any], updates: Dict[str, Any]) -> Dict[str, Any]:
        changes = _dates({key: value for key, value in updates.items() if key in UPDATABLE_FIELDS})
        if isinstance(changes.get("name"), str):
            changes["name"] = changes["name"].strip()
        return self._replace({**project, **changes})

    def set_status(self, project: Dict[str, Any], status: str) -> Dict[str, Any]:
        return self._replace({**project, "status": status})

    def add_member(self, project: Dict[str, Any], user_id: str, role: str = "member") -> Dict[str, Any]:
        if member_role(project, user_id) is not None:
            raise ApiError.conflict("already_member")
        member = {"userId": user_id, "role": role, "joinedAt": utc_now_iso()}
        return self._replace({**project, "members": [*(project.get("members") or []), member]})

    def remove_member(self, project: Dict[str, Any], user_id: str) -> Dict[str, Any]:
        if user_id == project["ownerId"]:
            raise ApiError.bad_request("cannot_remove_owner")
        if member_role(project, user_id) is None:
            raise ApiError.not_found("member_not_found")
        members = [member for member in project["members"] if member.get("userId") != user_id]
        return self._replace({**project, "members": members})

    def update_member_role(self, project: Dict[str, Any], user_id: str, role: str) -> Dict[str, Any]:
        # One owner per project; ownership is not transferable.
        if user_id == project["ownerId"] or role == "owner":
            raise ApiError.bad_request("cannot_change_owner")
        if member_role(project, user_id) is None:
            raise ApiError.not_found("member_not_found")
        members = [
            {**member, "role": role} if member.get("userId") == user_id else member
            for member in project["members"]
        ]
        return self._replace({**project, "members": members})

    def delete_project(self, project: Dict[str, Any]) -> None:
        try:
            self._ensure_container().delete_item(item=project["id"], partition_key=project["userId"])
        except CosmosResourceNotFoundError:
            raise ApiError.not_found("Project not found")
        except CosmosHttpResponseError:
            logger.exception("Error deleting project %s", project["id"])
            raise
