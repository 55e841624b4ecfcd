"""Project mappers for DTO responses."""

from __future__ import annotations

from typing import Any, Dict

from lifetracker.domains.projects.schemas.project_schemas import ProjectMemberResponse, ProjectResponse


def map_project(project: Dict[str, Any]) -> dict:
    return ProjectResponse(
        id=project["id"],
        owner_id=project["ownerId"],
        name=project.get("name", ""),
        description=project.get("description") or "",
        status=project.get("status", "active"),
        members=[
            ProjectMemberResponse(
                user_id=member["userId"],
                role=member.get("role", "member"),
                joined_at=member.get("joinedAt", ""),
            )
            for member in project.get("members") or []
        ],
        start_date=project.get("startDate"),
        end_date=project.get("endDate"),
        tags=project.get("tags") or [],
        created_at=project.get("createdAt", ""),
        updated_at=project.get("updatedAt", ""),
    ).model_dump(by_alias=True)
