"""Task mappers for DTO responses."""

from __future__ import annotations

from typing import Any, Dict

from lifetracker.domains.tasks.schemas.task_schemas import AttachmentResponse, TaskResponse


def map_task(task: Dict[str, Any]) -> dict:
    return TaskResponse(
        id=task["id"],
        project_id=task.get("projectId", ""),
        user_id=task["userId"],
        title=task.get("title", ""),
        description=task.get("description") or "",
        status=task.get("status", "todo"),
        priority=task.get("priority", "medium"),
        due_date=task.get("dueDate"),
        tags=task.get("tags") or [],
        attachments=[
            AttachmentResponse(
                id=item["id"],
                name=item.get("name", ""),
                url=item.get("url", ""),
                size=int(item.get("size") or 0),
                type=item.get("type", ""),
                uploaded_at=item.get("uploadedAt", ""),
            )
            for item in task.get("attachments") or []
        ],
        created_at=task.get("createdAt", ""),
        updated_at=task.get("updatedAt", ""),
        completed_at=task.get("completedAt"),
    ).model_dump(by_alias=True)
