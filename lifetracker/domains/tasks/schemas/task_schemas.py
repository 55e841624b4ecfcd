"""Task request/response schemas."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from lifetracker.core.utils.validation import reject_null

TaskStatus = Literal["todo", "in-progress", "completed", "blocked"]
TaskPriority = Literal["low", "medium", "high", "urgent"]


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TaskCreate(_CamelModel):
    project_id: str = Field(min_length=1)
    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    priority: TaskPriority = "medium"
    due_date: Optional[str] = None
    tags: Optional[List[str]] = None


class TaskUpdate(_CamelModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    due_date: Optional[str] = None
    tags: Optional[List[str]] = None

    @field_validator("title", "description", "status", "priority", "tags")
    @classmethod
    def _not_null(cls, value):
        return reject_null(value)


class AttachmentCreate(_CamelModel):
    name: str = Field(min_length=1, max_length=255)
    url: str = Field(min_length=1)
    size: int = Field(ge=0)
    type: str = Field(min_length=1, max_length=128)


class AttachmentResponse(_CamelModel):
    id: str
    name: str
    url: str
    size: int
    type: str
    uploaded_at: str


class TaskResponse(_CamelModel):
    id: str
    project_id: str
    user_id: str
    title: str
    description: str
    status: TaskStatus
    priority: TaskPriority
    due_date: Optional[str]
    tags: List[str]
    attachments: List[AttachmentResponse]
    created_at: str
    updated_at: str
    completed_at: Optional[str]
