"""Project request/response schemas."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from lifetracker.core.utils.validation import reject_null

ProjectStatus = Literal["active", "archived", "completed"]
MemberRole = Literal["owner", "admin", "member", "viewer"]


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProjectCreate(_CamelModel):
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, max_length=4096)
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    tags: Optional[List[str]] = None


class ProjectUpdate(_CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, max_length=4096)
    status: Optional[ProjectStatus] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    tags: Optional[List[str]] = None

    @field_validator("name", "description", "status", "tags")
    @classmethod
    def _not_null(cls, value):
        return reject_null(value)


class MemberAdd(_CamelModel):
    """A new member is named by user id or by the email on their profile."""

    user_id: Optional[str] = Field(default=None, min_length=1)
    member_email: Optional[EmailStr] = None
    role: Literal["admin", "member", "viewer"] = "member"

    @model_validator(mode="after")
    def _check_target(self):
        if not self.user_id and not self.member_email:
            raise ValueError("userId or memberEmail is required")
        return self


class MemberRoleUpdate(_CamelModel):
    role: MemberRole


class ProjectMemberResponse(_CamelModel):
    user_id: str
    role: MemberRole
    joined_at: str


class ProjectResponse(_CamelModel):
    id: str
    owner_id: str
    name: str
    description: str
    status: ProjectStatus
    members: List[ProjectMemberResponse]
    start_date: Optional[str]
    end_date: Optional[str]
    tags: List[str]
    created_at: str
    updated_at: str
