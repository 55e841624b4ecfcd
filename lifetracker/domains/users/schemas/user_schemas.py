"""Typed schemas for profile IO."""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel


class ProfileUpdateRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    email: Optional[EmailStr] = None
    display_name: Optional[str] = Field(default=None, max_length=120)
    preferences: Optional[Dict[str, Any]] = None


class ProfileResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    user_id: str
    # Stored emails come from identity tokens and are not re-validated.
    email: Optional[str] = None
    display_name: Optional[str] = None
    preferences: Dict[str, Any] = Field(default_factory=dict)
    created_at: str
    updated_at: str


def serialize_profile(profile: Dict[str, Any]) -> dict:
    return ProfileResponse.model_validate(profile).model_dump(by_alias=True)
