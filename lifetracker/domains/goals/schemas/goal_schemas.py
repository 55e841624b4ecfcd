"""Goal request schemas."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from lifetracker.core.utils.validation import reject_null


class GoalCreate(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: str = Field(min_length=1, max_length=200)
    target_date: str = Field(min_length=1)
    description: Optional[str] = None
    type: Optional[str] = Field(default=None, max_length=64)
    notes: Optional[str] = None
    achieved: bool = False
    progress: int = Field(default=0, ge=0, le=100)


class GoalUpdate(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    target_date: Optional[str] = None
    description: Optional[str] = None
    type: Optional[str] = Field(default=None, max_length=64)
    notes: Optional[str] = None
    achieved: Optional[bool] = None
    progress: Optional[int] = Field(default=None, ge=0, le=100)

    @field_validator("title", "target_date", "achieved", "progress")
    @classmethod
    def _not_null(cls, value):
        return reject_null(value)
