"""Activity request schemas."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from lifetracker.core.utils.validation import reject_null


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ActivityCreate(_CamelModel):
    type: str = Field(min_length=1, max_length=64)
    duration: float = Field(gt=0)
    calories: float = Field(default=0, ge=0)
    date: Optional[str] = None
    notes: Optional[str] = None


class ActivityUpdate(_CamelModel):
    type: Optional[str] = Field(default=None, min_length=1, max_length=64)
    duration: Optional[float] = Field(default=None, gt=0)
    calories: Optional[float] = Field(default=None, ge=0)
    date: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("type", "duration", "calories", "date")
    @classmethod
    def _not_null(cls, value):
        return reject_null(value)


class ActivityListFilter(_CamelModel):
    type: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    limit: int = Field(default=50, ge=1, le=1000)
    offset: int = Field(default=0, ge=0)
