"""Habit request schemas."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from lifetracker.core.utils.validation import reject_null

HabitFrequency = Literal["daily", "weekly", "monthly", "custom"]


class HabitCreate(BaseModel):
    name: str = Field(min_length=1, max_length=120)
    frequency: HabitFrequency = "daily"
    streak: Optional[int] = Field(default=None, ge=0)
    description: Optional[str] = None


class HabitUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=120)
    frequency: Optional[HabitFrequency] = None
    streak: Optional[int] = Field(default=None, ge=0)
    description: Optional[str] = None

    @field_validator("name", "frequency")
    @classmethod
    def _not_null(cls, value):
        return reject_null(value)
