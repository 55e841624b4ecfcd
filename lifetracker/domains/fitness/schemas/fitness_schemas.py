"""Fitness request schemas (camelCase on the wire)."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from lifetracker.core.utils.validation import reject_null


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class WorkoutCreate(_CamelModel):
    activity: str = Field(min_length=1, max_length=120)
    duration: float = Field(gt=0)
    date: Optional[str] = None
    calories: Optional[float] = Field(default=None, ge=0)
    distance: Optional[float] = Field(default=None, ge=0)
    steps: Optional[int] = Field(default=None, ge=0)
    notes: Optional[str] = None


class MeasurementCreate(_CamelModel):
    measurement_type: str = Field(min_length=1, max_length=64)
    value: float
    unit: str = Field(min_length=1, max_length=32)
    date: Optional[str] = None
    notes: Optional[str] = None


class FitnessGoalCreate(_CamelModel):
    goal_type: str = Field(min_length=1, max_length=64)
    target_value: float
    current_value: Optional[float] = None
    deadline: Optional[str] = None
    notes: Optional[str] = None


class FitnessRecordUpdate(_CamelModel):
    """Partial update; only the fields sent are merged into the record."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    type: Optional[Literal["workout", "measurement", "goal"]] = None
    date: Optional[str] = None
    activity: Optional[str] = None
    duration: Optional[float] = Field(default=None, gt=0)
    calories: Optional[float] = Field(default=None, ge=0)
    distance: Optional[float] = Field(default=None, ge=0)
    steps: Optional[int] = Field(default=None, ge=0)
    measurement_type: Optional[str] = None
    value: Optional[float] = None
    unit: Optional[str] = None
    goal_type: Optional[str] = None
    target_value: Optional[float] = None
    current_value: Optional[float] = None
    deadline: Optional[str] = None
    completed: Optional[bool] = None
    notes: Optional[str] = None

    @field_validator(
        "type",
        "date",
        "activity",
        "duration",
        "measurement_type",
        "value",
        "unit",
        "goal_type",
        "target_value",
        "completed",
    )
    @classmethod
    def _not_null(cls, value):
        return reject_null(value)
