"""Journal request/response schemas."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from lifetracker.core.utils.validation import reject_null


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class JournalEntryCreate(_CamelModel):
    content: str = Field(min_length=1)
    date: Optional[str] = None
    tags: Optional[List[str]] = None
    attachments: Optional[List[str]] = None


class JournalEntryUpdate(_CamelModel):
    content: Optional[str] = Field(default=None, min_length=1)
    date: Optional[str] = None
    tags: Optional[List[str]] = None
    attachments: Optional[List[str]] = None

    @field_validator("content", "date", "tags", "attachments")
    @classmethod
    def _not_null(cls, value):
        return reject_null(value)


class JournalEntryListFilter(_CamelModel):
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    min_sentiment: Optional[float] = Field(default=None, ge=0, le=1)
    max_sentiment: Optional[float] = Field(default=None, ge=0, le=1)
    tags: List[str] = Field(default_factory=list)
    limit: int = Field(default=50, ge=1, le=1000)
    offset: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def _check_sentiment_range(self):
        if (
            self.min_sentiment is not None
            and self.max_sentiment is not None
            and self.min_sentiment > self.max_sentiment
        ):
            raise ValueError("minSentiment must not exceed maxSentiment")
        return self


class JournalEntryResponse(_CamelModel):
    id: str
    user_id: str
    content: str
    date: str
    sentiment_score: float
    tags: List[str]
    attachments: List[str]
    created_at: str
    updated_at: str
