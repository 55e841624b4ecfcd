"""Input validation helpers."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ListWindow(BaseModel):
    """``limit``/``offset`` query parameters for list endpoints."""

    limit: int = Field(default=50, ge=1, le=1000)
    offset: int = Field(default=0, ge=0)


def reject_null(value):
    """Refuse an explicit ``null`` for a field whose stored value is never null.

    Optional update fields default to ``None`` when omitted, and pydantic only
    runs field validators on values that were actually sent.
    """
    if value is None:
        raise ValueError("must not be null")
    return value
