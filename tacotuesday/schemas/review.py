"""Pydantic schemas for the review endpoints."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated, Optional

from pydantic import AfterValidator, Field

from tacotuesday.schemas.common import CamelModel
from tacotuesday.schemas.user import UserRead


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive values; every stored timestamp is UTC.
    return value.replace(tzinfo=timezone.utc) if value.tzinfo is None else value


UTCDateTime = Annotated[datetime, AfterValidator(_as_utc)]


class ReviewCreate(CamelModel):
    """
    Body for POST /api/Reviews.
    id, userId and createdAt are assigned by the server; if a client sends
    them they are ignored.
    """

    summary: Optional[str] = None
    body: Optional[str] = None
    stars: int = Field(..., ge=1, le=5)
    restaurant_id: int


class ReviewUpdate(CamelModel):
    """
    Body for PUT /api/Reviews/{id}.
    Replaces the editable text and rating; owner, restaurant and creation
    time stay as they were.
    """

    id: Optional[int] = None
    summary: Optional[str] = None
    body: Optional[str] = None
    stars: int = Field(..., ge=1, le=5)


class ReviewRead(CamelModel):
    """A review as nested in restaurant listings."""

    id: int
    summary: Optional[str] = None
    body: Optional[str] = None
    stars: int
    created_at: UTCDateTime
    user_id: int
    restaurant_id: int


class ReviewWithUser(ReviewRead):
    """A review with its author — used wherever the user is loaded."""

    user: UserRead
