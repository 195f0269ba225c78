"""Pydantic schema for the public view of a user."""

from __future__ import annotations

from tacotuesday.schemas.common import CamelModel


class UserRead(CamelModel):
    """Embedded in reviews — never exposes the password credential."""

    id: int
    full_name: str
    email: str
