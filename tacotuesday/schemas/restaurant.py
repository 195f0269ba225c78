"""Pydantic schemas for the restaurant endpoints."""

from __future__ import annotations

from typing import Annotated, Optional

from pydantic import BeforeValidator, Field

from tacotuesday.schemas.common import CamelModel, required_text
from tacotuesday.schemas.review import ReviewRead, ReviewWithUser

RequiredName = Annotated[str, BeforeValidator(required_text("You must provide a name."))]
RequiredAddress = Annotated[str, BeforeValidator(required_text("You must provide an address."))]


class RestaurantWrite(CamelModel):
    """
    Body for POST /api/Restaurants.
    Any userId in the body is ignored; the owner always comes from the token.
    """

    name: RequiredName = Field(None, validate_default=True)
    description: Optional[str] = None
    address: RequiredAddress = Field(None, validate_default=True)
    telephone: Optional[str] = None


class RestaurantUpdate(RestaurantWrite):
    """Body for PUT /api/Restaurants/{id} — a full replace of the editable fields."""

    id: Optional[int] = None


class RestaurantRead(CamelModel):
    """A restaurant with its reviews (review authors not included)."""

    id: int
    name: str
    description: Optional[str] = None
    address: str
    telephone: Optional[str] = None
    user_id: int
    reviews: list[ReviewRead] = Field(default_factory=list)


class RestaurantDetail(RestaurantRead):
    """GET /api/Restaurants/{id} — every review carries its author."""

    reviews: list[ReviewWithUser] = Field(default_factory=list)
