"""Pydantic schemas package."""

from tacotuesday.schemas.user import UserRead
from tacotuesday.schemas.review import (
    ReviewCreate,
    ReviewRead,
    ReviewUpdate,
    ReviewWithUser,
)
from tacotuesday.schemas.restaurant import (
    RestaurantDetail,
    RestaurantRead,
    RestaurantUpdate,
    RestaurantWrite,
)

__all__ = [
    "UserRead",
    "ReviewCreate", "ReviewRead", "ReviewUpdate", "ReviewWithUser",
    "RestaurantDetail", "RestaurantRead", "RestaurantUpdate", "RestaurantWrite",
]
