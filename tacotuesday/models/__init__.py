"""SQLAlchemy ORM models package."""

from tacotuesday.database import Base
from tacotuesday.models.user import User
from tacotuesday.models.restaurant import Restaurant
from tacotuesday.models.review import Review

__all__ = ["Base", "User", "Restaurant", "Review"]
