"""User ORM model — owner of restaurants and reviews."""

from sqlalchemy import Column, Integer, Text
from sqlalchemy.orm import relationship

from tacotuesday.database import Base


class User(Base):
    """
    An account known to the identity service.
    Rows are provisioned by that service; this API only reads them and
    references them as the owner of restaurants and reviews.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    full_name = Column(Text, nullable=False)
    email = Column(Text, nullable=False, unique=True)
    hashed_password = Column(Text, nullable=False)

    # Relationships
    restaurants = relationship("Restaurant", back_populates="user")
    reviews = relationship("Review", back_populates="user")
