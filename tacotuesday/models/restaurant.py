"""Restaurant ORM model."""

from sqlalchemy import Column, Integer, Text, ForeignKey
from sqlalchemy.orm import relationship

from tacotuesday.database import Base


class Restaurant(Base):
    """
    A restaurant listed by one user.
    The owner (user_id) is set from the caller's token on creation and is
    never taken from a request body afterwards.
    """

    __tablename__ = "restaurants"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    address = Column(Text, nullable=False)
    telephone = Column(Text, nullable=True)

    user_id = Column(
        Integer,
        ForeignKey("users.id"),
        nullable=False,
    )

    # Relationships
    user = relationship("User", back_populates="restaurants")
    reviews = relationship(
        "Review",
        back_populates="restaurant",
        cascade="all, delete-orphan",
        order_by="Review.id",
    )
