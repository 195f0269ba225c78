"""Review ORM model — a star-rated opinion of one restaurant by one user."""

from datetime import datetime, timezone

from sqlalchemy import Column, Integer, Text, TIMESTAMP, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship

from tacotuesday.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Review(Base):
    """
    A user review for a restaurant.
    created_at is assigned when the row is inserted and is not part of any
    update payload.
    """

    __tablename__ = "reviews"
    __table_args__ = (
        CheckConstraint("stars BETWEEN 1 AND 5", name="ck_reviews_stars_range"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    summary = Column(Text, nullable=True)
    body = Column(Text, nullable=True)
    stars = Column(Integer, nullable=False)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=_utcnow)

    user_id = Column(
        Integer,
        ForeignKey("users.id"),
        nullable=False,
    )
    restaurant_id = Column(
        Integer,
        ForeignKey("restaurants.id", ondelete="CASCADE"),
        nullable=False,
    )

    # Relationships
    user = relationship("User", back_populates="reviews")
    restaurant = relationship("Restaurant", back_populates="reviews")
