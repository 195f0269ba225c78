"""
Review endpoints — /api/Reviews.

Every write requires a bearer token. A review belongs to the user who
posted it; only that user may edit or delete it.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.exceptions import RequestValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from tacotuesday.auth import get_current_user_id
from tacotuesday.database import get_db
from tacotuesday.errors import BadRequestError, NotAuthorizedError
from tacotuesday.models import Restaurant, Review
from tacotuesday.schemas.review import ReviewCreate, ReviewRead, ReviewUpdate, ReviewWithUser
from tacotuesday.services.records import record_exists, save_changes

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/Reviews", tags=["reviews"])


async def _load_review(
    db: AsyncSession, review_id: int, *, with_user: bool = False
) -> Optional[Review]:
    stmt = select(Review).where(Review.id == review_id)
    if with_user:
        stmt = stmt.options(selectinload(Review.user))
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


def _not_found(review_id: int) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Review {review_id} not found",
    )


@router.get("/{review_id}", response_model=ReviewWithUser)
async def get_review(
    review_id: int,
    db: AsyncSession = Depends(get_db),
) -> Review:
    """One review with its author."""
    review = await _load_review(db, review_id, with_user=True)
    if review is None:
        raise _not_found(review_id)
    return review


@router.post("", response_model=ReviewRead, status_code=status.HTTP_201_CREATED)
async def create_review(
    body: ReviewCreate,
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> Review:
    """Post a review of an existing restaurant as the caller."""
    if not await record_exists(db, Restaurant, body.restaurant_id):
        raise RequestValidationError([
            {
                "loc": ("body", "restaurantId"),
                "msg": f"Restaurant {body.restaurant_id} does not exist.",
                "type": "value_error",
            }
        ])

    review = Review(**body.model_dump(), user_id=user_id)
    db.add(review)
    await db.commit()

    logger.info(
        "User %s reviewed restaurant %s (review %s, %s stars)",
        user_id, review.restaurant_id, review.id, review.stars,
    )
    response.headers["Location"] = str(request.url_for("get_review", review_id=review.id))
    return review


@router.put("/{review_id}", response_model=ReviewRead)
async def update_review(
    review_id: int,
    body: ReviewUpdate,
    db: AsyncSession = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> Review:
    """Replace summary, body and stars; owner, restaurant and creation time are kept."""
    if body.id != review_id:
        raise BadRequestError("The id in the URL does not match the id in the body.")

    review = await _load_review(db, review_id)
    if review is None:
        raise _not_found(review_id)

    if review.user_id != user_id:
        logger.warning(
            "User %s tried to update review %s owned by %s",
            user_id, review_id, review.user_id,
        )
        raise NotAuthorizedError()

    review.summary = body.summary
    review.body = body.body
    review.stars = body.stars

    await save_changes(db, Review, review_id)
    logger.info("User %s updated review %s", user_id, review_id)
    return review


@router.delete("/{review_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_review(
    review_id: int,
    db: AsyncSession = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> Response:
    """Delete the caller's review."""
    review = await _load_review(db, review_id)
    if review is None:
        raise _not_found(review_id)

    if review.user_id != user_id:
        logger.warning(
            "User %s tried to delete review %s owned by %s",
            user_id, review_id, review.user_id,
        )
        raise NotAuthorizedError()

    await db.delete(review)
    await save_changes(db, Review, review_id)
    logger.info("User %s deleted review %s", user_id, review_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
