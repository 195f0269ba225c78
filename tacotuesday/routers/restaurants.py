"""
Restaurant endpoints — /api/Restaurants.

Reads are public. Creating requires a bearer token; updating and deleting
also require that the caller owns the restaurant.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from tacotuesday.auth import get_current_user_id
from tacotuesday.database import get_db
from tacotuesday.errors import BadRequestError, NotAuthorizedError
from tacotuesday.models import Restaurant, Review
from tacotuesday.schemas.restaurant import (
    RestaurantDetail,
    RestaurantRead,
    RestaurantUpdate,
    RestaurantWrite,
)
from tacotuesday.services.records import save_changes

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/Restaurants", tags=["restaurants"])


async def _load_restaurant(
    db: AsyncSession, restaurant_id: int, *, with_review_users: bool = False
) -> Optional[Restaurant]:
    """Fetch one restaurant with its reviews eagerly loaded, or None."""
    reviews = selectinload(Restaurant.reviews)
    if with_review_users:
        reviews = reviews.selectinload(Review.user)
    result = await db.execute(
        select(Restaurant).options(reviews).where(Restaurant.id == restaurant_id)
    )
    return result.scalar_one_or_none()


def _not_found(restaurant_id: int) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Restaurant {restaurant_id} not found",
    )


@router.get("", response_model=list[RestaurantRead])
async def list_restaurants(
    name_filter: Optional[str] = Query(default=None, alias="filter"),
    db: AsyncSession = Depends(get_db),
) -> list[Restaurant]:
    """
    All restaurants ordered by id, each with its reviews.
    ?filter= keeps only names containing the text, ignoring case.
    """
    stmt = (
        select(Restaurant)
        .options(selectinload(Restaurant.reviews))
        .order_by(Restaurant.id)
    )
    if name_filter is not None:
        stmt = stmt.where(
            func.lower(Restaurant.name).contains(name_filter.lower(), autoescape=True)
        )

    result = await db.execute(stmt)
    return list(result.scalars().all())


@router.get("/{restaurant_id}", response_model=RestaurantDetail)
async def get_restaurant(
    restaurant_id: int,
    db: AsyncSession = Depends(get_db),
) -> Restaurant:
    """One restaurant with its reviews and each review's author."""
    restaurant = await _load_restaurant(db, restaurant_id, with_review_users=True)
    if restaurant is None:
        raise _not_found(restaurant_id)
    return restaurant


@router.post("", response_model=RestaurantRead, status_code=status.HTTP_201_CREATED)
async def create_restaurant(
    body: RestaurantWrite,
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> Restaurant:
    """Create a restaurant owned by the caller."""
    restaurant = Restaurant(**body.model_dump(), user_id=user_id, reviews=[])
    db.add(restaurant)
    await db.commit()

    logger.info("User %s created restaurant %s", user_id, restaurant.id)
    response.headers["Location"] = str(
        request.url_for("get_restaurant", restaurant_id=restaurant.id)
    )
    return restaurant


@router.put("/{restaurant_id}", response_model=RestaurantRead)
async def update_restaurant(
    restaurant_id: int,
    body: RestaurantUpdate,
    db: AsyncSession = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> Restaurant:
    """
    Replace name, description, address and telephone.
    The owner is never changed, whatever userId the body carries.
    """
    if body.id != restaurant_id:
        raise BadRequestError("The id in the URL does not match the id in the body.")

    restaurant = await _load_restaurant(db, restaurant_id)
    if restaurant is None:
        raise _not_found(restaurant_id)

    if restaurant.user_id != user_id:
        logger.warning(
            "User %s tried to update restaurant %s owned by %s",
            user_id, restaurant_id, restaurant.user_id,
        )
        raise NotAuthorizedError()

    for field, value in body.model_dump(exclude={"id"}).items():
        setattr(restaurant, field, value)

    await save_changes(db, Restaurant, restaurant_id)
    logger.info("User %s updated restaurant %s", user_id, restaurant_id)
    return restaurant


@router.delete("/{restaurant_id}", response_model=RestaurantRead)
async def delete_restaurant(
    restaurant_id: int,
    db: AsyncSession = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> Restaurant:
    """Delete a restaurant (and its reviews) and return the deleted record."""
    restaurant = await _load_restaurant(db, restaurant_id)
    if restaurant is None:
        raise _not_found(restaurant_id)

    if restaurant.user_id != user_id:
        logger.warning(
            "User %s tried to delete restaurant %s owned by %s",
            user_id, restaurant_id, restaurant.user_id,
        )
        raise NotAuthorizedError()

    await db.delete(restaurant)
    await save_changes(db, Restaurant, restaurant_id)
    logger.info("User %s deleted restaurant %s", user_id, restaurant_id)
    return restaurant
