"""
Persistence helpers shared by the resource routers.

SQLAlchemy raises StaleDataError when an UPDATE or DELETE matches no row,
i.e. someone removed the record between our read and our write. That is the
only write conflict the API resolves itself; anything else propagates.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import HTTPException, status
from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

logger = logging.getLogger(__name__)


async def record_exists(db: AsyncSession, model: type[Any], record_id: int) -> bool:
    """Return True if a row of model with primary key record_id is present."""
    result = await db.execute(select(exists().where(model.id == record_id)))
    return bool(result.scalar())


async def save_changes(db: AsyncSession, model: type[Any], record_id: int) -> None:
    """
    Commit pending changes to one record.

    On a stale write the session is rolled back and the record looked up
    again: if it is gone the caller gets a 404, otherwise the conflict is
    re-raised and surfaces as a 500.
    """
    try:
        await db.commit()
    except StaleDataError:
        await db.rollback()
        if not await record_exists(db, model, record_id):
            logger.warning(
                "%s %s was deleted during update", model.__name__, record_id
            )
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"{model.__name__} not found",
            )
        logger.error("Concurrent update conflict on %s %s", model.__name__, record_id)
        raise
