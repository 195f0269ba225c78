"""Tests for commit-time conflict handling against a real database."""

import pytest
from fastapi import HTTPException
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm.exc import StaleDataError
from sqlalchemy.pool import NullPool

from tacotuesday.database import build_engine
from tacotuesday.models import Restaurant
from tacotuesday.services import records
from tacotuesday.services.records import record_exists, save_changes


@pytest.fixture()
def session_factory(db_path, sync_engine):
    engine = build_engine(f"sqlite+aiosqlite:///{db_path}", poolclass=NullPool)
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


async def _delete_elsewhere(session_factory, restaurant_id):
    async with session_factory() as other:
        await other.delete(await other.get(Restaurant, restaurant_id))
        await other.commit()


class TestRecordExists:
    @pytest.mark.asyncio
    async def test_present_and_absent(self, session_factory, seed, owner):
        restaurant = seed.restaurant(owner)

        async with session_factory() as session:
            assert await record_exists(session, Restaurant, restaurant.id)
            assert not await record_exists(session, Restaurant, restaurant.id + 1)


class TestSaveChanges:
    @pytest.mark.asyncio
    async def test_commits(self, session_factory, seed, owner):
        restaurant = seed.restaurant(owner)

        async with session_factory() as session:
            loaded = await session.get(Restaurant, restaurant.id)
            loaded.name = "Taco Palace"
            await save_changes(session, Restaurant, restaurant.id)

        assert seed.get(Restaurant, restaurant.id).name == "Taco Palace"

    @pytest.mark.asyncio
    async def test_record_deleted_meanwhile_is_404(self, session_factory, seed, owner):
        restaurant = seed.restaurant(owner)

        async with session_factory() as session:
            loaded = await session.get(Restaurant, restaurant.id)
            await _delete_elsewhere(session_factory, restaurant.id)

            loaded.name = "Too late"
            with pytest.raises(HTTPException) as excinfo:
                await save_changes(session, Restaurant, restaurant.id)

        assert excinfo.value.status_code == 404
        assert seed.get(Restaurant, restaurant.id) is None

    @pytest.mark.asyncio
    async def test_conflict_on_existing_record_is_reraised(
        self, session_factory, seed, owner, monkeypatch
    ):
        restaurant = seed.restaurant(owner)

        async def still_there(db, model, record_id):
            return True

        monkeypatch.setattr(records, "record_exists", still_there)

        async with session_factory() as session:
            loaded = await session.get(Restaurant, restaurant.id)
            await _delete_elsewhere(session_factory, restaurant.id)

            loaded.name = "Too late"
            with pytest.raises(StaleDataError):
                await save_changes(session, Restaurant, restaurant.id)
