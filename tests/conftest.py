"""Shared fixtures: a fresh SQLite file per test, seeding helpers, and tokens."""

import os

os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-for-taco-tuesday-suite")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from datetime import datetime, timedelta, timezone

import jwt
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import Session
from sqlalchemy.pool import NullPool

from tacotuesday.config import settings
from tacotuesday.database import build_engine, get_db
from tacotuesday.main import app
from tacotuesday.models import Base, Restaurant, Review, User


def make_token(user_id, **claims):
    payload = {
        "Id": str(user_id),
        "exp": datetime.now(timezone.utc) + timedelta(hours=1),
        **claims,
    }
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def auth_headers(user_id):
    return {"Authorization": f"Bearer {make_token(user_id)}"}


class Seeder:
    """Writes rows straight to the test database, one short session per call."""

    def __init__(self, engine):
        self.engine = engine

    def _save(self, obj):
        with Session(self.engine, expire_on_commit=False) as session:
            session.add(obj)
            session.commit()
        return obj

    def user(self, full_name="Pat Diner", email=None):
        email = email or f"{full_name.lower().replace(' ', '.')}@example.com"
        return self._save(User(full_name=full_name, email=email, hashed_password="x"))

    def restaurant(self, owner, name="Taco Hut", address="1 Main St", **fields):
        return self._save(
            Restaurant(name=name, address=address, user_id=owner.id, **fields)
        )

    def review(self, author, restaurant, stars=5, summary="Great food", body="Loved it"):
        return self._save(
            Review(
                summary=summary,
                body=body,
                stars=stars,
                user_id=author.id,
                restaurant_id=restaurant.id,
            )
        )

    def get(self, model, record_id):
        with Session(self.engine) as session:
            obj = session.get(model, record_id)
            if obj is not None:
                session.expunge(obj)
            return obj


@pytest.fixture()
def db_path(tmp_path):
    return tmp_path / "tacotuesday-test.db"


@pytest.fixture()
def sync_engine(db_path):
    engine = create_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def seed(sync_engine):
    return Seeder(sync_engine)


@pytest.fixture()
def client(db_path, sync_engine):
    test_engine = build_engine(f"sqlite+aiosqlite:///{db_path}", poolclass=NullPool)
    TestSessionLocal = async_sessionmaker(
        bind=test_engine, class_=AsyncSession, expire_on_commit=False
    )

    async def override_get_db():
        async with TestSessionLocal() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture()
def owner(seed):
    return seed.user("Olive Owner")


@pytest.fixture()
def stranger(seed):
    return seed.user("Sam Stranger")
