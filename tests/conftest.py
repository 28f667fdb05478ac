import os

# Settings are read at import time, so the environment goes first
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ["RATE_LIMIT_ENABLED"] = "false"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from main import app
from snsfeed.crud.crud_user import user as crud_user
from snsfeed.db.base import Base
from snsfeed.db.session import get_db
from snsfeed.schemas.user import UserCreate

DEFAULT_PASSWORD = "password123!"


@pytest.fixture
async def db_engine(tmp_path):
    """A fresh SQLite database file per test."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(bind=db_engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def create_user(session_factory):
    async def _create(
        login_id: str = "user123",
        nickname: str = "nickname",
        name: str = "김철수",
        password: str = DEFAULT_PASSWORD,
        profile_image_url: str | None = None,
    ):
        async with session_factory() as session:
            return await crud_user.create(
                session,
                obj_in=UserCreate(
                    login_id=login_id,
                    name=name,
                    nickname=nickname,
                    password=password,
                    profile_image_url=profile_image_url,
                ),
            )
    return _create
