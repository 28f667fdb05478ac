# snsfeed/db/session.py
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession, AsyncEngine
from snsfeed.core.config import settings
from typing import AsyncGenerator, Optional

# --- Engine and session factory are created lazily ---
_async_engine: Optional[AsyncEngine] = None
_AsyncSessionLocal: Optional[async_sessionmaker[AsyncSession]] = None

def get_async_engine() -> AsyncEngine:
    """Creates the engine if it doesn't exist yet."""
    global _async_engine
    if _async_engine is None:
        # The URL must carry an async driver,
        # e.g. "postgresql+asyncpg://..." or "sqlite+aiosqlite:///..."
        db_url = settings.DATABASE_URL
        if not db_url:
            raise RuntimeError("DATABASE_URL not loaded from settings. Check .env file and config.py")
        _async_engine = create_async_engine(
            db_url,
            pool_pre_ping=True,
            echo=False # Change to True to see SQL logs
        )
    return _async_engine

def get_session_local() -> async_sessionmaker[AsyncSession]:
    """Creates the session factory if it doesn't exist yet."""
    global _AsyncSessionLocal
    if _AsyncSessionLocal is None:
        engine = get_async_engine()
        _AsyncSessionLocal = async_sessionmaker(
            bind=engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )
    return _AsyncSessionLocal


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    SessionLocal = get_session_local()
    async with SessionLocal() as db:
        try:
            yield db
        finally:
            await db.close()

# Called from the FastAPI shutdown event
async def dispose_engine():
    global _async_engine, _AsyncSessionLocal
    if _async_engine:
        await _async_engine.dispose()
        _async_engine = None
        _AsyncSessionLocal = None
