# snsfeed/db/initial_data.py
import asyncio

from loguru import logger

from snsfeed.db.base import Base
from snsfeed.db.session import get_async_engine, dispose_engine

# Every model must be imported so Base.metadata knows about it
from snsfeed.models import user # noqa F401
from snsfeed.models import refresh_token # noqa F401


async def init_db(drop_existing: bool = False) -> None:
    """Creates every table known to Base.metadata (optionally dropping them first)."""
    engine = get_async_engine()
    async with engine.begin() as conn:
        if drop_existing:
            logger.info("Dropping existing tables...")
            await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables are in place.")


async def main() -> None:
    try:
        await init_db(drop_existing=True)
    finally:
        await dispose_engine()

if __name__ == "__main__":
    asyncio.run(main())
