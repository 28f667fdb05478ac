# snsfeed/crud/crud_refresh_token.py
from datetime import datetime
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload

from snsfeed.models.refresh_token import RefreshToken


async def create_refresh_token(
    db: AsyncSession,
    *,
    user_id: int,
    token: str,
    expires_at: datetime,
    ip_address: str,
    device_id: Optional[str] = None,
    user_agent: Optional[str] = None,
) -> RefreshToken:
    """Stores a new session row. Every login gets its own row, even for the same device."""
    db_token = RefreshToken(
        user_id=user_id,
        token=token,
        device_id=device_id,
        user_agent=user_agent,
        ip_address=ip_address,
        expires_at=expires_at,
    )
    db.add(db_token)
    await db.commit()
    await db.refresh(db_token)
    return db_token


async def get_refresh_token(db: AsyncSession, *, token: str) -> RefreshToken | None:
    """Looks a row up by its token string, with the owning user loaded. Expired rows are returned too."""
    stmt = (
        select(RefreshToken)
        .options(selectinload(RefreshToken.user))
        .where(RefreshToken.token == token)
        .execution_options(populate_existing=True)
    )
    result = await db.execute(stmt)
    return result.scalars().first()


async def rotate_refresh_token(
    db: AsyncSession,
    *,
    db_token: RefreshToken,
    new_token: str,
    expires_at: datetime,
    last_used_at: datetime,
) -> RefreshToken:
    """Replaces the token string and expiry of an existing row; the row id is kept."""
    db_token.token = new_token
    db_token.expires_at = expires_at
    db_token.last_used_at = last_used_at
    db.add(db_token)
    await db.commit()
    await db.refresh(db_token)
    return db_token


async def delete_refresh_token(db: AsyncSession, *, db_token: RefreshToken) -> None:
    await db.delete(db_token)
    await db.commit()
