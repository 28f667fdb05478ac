# snsfeed/crud/crud_user.py
from loguru import logger
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from typing import Optional

from snsfeed.crud.base import CRUDBase
from snsfeed.models.user import User
from snsfeed.schemas.user import UserCreate
from snsfeed.core.exceptions import DuplicateLoginIdException, DuplicateNicknameException
from snsfeed.core.security import get_password_hash


class CRUDUser(CRUDBase[User, UserCreate]):
    async def get_by_login_id(self, db: AsyncSession, *, login_id: str) -> Optional[User]:
        stmt = select(User).filter(User.login_id == login_id)
        result = await db.execute(stmt)
        return result.scalars().first()

    async def get_by_nickname(self, db: AsyncSession, *, nickname: str) -> Optional[User]:
        stmt = select(User).filter(User.nickname == nickname)
        result = await db.execute(stmt)
        return result.scalars().first()

    async def create(self, db: AsyncSession, *, obj_in: UserCreate) -> User:
        db_obj = User(
            login_id=obj_in.login_id,
            name=obj_in.name,
            nickname=obj_in.nickname,
            hashed_password=get_password_hash(obj_in.password),
            profile_image_url=obj_in.profile_image_url,
        )
        db.add(db_obj)
        try:
            await db.commit()
        except IntegrityError as e: # a concurrent registration took the login id or nickname
            await db.rollback()
            logger.warning(f"Integrity error registering '{obj_in.login_id}': {e}")
            if await self.get_by_login_id(db, login_id=obj_in.login_id):
                raise DuplicateLoginIdException()
            raise DuplicateNicknameException()
        await db.refresh(db_obj)
        return db_obj

user = CRUDUser(User)
