# snsfeed/services/user_service.py
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from snsfeed.core.exceptions import (
    DuplicateLoginIdException, DuplicateNicknameException,
    UserNotFoundException, InvalidUserIdException,
)
from snsfeed.crud.crud_user import user as crud_user
from snsfeed.models.user import User as UserModel
from snsfeed.schemas.user import UserCreate


# largest value a BIGINT primary key can hold
MAX_USER_ID = 2**63 - 1


class UserService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def register(self, user_in: UserCreate) -> UserModel:
        await self._check_duplicates(user_in.login_id, user_in.nickname)
        db_user = await crud_user.create(self.db, obj_in=user_in)
        logger.info(f"Registered user ID {db_user.id} ({db_user.login_id})")
        return db_user

    async def _check_duplicates(self, login_id: str, nickname: str) -> None:
        # login id is checked first so that its message wins when both collide
        if await crud_user.get_by_login_id(self.db, login_id=login_id):
            raise DuplicateLoginIdException()
        if await crud_user.get_by_nickname(self.db, nickname=nickname):
            raise DuplicateNicknameException()

    async def get_user(self, user_id: str) -> UserModel:
        """`user_id` comes straight from the path, so it is parsed here."""
        # int() alone would also take "1_0", "+1", " 1" and non-ASCII digits
        if not (user_id and user_id.isascii() and user_id.isdigit()):
            raise InvalidUserIdException()
        parsed_id = int(user_id)
        if not 0 < parsed_id <= MAX_USER_ID:
            raise InvalidUserIdException()

        db_user = await crud_user.get(self.db, id=parsed_id)
        if not db_user:
            raise UserNotFoundException()
        return db_user
