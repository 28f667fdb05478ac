# snsfeed/services/auth_service.py
"""
Session lifecycle: login, refresh-token rotation and logout.

Access tokens are stateless JWTs and are never stored. Refresh tokens are opaque
random strings, one row per login; a refresh rewrites that row in place, and
expired rows are deleted only when someone presents them.
"""
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from snsfeed.core import security
from snsfeed.core.config import settings
from snsfeed.core.exceptions import (
    InvalidCredentialsException, InvalidRefreshTokenException,
    ExpiredRefreshTokenException, MissingRefreshTokenException,
)
from snsfeed.crud import crud_refresh_token
from snsfeed.crud.crud_user import user as crud_user
from snsfeed.models.user import User as UserModel
from snsfeed.schemas.token import (
    ClientContext, LoginRequest, LoginResponse, TokenPair, MessageResponse,
)
from snsfeed.schemas.user import UserProfile

DEFAULT_CLIENT_IP = "127.0.0.1"
LOGOUT_MESSAGE = "로그아웃되었습니다"


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def get_client_ip(client: ClientContext) -> str:
    """First X-Forwarded-For entry, then the socket peer, then loopback."""
    if client.forwarded_for:
        first = client.forwarded_for.split(",")[0].strip()
        if first:
            return first
    return client.remote_address or DEFAULT_CLIENT_IP


class AuthService:
    def __init__(
        self,
        db: AsyncSession,
        *,
        access_token_expires_in: Optional[str] = None,
        refresh_token_expire_days: Optional[int] = None,
        default_profile_image_url: Optional[str] = None,
        signer: Callable[..., str] = security.create_access_token,
        password_verifier: Callable[[str, str], bool] = security.verify_password,
        token_generator: Callable[[], str] = security.generate_refresh_token,
    ):
        self.db = db
        self.access_token_expires_in = access_token_expires_in or settings.JWT_ACCESS_EXPIRES_IN or "30m"
        self.refresh_token_lifetime = timedelta(
            days=refresh_token_expire_days or settings.REFRESH_TOKEN_EXPIRE_DAYS
        )
        self.default_profile_image_url = default_profile_image_url or settings.DEFAULT_PROFILE_IMAGE_URL
        self.signer = signer
        self.password_verifier = password_verifier
        self.token_generator = token_generator

    def _issue_access_token(self, user: UserModel) -> str:
        return self.signer(
            {"sub": user.id, "loginId": user.login_id},
            expires_in=self.access_token_expires_in,
        )

    def _to_profile(self, user: UserModel) -> UserProfile:
        return UserProfile(
            id=user.id,
            login_id=user.login_id,
            name=user.name,
            nickname=user.nickname,
            profile_image_url=user.profile_image_url or self.default_profile_image_url,
        )

    async def login(self, credentials: LoginRequest, client: ClientContext) -> LoginResponse:
        user = await crud_user.get_by_login_id(self.db, login_id=credentials.login_id)
        if not user:
            logger.warning(f"Failed login for login_id={credentials.login_id!r}")
            raise InvalidCredentialsException()

        if not self.password_verifier(credentials.password, user.hashed_password):
            logger.warning(f"Failed login for login_id={credentials.login_id!r}")
            raise InvalidCredentialsException()

        access_token = self._issue_access_token(user)
        refresh_token = self.token_generator()
        await crud_refresh_token.create_refresh_token(
            self.db,
            user_id=user.id,
            token=refresh_token,
            device_id=credentials.device_id or None,
            user_agent=client.user_agent or None,
            ip_address=get_client_ip(client),
            expires_at=utcnow() + self.refresh_token_lifetime,
        )
        logger.info(f"User ID {user.id} logged in (device={credentials.device_id or '-'})")

        return LoginResponse(
            user=self._to_profile(user),
            access_token=access_token,
            refresh_token=refresh_token,
        )

    async def refresh(self, refresh_token: str, client: ClientContext) -> TokenPair:
        db_token = await crud_refresh_token.get_refresh_token(self.db, token=refresh_token)
        if not db_token:
            logger.warning("Refresh attempted with an unknown refresh token")
            raise InvalidRefreshTokenException()

        now = utcnow()
        if db_token.expires_at <= now:
            await crud_refresh_token.delete_refresh_token(self.db, db_token=db_token)
            logger.info(f"Expired refresh token {db_token.id} removed on refresh")
            raise ExpiredRefreshTokenException()

        access_token = self._issue_access_token(db_token.user)
        new_refresh_token = self.token_generator()
        await crud_refresh_token.rotate_refresh_token(
            self.db,
            db_token=db_token,
            new_token=new_refresh_token,
            expires_at=now + self.refresh_token_lifetime,
            last_used_at=now,
        )
        logger.info(f"Refresh token {db_token.id} rotated for user ID {db_token.user_id} (ip={get_client_ip(client)})")

        return TokenPair(access_token=access_token, refresh_token=new_refresh_token)

    async def logout(self, refresh_token: str) -> MessageResponse:
        if not refresh_token or not refresh_token.strip():
            raise MissingRefreshTokenException()

        db_token = await crud_refresh_token.get_refresh_token(self.db, token=refresh_token)
        if not db_token:
            logger.warning("Logout attempted with an unknown refresh token")
            raise InvalidRefreshTokenException()

        await crud_refresh_token.delete_refresh_token(self.db, db_token=db_token)
        if db_token.expires_at <= utcnow():
            logger.info(f"Expired refresh token {db_token.id} removed on logout")
            raise ExpiredRefreshTokenException()

        logger.info(f"User ID {db_token.user_id} logged out (refresh token {db_token.id})")
        return MessageResponse(message=LOGOUT_MESSAGE)
