# snsfeed/api/dependencies.py
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from snsfeed.core import security
from snsfeed.core.exceptions import ServiceException
from snsfeed.db.session import get_db
from snsfeed.models.user import User as UserModel
from snsfeed.crud.crud_user import user as crud_user
from snsfeed.schemas.token import ClientContext, TokenPayload
from snsfeed.services.auth_service import AuthService
from snsfeed.services.user_service import UserService

# auto_error=False so a missing header is a 401 like any other bad token
bearer_scheme = HTTPBearer(auto_error=False, description="JWT access token")


def service_error_to_http(exc: ServiceException) -> HTTPException:
    return HTTPException(status_code=exc.status_code, detail=exc.message)


async def get_current_user(
    db: AsyncSession = Depends(get_db),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> UserModel:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise credentials_exception

    payload = security.decode_access_token(credentials.credentials)
    if payload is None:
        raise credentials_exception

    try:
        token_data = TokenPayload(**payload)
        user_id = int(token_data.sub)
    except (ValidationError, TypeError, ValueError):
        raise credentials_exception

    user = await crud_user.get(db, id=user_id)
    if user is None:
        raise credentials_exception
    return user


def get_client_context(request: Request) -> ClientContext:
    return ClientContext(
        user_agent=request.headers.get("user-agent"),
        forwarded_for=request.headers.get("x-forwarded-for"),
        remote_address=request.client.host if request.client else None,
    )


def get_auth_service(db: AsyncSession = Depends(get_db)) -> AuthService:
    return AuthService(db)


def get_user_service(db: AsyncSession = Depends(get_db)) -> UserService:
    return UserService(db)
