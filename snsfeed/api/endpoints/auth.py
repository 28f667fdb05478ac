# snsfeed/api/endpoints/auth.py
from typing import Any

from fastapi import APIRouter, Depends, Request, status

from snsfeed.api.dependencies import (
    get_auth_service, get_client_context, get_current_user, service_error_to_http,
)
from snsfeed.core.config import settings
from snsfeed.core.exceptions import ServiceException
from snsfeed.core.limiter import limiter
from snsfeed.models.user import User as UserModel
from snsfeed.schemas.token import (
    ClientContext, LoginRequest, LoginResponse, RefreshTokenRequest, TokenPair, MessageResponse,
)
from snsfeed.services.auth_service import AuthService

router = APIRouter()

UNAUTHORIZED_RESPONSE = {"description": "Invalid credentials or refresh token"}


@router.post(
    "/login",
    response_model=LoginResponse,
    status_code=status.HTTP_200_OK,
    responses={401: UNAUTHORIZED_RESPONSE},
)
@limiter.limit(settings.LOGIN_RATE_LIMIT)
async def login(
    request: Request,
    login_in: LoginRequest,
    client: ClientContext = Depends(get_client_context),
    auth_service: AuthService = Depends(get_auth_service),
) -> Any:
    """
    Login with loginId / password.

    Returns the public profile plus an access token (send it as `Authorization: Bearer ...`)
    and a refresh token for `/auth/refresh`. The access token expires after
    JWT_ACCESS_EXPIRES_IN (30 minutes by default).
    """
    try:
        return await auth_service.login(login_in, client)
    except ServiceException as e:
        raise service_error_to_http(e)


@router.post(
    "/refresh",
    response_model=TokenPair,
    status_code=status.HTTP_200_OK,
    responses={401: UNAUTHORIZED_RESPONSE},
)
async def refresh(
    refresh_in: RefreshTokenRequest,
    client: ClientContext = Depends(get_client_context),
    auth_service: AuthService = Depends(get_auth_service),
) -> Any:
    """Exchanges a refresh token for a new token pair. The presented refresh token stops working."""
    try:
        return await auth_service.refresh(refresh_in.refresh_token, client)
    except ServiceException as e:
        raise service_error_to_http(e)


@router.post(
    "/logout",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    responses={400: {"description": "Missing refresh token"}, 401: UNAUTHORIZED_RESPONSE},
)
async def logout(
    refresh_in: RefreshTokenRequest,
    current_user: UserModel = Depends(get_current_user),
    auth_service: AuthService = Depends(get_auth_service),
) -> Any:
    try:
        return await auth_service.logout(refresh_in.refresh_token)
    except ServiceException as e:
        raise service_error_to_http(e)
