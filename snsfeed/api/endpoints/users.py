# snsfeed/api/endpoints/users.py
from typing import Any

from fastapi import APIRouter, Depends, status

from snsfeed.api.dependencies import get_user_service, service_error_to_http
from snsfeed.core.exceptions import ServiceException
from snsfeed.schemas.user import User as UserSchema, UserCreate
from snsfeed.services.user_service import UserService

router = APIRouter()


@router.post("/register", response_model=UserSchema, status_code=status.HTTP_201_CREATED)
async def register(
    *,
    user_in: UserCreate,
    user_service: UserService = Depends(get_user_service),
) -> Any:
    """
    Sign-up. loginId and nickname must both be unused (409 otherwise).
    """
    try:
        return await user_service.register(user_in)
    except ServiceException as e:
        raise service_error_to_http(e)


@router.get("/{user_id}", response_model=UserSchema)
async def read_user(
    user_id: str,
    user_service: UserService = Depends(get_user_service),
) -> Any:
    try:
        return await user_service.get_user(user_id)
    except ServiceException as e:
        raise service_error_to_http(e)
