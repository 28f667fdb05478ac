# snsfeed/core/exceptions.py
from fastapi import status


class ServiceException(Exception):
    """Business-rule failure; endpoints translate it into an HTTPException."""
    status_code: int = status.HTTP_400_BAD_REQUEST
    default_message: str = "잘못된 요청입니다"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidCredentialsException(ServiceException):
    """Unknown login id or wrong password. Deliberately one message for both."""
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "아이디 또는 비밀번호가 올바르지 않습니다"


class InvalidRefreshTokenException(ServiceException):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "유효하지 않은 리프레시 토큰입니다"


class ExpiredRefreshTokenException(ServiceException):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "만료된 리프레시 토큰입니다"


class MissingRefreshTokenException(ServiceException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "리프레시 토큰이 필요합니다"


class DuplicateLoginIdException(ServiceException):
    status_code = status.HTTP_409_CONFLICT
    default_message = "이미 사용 중인 ID입니다"


class DuplicateNicknameException(ServiceException):
    status_code = status.HTTP_409_CONFLICT
    default_message = "이미 사용 중인 닉네임입니다"


class UserNotFoundException(ServiceException):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "사용자를 찾을 수 없습니다"


class InvalidUserIdException(ServiceException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "유효하지 않은 사용자 ID입니다"
