# snsfeed/schemas/user.py
from pydantic import BaseModel, HttpUrl, TypeAdapter, ValidationError, field_validator
from pydantic.alias_generators import to_camel
from typing import Optional
from datetime import datetime
import re

LOGIN_ID_RE = re.compile(r"^[a-z0-9]+$")
NAME_RE = re.compile(r"^[가-힣a-zA-Z\s]+$")
NICKNAME_RE = re.compile(r"^[a-z]+$")
PASSWORD_RE = re.compile(r"^(?=.*[a-z])(?=.*\d)(?=.*[!@#$%^&*()_+\-=\[\]{};':\"\\|,.<>/?]).*$")
HTTP_URL_ADAPTER = TypeAdapter(HttpUrl)


class CamelModel(BaseModel):
    """snake_case attributes, camelCase on the wire. Unknown fields are rejected."""
    class Config:
        alias_generator = to_camel
        populate_by_name = True
        extra = "forbid"


def _check_length(value: str, min_length: int, max_length: int, message: str) -> None:
    if not min_length <= len(value) <= max_length:
        raise ValueError(message)


class UserCreate(CamelModel):
    login_id: str
    name: str
    nickname: str
    password: str
    profile_image_url: Optional[str] = None

    @field_validator('login_id')
    @classmethod
    def validate_login_id(cls, v: str) -> str:
        _check_length(v, 3, 20, 'ID는 3-20자 사이여야 합니다')
        if not LOGIN_ID_RE.match(v):
            raise ValueError('ID는 영문소문자와 숫자만 허용됩니다')
        return v

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        _check_length(v, 2, 50, '이름은 2-50자 사이여야 합니다')
        if not NAME_RE.match(v):
            raise ValueError('이름은 한글, 영문대소문자만 허용됩니다')
        return v

    @field_validator('nickname')
    @classmethod
    def validate_nickname(cls, v: str) -> str:
        _check_length(v, 2, 20, '닉네임은 2-20자 사이여야 합니다')
        if not NICKNAME_RE.match(v):
            raise ValueError('닉네임은 영문소문자만 허용됩니다')
        return v

    @field_validator('password')
    @classmethod
    def validate_password(cls, v: str) -> str:
        _check_length(v, 8, 20, '비밀번호는 8-20자 사이여야 합니다')
        if not PASSWORD_RE.match(v):
            raise ValueError('비밀번호는 영문소문자, 숫자, 특수문자를 각각 1개 이상 포함해야 합니다')
        return v

    @field_validator('profile_image_url')
    @classmethod
    def validate_profile_image_url(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        try:
            url = HTTP_URL_ADAPTER.validate_python(v)
        except ValidationError:
            raise ValueError('올바른 URL 형식이어야 합니다')
        # the URL parser accepts hosts such as "." or ".."; require dotted, non-empty labels
        labels = (url.host or "").rstrip(".").split(".")
        if len(labels) < 2 or not all(labels):
            raise ValueError('올바른 URL 형식이어야 합니다')
        return v


class UserProfile(CamelModel):
    """Public profile embedded in the login response."""
    id: int
    login_id: str
    name: str
    nickname: str
    profile_image_url: str


class User(CamelModel):
    id: int
    login_id: str
    name: str
    nickname: str
    profile_image_url: Optional[str] = None
    created_at: datetime

    class Config(CamelModel.Config):
        from_attributes = True
