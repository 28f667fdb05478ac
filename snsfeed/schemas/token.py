# snsfeed/schemas/token.py
from pydantic import BaseModel
from typing import Optional

from snsfeed.schemas.user import CamelModel, UserProfile


class LoginRequest(CamelModel):
    login_id: str
    password: str
    device_id: Optional[str] = None

class RefreshTokenRequest(CamelModel):
    refresh_token: str

class TokenPair(CamelModel):
    access_token: str
    refresh_token: str

class LoginResponse(CamelModel):
    user: UserProfile
    access_token: str
    refresh_token: str

class MessageResponse(BaseModel):
    message: str

class TokenPayload(BaseModel):
    sub: str | None = None
    loginId: str | None = None
    exp: int | None = None
    token_type: str | None = None

class ClientContext(BaseModel):
    """What the HTTP layer knows about the caller: headers and socket address."""
    user_agent: Optional[str] = None
    forwarded_for: Optional[str] = None
    remote_address: Optional[str] = None
