# snsfeed/core/security.py
from datetime import datetime, timezone
from typing import Any, Dict, Optional
import secrets

from passlib.context import CryptContext
from jose import jwt, JWTError

from .config import settings
from .durations import parse_duration

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

REFRESH_TOKEN_BYTES = 64


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        # bcrypt only looks at the first 72 bytes
        password_bytes = plain_password.encode('utf-8')[:72]
        return pwd_context.verify(password_bytes, hashed_password)
    except (ValueError, TypeError):
        # malformed or unknown hash
        return False

def get_password_hash(password: str) -> str:
    password_bytes = password.encode('utf-8')[:72]
    return pwd_context.hash(password_bytes)


# --- JWT ---
def create_access_token(claims: Dict[str, Any], expires_in: Optional[str] = None) -> str:
    """
    Signs an access token for the given claims ({"sub": ..., "loginId": ...}).
    `expires_in` is a duration string ("30m"); falls back to JWT_ACCESS_EXPIRES_IN.
    """
    now = datetime.now(timezone.utc)
    expire = now + parse_duration(expires_in or settings.JWT_ACCESS_EXPIRES_IN)
    to_encode: Dict[str, Any] = {
        **claims,
        "iss": settings.JWT_ISSUER,
        "aud": settings.JWT_AUDIENCE,
        "iat": now,
        "exp": expire,
        "token_type": "access",
    }
    # jose requires a string subject
    if "sub" in to_encode:
        to_encode["sub"] = str(to_encode["sub"])
    encoded_jwt = jwt.encode(
        to_encode,
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM
    )
    return encoded_jwt

def decode_access_token(token: str) -> Dict | None:
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            audience=settings.JWT_AUDIENCE,
            issuer=settings.JWT_ISSUER,
        )
    except JWTError:
        return None
    if payload.get("token_type") != "access":
        return None
    return payload


# --- Refresh token ---
def generate_refresh_token() -> str:
    """Opaque refresh token: 64 random bytes rendered as 128 lowercase hex chars."""
    return secrets.token_hex(REFRESH_TOKEN_BYTES)
