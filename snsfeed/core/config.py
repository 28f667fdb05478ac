# snsfeed/core/config.py
import logging
from pathlib import Path
from typing import List

from pydantic import field_validator
from pydantic_settings import BaseSettings

from snsfeed.core.durations import parse_duration

BASE_DIR = Path(__file__).resolve().parent.parent.parent
ENV_FILE_PATH = BASE_DIR / ".env"

class Settings(BaseSettings):

    # Core
    DATABASE_URL: str
    SECRET_KEY: str
    ALGORITHM: str = "HS256"

    # Access Token lifetime ("30m", "1h", "7d")
    JWT_ACCESS_EXPIRES_IN: str = "30m"

    # Refresh Token
    REFRESH_TOKEN_EXPIRE_DAYS: int = 7

    # JWT Claims
    JWT_ISSUER: str = "urn:snsfeed:api"
    JWT_AUDIENCE: str = "urn:snsfeed:client"

    # Profile
    DEFAULT_PROFILE_IMAGE_URL: str = "https://picsum.photos/40/40?random=1"

    # Rate limiting (slowapi)
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_DEFAULT: str = "60/minute"
    LOGIN_RATE_LIMIT: str = "10/minute"

    CORS_ORIGINS: List[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
        "http://localhost:5656",
    ]

    LOG_LEVEL: str = "INFO"

    @field_validator("JWT_ACCESS_EXPIRES_IN")
    @classmethod
    def validate_access_expires_in(cls, v: str) -> str:
        parse_duration(v)
        return v

    class Config:
        case_sensitive = True
        env_file = ENV_FILE_PATH
        env_file_encoding = 'utf-8'

try:
    settings = Settings()
except Exception as e:
    logging.error(f"FATAL: failed to load 'settings' from environment / {ENV_FILE_PATH}: {e}")
    raise e
