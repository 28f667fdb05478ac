# snsfeed/models/refresh_token.py
from sqlalchemy import String, DateTime, func, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
from datetime import datetime
from typing import Optional

from snsfeed.db.base import Base
from .user import User

class RefreshToken(Base):
    __tablename__ = "refresh_tokens"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    # Opaque token, replaced in place on every rotation
    token: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    device_id: Mapped[Optional[str]] = mapped_column(String(255))
    user_agent: Mapped[Optional[str]] = mapped_column(String(500))
    ip_address: Mapped[str] = mapped_column(String(64), nullable=False)
    expires_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)  # UTC naive
    last_used_at: Mapped[datetime] = mapped_column(DateTime, default=func.now())
    created_at: Mapped[datetime] = mapped_column(DateTime, default=func.now())

    user: Mapped["User"] = relationship()

    # A user may hold several sessions (one per login / device)
    __table_args__ = (Index("ix_refresh_tokens_user_device", "user_id", "device_id"),)
