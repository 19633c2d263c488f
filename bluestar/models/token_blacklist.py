"""Revoked token model."""

from sqlalchemy import Column, DateTime, Integer, Text, func

from bluestar.database import Base


class TokenBlacklist(Base):
    """A JWT that was invalidated by logout before its own expiry."""

    __tablename__ = "token_blacklist"

    id = Column(Integer, primary_key=True, index=True)
    token = Column(Text, unique=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
