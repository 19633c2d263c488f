"""One-time password model."""

from sqlalchemy import Column, DateTime, String, func

from bluestar.database import Base


class OTP(Base):
    """Pending email verification code, at most one per email."""

    __tablename__ = "otps"

    email = Column(String(255), primary_key=True)
    otp = Column(String(12), nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
