"""One-time password schemas."""

from pydantic import BaseModel


class OTPSentResponse(BaseModel):
    """OTP issued and emailed."""

    success: bool = True
    exists: bool = False
    message: str
    email: str


class OTPVerifiedResponse(BaseModel):
    """OTP matched and consumed."""

    success: bool = True
    message: str
