"""Email verification (OTP) API endpoints."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from bluestar.database import get_db
from bluestar.errors import APIError, ErrorKind
from bluestar.schemas.otp import OTPSentResponse, OTPVerifiedResponse
from bluestar.services.email import EmailService, get_email_service
from bluestar.services.otp import request_otp, verify_otp
from bluestar.services.validation import get_sanitized_body, missing_field
from bluestar.services.validators import is_email_valid

router = APIRouter(tags=["otp"])


@router.post("/check-email", response_model=OTPSentResponse)
@router.post("/request-otp", response_model=OTPSentResponse)
async def check_email(
    body: Annotated[dict[str, Any], Depends(get_sanitized_body)],
    db: Annotated[Session, Depends(get_db)],
    email_service: Annotated[EmailService, Depends(get_email_service)],
):
    """Send a one-time password to an email address that is not registered yet."""
    email = body.get("email")
    if not email:
        raise APIError(ErrorKind.MISSING_FIELDS, "Email is required")
    if not is_email_valid(email):
        raise APIError(ErrorKind.VALIDATION_ERR, "Invalid email format")

    await request_otp(db, email, email_service)

    return OTPSentResponse(message="OTP sent successfully to your email.", email=email)


@router.post("/verify-otp", response_model=OTPVerifiedResponse)
def check_otp(
    body: Annotated[dict[str, Any], Depends(get_sanitized_body)],
    db: Annotated[Session, Depends(get_db)],
):
    """Verify and consume a one-time password."""
    if missing_field(body, ("email", "otp")):
        raise APIError(ErrorKind.MISSING_FIELDS, "Email and OTP are required")

    verify_otp(db, body["email"], body["otp"])

    return OTPVerifiedResponse(message="OTP verified successfully")
