"""One-time password issue and verification."""

import logging
import secrets
from datetime import UTC, datetime, timedelta

from fastapi import status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bluestar.config import get_settings
from bluestar.errors import APIError, ErrorKind
from bluestar.models.otp import OTP
from bluestar.services.auth import get_user_by_email
from bluestar.services.email import EmailService

logger = logging.getLogger(__name__)

settings = get_settings()

DIGITS = "0123456789"


def generate_otp(length: int | None = None) -> str:
    """Generate a numeric code with uniformly random digits."""
    length = length or settings.otp_length
    return "".join(secrets.choice(DIGITS) for _ in range(length))


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything is stored in UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def find_otp(db: Session, email: str) -> OTP | None:
    """Get the live OTP for an email."""
    return db.query(OTP).filter(OTP.email == email).first()


def store_otp(db: Session, email: str, now: datetime | None = None) -> OTP:
    """Create or replace the live OTP for an email."""
    now = now or datetime.now(UTC)
    expires_at = now + timedelta(minutes=settings.otp_expiration_minutes)
    code = generate_otp()

    record = find_otp(db, email)
    if record is None:
        record = OTP(email=email, otp=code, expires_at=expires_at)
        db.add(record)
        try:
            db.commit()
            db.refresh(record)
            return record
        except IntegrityError:
            # A concurrent request inserted the row first; replace its code
            db.rollback()
            record = find_otp(db, email)

    record.otp = code
    record.expires_at = expires_at
    db.commit()
    db.refresh(record)
    return record


async def request_otp(
    db: Session,
    email: str,
    email_service: EmailService,
    now: datetime | None = None,
) -> OTP:
    """Issue an OTP for an unregistered email and send it.

    The stored code is kept when delivery fails; requesting again replaces it.
    """
    if get_user_by_email(db, email):
        raise APIError(ErrorKind.USER_EXISTS, "Email address taken")

    record = store_otp(db, email, now)
    logger.info(f"Issued OTP for {email}, expires at {record.expires_at}")

    try:
        await email_service.send_otp(email, record.otp)
    except Exception as e:
        logger.error(f"Failed to send OTP email to {email}: {e}")
        raise APIError(
            ErrorKind.INTERNAL_ERR,
            "Failed to send OTP email",
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            details=str(e),
        ) from e
    return record


def verify_otp(db: Session, email: str, otp: str, now: datetime | None = None) -> None:
    """Check a submitted code and consume it on success."""
    now = now or datetime.now(UTC)

    record = find_otp(db, email)
    if not record:
        raise APIError(ErrorKind.OTP_NOT_FOUND, "OTP not found for this email")

    if _as_utc(record.expires_at) < now:
        raise APIError(ErrorKind.OTP_EXPIRED, "OTP has expired")

    if not secrets.compare_digest(record.otp.encode(), str(otp).encode()):
        raise APIError(ErrorKind.INVALID_OTP, "Invalid OTP")

    db.delete(record)
    db.commit()
