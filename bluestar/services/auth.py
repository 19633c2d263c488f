"""Authentication service for JWT and password handling."""

import logging
from datetime import UTC, datetime, timedelta

from fastapi import status
from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from bluestar.config import get_settings
from bluestar.errors import APIError, ErrorKind
from bluestar.models.token_blacklist import TokenBlacklist
from bluestar.models.user import User

logger = logging.getLogger(__name__)

settings = get_settings()

# Password hashing context
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.hash_rounds,
)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def get_jwt_secret() -> str:
    """Return the signing secret, failing the request when it is not configured."""
    if not settings.jwt_secret:
        logger.error("JWT_SECRET is not configured")
        raise APIError(
            ErrorKind.INTERNAL_ERR,
            "Internal server error",
            status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
    return settings.jwt_secret


def create_access_token(user: User) -> str:
    """Create a JWT access token carrying the user's id and type."""
    secret = get_jwt_secret()
    now = datetime.now(UTC)
    to_encode = {
        "sub": str(user.id),
        "userId": user.id,
        "userType": user.user_type.value,
        "iat": now,
        "exp": now + timedelta(minutes=settings.jwt_expiration_minutes),
    }
    return jwt.encode(to_encode, secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict:
    """Verify a JWT's signature and expiry and return its claims."""
    secret = get_jwt_secret()
    try:
        return jwt.decode(token, secret, algorithms=[settings.jwt_algorithm])
    except ExpiredSignatureError:
        raise APIError(
            ErrorKind.TOKEN_EXPIRED, "Token has expired", status.HTTP_401_UNAUTHORIZED
        ) from None
    except JWTError:
        raise APIError(
            ErrorKind.INVALID_TOKEN, "Invalid token", status.HTTP_401_UNAUTHORIZED
        ) from None


def get_user_by_email(db: Session, email: str) -> User | None:
    """Get a user by email."""
    return db.query(User).filter(User.email == email).first()


def authenticate_user(db: Session, email: str, password: str) -> User:
    """Authenticate a user by email and password.

    An unknown email and a wrong password are reported with different error
    kinds, consistently across the API.
    """
    user = get_user_by_email(db, email)
    if not user:
        logger.warning(f"Login attempt for unknown email {email}")
        raise APIError(
            ErrorKind.USER_NONEXISTENT, "User does not exist", status.HTTP_401_UNAUTHORIZED
        )
    if not verify_password(password, user.password_hash):
        logger.warning(f"Failed login for user {user.id}")
        raise APIError(
            ErrorKind.INVALID_CREDENTIALS, "Invalid credentials", status.HTTP_401_UNAUTHORIZED
        )
    return user


def is_token_blacklisted(db: Session, token: str) -> bool:
    """Check whether a token was revoked by logout."""
    return db.query(TokenBlacklist.id).filter(TokenBlacklist.token == token).first() is not None


def blacklist_token(db: Session, token: str) -> bool:
    """Revoke a token.

    Returns False when the token was already revoked, which callers treat as
    success. The unique constraint on the token column decides the race
    between concurrent logouts.
    """
    db.add(TokenBlacklist(token=token))
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.info("Token was already blacklisted")
        return False
    except SQLAlchemyError as e:
        db.rollback()
        raise APIError(
            ErrorKind.DATABASE_ERROR,
            "Failed to invalidate token",
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            details=str(e),
        ) from e
    return True
