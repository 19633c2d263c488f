"""FastAPI dependencies for authentication."""

from typing import Annotated

from fastapi import Depends, Header, status
from sqlalchemy.orm import Session

from bluestar.database import get_db
from bluestar.errors import APIError, ErrorKind
from bluestar.models.user import User
from bluestar.services.auth import decode_access_token, is_token_blacklisted

BEARER_HEADERS = {"WWW-Authenticate": "Bearer"}


def get_bearer_token(
    authorization: Annotated[str | None, Header()] = None,
) -> str:
    """Extract the token from an ``Authorization: Bearer <token>`` header."""
    if authorization is None:
        raise APIError(
            ErrorKind.UNAUTHORIZED,
            "Missing authorization header",
            status.HTTP_401_UNAUTHORIZED,
            headers=BEARER_HEADERS,
        )

    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer" or not parts[1]:
        raise APIError(
            ErrorKind.INVALID_TOKEN,
            "Malformed authorization header",
            status.HTTP_401_UNAUTHORIZED,
            headers=BEARER_HEADERS,
        )
    return parts[1]


def get_current_user(
    token: Annotated[str, Depends(get_bearer_token)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """Get the current authenticated user from a live, unrevoked JWT."""
    payload = decode_access_token(token)

    if is_token_blacklisted(db, token):
        raise APIError(
            ErrorKind.INVALID_TOKEN,
            "Token has been revoked",
            status.HTTP_401_UNAUTHORIZED,
            headers=BEARER_HEADERS,
        )

    user_id = payload.get("userId")
    if user_id is None:
        raise APIError(
            ErrorKind.INVALID_TOKEN,
            "Invalid authentication credentials",
            status.HTTP_401_UNAUTHORIZED,
            headers=BEARER_HEADERS,
        )

    user = db.query(User).filter(User.id == int(user_id)).first()
    if user is None:
        raise APIError(ErrorKind.USER_NONEXISTENT, "User not found", status.HTTP_404_NOT_FOUND)

    return user
