"""Authentication API endpoints."""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from bluestar.api.dependencies import get_bearer_token, get_current_user
from bluestar.database import get_db
from bluestar.models.user import User
from bluestar.schemas.auth import LoginResponse, UserResponse
from bluestar.schemas.base import MessageResponse, StatusResponse
from bluestar.services.auth import (
    authenticate_user,
    blacklist_token,
    create_access_token,
    decode_access_token,
)
from bluestar.services.registration import register_user
from bluestar.services.validation import get_sanitized_body, raise_for, validate_credentials

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

REGISTER_SUCCESS = "User registered successfully!"
LOGIN_SUCCESS = "User logged in successfully!"
LOGOUT_SUCCESS = "User logged out successfully!"


@router.post("/register", response_model=StatusResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: Annotated[dict[str, Any], Depends(get_sanitized_body)],
    db: Annotated[Session, Depends(get_db)],
):
    """Register a new volunteer or service member."""
    register_user(db, body)
    return StatusResponse(message=REGISTER_SUCCESS)


@router.post("/login", response_model=LoginResponse)
def login(
    body: Annotated[dict[str, Any], Depends(get_sanitized_body)],
    db: Annotated[Session, Depends(get_db)],
):
    """Login with email and password."""
    raise_for(validate_credentials(body))

    user = authenticate_user(db, body["email"], body["password"])
    token = create_access_token(user)

    return LoginResponse(message=LOGIN_SUCCESS, token=token)


@router.post("/logout", response_model=MessageResponse)
def logout(
    token: Annotated[str, Depends(get_bearer_token)],
    db: Annotated[Session, Depends(get_db)],
):
    """Logout by blacklisting the bearer token. Repeating it is harmless."""
    payload = decode_access_token(token)
    if blacklist_token(db, token):
        logger.info(f"User {payload.get('userId')} logged out")
    return MessageResponse(message=LOGOUT_SUCCESS)


@router.get("/me", response_model=UserResponse)
def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Get current user information."""
    return current_user
