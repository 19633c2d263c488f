"""User registration service."""

import logging
from typing import Any

from fastapi import status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from bluestar.errors import APIError, ErrorKind
from bluestar.models.enums import Branch, Gender, UserType
from bluestar.models.user import ServiceMember, User
from bluestar.services.auth import get_password_hash, get_user_by_email
from bluestar.services.validation import raise_for, validate_registration

logger = logging.getLogger(__name__)

# Request field -> ServiceMember column for the optional profile fields
SERVICE_MEMBER_COLUMNS = {
    "addressLineOne": "address_line_one",
    "addressLineTwo": "address_line_two",
    "country": "country",
    "state": "state",
    "city": "city",
    "zipCode": "zip_code",
}


def register_user(db: Session, body: dict[str, Any]) -> User:
    """Validate a sanitized registration body and create the account.

    The user row and, for service members, the profile row are written in a
    single transaction. The existence check is only a courtesy; a duplicate
    email that slips past it is caught by the unique constraint at commit.
    """
    raise_for(validate_registration(body))

    email = body["email"]
    if get_user_by_email(db, email):
        raise APIError(ErrorKind.USER_EXISTS, "User already exists")

    # Hash before opening the transaction so no locks are held meanwhile
    password_hash = get_password_hash(body["password"])
    user_type = UserType(body["userType"])

    user = User(
        email=email,
        password_hash=password_hash,
        first_name=body["firstName"],
        last_name=body["lastName"],
        phone_number=body["phoneNumber"],
        gender=Gender(body["gender"]),
        user_type=user_type,
    )
    try:
        db.add(user)
        db.flush()

        if user_type.has_service_profile():
            profile = {
                column: body[field]
                for field, column in SERVICE_MEMBER_COLUMNS.items()
                if body.get(field)
            }
            db.add(ServiceMember(user_id=user.id, branch=Branch(body["branch"]), **profile))

        db.commit()
    except IntegrityError:
        db.rollback()
        raise APIError(
            ErrorKind.USER_EXISTS, "Email already exists", status.HTTP_409_CONFLICT
        ) from None
    except SQLAlchemyError as e:
        db.rollback()
        raise APIError(
            ErrorKind.DATABASE_ERROR,
            "Database operation failed",
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            details=str(e),
        ) from e

    db.refresh(user)
    logger.info(f"Registered {user_type.value} user {user.id}")
    return user
