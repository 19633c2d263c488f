"""Shared validation pipeline for every mutating endpoint.

Request bodies go through ``get_sanitized_body`` (shape check, then
sanitization) and the resulting dict is checked with the rule sets below.
Rule sets return a ``ValidationResult`` on the first failure and ``None``
when the input is acceptable; ``raise_for`` turns a result into an
``APIError`` at the endpoint boundary.
"""

from typing import Any

from fastapi import Request

from bluestar.errors import APIError, ErrorKind
from bluestar.models.enums import Branch, Gender, UserType
from bluestar.services.sanitizers import sanitize_body
from bluestar.services.validators import (
    ValidationResult,
    is_email_valid,
    is_enum_value,
    is_name_valid,
    is_password_valid,
    is_phone_number_valid,
    is_string_valid,
)

REQUIRED_USER_FIELDS = ("email", "password", "firstName", "lastName", "phoneNumber", "gender")
SERVICE_MEMBER_FIELDS = (
    "branch",
    "addressLineOne",
    "addressLineTwo",
    "country",
    "state",
    "city",
    "zipCode",
)
LABEL_MAX_LENGTH = 255
DESCRIPTION_MAX_LENGTH = 2000


async def get_sanitized_body(request: Request) -> dict[str, Any]:
    """Dependency that parses the JSON body and returns its sanitized copy."""
    try:
        body = await request.json()
    except ValueError:
        body = None
    if not isinstance(body, dict):
        raise APIError(ErrorKind.VALIDATION_ERR, "Invalid or missing body")
    return sanitize_body(body)


def raise_for(result: ValidationResult | None) -> None:
    """Raise the APIError described by a failed validation, if any."""
    if result is not None:
        raise APIError(result.error, result.message, result.status)


def missing_field(body: dict[str, Any], fields: tuple[str, ...]) -> str | None:
    """Return the first field in ``fields`` that is absent or empty."""
    for field in fields:
        if not body.get(field):
            return field
    return None


def validate_registration(body: dict[str, Any]) -> ValidationResult | None:
    """Validate a sanitized user registration body."""
    missing = missing_field(body, REQUIRED_USER_FIELDS)
    if missing:
        return ValidationResult(ErrorKind.MISSING_FIELDS, f"Missing required field: {missing}")

    if not is_name_valid(body["firstName"]) or not is_name_valid(body["lastName"]):
        return ValidationResult(
            ErrorKind.VALIDATION_ERR, "Name contains non-alphabetical characters"
        )

    if not is_enum_value(UserType, body.get("userType")):
        return ValidationResult(ErrorKind.INVALID_TYPE, "Invalid user type")
    if not is_enum_value(Gender, body["gender"]):
        return ValidationResult(ErrorKind.INVALID_TYPE, "Invalid gender")

    if not is_email_valid(body["email"]):
        return ValidationResult(ErrorKind.VALIDATION_ERR, "Invalid email format")
    if not is_password_valid(body["password"]):
        return ValidationResult(ErrorKind.VALIDATION_ERR, "Invalid password format")
    if not is_phone_number_valid(body["phoneNumber"]):
        return ValidationResult(ErrorKind.VALIDATION_ERR, "Invalid phone number format")

    user_type = UserType(body["userType"])
    if not user_type.has_service_profile():
        if any(body.get(field) for field in SERVICE_MEMBER_FIELDS):
            return ValidationResult(
                ErrorKind.VALIDATION_ERR,
                "Volunteer user should not have service member fields",
            )
    else:
        if not body.get("branch"):
            return ValidationResult(
                ErrorKind.MISSING_FIELDS, "Missing branch for service member"
            )
        if not is_enum_value(Branch, body["branch"]):
            return ValidationResult(ErrorKind.INVALID_TYPE, "Invalid branch type")

    return None


def validate_credentials(body: dict[str, Any]) -> ValidationResult | None:
    """Validate a sanitized login body."""
    if missing_field(body, ("email", "password")):
        return ValidationResult(ErrorKind.MISSING_FIELDS, "Email and password are required")
    if not isinstance(body["email"], str) or not isinstance(body["password"], str):
        return ValidationResult(ErrorKind.VALIDATION_ERR, "Email and password must be strings")
    return None


def validate_label(value: Any, label: str, required: bool = True) -> ValidationResult | None:
    """Validate a category or item name."""
    if not value:
        if required:
            return ValidationResult(ErrorKind.MISSING_FIELDS, f"Missing {label}")
        return None
    if not is_string_valid(value) or len(value) > LABEL_MAX_LENGTH:
        return ValidationResult(ErrorKind.VALIDATION_ERR, f"Invalid {label}")
    return None


def validate_description(value: Any) -> ValidationResult | None:
    """Validate an optional item description."""
    if value is None:
        return None
    if not isinstance(value, str) or len(value) > DESCRIPTION_MAX_LENGTH:
        return ValidationResult(ErrorKind.VALIDATION_ERR, "Invalid item description")
    return None
