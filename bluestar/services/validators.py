"""Field validators.

Every validator takes a single value and reports whether it is acceptable.
None of them raise or mutate their input, so a non-string value simply fails
the string checks. Mapping a failure to an HTTP status is the caller's job.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any

from email_validator import EmailNotValidError, validate_email

from bluestar.errors import ErrorKind

PASSWORD_MIN_LENGTH = 8
PASSWORD_SYMBOLS = "-#!$@£%^&*()_+|~=`{}[]:\";'<>?,./\\ "
# Largest value an Integer primary key column holds
MAX_ID = 2**31 - 1

_PHONE_RE = re.compile(r"^\+?[1-9]\d{7,14}$")
_STRING_RE = re.compile(r"^[ A-Za-z]+$")
# Apostrophes reach the validators HTML-escaped, so accept the entity as well.
_NAME_RE = re.compile(r"^(?:[A-Za-z -]|'|&#x27;)+$")


@dataclass(frozen=True)
class ValidationResult:
    """A failed validation: error kind, user-facing message and HTTP status."""

    error: ErrorKind
    message: str
    status: int = 400


def is_email_valid(value: Any) -> bool:
    """Check that a value is shaped like an email address."""
    if not isinstance(value, str) or not value:
        return False
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def is_password_valid(value: Any) -> bool:
    """Check password strength.

    Requires at least 8 characters with an uppercase letter, a lowercase
    letter, a digit and a symbol.
    """
    if not isinstance(value, str) or len(value) < PASSWORD_MIN_LENGTH:
        return False
    return (
        any(c.isupper() for c in value)
        and any(c.islower() for c in value)
        and any(c.isdigit() for c in value)
        and any(c in PASSWORD_SYMBOLS for c in value)
    )


def is_phone_number_valid(value: Any) -> bool:
    """Loose international mobile number check: optional plus, 8-15 digits."""
    return isinstance(value, str) and bool(_PHONE_RE.match(value))


def is_enum_value(enum_cls: type[Enum], value: Any) -> bool:
    """Check membership of a value in a closed enum."""
    try:
        enum_cls(value)
    except (TypeError, ValueError):
        return False
    return True


def is_string_valid(value: Any) -> bool:
    """Check that a value only consists of letters and spaces."""
    return isinstance(value, str) and bool(_STRING_RE.match(value))


def is_name_valid(value: Any) -> bool:
    """Check a person's name: letters, spaces, hyphens and apostrophes."""
    return isinstance(value, str) and bool(_NAME_RE.match(value))


def is_id_valid(value: Any) -> bool:
    """Check that a value is a positive integer id or a string holding one."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return 0 < value <= MAX_ID
    if isinstance(value, str):
        value = value.strip()
        # isdigit() also accepts characters like "²" that int() rejects
        if value.isascii() and value.isdecimal():
            return 0 < int(value) <= MAX_ID
    return False
