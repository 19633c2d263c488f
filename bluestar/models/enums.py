"""Enums for model fields."""

from enum import Enum


class UserType(str, Enum):
    """Account variants; service members carry an extra profile record."""

    VOLUNTEER = "VOLUNTEER"
    SERVICE_MEMBER = "SERVICE_MEMBER"

    def has_service_profile(self) -> bool:
        """Check if this user type owns a ServiceMember record."""
        return self == UserType.SERVICE_MEMBER


class Gender(str, Enum):
    """Gender values accepted at registration."""

    MALE = "MALE"
    FEMALE = "FEMALE"


class Branch(str, Enum):
    """Military branches a service member can belong to."""

    ARMY = "ARMY"
    NAVY = "NAVY"
    AIR_FORCE = "AIR_FORCE"
    SPACE_FORCE = "SPACE_FORCE"
    COAST_GUARD = "COAST_GUARD"
    NATIONAL_GUARD = "NATIONAL_GUARD"
    MARINES = "MARINES"
