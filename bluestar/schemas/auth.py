"""Authentication schemas."""

from datetime import datetime

from bluestar.models.enums import Branch, Gender, UserType
from bluestar.schemas.base import CamelModel, MessageResponse


class LoginResponse(MessageResponse):
    """Successful login with the issued token."""

    token: str


class ServiceMemberResponse(CamelModel):
    """Service member profile response."""

    address_line_one: str | None
    address_line_two: str | None
    branch: Branch
    country: str | None
    state: str | None
    city: str | None
    zip_code: str | None


class UserResponse(CamelModel):
    """User information response."""

    id: int
    email: str
    first_name: str
    last_name: str
    phone_number: str
    gender: Gender
    user_type: UserType
    service_member: ServiceMemberResponse | None = None
    created_at: datetime
