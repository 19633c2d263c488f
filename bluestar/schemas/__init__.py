"""Pydantic schemas for API responses."""

from bluestar.schemas.auth import LoginResponse, ServiceMemberResponse, UserResponse
from bluestar.schemas.base import DataResponse, MessageResponse, StatusResponse
from bluestar.schemas.category import CategoryResponse
from bluestar.schemas.item import ItemResponse
from bluestar.schemas.otp import OTPSentResponse, OTPVerifiedResponse

__all__ = [
    "MessageResponse",
    "StatusResponse",
    "DataResponse",
    "LoginResponse",
    "UserResponse",
    "ServiceMemberResponse",
    "OTPSentResponse",
    "OTPVerifiedResponse",
    "CategoryResponse",
    "ItemResponse",
]
