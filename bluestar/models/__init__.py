"""SQLAlchemy models."""

from bluestar.models.category import Category
from bluestar.models.item import Item
from bluestar.models.otp import OTP
from bluestar.models.token_blacklist import TokenBlacklist
from bluestar.models.user import ServiceMember, User

__all__ = [
    "User",
    "ServiceMember",
    "TokenBlacklist",
    "OTP",
    "Category",
    "Item",
]
