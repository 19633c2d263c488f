"""User and service member models."""

from sqlalchemy import Column, Enum, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from bluestar.database import Base
from bluestar.models.enums import Branch, Gender, UserType
from bluestar.models.mixins import TimestampMixin


def _enum_values(enum_cls):
    return [e.value for e in enum_cls]


class User(Base, TimestampMixin):
    """User model for authentication."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)  # stored lower-cased
    password_hash = Column(String(255), nullable=False)
    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=False)
    phone_number = Column(String(32), nullable=False)
    gender = Column(
        Enum(Gender, name="gender", values_callable=_enum_values),
        nullable=False,
    )
    user_type = Column(
        Enum(UserType, name="usertype", values_callable=_enum_values),
        nullable=False,
        default=UserType.VOLUNTEER,
    )

    # Relationships
    service_member = relationship(
        "ServiceMember",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
    )


class ServiceMember(Base, TimestampMixin):
    """Service member profile, owned exclusively by one SERVICE_MEMBER user."""

    __tablename__ = "service_members"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
        index=True,
    )
    address_line_one = Column(String(255), nullable=True)
    address_line_two = Column(String(255), nullable=True)
    branch = Column(
        Enum(Branch, name="branch", values_callable=_enum_values),
        nullable=False,
    )
    country = Column(String(100), nullable=True)
    state = Column(String(100), nullable=True)
    city = Column(String(100), nullable=True)
    zip_code = Column(String(20), nullable=True)

    # Relationships
    user = relationship("User", back_populates="service_member")
