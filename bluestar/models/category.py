"""Category model."""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from bluestar.database import Base
from bluestar.models.mixins import TimestampMixin


class Category(Base, TimestampMixin):
    """Category grouping inventory items."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), unique=True, nullable=False)

    # Relationships
    items = relationship("Item", back_populates="category")
