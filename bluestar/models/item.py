"""Item model."""

from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from bluestar.database import Base
from bluestar.models.mixins import TimestampMixin


class Item(Base, TimestampMixin):
    """Inventory item donated to or stocked by the charity."""

    __tablename__ = "items"

    id = Column(Integer, primary_key=True, index=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False, index=True)
    name = Column(String(255), unique=True, nullable=False)
    description = Column(String(2000), nullable=True)

    # Relationships
    category = relationship("Category", back_populates="items")
