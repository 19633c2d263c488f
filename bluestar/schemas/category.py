"""Category schemas."""

from datetime import datetime

from bluestar.schemas.base import CamelModel


class CategoryResponse(CamelModel):
    """Category response."""

    id: int
    name: str
    created_at: datetime
    updated_at: datetime
