"""Item schemas."""

from datetime import datetime

from bluestar.schemas.base import CamelModel


class ItemResponse(CamelModel):
    """Item response."""

    id: int
    name: str
    description: str | None
    category_id: int
    created_at: datetime
    updated_at: datetime
