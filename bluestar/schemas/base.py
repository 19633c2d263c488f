"""Shared schema building blocks."""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

DataT = TypeVar("DataT")


class CamelModel(BaseModel):
    """Schema serialized with camelCase keys, readable from ORM objects."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class MessageResponse(BaseModel):
    """Plain message response."""

    message: str


class StatusResponse(BaseModel):
    """Status and message response."""

    status: str = "success"
    message: str


class DataResponse(BaseModel, Generic[DataT]):
    """Status envelope around a payload."""

    status: str = "success"
    message: str | None = None
    data: DataT | None = None
