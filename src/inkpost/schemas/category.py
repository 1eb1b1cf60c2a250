"""Category schemas."""

from pydantic import Field

from .common import ApiModel, RequestModel


class CategoryCreate(RequestModel):
    """Schema for creating a category."""

    name: str = Field(..., min_length=1, max_length=100)


class CategoryResponse(ApiModel):
    """Category as returned by the API."""

    id: int
    name: str
