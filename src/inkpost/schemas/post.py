# src/inkpost/schemas/post.py
"""Post-related Pydantic schemas."""

from pydantic import Field, model_validator

from .common import ApiModel, RequestModel, UtcDatetime

_REQUIRED_ON_UPDATE = ("title", "content", "category")


class PostCreate(RequestModel):
    """Schema for creating a new post."""

    title: str = Field(..., min_length=1, max_length=300, description="Post title")
    content: str = Field(..., min_length=1, description="Post body")
    category: int = Field(..., description="Category id")
    image_url: str | None = Field(None, description="URL returned by the upload endpoint")


class PostUpdate(RequestModel):
    """Partial update of a post; omitted fields are left untouched."""

    title: str | None = Field(None, min_length=1, max_length=300)
    content: str | None = Field(None, min_length=1)
    category: int | None = None
    image_url: str | None = None

    @model_validator(mode="after")
    def _reject_null_required_fields(self) -> "PostUpdate":
        for name in _REQUIRED_ON_UPDATE:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def to_fields(self) -> dict[str, object]:
        """Return the explicitly supplied fields keyed by column name."""
        fields = self.model_dump(exclude_unset=True)
        if "category" in fields:
            fields["category_id"] = fields.pop("category")
        return fields


class CategoryRef(ApiModel):
    """Category display fields resolved at read time."""

    id: int
    name: str


class PostResponse(ApiModel):
    """Schema for post information returned by the API."""

    id: int
    title: str
    content: str
    category_id: int
    category: CategoryRef | None = None
    image_url: str | None = None
    created_at: UtcDatetime
    updated_at: UtcDatetime
