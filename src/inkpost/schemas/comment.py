"""Comment schemas."""

from pydantic import Field

from .common import ApiModel, RequestModel, UtcDatetime


class CommentCreate(RequestModel):
    """Schema for posting a comment.

    ``username`` is accepted for wire compatibility; the author is always
    the authenticated caller.
    """

    post_id: int
    text: str = Field(..., min_length=1, max_length=5000)
    username: str | None = None


class CommentResponse(ApiModel):
    """Comment as returned by the API."""

    id: int
    post_id: int
    username: str
    text: str
    created_at: UtcDatetime
