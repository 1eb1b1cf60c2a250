"""Upload response schema."""

from pydantic import BaseModel


class UploadResponse(BaseModel):
    """Public URL of a stored upload."""

    url: str
