"""Service-layer helpers shared by the API endpoints."""

from .post_service import to_post_response, to_post_responses
from .upload_service import store_upload
from .user_service import authenticate_user, register_user

__all__ = [
    "authenticate_user",
    "register_user",
    "store_upload",
    "to_post_response",
    "to_post_responses",
]
