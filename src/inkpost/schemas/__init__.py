# src/inkpost/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .category import CategoryCreate, CategoryResponse
from .comment import CommentCreate, CommentResponse
from .common import MessageResponse
from .post import CategoryRef, PostCreate, PostResponse, PostUpdate
from .upload import UploadResponse
from .user import AuthResponse, CurrentUser, LoginRequest, RegisterRequest, UserPublic

__all__ = [
    "AuthResponse", "CurrentUser", "LoginRequest", "RegisterRequest", "UserPublic",
    "CategoryCreate", "CategoryResponse",
    "CategoryRef", "PostCreate", "PostResponse", "PostUpdate",
    "CommentCreate", "CommentResponse",
    "MessageResponse",
    "UploadResponse",
]
