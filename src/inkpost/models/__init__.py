# src/inkpost/models/__init__.py
"""SQLAlchemy models for the Inkpost application."""

from .category import Category
from .comment import Comment
from .post import Post
from .user import User

__all__ = [
    "Category",
    "Comment",
    "Post",
    "User",
]
