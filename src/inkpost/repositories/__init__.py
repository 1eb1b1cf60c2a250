"""Data access helpers, one repository per entity."""

from .category_repo import CategoryRepository
from .comment_repo import CommentRepository
from .post_repo import PostRepository
from .user_repo import UserRepository

__all__ = [
    "CategoryRepository",
    "CommentRepository",
    "PostRepository",
    "UserRepository",
]
