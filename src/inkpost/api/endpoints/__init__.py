"""API endpoint modules."""

from .auth import router as auth_router
from .categories import router as categories_router
from .comments import router as comments_router
from .posts import router as posts_router
from .upload import router as upload_router

__all__ = [
    "auth_router",
    "categories_router",
    "comments_router",
    "posts_router",
    "upload_router",
]
