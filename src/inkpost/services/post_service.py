"""Read-time resolution of post references."""
from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from inkpost.models.category import Category
from inkpost.models.post import Post
from inkpost.repositories.category_repo import CategoryRepository
from inkpost.schemas.post import CategoryRef, PostResponse

__all__ = ["to_post_response", "to_post_responses"]


def _build(post: Post, category: Category | None) -> PostResponse:
    return PostResponse(
        id=post.id,
        title=post.title,
        content=post.content,
        category_id=post.category_id,
        category=CategoryRef(id=category.id, name=category.name) if category else None,
        image_url=post.image_url,
        created_at=post.created_at,
        updated_at=post.updated_at,
    )


def to_post_response(db: Session, post: Post) -> PostResponse:
    """Convert a Post to an API schema, resolving its category now.

    A category that no longer exists yields ``category=None``.
    """
    categories = CategoryRepository(db).find_many([post.category_id])
    return _build(post, categories.get(post.category_id))


def to_post_responses(db: Session, posts: Sequence[Post]) -> list[PostResponse]:
    """Convert many posts with a single category lookup."""
    categories = CategoryRepository(db).find_many(post.category_id for post in posts)
    return [_build(post, categories.get(post.category_id)) for post in posts]
