"""Data access helpers for working with posts."""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from inkpost.core.errors import InputValidationError, NotFoundError
from inkpost.models.post import Post

__all__ = ["PostRepository"]

_UPDATABLE_FIELDS = frozenset({"title", "content", "category_id", "image_url"})
_REQUIRED_TEXT_FIELDS = ("title", "content")


def _require_text(fields: Mapping[str, Any], names: tuple[str, ...]) -> None:
    for name in names:
        value = fields.get(name)
        if value is None or not str(value).strip():
            raise InputValidationError(f"{name} is required")


class PostRepository:
    """Thin wrapper around database access for post entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get(self, post_id: int) -> Post:
        """Return a post by identifier.

        Raises:
            NotFoundError: If no post has ``post_id``.
        """
        post = self.session.get(Post, post_id)
        if post is None:
            raise NotFoundError("Post not found")
        return post

    def list(self, *, query: str | None = None, page: int = 1, limit: int = 5) -> list[Post]:
        """Return one page of posts, newest first.

        Args:
            query: Case-insensitive substring matched against the title.
            page: 1-based page number.
            limit: Page size.
        """
        if page < 1 or limit < 1:
            raise InputValidationError("page and limit must be positive integers")

        stmt = select(Post)
        if query:
            stmt = stmt.where(func.lower(Post.title).contains(query.lower(), autoescape=True))
        stmt = stmt.order_by(Post.id.desc()).offset((page - 1) * limit).limit(limit)
        return list(self.session.scalars(stmt))

    def create(
        self,
        *,
        title: str,
        content: str,
        category_id: int,
        image_url: str | None = None,
    ) -> Post:
        """Insert a new post and return the persisted ORM instance."""
        _require_text({"title": title, "content": content}, _REQUIRED_TEXT_FIELDS)
        post = Post(
            title=title,
            content=content,
            category_id=category_id,
            image_url=image_url,
        )
        self.session.add(post)
        self.session.commit()
        self.session.refresh(post)
        return post

    def update(self, post_id: int, fields: Mapping[str, Any]) -> Post:
        """Apply a partial update and return the refreshed post."""
        unknown = set(fields) - _UPDATABLE_FIELDS
        if unknown:
            raise InputValidationError(f"Unknown fields: {', '.join(sorted(unknown))}")
        _require_text(
            fields,
            tuple(name for name in _REQUIRED_TEXT_FIELDS if name in fields),
        )
        if "category_id" in fields and fields["category_id"] is None:
            raise InputValidationError("category is required")

        post = self.get(post_id)
        for key, value in fields.items():
            setattr(post, key, value)
        self.session.commit()
        self.session.refresh(post)
        return post

    def delete(self, post_id: int) -> None:
        """Remove a post."""
        post = self.get(post_id)
        self.session.delete(post)
        self.session.commit()
