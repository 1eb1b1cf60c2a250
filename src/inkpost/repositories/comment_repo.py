"""Data access helpers for comments."""
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from inkpost.core.errors import InputValidationError
from inkpost.models.comment import Comment

__all__ = ["CommentRepository"]


class CommentRepository:
    """Thin wrapper around database access for comments."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_for_post(self, post_id: int) -> list[Comment]:
        """Return the comments on ``post_id`` in the order they were written."""
        stmt = select(Comment).where(Comment.post_id == post_id).order_by(Comment.id)
        return list(self.session.scalars(stmt))

    def create(self, *, post_id: int, username: str, text: str) -> Comment:
        """Insert a comment. The post id is stored as given."""
        for name, value in (("username", username), ("text", text)):
            if not value or not value.strip():
                raise InputValidationError(f"{name} is required")
        comment = Comment(post_id=post_id, username=username, text=text)
        self.session.add(comment)
        self.session.commit()
        self.session.refresh(comment)
        return comment
