"""Credential store access."""
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from inkpost.models.user import User

__all__ = ["UserRepository"]


class UserRepository:
    """Lookups and inserts for user accounts."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_id(self, user_id: int) -> User | None:
        return self.session.get(User, user_id)

    def get_by_email(self, email: str) -> User | None:
        return self.session.scalars(select(User).where(User.email == email)).first()

    def get_by_username(self, username: str) -> User | None:
        return self.session.scalars(select(User).where(User.username == username)).first()

    def create(self, *, username: str, email: str, password_hash: str) -> User:
        user = User(
            username=username,
            email=email,
            password_hash=password_hash,
        )
        self.session.add(user)
        self.session.commit()
        self.session.refresh(user)
        return user
