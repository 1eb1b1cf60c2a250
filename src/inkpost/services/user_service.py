"""Registration and credential checks."""
from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from inkpost.core import security
from inkpost.core.errors import InputValidationError
from inkpost.models.user import User
from inkpost.repositories.user_repo import UserRepository
from inkpost.schemas.user import RegisterRequest

logger = logging.getLogger(__name__)

__all__ = ["authenticate_user", "register_user"]


def register_user(db: Session, payload: RegisterRequest) -> User:
    """Persist a new account with a salted password hash.

    Raises:
        InputValidationError: If the username or email is already taken.
    """
    repo = UserRepository(db)
    email = payload.email.lower()
    if repo.get_by_username(payload.username) is not None:
        raise InputValidationError("Username already taken")
    if repo.get_by_email(email) is not None:
        raise InputValidationError("Email already registered")

    password_hash = security.hash_password(payload.password)
    try:
        user = repo.create(
            username=payload.username,
            email=email,
            password_hash=password_hash,
        )
    except IntegrityError as err:
        db.rollback()
        raise InputValidationError("Username or email already registered") from err
    logger.info("Registered user %s", user.id)
    return user


def authenticate_user(db: Session, email: str, password: str) -> User | None:
    """Return the account matching ``email`` and ``password``, or None."""
    user = UserRepository(db).get_by_email(email.lower())
    if user is None or not security.verify_password(password, user.password_hash):
        return None
    return user
