# src/inkpost/models/user.py
"""SQLAlchemy model for registered accounts."""

from datetime import datetime

from sqlalchemy import DateTime, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from inkpost.db.session import Base
from inkpost.db.time import utcnow


class User(Base):
    """Registered account with a salted password hash.

    The plaintext password is never stored; ``password_hash`` holds a
    bcrypt digest with its salt embedded.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    email: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
