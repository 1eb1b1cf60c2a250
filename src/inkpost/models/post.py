# src/inkpost/models/post.py
"""SQLAlchemy model for blog posts."""

from datetime import datetime

from sqlalchemy import DateTime, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from inkpost.db.session import Base
from inkpost.db.time import utcnow


class Post(Base):
    """Primary content entity.

    The category is stored as a bare id and resolved at read time, so a post
    can outlive the category it points at.
    """

    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    # No foreign key: referential integrity is not enforced.
    category_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    image_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
    )
