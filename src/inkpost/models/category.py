"""SQLAlchemy model for post categories."""
from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from inkpost.db.session import Base


class Category(Base):
    """Named bucket that posts reference by id."""

    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # Uniqueness is expected but not enforced.
    name: Mapped[str] = mapped_column(Text, nullable=False)
