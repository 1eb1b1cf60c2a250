"""Data access helpers for categories."""
from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.orm import Session

from inkpost.core.errors import InputValidationError
from inkpost.models.category import Category

__all__ = ["CategoryRepository"]


class CategoryRepository:
    """Thin wrapper around database access for categories."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def find_many(self, category_ids: Iterable[int]) -> dict[int, Category]:
        """Return the existing categories among ``category_ids`` keyed by id."""
        ids = set(category_ids)
        if not ids:
            return {}
        result = self.session.scalars(select(Category).where(Category.id.in_(ids)))
        return {category.id: category for category in result}

    def list(self) -> list[Category]:
        """Return all categories in creation order."""
        return list(self.session.scalars(select(Category).order_by(Category.id)))

    def create(self, *, name: str) -> Category:
        """Insert a category."""
        if not name or not name.strip():
            raise InputValidationError("name is required")
        category = Category(name=name)
        self.session.add(category)
        self.session.commit()
        self.session.refresh(category)
        return category
