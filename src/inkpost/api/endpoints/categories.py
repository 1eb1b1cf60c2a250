"""Category endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from inkpost.api.dependencies import SessionDep, error_responses
from inkpost.models.category import Category
from inkpost.repositories.category_repo import CategoryRepository
from inkpost.schemas.category import CategoryCreate, CategoryResponse

router = APIRouter(prefix="/categories", tags=["categories"], responses=error_responses(400))


@router.get("", response_model=list[CategoryResponse])
async def list_categories(db: SessionDep) -> list[Category]:
    """List all categories."""
    return CategoryRepository(db).list()


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(payload: CategoryCreate, db: SessionDep) -> Category:
    """Create a new category."""
    return CategoryRepository(db).create(name=payload.name)
