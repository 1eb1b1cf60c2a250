# src/inkpost/api/endpoints/posts.py
"""Post-related endpoints for the Inkpost API."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Query, Response, status

from inkpost.api.dependencies import CurrentUserDep, SessionDep, error_responses
from inkpost.core.settings import settings
from inkpost.repositories.post_repo import PostRepository
from inkpost.schemas.post import PostCreate, PostResponse, PostUpdate
from inkpost.services.post_service import to_post_response, to_post_responses

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/posts", tags=["posts"], responses=error_responses(400, 401, 404))


@router.get("", response_model=list[PostResponse])
async def list_posts(
    db: SessionDep,
    page: int = Query(1, ge=1, description="1-based page number"),
    limit: int = Query(settings.default_page_size, ge=1, description="Posts per page"),
    q: str | None = Query(None, description="Case-insensitive title search"),
) -> list[PostResponse]:
    """List posts newest first, optionally filtered by title.

    Args:
        db: Database session
        page: Page number, starting at 1
        limit: Maximum number of posts to return
        q: Substring that must appear in the title, ignoring case

    Returns:
        One page of posts with their categories resolved
    """
    posts = PostRepository(db).list(query=q or None, page=page, limit=limit)
    return to_post_responses(db, posts)


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(post_id: int, db: SessionDep) -> PostResponse:
    """Get a specific post by ID.

    Raises:
        NotFoundError: If the post does not exist
    """
    post = PostRepository(db).get(post_id)
    return to_post_response(db, post)


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    post_data: PostCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> PostResponse:
    """Create a new post.

    The request body is validated before the repository is touched; a
    missing title or content never reaches the store.
    """
    post = PostRepository(db).create(
        title=post_data.title,
        content=post_data.content,
        category_id=post_data.category,
        image_url=post_data.image_url,
    )
    logger.info("Post %s created by %s", post.id, current_user.username)
    return to_post_response(db, post)


@router.put("/{post_id}", response_model=PostResponse)
async def update_post(
    post_id: int,
    post_data: PostUpdate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> PostResponse:
    """Apply a partial update to a post."""
    post = PostRepository(db).update(post_id, post_data.to_fields())
    logger.info("Post %s updated by %s", post.id, current_user.username)
    return to_post_response(db, post)


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post(
    post_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Response:
    """Delete a post."""
    PostRepository(db).delete(post_id)
    logger.info("Post %s deleted by %s", post_id, current_user.username)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
