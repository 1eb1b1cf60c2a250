"""Comment endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from inkpost.api.dependencies import CurrentUserDep, SessionDep, error_responses
from inkpost.models.comment import Comment
from inkpost.repositories.comment_repo import CommentRepository
from inkpost.schemas.comment import CommentCreate, CommentResponse

router = APIRouter(prefix="/comments", tags=["comments"], responses=error_responses(400, 401))


@router.get("/{post_id}", response_model=list[CommentResponse])
async def list_comments(post_id: int, db: SessionDep) -> list[Comment]:
    """List the comments on a post, oldest first."""
    return CommentRepository(db).list_for_post(post_id)


@router.post("", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
async def create_comment(
    payload: CommentCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Comment:
    """Comment on a post as the authenticated user."""
    return CommentRepository(db).create(
        post_id=payload.post_id,
        username=current_user.username,
        text=payload.text,
    )
