"""Shared API dependencies for authentication and common functionality."""

import logging
from typing import Annotated, Any

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from inkpost.core.security import InvalidTokenError, decode_access_token
from inkpost.db.session import get_db
from inkpost.repositories.user_repo import UserRepository
from inkpost.schemas.common import MessageResponse
from inkpost.schemas.user import CurrentUser

logger = logging.getLogger(__name__)

# Missing or malformed headers are reported as 401 by get_current_user.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]

_BEARER_HEADERS = {"WWW-Authenticate": "Bearer"}


def error_responses(*codes: int) -> dict[int | str, dict[str, Any]]:
    """OpenAPI entries documenting the ``{"message": ...}`` error body."""
    return {code: {"model": MessageResponse} for code in codes}


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers=_BEARER_HEADERS,
    )


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    db: SessionDep,
) -> CurrentUser:
    """Resolve the bearer token on the request to the calling user.

    Expired and invalid tokens are reported identically.

    Args:
        credentials: HTTP Bearer token credentials, if any
        db: Database session

    Returns:
        Identity of the authenticated user, without password fields

    Raises:
        HTTPException: If the header is missing, the token fails verification,
            or the user no longer exists
    """
    if credentials is None or not credentials.credentials:
        raise _unauthorized("Not authorized")

    try:
        user_id = decode_access_token(credentials.credentials)
    except InvalidTokenError as err:
        logger.debug("Rejected token: %s", err)
        raise _unauthorized("Token failed") from err

    user = UserRepository(db).get_by_id(user_id)
    if user is None:
        raise _unauthorized("Token failed")
    return CurrentUser.model_validate(user)


# Type alias for current user dependency
CurrentUserDep = Annotated[CurrentUser, Depends(get_current_user)]
