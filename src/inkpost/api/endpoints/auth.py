# src/inkpost/api/endpoints/auth.py
"""Authentication endpoints for the Inkpost API."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from inkpost.api.dependencies import CurrentUserDep, SessionDep, error_responses
from inkpost.core.security import create_access_token
from inkpost.models.user import User
from inkpost.schemas.user import (
    AuthResponse,
    CurrentUser,
    LoginRequest,
    RegisterRequest,
    UserPublic,
)
from inkpost.services.user_service import authenticate_user, register_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"], responses=error_responses(400, 401))


def _auth_response(user: User) -> AuthResponse:
    return AuthResponse(
        token=create_access_token(user.id),
        user=UserPublic(username=user.username, email=user.email),
    )


@router.post(
    "/register",
    summary="Create an account",
    response_model=AuthResponse,
)
async def register(payload: RegisterRequest, db: SessionDep) -> AuthResponse:
    """Register a new account and sign it in."""
    user = register_user(db, payload)
    return _auth_response(user)


@router.post(
    "/login",
    summary="Exchange credentials for a session token",
    response_model=AuthResponse,
)
async def login(payload: LoginRequest, db: SessionDep) -> AuthResponse:
    """Authenticate with email and password."""
    user = authenticate_user(db, payload.email, payload.password)
    if user is None:
        logger.info("Failed login attempt")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )
    return _auth_response(user)


@router.get("/me", response_model=CurrentUser)
async def read_current_user(current_user: CurrentUserDep) -> CurrentUser:
    """Return the identity behind the bearer token."""
    return current_user
