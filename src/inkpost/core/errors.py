"""Error taxonomy and the handlers that render it as ``{"message": ...}``."""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

__all__ = [
    "InkpostError",
    "InputValidationError",
    "NotFoundError",
    "UnauthenticatedError",
    "UpstreamFailureError",
    "install_error_handlers",
]


class InkpostError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InputValidationError(InkpostError):
    """Malformed or missing input, detected before any mutation."""

    status_code = status.HTTP_400_BAD_REQUEST


class UnauthenticatedError(InkpostError):
    """Missing, invalid or expired credentials."""

    status_code = status.HTTP_401_UNAUTHORIZED


class NotFoundError(InkpostError):
    """Unknown record identifier."""

    status_code = status.HTTP_404_NOT_FOUND


class UpstreamFailureError(InkpostError):
    """Store failure or other unexpected error."""


def _message(status_code: int, message: str, headers: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message}, headers=headers)


def _describe_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ()) if item != "body")
        text = error.get("msg", "Invalid value")
        parts.append(f"{location}: {text}" if location else text)
    return "; ".join(parts) or "Invalid request"


async def inkpost_error_handler(_request: Request, exc: InkpostError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("Request failed: %s", exc.message)
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, UnauthenticatedError) else None
    return _message(exc.status_code, exc.message, headers)


async def http_error_handler(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _message(exc.status_code, str(exc.detail), getattr(exc, "headers", None))


async def request_validation_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
    return _message(status.HTTP_400_BAD_REQUEST, _describe_validation_errors(exc))


async def store_error_handler(_request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Database error")
    return _message(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))


async def unhandled_error_handler(_request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error")
    return _message(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc) or exc.__class__.__name__)


def install_error_handlers(app: FastAPI) -> None:
    """Register the error handlers on ``app``."""
    app.add_exception_handler(InkpostError, inkpost_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, request_validation_handler)  # type: ignore[arg-type]
    app.add_exception_handler(SQLAlchemyError, store_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_error_handler)
