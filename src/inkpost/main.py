# src/inkpost/main.py
"""Main entry point for the Inkpost application."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.staticfiles import StaticFiles

from inkpost.api.endpoints import (
    auth_router,
    categories_router,
    comments_router,
    posts_router,
    upload_router,
)
from inkpost.core.errors import install_error_handlers
from inkpost.core.settings import settings
from inkpost.db.session import create_tables

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title=f"{settings.app_name} API",
    description="Blog posts, categories and comments with JWT authentication",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

install_error_handlers(app)

# Include API routers
app.include_router(auth_router, prefix="/api")
app.include_router(posts_router, prefix="/api")
app.include_router(categories_router, prefix="/api")
app.include_router(comments_router, prefix="/api")
app.include_router(upload_router, prefix="/api")

# Static folder for uploaded images
settings.upload_dir.mkdir(parents=True, exist_ok=True)
app.mount(
    settings.upload_url_prefix.rstrip("/"),
    StaticFiles(directory=settings.upload_dir),
    name="uploads",
)


@app.on_event("startup")
async def on_startup() -> None:
    create_tables()
    logger.info("%s %s started", settings.app_name, settings.app_version)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": f"{settings.app_name} API",
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("inkpost.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
