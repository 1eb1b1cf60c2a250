# tests/conftest.py
from __future__ import annotations

import os
import tempfile
from collections.abc import Callable, Generator, Iterator
from typing import Any

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="inkpost-uploads-"))

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from inkpost.core.security import create_access_token, hash_password
from inkpost.core.settings import Settings
from inkpost.db.session import Base, build_engine
from inkpost.db.session import get_db as app_get_session
from inkpost.main import app as fastapi_app
from inkpost.models import Category, Comment, Post, User

TEST_DB_URL = "sqlite://"
TEST_PASSWORD = "correct horse battery staple"


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    engine = build_engine(TEST_DB_URL, poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def lenient_client(app: FastAPI) -> Iterator[TestClient]:
    """Client that returns 500 responses instead of re-raising server errors."""
    with TestClient(app, base_url="http://test", raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Provide a Settings instance aligned with runtime configuration."""
    return Settings()  # type: ignore[call-arg]


def _make_user(db_session: Session, username: str, email: str) -> User:
    password_hash = hash_password(TEST_PASSWORD)
    user = User(username=username, email=email, password_hash=password_hash)
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture()
def test_user(db_session: Session) -> User:
    """Create and return a persisted test user."""
    return _make_user(db_session, "alice", "alice@example.com")


@pytest.fixture()
def other_user(db_session: Session) -> User:
    """Create and return a second persisted user."""
    return _make_user(db_session, "bob", "bob@example.com")


@pytest.fixture()
def auth_token(test_user: User) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    token = create_access_token(test_user.id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def category(db_session: Session) -> Category:
    """Create a default test category."""
    category = Category(name="Travel")
    db_session.add(category)
    db_session.commit()
    db_session.refresh(category)
    return category


@pytest.fixture()
def make_post(db_session: Session, category: Category) -> Callable[..., Post]:
    """Return a factory that persists posts in the default category."""

    def _make_post(title: str = "Test post", content: str = "Test post content", **extra: Any) -> Post:
        post = Post(title=title, content=content, category_id=extra.pop("category_id", category.id), **extra)
        db_session.add(post)
        db_session.commit()
        db_session.refresh(post)
        return post

    return _make_post


@pytest.fixture()
def test_post(make_post: Callable[..., Post]) -> Post:
    """Create a baseline post for tests."""
    return make_post()


@pytest.fixture()
def make_comment(db_session: Session) -> Callable[..., Comment]:
    def _make_comment(post_id: int, text: str = "Nice post", username: str = "alice") -> Comment:
        comment = Comment(post_id=post_id, text=text, username=username)
        db_session.add(comment)
        db_session.commit()
        db_session.refresh(comment)
        return comment

    return _make_comment
