# tests/api/test_authorization_gate.py
"""Bearer token checks shared by every protected endpoint."""

from datetime import timedelta

import pytest
from fastapi import status
from jose import jwt

from inkpost.core.security import create_access_token

PROTECTED = [
    ("post", "/api/posts", {"title": "t", "content": "c", "category": 1}),
    ("put", "/api/posts/1", {"title": "t"}),
    ("delete", "/api/posts/1", None),
    ("post", "/api/comments", {"postId": 1, "text": "hi"}),
    ("get", "/api/auth/me", None),
]


def _call(client, method, path, body, headers):
    kwargs = {"headers": headers}
    if body is not None:
        kwargs["json"] = body
    return client.request(method.upper(), path, **kwargs)


@pytest.mark.parametrize("method,path,body", PROTECTED)
def test_missing_header_is_rejected(client, method, path, body) -> None:
    response = _call(client, method, path, body, {})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json() == {"message": "Not authorized"}
    assert response.headers["www-authenticate"] == "Bearer"


@pytest.mark.parametrize(
    "header",
    ["Basic dXNlcjpwYXNz", "Bearer", "Bearer ", "Token abc"],
)
def test_malformed_header_is_rejected(client, header) -> None:
    response = client.get("/api/auth/me", headers={"Authorization": header})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json() == {"message": "Not authorized"}


def test_garbage_token(client) -> None:
    response = client.get("/api/auth/me", headers={"Authorization": "Bearer not.a.token"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json() == {"message": "Token failed"}


def test_expired_token(client, test_user) -> None:
    token = create_access_token(test_user.id, expires_delta=timedelta(seconds=-30))
    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json() == {"message": "Token failed"}


def test_token_signed_with_other_secret(client, test_user, test_settings) -> None:
    token = jwt.encode({"sub": str(test_user.id)}, "some-other-secret", algorithm=test_settings.jwt_algorithm)
    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json() == {"message": "Token failed"}


def test_token_for_deleted_user(client, db_session, test_user, auth_token) -> None:
    db_session.delete(test_user)
    db_session.commit()

    response = client.get("/api/auth/me", headers=auth_token)
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json() == {"message": "Token failed"}


def test_rejected_request_does_not_mutate(client, test_post) -> None:
    response = client.delete(f"/api/posts/{test_post.id}")
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert client.get(f"/api/posts/{test_post.id}").status_code == status.HTTP_200_OK
