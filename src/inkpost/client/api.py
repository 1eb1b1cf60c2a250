# src/inkpost/client/api.py
"""HTTP client for the Inkpost REST API."""
from __future__ import annotations

from typing import Any

import httpx

from inkpost.client.session import AuthSession
from inkpost.client.settings import ClientSettings

__all__ = ["ApiClientError", "BlogApiClient"]


class ApiClientError(Exception):
    """Raised when the server answers with an error status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return f"HTTP {response.status_code}"


class BlogApiClient:
    """Thin wrapper over the REST endpoints.

    The bearer token is read from ``session`` on every request, so signing
    in or out takes effect immediately.
    """

    def __init__(self, http: httpx.Client, session: AuthSession | None = None) -> None:
        self.http = http
        self.session = session

    @classmethod
    def from_settings(cls, settings: ClientSettings, session: AuthSession | None = None) -> BlogApiClient:
        return cls(httpx.Client(base_url=settings.api_base_url), session)

    def close(self) -> None:
        self.http.close()

    def _headers(self) -> dict[str, str]:
        if self.session is not None and self.session.token:
            return {"Authorization": f"Bearer {self.session.token}"}
        return {}

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        response = self.http.request(method, path, headers=self._headers(), **kwargs)
        if response.status_code >= 400:
            raise ApiClientError(_error_message(response), response.status_code)
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    # -------------------------------
    # Authentication
    # -------------------------------

    def register(self, username: str, email: str, password: str) -> dict[str, Any]:
        """Create an account. Returns ``{"token", "user"}``."""
        return self._request(
            "POST",
            "/api/auth/register",
            json={"username": username, "email": email, "password": password},
        )

    def login(self, email: str, password: str) -> dict[str, Any]:
        """Sign in. Returns ``{"token", "user"}``."""
        return self._request("POST", "/api/auth/login", json={"email": email, "password": password})

    def me(self) -> dict[str, Any]:
        return self._request("GET", "/api/auth/me")

    # -------------------------------
    # Posts
    # -------------------------------

    def list_posts(self, page: int = 1, limit: int = 5, query: str = "") -> list[dict[str, Any]]:
        params: dict[str, Any] = {"page": page, "limit": limit}
        if query:
            params["q"] = query
        return self._request("GET", "/api/posts", params=params)

    def get_post(self, post_id: int) -> dict[str, Any]:
        return self._request("GET", f"/api/posts/{post_id}")

    def create_post(self, fields: dict[str, Any]) -> dict[str, Any]:
        return self._request("POST", "/api/posts", json=fields)

    def update_post(self, post_id: int, fields: dict[str, Any]) -> dict[str, Any]:
        return self._request("PUT", f"/api/posts/{post_id}", json=fields)

    def delete_post(self, post_id: int) -> None:
        self._request("DELETE", f"/api/posts/{post_id}")

    # -------------------------------
    # Categories and comments
    # -------------------------------

    def list_categories(self) -> list[dict[str, Any]]:
        return self._request("GET", "/api/categories")

    def create_category(self, name: str) -> dict[str, Any]:
        return self._request("POST", "/api/categories", json={"name": name})

    def list_comments(self, post_id: int) -> list[dict[str, Any]]:
        return self._request("GET", f"/api/comments/{post_id}")

    def create_comment(self, post_id: int, text: str) -> dict[str, Any]:
        return self._request("POST", "/api/comments", json={"postId": post_id, "text": text})

    # -------------------------------
    # Uploads
    # -------------------------------

    def upload_image(self, filename: str, content: bytes, content_type: str = "application/octet-stream") -> str:
        """Upload an image and return its public URL."""
        data = self._request("POST", "/api/upload", files={"image": (filename, content, content_type)})
        return data["url"]
