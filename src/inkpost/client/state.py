"""Client state controller.

Owns the in-memory projection of server state (post list, categories,
comments, signed-in identity) and drives it through the API client.

Create and update actions are optimistic: the change is applied locally
before the request is sent, then either confirmed with the server's record
or rolled back with a notice. List fetches go through a ``RequestSlot`` so
a response from a superseded request never overwrites a newer one.
"""
from __future__ import annotations

import logging
import threading
import uuid
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

import httpx

from inkpost.client.api import ApiClientError, BlogApiClient
from inkpost.client.session import AuthSession

logger = logging.getLogger(__name__)

__all__ = ["BlogController", "Notice", "RequestSlot", "Submission", "SubmissionState"]

TEMP_ID_PREFIX = "temp-"

# Failures the controller turns into notices instead of raising.
_REQUEST_ERRORS = (ApiClientError, httpx.HTTPError)


def _as_record(fields: dict[str, Any], categories: list[dict[str, Any]]) -> dict[str, Any]:
    """Shape request fields like a server post record.

    Requests carry ``category`` as an id while records carry ``categoryId``
    plus the resolved ``category`` object, looked up in the loaded categories.
    """
    record = {key: value for key, value in fields.items() if key != "category"}
    if "category" in fields:
        category_id = fields["category"]
        record["categoryId"] = category_id
        record["category"] = next(
            (category for category in categories if category.get("id") == category_id),
            None,
        )
    return record


class SubmissionState(str, Enum):
    OPTIMISTIC = "optimistic"
    CONFIRMED = "confirmed"
    ROLLED_BACK = "rolled_back"


@dataclass
class Submission:
    """Outcome of one optimistic create or update."""

    temp_id: str
    state: SubmissionState = SubmissionState.OPTIMISTIC
    record: dict[str, Any] | None = None
    error: str | None = None


@dataclass(frozen=True)
class Notice:
    """One-shot user-visible message."""

    message: str
    level: str = "error"


class RequestSlot:
    """Generation counter for one logical request slot."""

    def __init__(self) -> None:
        self._generation = 0
        self._lock = threading.Lock()

    def begin(self) -> int:
        """Start a request and return its generation."""
        with self._lock:
            self._generation += 1
            return self._generation

    def is_current(self, generation: int) -> bool:
        with self._lock:
            return generation == self._generation


class BlogController:
    """State owner for a single client session."""

    def __init__(
        self,
        api: BlogApiClient,
        session: AuthSession,
        *,
        page_size: int = 5,
        on_notice: Callable[[Notice], None] | None = None,
    ) -> None:
        self.api = api
        self.session = session
        self.page_size = page_size
        self.on_notice = on_notice

        self.posts: list[dict[str, Any]] = []
        self.categories: list[dict[str, Any]] = []
        self.comments: dict[int, list[dict[str, Any]]] = {}
        self.page = 1
        self.query = ""
        self.loading = False
        self.error: str | None = None
        self.notices: list[Notice] = []

        self._lock = threading.RLock()
        self._posts_slot = RequestSlot()

    # -------------------------------
    # Notices
    # -------------------------------

    def _notify(self, message: str, level: str = "error") -> None:
        notice = Notice(message, level)
        self.notices.append(notice)
        if self.on_notice is not None:
            self.on_notice(notice)

    # -------------------------------
    # Authentication
    # -------------------------------

    @property
    def user(self) -> dict[str, Any] | None:
        return self.session.user

    def restore_session(self) -> bool:
        """Load a previously persisted identity, if any."""
        return self.session.load()

    def login(self, email: str, password: str) -> bool:
        """Sign in; on failure nothing changes and a notice is emitted."""
        try:
            result = self.api.login(email, password)
        except _REQUEST_ERRORS as exc:
            logger.info("Login failed: %s", exc)
            self._notify("Login failed")
            return False
        return self._sign_in(result, "Login failed")

    def register(self, username: str, email: str, password: str) -> bool:
        """Create an account and sign in with it."""
        try:
            result = self.api.register(username, email, password)
        except _REQUEST_ERRORS as exc:
            logger.info("Registration failed: %s", exc)
            self._notify("Register failed")
            return False
        return self._sign_in(result, "Register failed")

    def _sign_in(self, result: dict[str, Any], failure_notice: str) -> bool:
        try:
            self.session.persist(result["user"], result["token"])
        except OSError as exc:
            logger.warning("Could not save session: %s", exc)
            self._notify(failure_notice)
            return False
        return True

    def logout(self) -> None:
        self.session.clear()

    # -------------------------------
    # Post list
    # -------------------------------

    def load_posts(self, page: int | None = None, query: str | None = None) -> bool:
        """Fetch a page of posts and replace the local list with it.

        Returns False if the request failed or was superseded by a newer one.
        """
        with self._lock:
            if page is not None:
                self.page = max(page, 1)
            if query is not None:
                self.query = query
            page_, query_ = self.page, self.query
            generation = self._posts_slot.begin()
            self.loading = True

        try:
            posts = self.api.list_posts(page=page_, limit=self.page_size, query=query_)
        except _REQUEST_ERRORS as exc:
            if not self._posts_slot.is_current(generation):
                return False
            with self._lock:
                self.loading = False
                self.error = str(exc)
            self._notify("Failed to load posts")
            return False

        with self._lock:
            if not self._posts_slot.is_current(generation):
                logger.debug("Dropping stale post list for page=%s query=%r", page_, query_)
                return False
            self.posts = list(posts)
            self.loading = False
            self.error = None
        return True

    def search(self, query: str) -> bool:
        """Filter by title, starting again from the first page."""
        return self.load_posts(page=1, query=query)

    def next_page(self) -> bool:
        return self.load_posts(page=self.page + 1)

    def previous_page(self) -> bool:
        return self.load_posts(page=max(self.page - 1, 1))

    # -------------------------------
    # Optimistic mutations
    # -------------------------------

    def submit_post(self, fields: dict[str, Any]) -> Submission:
        """Create a post optimistically.

        The temporary record is prepended at once. On success it is replaced
        by the server's record; on failure it is removed and the list is
        exactly what it was before the submission.
        """
        submission = Submission(temp_id=f"{TEMP_ID_PREFIX}{uuid.uuid4().hex}")
        with self._lock:
            temp = {**_as_record(fields, self.categories), "id": submission.temp_id}
            self.posts = [temp, *self.posts]

        try:
            created = self.api.create_post(fields)
        except _REQUEST_ERRORS as exc:
            with self._lock:
                self.posts = [post for post in self.posts if post.get("id") != submission.temp_id]
            submission.state = SubmissionState.ROLLED_BACK
            submission.error = str(exc)
            logger.info("Rolled back post creation: %s", exc)
            self._notify("Failed to create post")
            return submission

        with self._lock:
            self.posts = [
                created if post.get("id") == submission.temp_id else post for post in self.posts
            ]
        submission.state = SubmissionState.CONFIRMED
        submission.record = created
        return submission

    def save_post(self, post_id: int, fields: dict[str, Any]) -> Submission:
        """Update a post optimistically, restoring the old record on failure."""
        submission = Submission(temp_id=str(post_id))
        with self._lock:
            previous = next((post for post in self.posts if post.get("id") == post_id), None)
            if previous is not None:
                merged = {**previous, **_as_record(fields, self.categories)}
                self.posts = [merged if post.get("id") == post_id else post for post in self.posts]

        try:
            updated = self.api.update_post(post_id, fields)
        except _REQUEST_ERRORS as exc:
            if previous is not None:
                with self._lock:
                    self.posts = [
                        previous if post.get("id") == post_id else post for post in self.posts
                    ]
            submission.state = SubmissionState.ROLLED_BACK
            submission.error = str(exc)
            logger.info("Rolled back update of post %s: %s", post_id, exc)
            self._notify("Failed to update post")
            return submission

        with self._lock:
            self.posts = [updated if post.get("id") == post_id else post for post in self.posts]
        submission.state = SubmissionState.CONFIRMED
        submission.record = updated
        return submission

    def delete_post(self, post_id: int) -> bool:
        """Delete a post and drop it from the local list once confirmed."""
        try:
            self.api.delete_post(post_id)
        except _REQUEST_ERRORS as exc:
            logger.info("Delete of post %s failed: %s", post_id, exc)
            self._notify("Failed to delete post")
            return False
        with self._lock:
            self.posts = [post for post in self.posts if post.get("id") != post_id]
        return True

    # -------------------------------
    # Categories, comments, uploads
    # -------------------------------

    def load_categories(self) -> bool:
        try:
            categories = self.api.list_categories()
        except _REQUEST_ERRORS as exc:
            with self._lock:
                self.error = str(exc)
            self._notify("Failed to load categories")
            return False
        with self._lock:
            self.categories = list(categories)
        return True

    def load_comments(self, post_id: int) -> list[dict[str, Any]]:
        try:
            comments = self.api.list_comments(post_id)
        except _REQUEST_ERRORS as exc:
            logger.info("Loading comments for post %s failed: %s", post_id, exc)
            self._notify("Failed to load comments")
            return self.comments.get(post_id, [])
        with self._lock:
            self.comments[post_id] = list(comments)
        return self.comments[post_id]

    def add_comment(self, post_id: int, text: str) -> dict[str, Any] | None:
        """Post a comment and prepend the confirmed record.

        Empty text is ignored. Commenting requires a signed-in user.
        """
        if not text or not text.strip():
            return None
        if not self.session.is_authenticated:
            self._notify("Sign in to comment")
            return None
        try:
            comment = self.api.create_comment(post_id, text)
        except _REQUEST_ERRORS as exc:
            logger.info("Comment on post %s failed: %s", post_id, exc)
            self._notify("Failed to add comment")
            return None
        with self._lock:
            self.comments[post_id] = [comment, *self.comments.get(post_id, [])]
        return comment

    def upload_image(
        self,
        filename: str,
        content: bytes,
        content_type: str = "application/octet-stream",
    ) -> str | None:
        """Upload an image and return its URL, or None with a notice on failure."""
        try:
            return self.api.upload_image(filename, content, content_type)
        except _REQUEST_ERRORS as exc:
            logger.info("Image upload failed: %s", exc)
            self._notify("Image upload failed")
            return None
