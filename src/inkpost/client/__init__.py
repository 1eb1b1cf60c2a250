"""Client-side API access and state controller for Inkpost."""

from .api import ApiClientError, BlogApiClient
from .session import AuthSession, SessionStore
from .state import BlogController, Notice, RequestSlot, Submission, SubmissionState

__all__ = [
    "ApiClientError",
    "AuthSession",
    "BlogApiClient",
    "BlogController",
    "Notice",
    "RequestSlot",
    "SessionStore",
    "Submission",
    "SubmissionState",
]
