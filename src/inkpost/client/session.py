"""Signed-in identity and its durable local storage."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

__all__ = ["AuthSession", "SessionStore"]


class SessionStore:
    """JSON file holding the ``user`` and ``token`` entries between runs."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def read(self) -> dict[str, Any]:
        """Return the stored entries, or an empty dict if nothing usable is stored."""
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable session file %s: %s", self.path, exc)
            return {}
        return data if isinstance(data, dict) else {}

    def write(self, user: dict[str, Any], token: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({"user": user, "token": token}), encoding="utf-8")

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)


class AuthSession:
    """Identity and token for the current user.

    Passed explicitly to the API client and the controller. ``load`` restores
    a previously persisted session, ``persist`` records a new one in memory and
    on disk, and ``clear`` forgets both.
    """

    def __init__(self, store: SessionStore) -> None:
        self.store = store
        self.user: dict[str, Any] | None = None
        self.token: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None and self.user is not None

    @property
    def username(self) -> str | None:
        return self.user.get("username") if self.user else None

    def load(self) -> bool:
        """Restore the persisted session. Returns True if one was found."""
        data = self.store.read()
        user, token = data.get("user"), data.get("token")
        if not isinstance(user, dict) or not isinstance(token, str) or not token:
            return False
        self.user, self.token = user, token
        return True

    def persist(self, user: dict[str, Any], token: str) -> None:
        """Record a new identity. Memory is untouched if the file cannot be written."""
        user = dict(user)
        self.store.write(user, token)
        self.user, self.token = user, token

    def clear(self) -> None:
        self.user, self.token = None, None
        self.store.clear()
