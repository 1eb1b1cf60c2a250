"""Storage for uploaded images."""
from __future__ import annotations

import logging
import re
import uuid
from pathlib import Path

from inkpost.core.errors import UpstreamFailureError

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def _safe_name(filename: str) -> str:
    name = _UNSAFE_CHARS.sub("_", Path(filename).name).strip("._")
    return name or "upload"


def store_upload(filename: str, content: bytes, directory: Path) -> str:
    """Write ``content`` under ``directory`` and return the stored file name.

    The stored name is prefixed with a random hex id so uploads never collide.

    Raises:
        UpstreamFailureError: If the file cannot be written.
    """
    stored_name = f"{uuid.uuid4().hex}_{_safe_name(filename)}"
    try:
        directory.mkdir(parents=True, exist_ok=True)
        (directory / stored_name).write_bytes(content)
    except OSError as err:
        logger.error("Could not store upload %s: %s", stored_name, err)
        raise UpstreamFailureError("Failed to store upload") from err
    logger.info("Stored upload %s (%d bytes)", stored_name, len(content))
    return stored_name
