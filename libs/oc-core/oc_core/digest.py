"""Content digests used to decide whether two files are already in sync."""

from __future__ import annotations

import hashlib
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

_CHUNK = 1024 * 1024


def compute_digest(data: bytes) -> str:
    """SHA256 hex digest of raw bytes."""
    return hashlib.sha256(data).hexdigest()


def file_digest(path: Path) -> str:
    """SHA256 hex digest of a file's bytes."""
    h = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(_CHUNK), b""):
            h.update(chunk)
    return h.hexdigest()


def files_identical(a: Path, b: Path) -> bool:
    """
    Return True when both files hold exactly the same bytes.

    Read failures (permissions, a file vanishing mid-run, a directory where a
    file was expected) count as "different" so the caller falls back to asking.
    """
    try:
        return file_digest(a) == file_digest(b)
    except OSError as e:
        logger.debug(f"Digest comparison failed for {a} / {b}: {e}")
        return False
