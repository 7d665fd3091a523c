"""Map logical registry paths to concrete template directories."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from oc_core.config import data_dir

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Found:
    path: Path


@dataclass(frozen=True)
class NotFound:
    reason: str


Resolution = Found | NotFound


def resolve_local(logical_path: str, base_dir: Path | None = None) -> Resolution:
    """Join logical_path onto the registry directory; Found only if it exists on disk."""
    base = base_dir if base_dir is not None else data_dir()
    candidate = base / logical_path
    if candidate.exists():
        return Found(candidate)
    return NotFound(f"{logical_path} not found under {base}")


def resolve_remote(logical_path: str) -> Resolution:
    """Remote template fetching is not implemented; always NotFound."""
    logger.info(f"Remote resolution unavailable for {logical_path}")
    return NotFound(f"{logical_path} is not available locally and remote fetching is not supported")


def resolve(logical_path: str, base_dir: Path | None = None) -> Resolution:
    found = resolve_local(logical_path, base_dir)
    if isinstance(found, Found):
        return found
    return resolve_remote(logical_path)
