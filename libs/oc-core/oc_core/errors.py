"""Exceptions raised by the oc core and sync engine."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


class OcError(Exception):
    """Base exception for oc errors the CLI reports without a traceback."""


@dataclass(frozen=True)
class ManifestError(OcError):
    """Raised when a package.json cannot be read or has an unexpected shape."""

    path: Path
    message: str

    def __str__(self) -> str:
        return f"Invalid manifest {self.path}: {self.message}"


@dataclass(frozen=True)
class ConfigError(OcError):
    """Raised when .oc/config.yaml cannot be parsed or fails validation."""

    path: Path
    message: str

    def __str__(self) -> str:
        return f"Invalid project config {self.path}: {self.message}"


@dataclass(frozen=True)
class RegistryError(OcError):
    """Raised when the template registry is unavailable."""

    message: str

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class ProjectExistsError(OcError):
    """Raised when a scaffold target directory already exists."""

    path: Path

    def __str__(self) -> str:
        return f"Directory {self.path} already exists"
