"""oc core - registry, configuration, manifest and digest utilities."""

from oc_core.config import (
    data_dir,
    load_project_config,
    project_config_path,
    registry_path,
    write_project_config,
)
from oc_core.digest import compute_digest, file_digest, files_identical
from oc_core.errors import ConfigError, ManifestError, OcError, ProjectExistsError, RegistryError
from oc_core.models import (
    PackageManifest,
    ProjectConfig,
    Registry,
    RegistryItem,
    TemplateRoot,
)
from oc_core.registry import build_registry, load_registry, save_registry
from oc_core.resolver import Found, NotFound, Resolution, resolve, resolve_local

__all__ = [
    "compute_digest",
    "file_digest",
    "files_identical",
    # config
    "data_dir",
    "registry_path",
    "project_config_path",
    "load_project_config",
    "write_project_config",
    # registry
    "load_registry",
    "save_registry",
    "build_registry",
    "Found",
    "NotFound",
    "Resolution",
    "resolve",
    "resolve_local",
    "OcError",
    "ConfigError",
    "ManifestError",
    "RegistryError",
    "ProjectExistsError",
    "PackageManifest",
    "ProjectConfig",
    "Registry",
    "RegistryItem",
    "TemplateRoot",
]

__version__ = "0.1.0"
