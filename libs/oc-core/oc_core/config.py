"""Locations of the bundled template data and per-project configuration."""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from oc_core.errors import ConfigError
from oc_core.models import ProjectConfig

yaml = YAML()
yaml.preserve_quotes = True
yaml.default_flow_style = False

DEFAULT_REGISTRY_URL = "https://raw.githubusercontent.com/ecafe8/oc-cli/main"
PROJECT_DIR = ".oc"
CONFIG_NAME = "config.yaml"


def data_dir() -> Path:
    """Directory holding registry.json and the template tree (override with OC_DATA_DIR)."""
    env = os.environ.get("OC_DATA_DIR")
    if env:
        return Path(env).expanduser().resolve()
    return Path(__file__).resolve().parent / "data"


def registry_path() -> Path:
    return data_dir() / "registry.json"


def registry_url() -> str:
    return os.environ.get("OC_REGISTRY_URL", DEFAULT_REGISTRY_URL)


def project_config_path(root: Path) -> Path:
    return root / PROJECT_DIR / CONFIG_NAME


def load_project_config(root: Path) -> ProjectConfig:
    """Load .oc/config.yaml from a project root, falling back to defaults.

    Raises:
        ConfigError: the file is not valid YAML, not a mapping, or fails validation
    """
    path = project_config_path(root)
    if not path.exists():
        return ProjectConfig(project_name=root.name)
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.load(f)
    except YAMLError as e:
        raise ConfigError(path, f"invalid YAML ({e})") from e
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(path, "top-level value must be a mapping")
    try:
        return ProjectConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(path, str(e)) from e


def write_project_config(root: Path, config: ProjectConfig) -> Path:
    path = project_config_path(root)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(config.model_dump(by_alias=True), f)
    return path
